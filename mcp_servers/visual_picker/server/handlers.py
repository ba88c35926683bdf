"""
Tool handlers.

All handlers follow the signature: (config, state, arguments) -> ToolResult
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import tools
from ..tools.base import ToolError
from .format import render_elements
from .types import ToolResult

if TYPE_CHECKING:
    from ..config import PickerConfig
    from ..tools.picker import PickState


def _number(args: dict[str, Any], key: str, tool: str) -> float:
    value = args.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolError(
            tool=tool,
            action="validate",
            reason=f"'{key}' must be a number",
            suggestion=f"Pass {key} in page CSS pixels",
            details={key: value},
        )
    return float(value)


def handle_pick(config: PickerConfig, state: PickState, args: dict[str, Any]) -> ToolResult:
    timeout_ms = args.get("timeoutMs")
    timeout = float(timeout_ms) / 1000.0 if isinstance(timeout_ms, (int, float)) else None
    result = tools.pick(config, state, timeout=timeout)
    return ToolResult.json(result, summary=render_elements(result))


def handle_resolve(config: PickerConfig, state: PickState, args: dict[str, Any]) -> ToolResult:
    x = _number(args, "x", "resolve")
    y = _number(args, "y", "resolve")
    result = tools.resolve(config, state, x, y, refresh=bool(args.get("refresh", False)))
    return ToolResult.json(result, summary=render_elements(result))


def handle_highlight(config: PickerConfig, state: PickState, args: dict[str, Any]) -> ToolResult:
    index = args.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        index = None
    result = tools.highlight(config, state, index, clear=bool(args.get("clear", False)))
    return ToolResult.json(result)


def handle_verify_selector(config: PickerConfig, state: PickState, args: dict[str, Any]) -> ToolResult:
    result = tools.verify_selector(config, state, str(args.get("selector") or ""))
    return ToolResult.json(result)


PICKER_HANDLERS: dict[str, tuple] = {
    "pick": (handle_pick, True),
    "resolve": (handle_resolve, True),
    "highlight": (handle_highlight, False),
    "verify_selector": (handle_verify_selector, True),
}

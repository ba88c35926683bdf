"""
Tool registry with dispatch table for the MCP server.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..session import cdp_ready
from .types import HandlerFunc, ToolResult

if TYPE_CHECKING:
    from ..config import PickerConfig
    from ..tools.picker import PickState

logger = logging.getLogger("mcp.visual_picker.registry")


class ToolRegistry:
    """Registry for tool handlers with a DevTools reachability precheck."""

    def __init__(self) -> None:
        # name -> (handler, requires_browser)
        self._handlers: dict[str, tuple[HandlerFunc, bool]] = {}

    def register_many(self, handlers: dict[str, tuple[HandlerFunc, bool]]) -> None:
        self._handlers.update(handlers)

    def has(self, name: str) -> bool:
        return name in self._handlers

    def dispatch(
        self,
        name: str,
        config: PickerConfig,
        state: PickState,
        arguments: dict[str, Any],
    ) -> ToolResult:
        """Dispatch a tool call. Raises KeyError for unknown tools."""
        handler_info = self._handlers.get(name)
        if handler_info is None:
            raise KeyError(f"Unknown tool: {name}")

        handler, requires_browser = handler_info
        if requires_browser and not cdp_ready(config):
            logger.info("cdp_unreachable tool=%s endpoint=%s", name, config.http_endpoint)
            return ToolResult.error(
                "CDP endpoint not reachable",
                tool=name,
                suggestion=f"Start Chrome with --remote-debugging-port={config.cdp_port} or set MCP_PICKER_PORT",
                details={"endpoint": config.http_endpoint},
            )
        return handler(config, state, arguments)

    def __len__(self) -> int:
        return len(self._handlers)


def create_default_registry() -> ToolRegistry:
    from .handlers import PICKER_HANDLERS

    registry = ToolRegistry()
    registry.register_many(PICKER_HANDLERS)
    return registry


__all__ = ["ToolRegistry", "create_default_registry"]

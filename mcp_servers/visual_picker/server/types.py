"""
Type definitions for MCP server responses and handlers.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import PickerConfig
    from ..tools.picker import PickState


@dataclass(slots=True)
class ToolContent:
    """Single text content item in a tool response."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(slots=True)
class ToolResult:
    """Result of a tool execution."""

    content: list[ToolContent] = field(default_factory=list)
    is_error: bool = False
    # Raw payload for in-process callers and tests; not part of the wire format.
    data: Any | None = None

    @classmethod
    def json(cls, data: Any, summary: str | None = None) -> ToolResult:
        """Compact summary (when given) followed by the JSON payload."""
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        items = [ToolContent(text=summary)] if summary else []
        items.append(ToolContent(text=payload))
        return cls(content=items, data=data)

    @classmethod
    def error(
        cls,
        message: str,
        *,
        tool: str | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> ToolResult:
        payload: dict[str, Any] = {"ok": False, "error": message}
        if tool:
            payload["tool"] = tool
        if suggestion:
            payload["suggestion"] = suggestion
        if details:
            payload["details"] = details
        return cls(content=[ToolContent(text=json.dumps(payload, ensure_ascii=False))], is_error=True, data=payload)

    def to_content_list(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.content]


HandlerFunc = Callable[["PickerConfig", "PickState", dict[str, Any]], ToolResult]

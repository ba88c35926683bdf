"""
Base utilities for picker tools.

Provides:
- ToolError: structured errors returned to MCP clients
- get_session: context manager connecting to the inspected tab
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from ..config import PickerConfig
from ..http_client import HttpClientError
from ..session import PickerSession, connect


@dataclass
class ToolError(Exception):
    """Structured error with context for the calling agent."""

    tool: str
    action: str
    reason: str
    suggestion: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.tool}] {self.action} failed: {self.reason}. Suggestion: {self.suggestion}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "tool": self.tool,
            "action": self.action,
            "reason": self.reason,
            "suggestion": self.suggestion,
            "details": self.details,
        }


@contextmanager
def get_session(config: PickerConfig, tool: str) -> Generator[PickerSession, None, None]:
    """Connect to the inspected tab, mapping connection failures to ToolError.

    Usage:
        with get_session(config, "pick") as session:
            session.eval_js("document.title")
    """
    try:
        session = connect(config)
    except HttpClientError as e:
        raise ToolError(
            tool=tool,
            action="connect",
            reason=str(e),
            suggestion=f"Ensure Chrome is running with --remote-debugging-port={config.cdp_port}",
            details={"endpoint": config.http_endpoint},
        ) from e
    try:
        yield session
    finally:
        session.close()

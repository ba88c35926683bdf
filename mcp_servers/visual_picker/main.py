"""
MCP server for the visual element picker.

Reads JSON-RPC messages line by line from stdin and writes responses to stdout.
Tool dispatch is handled via the registry in server/registry.py.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any

from .config import PickerConfig
from .http_client import HttpClientError
from .server.contract import initialize_result, select_protocol, tools_list
from .server.registry import create_default_registry
from .server.types import ToolResult
from .tools.base import ToolError
from .tools.picker import PickState

logger = logging.getLogger("mcp.visual_picker")

__all__ = ["McpServer", "main"]


def _write_message(payload: dict[str, Any]) -> None:
    """Write JSON-RPC message to stdout."""
    line = (json.dumps(payload, ensure_ascii=False) + "\n").encode()
    sys.stdout.buffer.write(line)
    sys.stdout.buffer.flush()


def _read_message() -> dict[str, Any] | None:
    """Read one JSON-RPC message from stdin; None at EOF."""
    while True:
        line = sys.stdin.buffer.readline()
        if not line:
            return None
        line = line.strip()
        if not line:
            continue
        try:
            msg = json.loads(line.decode())
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("bad_frame %s", exc)
            continue
        if os.environ.get("MCP_TRACE"):
            logger.info("recv %s", msg)
        return msg if isinstance(msg, dict) else {}


class McpServer:
    """MCP server with registry-based tool dispatch and one pick session."""

    def __init__(self, config: PickerConfig | None = None) -> None:
        self.config = config or PickerConfig.from_env()
        self.registry = create_default_registry()
        self.state = PickState.for_config(self.config)

    def handle_initialize(self, request_id: Any, params: dict[str, Any] | None = None) -> None:
        requested = (params or {}).get("protocolVersion") if isinstance(params, dict) else None
        _write_message({"jsonrpc": "2.0", "id": request_id, "result": initialize_result(select_protocol(requested))})

    def handle_list_tools(self, request_id: Any) -> None:
        _write_message({"jsonrpc": "2.0", "id": request_id, "result": {"tools": tools_list()}})

    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        logger.info("tool=%s args=%s", name, arguments)
        try:
            if not name:
                return ToolResult.error("Missing tool name")
            if not self.registry.has(name):
                return ToolResult.error(f"Unknown tool: {name}", tool=name)
            return self.registry.dispatch(name, self.config, self.state, arguments)
        except ToolError as e:
            logger.info("tool_error tool=%s action=%s reason=%s", e.tool, e.action, e.reason)
            return ToolResult.error(e.reason, tool=e.tool, suggestion=e.suggestion, details=e.details)
        except HttpClientError as e:
            logger.info("http_error %s", str(e))
            return ToolResult.error(str(e), tool=name)
        except Exception as exc:
            logger.exception("tool_call_failed")
            return ToolResult.error(str(exc), tool=name)

    def handle_call_tool(self, request_id: Any, name: str, arguments: dict[str, Any]) -> None:
        result = self.call_tool(name, arguments)
        _write_message(
            {
                "jsonrpc": "2.0",
                "id": request_id,
                "result": {"content": result.to_content_list(), "isError": result.is_error},
            }
        )

    def dispatch(self, message: dict[str, Any]) -> None:
        """Dispatch incoming JSON-RPC message to appropriate handler."""
        if not message:
            return

        method = message.get("method")
        request_id = message.get("id")
        params = message.get("params") or {}

        if method == "initialize":
            self.handle_initialize(request_id, params)
        elif method == "notifications/initialized":
            return
        elif method in ("tools/list", "list_tools"):
            self.handle_list_tools(request_id)
        elif method in ("tools/call", "call_tool"):
            name = params.get("name")
            arguments = params.get("arguments") or {}
            self.handle_call_tool(request_id, name or "", arguments)
        elif method == "ping":
            _write_message({"jsonrpc": "2.0", "id": request_id, "result": {}})
        elif request_id is None:
            # Unknown notification: nothing to answer.
            return
        else:
            _write_message(
                {
                    "jsonrpc": "2.0",
                    "id": request_id,
                    "error": {"code": -32601, "message": f"Method {method} not found"},
                }
            )


def main() -> None:
    """Main entry point for the MCP server."""
    # stdout carries the protocol; logs go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("MCP_PICKER_DEBUG") else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    server = McpServer()
    logger.info("visual picker ready endpoint=%s overlay=%s", server.config.http_endpoint, server.config.overlay_id)
    while True:
        message = _read_message()
        if message is None:
            break
        server.dispatch(message)


if __name__ == "__main__":
    main()

"""Tool schema definitions."""

from __future__ import annotations

from typing import Any

PICK_TOOL: dict[str, Any] = {
    "name": "pick",
    "description": """Wait for the user to click a point on the inspected page and list every element whose box covers it.
Each element is tagged with the box layer hit (margin, border, padding, content, text) and a unique CSS selector.
Elements are ordered topmost first (reverse document order; z-index is not evaluated).

RESPONSE EXAMPLE:
{
  "point": {"x": 120, "y": 48},
  "elements": [
    {"nodeName": "#text", "reason": "text", "uniqueSelector": "#title"},
    {"nodeName": "H1", "attributes": [{"name": "id", "value": "title"}], "reason": "content", "uniqueSelector": "#title"},
    {"nodeName": "BODY", "attributes": [], "reason": "margin", "uniqueSelector": "body"}
  ]
}""",
    "inputSchema": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "timeoutMs": {
                "type": "integer",
                "minimum": 1000,
                "description": "How long to wait for the click (default: MCP_PICKER_PICK_TIMEOUT)",
            },
        },
        "additionalProperties": False,
    },
}

RESOLVE_TOOL: dict[str, Any] = {
    "name": "resolve",
    "description": """List the elements covering a page point without waiting for a click.
Reuses the snapshot of the current pick session; pass refresh=true to re-read the page.""",
    "inputSchema": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "x": {"type": "number", "description": "Page X (CSS px, document coordinates)"},
            "y": {"type": "number", "description": "Page Y (CSS px, document coordinates)"},
            "refresh": {"type": "boolean", "default": False, "description": "Capture a new snapshot first"},
        },
        "required": ["x", "y"],
        "additionalProperties": False,
    },
}

HIGHLIGHT_TOOL: dict[str, Any] = {
    "name": "highlight",
    "description": """Outline the matched box band of an element from the last pick/resolve result.
USAGE:
- highlight(index=0): topmost element
- highlight(clear=true): remove the outline
An unknown index returns rect=null.""",
    "inputSchema": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "index": {"type": "integer", "description": "Position in the last elements list"},
            "clear": {"type": "boolean", "default": False, "description": "Remove the highlight"},
        },
        "additionalProperties": False,
    },
}

VERIFY_SELECTOR_TOOL: dict[str, Any] = {
    "name": "verify_selector",
    "description": "Count how many nodes a CSS selector matches in the live page (unique == exactly one).",
    "inputSchema": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "selector": {"type": "string", "description": "CSS selector, e.g. a uniqueSelector from pick"},
        },
        "required": ["selector"],
        "additionalProperties": False,
    },
}

TOOL_DEFINITIONS: list[dict[str, Any]] = [PICK_TOOL, RESOLVE_TOOL, HIGHLIGHT_TOOL, VERIFY_SELECTOR_TOOL]

from __future__ import annotations

from typing import Any

from ..response import node_preview

MAX_LINES = 60


def _attribute_pairs(element: dict[str, Any]) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for attr in element.get("attributes") or []:
        if isinstance(attr, dict):
            out.append((str(attr.get("name") or ""), str(attr.get("value") or "")))
    return out


def render_elements(result: dict[str, Any]) -> str:
    """One line per contributing element, topmost first.

    ``0. div#main.card  margin  #main``
    """
    point = result.get("point") or {}
    elements = result.get("elements") or []
    lines = [f"{len(elements)} element(s) at ({point.get('x')}, {point.get('y')})"]
    for i, element in enumerate(elements[:MAX_LINES]):
        label = node_preview(str(element.get("nodeName") or ""), _attribute_pairs(element))
        lines.append(f"{i}. {label}  {element.get('reason')}  {element.get('uniqueSelector')}")
    if len(elements) > MAX_LINES:
        lines.append(f"… {len(elements) - MAX_LINES} more")
    return "\n".join(lines)

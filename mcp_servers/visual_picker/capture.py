"""
Build a DocumentSnapshot from a live tab.

One DOM.getDocument call for the tree, then one geometry call per node:
DOM.getBoxModel for elements, DOM.getContentQuads for text. CDP reports quads in
viewport coordinates; they are shifted by the layout viewport scroll offset so
they share the page coordinate space of the picked point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .dom import BoxQuads, DocumentSnapshot, Node, NodeKind
from .geometry import BoxLevel, Point, Quad
from .http_client import HttpClientError
from .session import PickerSession

logger = logging.getLogger("mcp.visual_picker.capture")

ELEMENT_NODE = 1
TEXT_NODE = 3

_CDP_BOX_KEYS: tuple[tuple[BoxLevel, str], ...] = (
    (BoxLevel.MARGIN, "margin"),
    (BoxLevel.BORDER, "border"),
    (BoxLevel.PADDING, "padding"),
    (BoxLevel.CONTENT, "content"),
)


@dataclass
class CaptureStats:
    nodes: int = 0
    laid_out: int = 0
    geometry_errors: int = 0


def scroll_offset(session: PickerSession) -> Point:
    metrics = session.send("Page.getLayoutMetrics")
    viewport = metrics.get("cssLayoutViewport") or metrics.get("layoutViewport") or {}
    return Point(float(viewport.get("pageX") or 0.0), float(viewport.get("pageY") or 0.0))


def _pairs(flat: list[Any] | None) -> tuple[tuple[str, str], ...]:
    flat = flat or []
    return tuple((str(flat[i]), str(flat[i + 1])) for i in range(0, len(flat) - 1, 2))


def _element_boxes(session: PickerSession, node_id: int, offset: Point, stats: CaptureStats) -> BoxQuads:
    try:
        model = session.send("DOM.getBoxModel", {"nodeId": node_id}).get("model") or {}
    except HttpClientError:
        # Not rendered (display:none, <head>, ...): no geometry.
        stats.geometry_errors += 1
        return {}
    boxes: BoxQuads = {}
    for level, key in _CDP_BOX_KEYS:
        raw = model.get(key)
        if isinstance(raw, list) and len(raw) == 8:
            boxes[level] = (Quad.from_cdp(raw).translated(offset.x, offset.y),)
    return boxes


def _text_boxes(session: PickerSession, node_id: int, offset: Point, stats: CaptureStats) -> BoxQuads:
    try:
        raw_quads = session.send("DOM.getContentQuads", {"nodeId": node_id}).get("quads") or []
    except HttpClientError:
        stats.geometry_errors += 1
        return {}
    quads = tuple(
        Quad.from_cdp(raw).translated(offset.x, offset.y)
        for raw in raw_quads
        if isinstance(raw, list) and len(raw) == 8
    )
    return {BoxLevel.CONTENT: quads} if quads else {}


def _build(session: PickerSession, raw: dict[str, Any], offset: Point, stats: CaptureStats) -> Node | None:
    node_type = raw.get("nodeType")
    node_id = int(raw.get("nodeId") or 0)
    if node_type == ELEMENT_NODE:
        node = Node(
            kind=NodeKind.ELEMENT,
            node_name=str(raw.get("nodeName") or ""),
            # Kept as reported; SVG names such as linearGradient match case-sensitively.
            local_name=str(raw.get("localName") or str(raw.get("nodeName") or "").lower()),
            attributes=_pairs(raw.get("attributes")),
            node_id=node_id,
            boxes=_element_boxes(session, node_id, offset, stats),
        )
        for child in raw.get("children") or []:
            built = _build(session, child, offset, stats)
            if built is not None:
                node.children.append(built)
    elif node_type == TEXT_NODE:
        node = Node(
            kind=NodeKind.TEXT,
            node_name="#text",
            text=str(raw.get("nodeValue") or ""),
            node_id=node_id,
            boxes=_text_boxes(session, node_id, offset, stats),
        )
    else:
        # Comments, doctype, processing instructions.
        return None

    stats.nodes += 1
    if node.boxes:
        stats.laid_out += 1
    return node


def capture_snapshot(session: PickerSession) -> DocumentSnapshot:
    """Snapshot the tab's main document (iframes and shadow roots are not entered)."""
    session.enable("DOM", "Page")
    root = session.send("DOM.getDocument", {"depth": -1, "pierce": False}).get("root") or {}
    offset = scroll_offset(session)
    stats = CaptureStats()
    children = []
    for child in root.get("children") or []:
        built = _build(session, child, offset, stats)
        if built is not None:
            children.append(built)
    logger.info(
        "snapshot captured nodes=%d laid_out=%d geometry_errors=%d scroll=(%s,%s)",
        stats.nodes,
        stats.laid_out,
        stats.geometry_errors,
        offset.x,
        offset.y,
    )
    return DocumentSnapshot(children, url=str(root.get("documentURL") or ""), scroll=offset)


def count_live_matches(session: PickerSession, selector: str) -> int:
    """Number of nodes ``selector`` matches in the live document."""
    session.enable("DOM")
    root = session.send("DOM.getDocument", {"depth": 0}).get("root") or {}
    result = session.send("DOM.querySelectorAll", {"nodeId": root.get("nodeId"), "selector": selector})
    return len(result.get("nodeIds") or [])


__all__ = ["CaptureStats", "capture_snapshot", "count_live_matches", "scroll_offset"]

"""
Immutable document snapshots.

A snapshot is the geometry provider the picker core reads from: the node tree
(elements and text nodes), their attributes, and the four box-model quad lists
per node. Snapshots are built once per pick session, either from a live tab
(see capture.py) or directly with the ``element`` / ``text`` helpers.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Union

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import Tag

from .geometry import BOX_LEVELS, BoxLevel, Point, Quad

# HTML class tokens split on ASCII whitespace only.
_CLASS_TOKEN = re.compile(r"[^ \t\n\f\r]+")


class NodeKind(str, Enum):
    ELEMENT = "element"
    TEXT = "text"


BoxQuads = dict[BoxLevel, tuple[Quad, ...]]


@dataclass(eq=False)
class Node:
    """One DOM node. Compared by identity.

    ``kind`` discriminates the two cases: elements carry a tag, attributes and
    children; text nodes carry text and always hang off an element.
    """

    kind: NodeKind
    node_name: str
    local_name: str = ""
    attributes: tuple[tuple[str, str], ...] = ()
    text: str = ""
    node_id: int = 0
    boxes: BoxQuads = field(default_factory=dict, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)
    parent: Node | None = field(default=None, repr=False)
    # 1-based position among element siblings; 0 for text nodes.
    sibling_index: int = 0

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind is NodeKind.TEXT

    def get_attribute(self, name: str) -> str | None:
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return None

    @property
    def element_id(self) -> str:
        return self.get_attribute("id") or ""

    @property
    def class_list(self) -> list[str]:
        seen: list[str] = []
        for token in _CLASS_TOKEN.findall(self.get_attribute("class") or ""):
            if token not in seen:
                seen.append(token)
        return seen


class GeometryProvider(Protocol):
    """What the picker core needs from a document."""

    def iter_nodes(self) -> Iterator[Node]: ...

    def get_box_quads(self, node: Node, level: BoxLevel) -> Sequence[Quad]: ...

    def attributes(self, node: Node) -> list[tuple[str, str]]: ...

    def query_all(self, selector: str) -> list[Node]: ...


class DocumentSnapshot:
    """Document-ordered node tree with box geometry in page coordinates."""

    def __init__(
        self,
        children: Sequence[Node],
        *,
        url: str = "",
        scroll: Point | None = None,
    ) -> None:
        self.url = url
        self.scroll = scroll or Point(0.0, 0.0)
        self.children: list[Node] = list(children)
        self._order: list[Node] = []
        self._link(None, self.children)
        self._soup: BeautifulSoup | None = None
        # id(Tag) -> Node for the selector mirror.
        self._mirrored: dict[int, Node] = {}

    def _link(self, parent: Node | None, children: Sequence[Node]) -> None:
        index = 0
        for child in children:
            child.parent = parent
            if child.is_element:
                index += 1
                child.sibling_index = index
            else:
                child.sibling_index = 0
            self._order.append(child)
            self._link(child, child.children)

    def __len__(self) -> int:
        return len(self._order)

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self._order)

    def get_box_quads(self, node: Node, level: BoxLevel) -> Sequence[Quad]:
        return node.boxes.get(level, ())

    def attributes(self, node: Node) -> list[tuple[str, str]]:
        if not node.is_element:
            return []
        return list(node.attributes)

    def _mirror(self, soup: BeautifulSoup, parent: BeautifulSoup | Tag, children: Sequence[Node]) -> None:
        for child in children:
            if child.is_text:
                parent.append(soup.new_string(child.text))
                continue
            attrs = dict(child.attributes)
            if "class" in attrs:
                # Pre-split so bs4 does not re-split on non-ASCII whitespace.
                attrs["class"] = child.class_list
            tag = soup.new_tag(child.local_name, attrs=attrs)
            self._mirrored[id(tag)] = child
            parent.append(tag)
            self._mirror(soup, tag, child.children)

    def soup(self) -> BeautifulSoup:
        """BeautifulSoup copy of the element tree, built on first use."""
        if self._soup is None:
            soup = BeautifulSoup("", "html.parser")
            self._mirror(soup, soup, self.children)
            self._soup = soup
        return self._soup

    def query_all(self, selector: str) -> list[Node]:
        """Document-ordered nodes matching ``selector``.

        Raises ``soupsieve.SelectorSyntaxError`` for invalid selectors.
        """
        return [self._mirrored[id(tag)] for tag in soupsieve.select(selector, self.soup())]


RectLike = Union[Quad, Sequence[float]]


def _as_quad(rect: RectLike) -> Quad:
    if isinstance(rect, Quad):
        return rect
    left, top, right, bottom = rect
    return Quad.from_rect(left, top, right, bottom)


def box_model(
    margin: RectLike,
    border: RectLike | None = None,
    padding: RectLike | None = None,
    content: RectLike | None = None,
) -> BoxQuads:
    """Box quads from ``(left, top, right, bottom)`` rects.

    A missing inner level defaults to the next outer one (no border, no padding...).
    """
    quads: BoxQuads = {}
    current = _as_quad(margin)
    for level, rect in zip(BOX_LEVELS, (margin, border, padding, content)):
        if rect is not None:
            current = _as_quad(rect)
        quads[level] = (current,)
    return quads


def element(
    tag: str,
    attrs: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
    *children: Node,
    boxes: BoxQuads | None = None,
    node_id: int = 0,
) -> Node:
    if isinstance(attrs, Mapping):
        attributes = tuple((str(k), str(v)) for k, v in attrs.items())
    else:
        attributes = tuple((str(k), str(v)) for k, v in (attrs or ()))
    return Node(
        kind=NodeKind.ELEMENT,
        node_name=tag.upper(),
        local_name=tag,
        attributes=attributes,
        node_id=node_id,
        boxes=boxes or {},
        children=list(children),
    )


def text(value: str, *, content: RectLike | None = None, node_id: int = 0) -> Node:
    boxes: BoxQuads = {BoxLevel.CONTENT: (_as_quad(content),)} if content is not None else {}
    return Node(kind=NodeKind.TEXT, node_name="#text", text=value, node_id=node_id, boxes=boxes)


__all__ = [
    "BoxQuads",
    "DocumentSnapshot",
    "GeometryProvider",
    "Node",
    "NodeKind",
    "box_model",
    "element",
    "text",
]

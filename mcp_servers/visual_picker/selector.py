"""Unique CSS selectors for snapshot nodes."""

from __future__ import annotations

from collections.abc import Callable

import soupsieve

from .dom import GeometryProvider, Node

# Structurally unique in an HTML document.
UNIQUE_TAGS = frozenset({"html", "head", "body"})


class UniqueSelectorSynthesizer:
    """Build the shortest selector (by the rules below) that matches exactly one node.

    Order: unique id, html/head/body, per class (``.c``, ``tag.c``,
    ``tag.c:nth-child(k)``), then ``tag:nth-child(k)`` chained to the parent's
    selector with ``>``. Text nodes use their parent element's selector.
    """

    def __init__(self, provider: GeometryProvider, *, escape: Callable[[str], str] = soupsieve.escape) -> None:
        self.provider = provider
        self.escape = escape
        self._memo: dict[Node, str] = {}

    def _is_unique(self, selector: str) -> bool:
        try:
            return len(self.provider.query_all(selector)) == 1
        except soupsieve.SelectorSyntaxError:
            return False

    def selector_for(self, node: Node) -> str:
        if node.is_text:
            parent = node.parent
            return self.selector_for(parent) if parent is not None else ""

        cached = self._memo.get(node)
        if cached is None:
            cached = self._synthesize(node)
            self._memo[node] = cached
        return cached

    def _synthesize(self, node: Node) -> str:
        esc = self.escape

        node_id = node.element_id
        if node_id:
            selector = "#" + esc(node_id)
            if self._is_unique(selector):
                return selector

        tag = node.local_name
        if tag in UNIQUE_TAGS:
            return tag

        for class_name in node.class_list:
            selector = "." + esc(class_name)
            if self._is_unique(selector):
                return selector
            selector = esc(tag) + selector
            if self._is_unique(selector):
                return selector
            selector = f"{selector}:nth-child({node.sibling_index})"
            if self._is_unique(selector):
                return selector

        selector = f"{esc(tag)}:nth-child({node.sibling_index})"
        if node.parent is not None:
            selector = f"{self.selector_for(node.parent)} > {selector}"
        return selector


__all__ = ["UNIQUE_TAGS", "UniqueSelectorSynthesizer"]

"""One-shot catalog of the nodes that take part in layout."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .dom import GeometryProvider, Node
from .geometry import BOX_LEVELS

logger = logging.getLogger("mcp.visual_picker.catalog")


class NodeCatalog:
    """Document-ordered snapshot of laid-out nodes, filled on first use.

    Holds non-owning references. Never updated after population; start a new
    pick session to see DOM changes.
    """

    def __init__(self, provider: GeometryProvider, *, overlay_id: str = "") -> None:
        self.provider = provider
        self.overlay_id = overlay_id
        self._nodes: list[Node] = []
        self._populated = False

    @property
    def populated(self) -> bool:
        return self._populated

    def _is_overlay(self, node: Node) -> bool:
        current: Node | None = node
        while current is not None:
            # The click overlay and its highlight box share the overlay id prefix.
            if current.is_element and self.overlay_id and current.element_id.startswith(self.overlay_id):
                return True
            current = current.parent
        return False

    def _has_geometry(self, node: Node) -> bool:
        return any(self.provider.get_box_quads(node, level) for level in BOX_LEVELS)

    def populate(self) -> None:
        if self._populated:
            return
        skipped = 0
        for node in self.provider.iter_nodes():
            if self._is_overlay(node) or not self._has_geometry(node):
                skipped += 1
                continue
            self._nodes.append(node)
        self._populated = True
        logger.debug("catalog populated nodes=%d skipped=%d", len(self._nodes), skipped)

    def all(self) -> Iterator[Node]:
        self.populate()
        return iter(self._nodes)

    def __len__(self) -> int:
        self.populate()
        return len(self._nodes)

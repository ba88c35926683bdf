"""
Point -> contributing nodes.

A node contributes to a point when one of its box-model bands contains it. Bands
are tried outer to inner (margin, border, padding, content) and the first hit is
the node's only contribution. The final list is reversed document order, which
approximates top-to-bottom painting (z-index, transforms and stacking contexts
are ignored).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .catalog import NodeCatalog
from .dom import GeometryProvider, Node
from .geometry import BOX_LEVELS, BoxLevel, Point, Quad, decompose, first_containing

logger = logging.getLogger("mcp.visual_picker.resolver")

TEXT_REASON = "text"


@dataclass(frozen=True, slots=True)
class Contribution:
    node: Node
    reason: str  # BoxLevel value or "text"
    rect: Quad


class ContributionResolver:
    """Owns the state of one pick session: the node catalog and the last result."""

    def __init__(self, *, overlay_id: str = "") -> None:
        self.overlay_id = overlay_id
        self.provider: GeometryProvider | None = None
        self.catalog: NodeCatalog | None = None
        self.last: list[Contribution] = []

    @property
    def active(self) -> bool:
        return self.catalog is not None

    def begin_pick(self, provider: GeometryProvider) -> None:
        """Start a pick session over ``provider``; drops any previous catalog and result."""
        self.provider = provider
        self.catalog = NodeCatalog(provider, overlay_id=self.overlay_id)
        self.last = []

    def end_pick(self) -> None:
        self.provider = None
        self.catalog = None
        self.last = []

    def _resolve_node(self, provider: GeometryProvider, node: Node, point: Point) -> Contribution | None:
        quads = [provider.get_box_quads(node, level) for level in BOX_LEVELS]
        last = len(BOX_LEVELS) - 1
        for i, level in enumerate(BOX_LEVELS):
            if i == last:
                bands = decompose(level, quads[i], innermost=True)
            else:
                bands = decompose(level, quads[i], quads[i + 1])
            band = first_containing(point, bands)
            if band is None:
                continue
            if level is BoxLevel.CONTENT and node.is_text:
                return Contribution(node, TEXT_REASON, band.quad)
            return Contribution(node, level.value, band.quad)
        return None

    def resolve(self, point: Point) -> list[Contribution]:
        """Contributions at ``point``, topmost first. Retained for ``highlight_at``."""
        if self.catalog is None or self.provider is None:
            logger.warning("resolve called without an active pick session")
            self.last = []
            return []

        provider = self.provider
        found: list[Contribution] = []
        for node in self.catalog.all():
            contribution = self._resolve_node(provider, node, point)
            if contribution is not None:
                found.append(contribution)
        found.reverse()
        self.last = found
        logger.debug("resolved x=%s y=%s contributions=%d", point.x, point.y, len(found))
        return list(found)

    def highlight_at(self, index: int) -> Quad | None:
        """Rect of the ``index``-th contribution of the last result, or None."""
        if index < 0 or index >= len(self.last):
            return None
        return self.last[index].rect


__all__ = ["Contribution", "ContributionResolver", "TEXT_REASON"]

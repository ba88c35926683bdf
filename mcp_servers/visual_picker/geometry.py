"""
Box-model geometry primitives.

Provides:
- Point / Quad: axis-aligned rectangles as four corner points
- BoxLevel: margin > border > padding > content nesting
- decompose: split the region between two nested quads into bands
- contains: inclusive point-in-rect test
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class BoxLevel(str, Enum):
    MARGIN = "margin"
    BORDER = "border"
    PADDING = "padding"
    CONTENT = "content"


# Outer -> inner. Resolution walks this order and stops at the first hit.
BOX_LEVELS: tuple[BoxLevel, ...] = (BoxLevel.MARGIN, BoxLevel.BORDER, BoxLevel.PADDING, BoxLevel.CONTENT)


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class Quad:
    """Four corners: p1 top-left, p2 top-right, p3 bottom-right, p4 bottom-left.

    Rectangularity is assumed, never checked.
    """

    p1: Point
    p2: Point
    p3: Point
    p4: Point

    @classmethod
    def from_rect(cls, left: float, top: float, right: float, bottom: float) -> Quad:
        return cls(Point(left, top), Point(right, top), Point(right, bottom), Point(left, bottom))

    @classmethod
    def from_cdp(cls, raw: Sequence[float]) -> Quad:
        """Build from CDP's flat ``[x1, y1, x2, y2, x3, y3, x4, y4]`` quad."""
        if len(raw) != 8:
            raise ValueError(f"CDP quad must have 8 numbers, got {len(raw)}")
        xs = [float(v) for v in raw]
        return cls(Point(xs[0], xs[1]), Point(xs[2], xs[3]), Point(xs[4], xs[5]), Point(xs[6], xs[7]))

    @property
    def left(self) -> float:
        return self.p1.x

    @property
    def top(self) -> float:
        return self.p1.y

    @property
    def right(self) -> float:
        return self.p2.x

    @property
    def bottom(self) -> float:
        return self.p4.y

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    def translated(self, dx: float, dy: float) -> Quad:
        return Quad(
            Point(self.p1.x + dx, self.p1.y + dy),
            Point(self.p2.x + dx, self.p2.y + dy),
            Point(self.p3.x + dx, self.p3.y + dy),
            Point(self.p4.x + dx, self.p4.y + dy),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "p1": self.p1.to_dict(),
            "p2": self.p2.to_dict(),
            "p3": self.p3.to_dict(),
            "p4": self.p4.to_dict(),
        }

    def to_box(self) -> dict[str, float]:
        """Compact ``{x, y, width, height}`` form used by overlays."""
        return {"x": self.left, "y": self.top, "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class Band:
    level: BoxLevel
    quad: Quad


def _ring(level: BoxLevel, outer: Quad, inner: Quad) -> Iterator[Band]:
    # Top and bottom take the full outer width; left and right fill the rows
    # between them, so the four bands never overlap.
    yield Band(
        level,
        Quad(
            outer.p1,
            outer.p2,
            Point(outer.p2.x, inner.p2.y),
            Point(outer.p1.x, inner.p1.y),
        ),
    )
    yield Band(
        level,
        Quad(
            Point(inner.p2.x, inner.p2.y),
            Point(outer.p2.x, inner.p2.y),
            Point(outer.p3.x, inner.p3.y),
            Point(inner.p3.x, inner.p3.y),
        ),
    )
    yield Band(
        level,
        Quad(
            Point(outer.p4.x, inner.p4.y),
            Point(outer.p3.x, inner.p3.y),
            outer.p3,
            outer.p4,
        ),
    )
    yield Band(
        level,
        Quad(
            Point(outer.p1.x, inner.p1.y),
            Point(inner.p1.x, inner.p1.y),
            Point(inner.p4.x, inner.p4.y),
            Point(outer.p4.x, inner.p4.y),
        ),
    )


def decompose(
    level: BoxLevel,
    outer_quads: Sequence[Quad],
    inner_quads: Sequence[Quad] | None = None,
    *,
    innermost: bool = False,
) -> list[Band]:
    """Return the bands covering ``outer`` minus ``inner`` for each aligned quad pair.

    With ``innermost=True`` there is no nested level: every outer quad is one band
    and ``inner_quads`` is ignored. Otherwise quads are paired by index; an outer
    quad without an inner partner yields nothing.
    """
    if innermost:
        return [Band(level, quad) for quad in outer_quads]

    bands: list[Band] = []
    inner = inner_quads or ()
    for outer, nested in zip(outer_quads, inner):
        bands.extend(_ring(level, outer, nested))
    return bands


def contains(point: Point, rect: Quad) -> bool:
    """Inclusive containment. Reads p1, p2 and p4 only."""
    return rect.p1.x <= point.x <= rect.p2.x and rect.p1.y <= point.y <= rect.p4.y


def first_containing(point: Point, bands: Sequence[Band]) -> Band | None:
    for band in bands:
        if contains(point, band.quad):
            return band
    return None


__all__ = [
    "BOX_LEVELS",
    "Band",
    "BoxLevel",
    "Point",
    "Quad",
    "contains",
    "decompose",
    "first_containing",
]

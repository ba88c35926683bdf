from __future__ import annotations

import pytest


def test_contains_is_inclusive_on_every_edge() -> None:
    from mcp_servers.visual_picker.geometry import Point, Quad, contains

    rect = Quad.from_rect(10, 20, 30, 40)
    assert contains(Point(10, 20), rect)
    assert contains(Point(30, 40), rect)
    assert contains(Point(30, 20), rect)
    assert contains(Point(20, 30), rect)
    assert not contains(Point(9.99, 30), rect)
    assert not contains(Point(20, 40.01), rect)


def test_contains_never_reads_p3() -> None:
    from mcp_servers.visual_picker.geometry import Point, Quad, contains

    # Skewed third corner: only p1/p2/p4 matter.
    quad = Quad(Point(0, 0), Point(10, 0), Point(500, -500), Point(0, 10))
    assert contains(Point(5, 5), quad)
    assert not contains(Point(50, 5), quad)


def test_decompose_ring_area_matches_outer_minus_inner() -> None:
    from mcp_servers.visual_picker.geometry import BoxLevel, Quad, decompose

    outer = Quad.from_rect(0, 0, 100, 60)
    inner = Quad.from_rect(10, 5, 70, 45)
    bands = decompose(BoxLevel.MARGIN, [outer], [inner])

    assert len(bands) == 4
    assert all(b.level is BoxLevel.MARGIN for b in bands)
    assert sum(b.quad.area for b in bands) == pytest.approx(outer.area - inner.area)


def test_decompose_bands_do_not_overlap() -> None:
    from mcp_servers.visual_picker.geometry import BoxLevel, Quad, decompose

    outer = Quad.from_rect(0, 0, 100, 60)
    inner = Quad.from_rect(10, 5, 70, 45)
    bands = [b.quad for b in decompose(BoxLevel.BORDER, [outer], [inner])]

    def overlap(a, b) -> float:  # noqa: ANN001
        w = min(a.right, b.right) - max(a.left, b.left)
        h = min(a.bottom, b.bottom) - max(a.top, b.top)
        return max(0.0, w) * max(0.0, h)

    for i, a in enumerate(bands):
        for b in bands[i + 1 :]:
            assert overlap(a, b) == 0.0


def test_decompose_band_edges() -> None:
    from mcp_servers.visual_picker.geometry import BoxLevel, Quad, decompose

    outer = Quad.from_rect(0, 0, 100, 60)
    inner = Quad.from_rect(10, 5, 70, 45)
    top, right, bottom, left = (b.quad for b in decompose(BoxLevel.PADDING, [outer], [inner]))

    assert (top.left, top.top, top.right, top.bottom) == (0, 0, 100, 5)
    assert (right.left, right.top, right.right, right.bottom) == (70, 5, 100, 45)
    assert (bottom.left, bottom.top, bottom.right, bottom.bottom) == (0, 45, 100, 60)
    assert (left.left, left.top, left.right, left.bottom) == (0, 5, 10, 45)


def test_decompose_innermost_returns_outer_quads_unchanged() -> None:
    from mcp_servers.visual_picker.geometry import BoxLevel, Quad, decompose

    lines = [Quad.from_rect(0, 0, 50, 10), Quad.from_rect(0, 10, 30, 20)]
    bands = decompose(BoxLevel.CONTENT, lines, innermost=True)
    assert [b.quad for b in bands] == lines


def test_decompose_equal_quads_gives_zero_area_bands() -> None:
    from mcp_servers.visual_picker.geometry import BoxLevel, Point, Quad, contains, decompose

    box = Quad.from_rect(10, 10, 90, 90)
    bands = decompose(BoxLevel.BORDER, [box], [box])
    assert len(bands) == 4
    assert all(b.quad.area == 0 for b in bands)
    assert not any(contains(Point(50, 50), b.quad) for b in bands)


def test_decompose_skips_outer_quads_without_inner_partner() -> None:
    from mcp_servers.visual_picker.geometry import BoxLevel, Quad, decompose

    outer = [Quad.from_rect(0, 0, 10, 10), Quad.from_rect(20, 0, 30, 10)]
    inner = [Quad.from_rect(2, 2, 8, 8)]
    assert len(decompose(BoxLevel.MARGIN, outer, inner)) == 4
    assert decompose(BoxLevel.MARGIN, outer, []) == []
    assert decompose(BoxLevel.MARGIN, outer, None) == []


def test_quad_from_cdp_and_translate() -> None:
    from mcp_servers.visual_picker.geometry import Quad

    quad = Quad.from_cdp([8, 16, 108, 16, 108, 66, 8, 66]).translated(0, 200)
    assert (quad.left, quad.top, quad.right, quad.bottom) == (8, 216, 108, 266)
    assert quad.to_box() == {"x": 8, "y": 216, "width": 100, "height": 50}

    with pytest.raises(ValueError):
        Quad.from_cdp([1, 2, 3])

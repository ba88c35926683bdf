"""
Picker tools: pick a point, resolve it, highlight and verify results.

Each function returns a plain dict; server handlers wrap them into ToolResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import soupsieve

from ..capture import capture_snapshot, count_live_matches
from ..config import PickerConfig
from ..dom import DocumentSnapshot
from ..geometry import Point
from ..http_client import HttpClientError
from ..overlay import HIGHLIGHT_SUFFIX, build_highlight_js, build_pick_js, build_remove_js
from ..resolver import ContributionResolver
from ..response import NodeResponse, build_node_responses
from ..selector import UniqueSelectorSynthesizer
from .base import ToolError, get_session

logger = logging.getLogger("mcp.visual_picker.tools")


@dataclass
class PickState:
    """Server-held state of the current pick session."""

    resolver: ContributionResolver
    snapshot: DocumentSnapshot | None = None
    synthesizer: UniqueSelectorSynthesizer | None = None
    point: Point | None = None
    responses: list[NodeResponse] = field(default_factory=list)

    @classmethod
    def for_config(cls, config: PickerConfig) -> PickState:
        return cls(resolver=ContributionResolver(overlay_id=config.overlay_id))

    @property
    def active(self) -> bool:
        return self.snapshot is not None and self.resolver.active

    def start(self, snapshot: DocumentSnapshot) -> None:
        self.snapshot = snapshot
        self.synthesizer = UniqueSelectorSynthesizer(snapshot)
        self.point = None
        self.responses = []
        self.resolver.begin_pick(snapshot)

    def reset(self) -> None:
        self.resolver.end_pick()
        self.snapshot = None
        self.synthesizer = None
        self.point = None
        self.responses = []


def _resolve_into(state: PickState, point: Point) -> dict[str, Any]:
    snapshot = state.snapshot
    if snapshot is None:
        raise ToolError(
            tool="resolve",
            action="resolve",
            reason="No page snapshot",
            suggestion="Run pick() or resolve(refresh=true) first",
        )
    contributions = state.resolver.resolve(point)
    state.point = point
    state.responses = build_node_responses(contributions, snapshot, state.synthesizer)
    return {
        "point": point.to_dict(),
        "url": snapshot.url,
        "elements": [r.to_dict() for r in state.responses],
    }


def _capture(config: PickerConfig, state: PickState, tool: str) -> None:
    with get_session(config, tool) as session:
        try:
            snapshot = capture_snapshot(session)
        except HttpClientError as e:
            raise ToolError(
                tool=tool,
                action="capture",
                reason=str(e),
                suggestion="Reload the page and retry",
            ) from e
    state.start(snapshot)


def pick(config: PickerConfig, state: PickState, timeout: float | None = None) -> dict[str, Any]:
    """Wait for one click on the page, then resolve the clicked point.

    Every pick starts a new session: the page is snapshotted after the click.
    """
    wait_s = float(timeout) if timeout is not None else config.pick_timeout
    wait_s = max(1.0, min(wait_s, 3600.0))

    with get_session(config, "pick") as session:
        try:
            raw = session.eval_js(
                build_pick_js(config.overlay_id, int(wait_s * 1000)),
                timeout=wait_s + config.cdp_timeout,
            )
        except HttpClientError as e:
            # The overlay removes itself on click/timeout; this covers a dropped evaluation.
            try:
                session.eval_js(build_remove_js(config.overlay_id))
            except HttpClientError:
                logger.warning("overlay cleanup failed id=%s", config.overlay_id)
            raise ToolError(
                tool="pick",
                action="wait",
                reason=str(e),
                suggestion="Keep the inspected tab in the foreground and retry",
            ) from e

        if not isinstance(raw, dict) or "x" not in raw or "y" not in raw:
            raise ToolError(
                tool="pick",
                action="wait",
                reason=f"No click within {wait_s:g}s",
                suggestion="Call pick again and click on the page",
            )
        point = Point(float(raw["x"]), float(raw["y"]))
        try:
            snapshot = capture_snapshot(session)
        except HttpClientError as e:
            raise ToolError(
                tool="pick",
                action="capture",
                reason=str(e),
                suggestion="Reload the page and retry",
            ) from e

    state.start(snapshot)
    return _resolve_into(state, point)


def resolve(config: PickerConfig, state: PickState, x: float, y: float, *, refresh: bool = False) -> dict[str, Any]:
    """Resolve a page point without waiting for a click."""
    if refresh or not state.active:
        _capture(config, state, "resolve")
    return _resolve_into(state, Point(float(x), float(y)))


def highlight(
    config: PickerConfig,
    state: PickState,
    index: int | None = None,
    *,
    clear: bool = False,
) -> dict[str, Any]:
    """Draw the rect of the ``index``-th element of the last result.

    An unknown index returns ``rect: None`` without touching the page.
    """
    highlight_id = config.overlay_id + HIGHLIGHT_SUFFIX
    if clear:
        with get_session(config, "highlight") as session:
            session.eval_js(build_remove_js(highlight_id))
        return {"cleared": True}

    rect = state.resolver.highlight_at(index) if index is not None else None
    if rect is None:
        return {"index": index, "rect": None}

    label = ""
    if index is not None and 0 <= index < len(state.responses):
        response = state.responses[index]
        label = f"{response.preview} [{response.reason}]"
    with get_session(config, "highlight") as session:
        session.eval_js(build_highlight_js(highlight_id, rect.to_box(), label))
    return {"index": index, "rect": rect.to_dict(), "label": label}


def verify_selector(config: PickerConfig, state: PickState, selector: str) -> dict[str, Any]:
    """Count matches of ``selector`` in the live page (and the current snapshot, if any)."""
    selector = (selector or "").strip()
    if not selector:
        raise ToolError(
            tool="verify_selector",
            action="validate",
            reason="Missing selector",
            suggestion="Pass a uniqueSelector from a pick result",
        )
    with get_session(config, "verify_selector") as session:
        try:
            live = count_live_matches(session, selector)
        except HttpClientError as e:
            raise ToolError(
                tool="verify_selector",
                action="query",
                reason=str(e),
                suggestion="Check the selector syntax",
                details={"selector": selector},
            ) from e

    result: dict[str, Any] = {"selector": selector, "matches": live, "unique": live == 1}
    if state.snapshot is not None:
        try:
            result["snapshotMatches"] = len(state.snapshot.query_all(selector))
        except soupsieve.SelectorSyntaxError:
            result["snapshotMatches"] = None
    return result


__all__ = ["PickState", "highlight", "pick", "resolve", "verify_selector"]

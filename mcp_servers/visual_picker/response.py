"""Serializable node responses for pick results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .dom import GeometryProvider
from .resolver import Contribution
from .selector import UniqueSelectorSynthesizer


@dataclass(frozen=True, slots=True)
class NodeResponse:
    node_name: str
    reason: str
    unique_selector: str
    # None for text contributions (omitted on the wire).
    attributes: tuple[tuple[str, str], ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"nodeName": self.node_name}
        if self.attributes is not None:
            out["attributes"] = [{"name": name, "value": value} for name, value in self.attributes]
        out["reason"] = self.reason
        out["uniqueSelector"] = self.unique_selector
        return out

    @property
    def preview(self) -> str:
        return node_preview(self.node_name, self.attributes or ())


def node_preview(node_name: str, attributes: Sequence[tuple[str, str]]) -> str:
    """Short label like ``div#main.card.wide``."""
    label = node_name.lower()
    attrs = dict(attributes)
    node_id = attrs.get("id")
    if node_id:
        label += "#" + node_id
    classes = (attrs.get("class") or "").split()
    if classes:
        label += "." + ".".join(classes)
    return label


def create_node_response(
    contribution: Contribution,
    provider: GeometryProvider,
    synthesizer: UniqueSelectorSynthesizer,
) -> NodeResponse:
    node = contribution.node
    attributes = tuple(provider.attributes(node)) if node.is_element else None
    return NodeResponse(
        node_name=node.node_name,
        reason=contribution.reason,
        unique_selector=synthesizer.selector_for(node),
        attributes=attributes,
    )


def build_node_responses(
    contributions: Sequence[Contribution],
    provider: GeometryProvider,
    synthesizer: UniqueSelectorSynthesizer | None = None,
) -> list[NodeResponse]:
    synth = synthesizer or UniqueSelectorSynthesizer(provider)
    return [create_node_response(c, provider, synth) for c in contributions]


__all__ = ["NodeResponse", "build_node_responses", "create_node_response", "node_preview"]

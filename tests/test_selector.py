from __future__ import annotations

import pytest


def _synth(doc):  # noqa: ANN001, ANN202
    from mcp_servers.visual_picker.selector import UniqueSelectorSynthesizer

    return UniqueSelectorSynthesizer(doc)


def _assert_round_trip(doc, node, selector: str) -> None:  # noqa: ANN001
    assert doc.query_all(selector) == [node]


def test_duplicate_class_needs_nth_child() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    first = element("span", {"class": "a"})
    second = element("span", {"class": "a"})
    doc = DocumentSnapshot([element("div", {"id": "x"}, first, second)])
    synth = _synth(doc)

    assert synth.selector_for(first) == "span.a:nth-child(1)"
    assert synth.selector_for(second) == "span.a:nth-child(2)"
    _assert_round_trip(doc, first, "span.a:nth-child(1)")


def test_unique_id_wins() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    node = element("section", {"id": "main", "class": "a"})
    doc = DocumentSnapshot([element("html", {}, element("body", {}, node))])
    assert _synth(doc).selector_for(node) == "#main"


def test_duplicate_id_falls_through_to_classes() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    one = element("p", {"id": "dup", "class": "intro"})
    two = element("div", {"id": "dup", "class": "intro"})
    doc = DocumentSnapshot([element("html", {}, element("body", {}, one, two))])
    synth = _synth(doc)

    assert synth.selector_for(one) == "p.intro"
    assert synth.selector_for(two) == "div.intro"


def test_unique_class_alone() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    node = element("li", {"class": "active item"})
    doc = DocumentSnapshot(
        [element("ul", {}, element("li", {"class": "item"}), node, element("li", {"class": "item"}))]
    )
    selector = _synth(doc).selector_for(node)
    assert selector == ".active"
    _assert_round_trip(doc, node, selector)


@pytest.mark.parametrize("tag", ["html", "head", "body"])
def test_structural_tags_are_literal(tag: str) -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    head = element("head", {"class": "x"})
    body = element("body", {"class": "x"})
    html = element("html", {"class": "x"}, head, body)
    doc = DocumentSnapshot([html])
    node = {"html": html, "head": head, "body": body}[tag]
    assert _synth(doc).selector_for(node) == tag


def test_deep_fallback_chain_anchors_at_nearest_unique_ancestor() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    target = element("p")
    doc = DocumentSnapshot(
        [
            element(
                "html",
                {},
                element("head"),
                element("body", {}, element("div", {}, element("p")), element("div", {}, element("p"), target)),
            )
        ]
    )
    selector = _synth(doc).selector_for(target)
    assert selector == "body > div:nth-child(2) > p:nth-child(2)"
    _assert_round_trip(doc, target, selector)


def test_fallback_chain_stops_at_ancestor_with_id() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    target = element("em")
    doc = DocumentSnapshot(
        [element("html", {}, element("body", {}, element("div", {"id": "app"}, element("span", {}, target))))]
    )
    selector = _synth(doc).selector_for(target)
    assert selector == "#app > span:nth-child(1) > em:nth-child(1)"
    _assert_round_trip(doc, target, selector)


def test_root_element_without_body_context() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    svg = element("svg")
    doc = DocumentSnapshot([svg])
    assert _synth(doc).selector_for(svg) == "svg:nth-child(1)"


def test_text_node_uses_parent_selector() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element, text

    words = text("hello")
    doc = DocumentSnapshot([element("html", {}, element("body", {}, element("h1", {"id": "title"}, words)))])
    assert _synth(doc).selector_for(words) == "#title"


def test_identifiers_are_escaped() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    by_id = element("div", {"id": "1:weird id"})
    by_class = element("span", {"class": "w-1/2"})
    doc = DocumentSnapshot([element("html", {}, element("body", {}, by_id, by_class, element("span")))])
    synth = _synth(doc)

    id_selector = synth.selector_for(by_id)
    assert id_selector == "#\\31 \\:weird\\ id"
    _assert_round_trip(doc, by_id, id_selector)

    class_selector = synth.selector_for(by_class)
    assert class_selector == ".w-1\\/2"
    _assert_round_trip(doc, by_class, class_selector)


def test_every_element_round_trips() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element, text

    doc = DocumentSnapshot(
        [
            element(
                "html",
                {},
                element("head", {}, element("title", {}, text("t"))),
                element(
                    "body",
                    {},
                    element("nav", {"class": "menu"}, element("a", {"class": "link"}), element("a", {"class": "link"})),
                    element("main", {"id": "main"}, element("article", {}, element("p"), element("p", {"class": "menu"}))),
                    element("footer", {"class": "menu"}, element("a", {"class": "link"})),
                ),
            )
        ]
    )
    synth = _synth(doc)
    for node in doc.iter_nodes():
        if node.is_element:
            _assert_round_trip(doc, node, synth.selector_for(node))


def test_custom_escape_is_pluggable() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element
    from mcp_servers.visual_picker.selector import UniqueSelectorSynthesizer

    node = element("div", {"id": "main"})
    doc = DocumentSnapshot([node])
    synth = UniqueSelectorSynthesizer(doc, escape=lambda value: value)
    assert synth.selector_for(node) == "#main"


def test_svg_names_keep_their_case() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    first = element("linearGradient")
    second = element("linearGradient")
    doc = DocumentSnapshot(
        [element("html", {}, element("body", {}, element("svg", {"id": "icon"}, element("defs", {}, first, second))))]
    )
    selector = _synth(doc).selector_for(second)
    assert selector == "#icon > defs:nth-child(1) > linearGradient:nth-child(2)"
    _assert_round_trip(doc, second, selector)

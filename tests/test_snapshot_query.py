from __future__ import annotations

import pytest


def _doc():  # noqa: ANN202
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    return DocumentSnapshot(
        [
            element(
                "html",
                {},
                element("head"),
                element(
                    "body",
                    {},
                    element("div", {"id": "a:b", "class": "card wide"}),
                    element("div", {"id": "1st", "class": "card"}, element("p", {"class": "x"})),
                    element("section", {}, element("p", {"class": "x"})),
                ),
            )
        ]
    )


def test_escaped_identifiers_round_trip() -> None:
    import soupsieve

    doc = _doc()
    for raw in ("a:b", "1st"):
        found = doc.query_all("#" + soupsieve.escape(raw))
        assert [n.element_id for n in found] == [raw]


def test_query_compounds_and_combinators() -> None:
    doc = _doc()
    assert len(doc.query_all(".card")) == 2
    assert len(doc.query_all("div.card.wide")) == 1
    assert len(doc.query_all("DIV.card")) == 2
    assert len(doc.query_all("p.x")) == 2
    assert len(doc.query_all("section > p")) == 1
    assert len(doc.query_all("body p")) == 2
    assert len(doc.query_all("body > p")) == 0
    assert [n.local_name for n in doc.query_all("body > :nth-child(3)")] == ["section"]
    assert len(doc.query_all("*")) == 8
    assert [n.local_name for n in doc.query_all("section, head")] == ["head", "section"]


def test_query_returns_snapshot_nodes() -> None:
    doc = _doc()
    [card] = doc.query_all("div.wide")
    assert card in list(doc.iter_nodes())
    assert card.parent is not None and card.parent.local_name == "body"


def test_nth_child_counts_element_siblings_only() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element, text

    doc = DocumentSnapshot([element("ul", {}, text("\n"), element("li"), text("\n"), element("li", {"id": "two"}))])
    found = doc.query_all("li:nth-child(2)")
    assert [n.element_id for n in found] == ["two"]


def test_class_tokens_split_on_ascii_whitespace_only() -> None:
    from mcp_servers.visual_picker.dom import DocumentSnapshot, element

    node = element("span", {"class": "a\u00a0b\tc  c\nd"})
    assert node.class_list == ["a\u00a0b", "c", "d"]

    doc = DocumentSnapshot([element("body", {}, node)])
    assert doc.query_all(".d") == [node]
    assert doc.query_all(".a") == []


@pytest.mark.parametrize("bad", ["div >", "#", "..x", "a[", "p:nth-child("])
def test_invalid_selectors_raise(bad: str) -> None:
    import soupsieve

    with pytest.raises(soupsieve.SelectorSyntaxError):
        _doc().query_all(bad)

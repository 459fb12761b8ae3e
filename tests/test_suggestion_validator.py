from __future__ import annotations

import logging
from typing import Any

import pytest

from data_model import CollectionSet
from html_parser import DocumentModel
from validator import DiscardCode, SuggestionValidator, initial_selection


HTML = """
<body>
  <ul id="list">
    <li class="item"><span class="name">A</span><a href="/a">more</a></li>
    <li class="item"><span class="name">B</span></li>
    <li class="item"><span class="name">C</span><a href="/c">more</a></li>
  </ul>
  <div class="card"><h2>Card 1</h2><p class="price">10</p></div>
  <div class="card"><h2>Card 2</h2><p class="price">20</p></div>
</body>
"""


def _validate(proposals: Any):
    doc = DocumentModel(HTML)
    return SuggestionValidator(doc).validate(proposals)


def _items(*points: dict[str, Any], selector: str = "li.item", name: str = "Items") -> dict[str, Any]:
    return {"collectionName": name, "repeatingElementSelector": selector, "dataPoints": list(points)}


def _assert_sound(collections: CollectionSet) -> None:
    doc = DocumentModel(HTML)
    for coll in collections:
        elements = doc.match_all(coll.repeating_selector)
        assert elements
        assert coll.data_points
        for dp in coll.data_points:
            assert doc.match_first(dp.selector, scope=elements[0]) is not None


def test_collection_with_unmatched_repeating_selector_is_absent() -> None:
    report = _validate([_items({"label": "Name", "selector": "span.name"}, selector="article.post")])

    assert report.is_empty
    assert [d.code for d in report.discarded] == [DiscardCode.REPEATING_NO_MATCH]


def test_unmatched_points_are_dropped_and_ids_reassigned() -> None:
    report = _validate([
        _items(
            {"label": "Bogus", "selector": ".does-not-exist"},
            {"label": "Name", "selector": "span.name"},
            {"label": "Link", "selector": "a", "attribute": "href"},
        )
    ])

    (coll,) = report.collections
    assert coll.id == "coll-0"
    assert [(dp.id, dp.label) for dp in coll.data_points] == [("dp-0-0", "Name"), ("dp-0-1", "Link")]
    assert coll.data_points[1].attribute == "href"
    assert report.discarded[0].code == DiscardCode.POINT_NO_MATCH
    assert report.discarded[0].path == "/0/dataPoints/0"


def test_collection_without_valid_points_is_dropped() -> None:
    report = _validate([_items({"label": "Bogus", "selector": "table td"})])

    assert report.is_empty
    assert report.discarded[-1].code == DiscardCode.NO_VALID_POINTS


def test_points_are_validated_against_first_element_only() -> None:
    # link exists in the first item but not in the second, still kept
    report = _validate([_items({"label": "Link", "selector": "a", "attribute": "href"})])

    assert [dp.label for dp in report.collections.first.data_points] == ["Link"]


def test_collection_ids_follow_oracle_index() -> None:
    report = _validate([
        _items({"label": "X", "selector": "span"}, selector="section"),
        _items({"label": "Title", "selector": "h2"}, selector="div.card", name="Cards"),
    ])

    (coll,) = report.collections
    assert coll.id == "coll-1"
    assert coll.point_ids() == ["dp-1-0"]


def test_order_of_collections_and_points_is_preserved() -> None:
    report = _validate([
        _items(
            {"label": "Price", "selector": "p.price"},
            {"label": "nope", "selector": "span"},
            {"label": "Title", "selector": "h2"},
            selector="div.card", name="Cards",
        ),
        _items({"label": "Name", "selector": "span.name"}),
    ])

    assert [c.name for c in report.collections] == ["Cards", "Items"]
    assert [dp.label for dp in report.collections.first.data_points] == ["Price", "Title"]


@pytest.mark.parametrize(
    "proposals",
    [
        [None, "collection", 7, []],
        [{}],
        [{"repeatingElementSelector": "", "dataPoints": []}],
        [{"repeatingElementSelector": "li.item", "dataPoints": "span.name"}],
        [{"repeatingElementSelector": "li.item"}],
        [_items({"label": "Name", "selector": "span.name"}, selector="div[")],
        [_items({"label": "", "selector": "span.name"})],
        [_items({"label": "Name", "selector": "   "})],
        [_items({"label": "Name", "selector": "span["})],
        [_items({"label": "Name", "selector": "span.name", "attribute": 5})],
        [_items({"label": "Name"}), _items({"selector": "span.name"})],
        [_items(None, "x", {"label": None, "selector": "span"})],
    ],
)
def test_adversarial_proposals_never_survive(proposals: list[Any]) -> None:
    report = _validate(proposals)

    assert report.is_empty
    assert report.discarded


@pytest.mark.parametrize(
    "proposals",
    [
        [
            _items({"label": "Name", "selector": "span.name"}, {"label": "Bad", "selector": "b["}),
            _items({"label": "Title", "selector": "h2"}, selector="div.card"),
        ],
        [
            _items({"label": "Price", "selector": "p.price", "attribute": "data-x"}, selector="div.card"),
            _items({"label": "Ghost", "selector": "span"}, selector="#missing"),
        ],
        [_items({"label": "Any", "selector": "*"}, selector="ul#list > li")],
    ],
)
def test_validation_result_is_sound(proposals: list[Any]) -> None:
    report = _validate(proposals)

    assert not report.is_empty
    _assert_sound(report.collections)


def test_strings_are_normalized() -> None:
    report = _validate([{
        "name": "  Items ",
        "repeatingElementSelector": " li.item ",
        "dataPoints": [{"label": " Name ", "selector": " span.name ", "attribute": "  "}],
    }])

    coll = report.collections.first
    assert coll.name == "Items"
    assert coll.repeating_selector == "li.item"
    assert coll.data_points[0].label == "Name"
    assert coll.data_points[0].attribute is None


def test_wrapper_object_is_accepted() -> None:
    report = _validate({"collections": [_items({"label": "Name", "selector": "span.name"})]})

    assert len(report.collections) == 1


@pytest.mark.parametrize("proposals", [None, "[]", {"items": []}, 3])
def test_non_list_output_yields_empty_set(proposals: Any) -> None:
    report = _validate(proposals)

    assert report.is_empty
    assert report.discarded[0].code == DiscardCode.SHAPE_INVALID


def test_duplicate_labels_are_kept_as_independent_points() -> None:
    report = _validate([_items({"label": "Name", "selector": "span.name"}, {"label": "Name", "selector": "span"})])

    assert report.collections.first.point_ids() == ["dp-0-0", "dp-0-1"]


def test_discards_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="validator.suggestion_validator"):
        _validate([_items({"label": "Name", "selector": "span.name"}, selector="article")])

    assert "article" in caplog.text


def test_initial_selection_is_first_collection_points() -> None:
    report = _validate([
        _items({"label": "Name", "selector": "span.name"}, {"label": "Link", "selector": "a"}),
        _items({"label": "Title", "selector": "h2"}, selector="div.card"),
    ])

    assert initial_selection(report.collections) == {"dp-0-0", "dp-0-1"}


def test_initial_selection_of_empty_set_is_empty() -> None:
    assert initial_selection(CollectionSet()) == set()

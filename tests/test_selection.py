from __future__ import annotations

import pytest

from data_model import CollectionSet, DataCollection, DataPoint
from selection import (
    SelectionState,
    all_visible_selected,
    filter_collections,
    toggle_all_visible,
    visible_point_ids,
)


def _collections() -> CollectionSet:
    return CollectionSet([
        DataCollection(
            id="coll-0",
            name="Products",
            repeating_selector="div.product",
            data_points=(
                DataPoint(id="dp-0-0", label="Name", selector="h2"),
                DataPoint(id="dp-0-1", label="Price", selector=".price"),
            ),
        ),
        DataCollection(
            id="coll-2",
            name="Reviews",
            repeating_selector="li.review",
            data_points=(
                DataPoint(id="dp-2-0", label="Author", selector=".author"),
                DataPoint(id="dp-2-1", label="Rating", selector="span", attribute="data-stars"),
                DataPoint(id="dp-2-2", label="Unit price", selector=".up"),
            ),
        ),
    ])


def test_state_starts_with_first_collection_selected() -> None:
    state = SelectionState(_collections())

    assert state.selected_ids == {"dp-0-0", "dp-0-1"}


def test_state_over_empty_set_is_empty() -> None:
    assert len(SelectionState(CollectionSet())) == 0


def test_reset_replaces_previous_membership() -> None:
    state = SelectionState(_collections())
    state.toggle("dp-2-0")
    state.toggle("dp-0-0")

    state.reset(_collections())

    assert state.selected_ids == {"dp-0-0", "dp-0-1"}


@pytest.mark.parametrize("point_id", ["dp-0-0", "dp-2-1", "unknown-id"])
def test_toggle_twice_restores_membership(point_id: str) -> None:
    state = SelectionState(_collections())
    before = state.selected_ids

    state.toggle(point_id)
    assert state.selected_ids != before
    state.toggle(point_id)

    assert state.selected_ids == before


def test_select_then_toggle_all_deselects_visible() -> None:
    state = SelectionState(_collections())
    visible = ["dp-2-0", "dp-2-1"]

    state.select_all_visible(visible)
    assert set(visible) <= state.selected_ids
    assert all_visible_selected(state, visible)

    selected = toggle_all_visible(state, visible)

    assert selected is False
    assert not set(visible) & state.selected_ids
    # ids outside the visible set are left alone
    assert state.selected_ids == {"dp-0-0", "dp-0-1"}


def test_toggle_all_selects_when_only_some_visible_are_selected() -> None:
    state = SelectionState(_collections())
    visible = ["dp-0-1", "dp-2-2"]

    assert toggle_all_visible(state, visible) is True
    assert {"dp-0-1", "dp-2-2"} <= state.selected_ids


def test_deselect_all_visible_only_removes_visible() -> None:
    state = SelectionState(_collections())

    state.deselect_all_visible(["dp-0-0", "dp-2-0"])

    assert state.selected_ids == {"dp-0-1"}


def test_all_visible_selected_is_false_for_empty_visibility() -> None:
    state = SelectionState(_collections())

    assert all_visible_selected(state, []) is False


def test_select_all_affordance_is_recomputed_from_membership() -> None:
    state = SelectionState(_collections())
    visible = visible_point_ids(_collections(), "price")

    assert not all_visible_selected(state, visible)
    state.toggle("dp-2-2")
    assert all_visible_selected(state, visible)
    state.toggle("dp-0-1")
    assert not all_visible_selected(state, visible)


def test_filter_matches_label_case_insensitively() -> None:
    assert visible_point_ids(_collections(), "PRICE") == ["dp-0-1", "dp-2-2"]


def test_filter_matches_collection_name() -> None:
    assert visible_point_ids(_collections(), "review") == ["dp-2-0", "dp-2-1", "dp-2-2"]


def test_empty_filter_shows_everything() -> None:
    assert visible_point_ids(_collections(), "") == _collections().all_point_ids()


def test_filter_collections_drops_collections_without_visible_points() -> None:
    view = filter_collections(_collections(), "author")

    assert [c.id for c in view] == ["coll-2"]
    assert [dp.id for dp in view[0].data_points] == ["dp-2-0"]


def test_filter_without_matches_is_empty() -> None:
    assert visible_point_ids(_collections(), "zzz") == []

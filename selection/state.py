"""
selection/state.py — zbiór pól zaznaczonych do następnej ekstrakcji.

SelectionState jest zwykłym zbiorem id pól (tylko przynależność, bez
kolejności). Stan przycisku "zaznacz wszystko" nie jest przechowywany:
all_visible_selected() wylicza go przy każdym odczycie.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from data_model import CollectionSet, DataPointId
from validator import initial_selection


class SelectionState:
    """
    Zaznaczenie pól nad zweryfikowanym CollectionSet.

    Użycie:
        state = SelectionState(report.collections)   # pola 1. kolekcji
        state.toggle("dp-1-0")
        state.select_all_visible(visible_point_ids(collections, "cena"))
    """

    def __init__(self, collection_set: CollectionSet | None = None) -> None:
        self._selected: set[DataPointId] = set()
        if collection_set is not None:
            self.reset(collection_set)

    def reset(self, collection_set: CollectionSet) -> None:
        """Czyści zaznaczenie i zaznacza wszystkie pola pierwszej kolekcji."""
        self._selected = initial_selection(collection_set)

    def clear(self) -> None:
        self._selected.clear()

    # ------------------------------------------------------------------
    # Mutacje
    # ------------------------------------------------------------------

    def toggle(self, point_id: DataPointId) -> None:
        # Id spoza zweryfikowanych kolekcji jest tylko śledzone; ekstrakcja
        # i tak bierze pod uwagę wyłącznie pola zweryfikowanych kolekcji.
        if point_id in self._selected:
            self._selected.discard(point_id)
        else:
            self._selected.add(point_id)

    def select_all_visible(self, visible_ids: Iterable[DataPointId]) -> None:
        self._selected.update(visible_ids)

    def deselect_all_visible(self, visible_ids: Iterable[DataPointId]) -> None:
        self._selected.difference_update(visible_ids)

    # ------------------------------------------------------------------
    # Odczyt
    # ------------------------------------------------------------------

    def __contains__(self, point_id: object) -> bool:
        return point_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __iter__(self) -> Iterator[DataPointId]:
        return iter(self._selected)

    @property
    def selected_ids(self) -> frozenset[DataPointId]:
        return frozenset(self._selected)


def all_visible_selected(state: SelectionState, visible_ids: Iterable[DataPointId]) -> bool:
    """True gdy każde widoczne pole jest zaznaczone; False dla pustej widoczności."""
    visible = list(visible_ids)
    if not visible:
        return False
    return all(pid in state for pid in visible)


def toggle_all_visible(state: SelectionState, visible_ids: Iterable[DataPointId]) -> bool:
    """
    Zachowanie pojedynczego przycisku "zaznacz / odznacz wszystko".

    Gdy wszystkie widoczne pola są już zaznaczone, odznacza je, w przeciwnym
    razie zaznacza. Zwraca True jeśli wykonano zaznaczenie.
    """
    visible = list(visible_ids)
    if all_visible_selected(state, visible):
        state.deselect_all_visible(visible)
        return False
    state.select_all_visible(visible)
    return True

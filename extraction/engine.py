"""
extraction/engine.py — ekstrakcja wierszy z jednej zweryfikowanej kolekcji.

extract(collection_set, selection, document) -> ExtractionResult

Reguła jednej kolekcji: spośród kolekcji z co najmniej jednym zaznaczonym
polem brana jest tylko pierwsza (w kolejności CollectionSet). Pola zaznaczone
w pozostałych kolekcjach są w tym przebiegu ignorowane, a do wyniku trafia
notatka informacyjna.

Ekstrakcja jest atomowa: zwraca komplet wierszy albo zgłasza wyjątek.
"""

from __future__ import annotations

import logging

from data_model import (
    CollectionSet,
    DataCollection,
    ExtractionResult,
    NoElementsMatchedError,
    NoSelectionError,
    Row,
)
from html_parser import DocumentModel
from selection import SelectionState

logger = logging.getLogger(__name__)


def _collections_with_selection(
    collection_set: CollectionSet,
    selection: SelectionState,
) -> list[DataCollection]:
    return [
        coll for coll in collection_set
        if any(dp.id in selection for dp in coll.data_points)
    ]


def extract(
    collection_set: CollectionSet,
    selection: SelectionState,
    document: DocumentModel,
) -> ExtractionResult:
    """
    Wyciąga po jednym wierszu z każdego powtarzalnego elementu kolekcji.

    Raises:
        NoSelectionError:       żadne pole zweryfikowanych kolekcji nie jest zaznaczone
        NoElementsMatchedError: selektor powtarzalny nie pasuje już do niczego
    """
    candidates = _collections_with_selection(collection_set, selection)
    if not candidates:
        raise NoSelectionError()

    collection = candidates[0]
    notes: list[str] = []
    if len(candidates) > 1:
        note = (
            f'Wyciągam dane tylko z pierwszej kolekcji: "{collection.name}". '
            f"Ekstrakcja wielu kolekcji naraz nie jest obsługiwana."
        )
        logger.info(note)
        notes.append(note)

    points = [dp for dp in collection.data_points if dp.id in selection]

    elements = document.match_all(collection.repeating_selector)
    if not elements:
        raise NoElementsMatchedError(collection.repeating_selector)

    rows: list[Row] = []
    for element in elements:
        row: Row = {}
        for dp in points:
            row[dp.label] = document.read_field(element, dp.selector, dp.attribute)
        rows.append(row)

    # etykiety mogą się powtarzać, kolumna zostaje na pozycji pierwszego wystąpienia
    columns = list(dict.fromkeys(dp.label for dp in points))

    logger.debug(
        "Kolekcja %s: %d wierszy x %d kolumn", collection.id, len(rows), len(columns),
    )
    return ExtractionResult(collection=collection, columns=columns, rows=rows, notes=notes)

"""
validator/suggestion_validator.py — weryfikacja sugestii wyroczni względem dokumentu.

SuggestionValidator(document).validate(proposals) -> ValidationReport

Etapy dla każdej proponowanej kolekcji (w kolejności wyroczni):
  A — kształt JSON           (jsonschema, Draft 2020-12)
  B — selektor powtarzalny   (>= 1 dopasowanie w całym dokumencie)
  C — pola                   (każde pole musi pasować w PIERWSZYM elemencie)
  D — kolekcja niepusta      (>= 1 pole po etapie C)

Walidacja pól to próbka na jednym elemencie, nie sprawdzenie wyczerpujące:
pole obecne w pierwszym elemencie, a nieobecne w pozostałych, da w ekstrakcji
wartości None dla tych wierszy.
"""

from __future__ import annotations

import logging
from typing import Any

import jsonschema

from data_model import CollectionSet, DataCollection, DataPoint, DataPointId
from html_parser import DocumentModel

from .normalizer import normalize_collection, normalize_point
from .types import Discard, DiscardCode, ValidationReport

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Schematy kształtu pojedynczych propozycji
# ---------------------------------------------------------------------------

COLLECTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["repeatingElementSelector", "dataPoints"],
    "properties": {
        "collectionName":           {"type": "string"},
        "repeatingElementSelector": {"type": "string", "minLength": 1},
        "dataPoints":               {"type": "array"},
    },
}

POINT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["label", "selector"],
    "properties": {
        "label":     {"type": "string", "minLength": 1},
        "selector":  {"type": "string", "minLength": 1},
        "attribute": {"type": "string"},
    },
}

_COLLECTION_VALIDATOR = jsonschema.Draft202012Validator(COLLECTION_SCHEMA)
_POINT_VALIDATOR      = jsonschema.Draft202012Validator(POINT_SCHEMA)


def _shape_errors(validator: jsonschema.Draft202012Validator, item: Any) -> list[str]:
    return [e.message for e in validator.iter_errors(item)]


def _as_proposals(raw: Any) -> list[Any] | None:
    """Akceptuje listę propozycji albo obiekt {"collections": [...]}."""
    if isinstance(raw, dict):
        raw = raw.get("collections")
    if isinstance(raw, list):
        return raw
    return None


def initial_selection(collection_set: CollectionSet) -> set[DataPointId]:
    """
    Domyślne zaznaczenie po walidacji: wszystkie pola pierwszej kolekcji.

    Pusty zestaw → puste zaznaczenie (stan "brak kolekcji", nie błąd).
    """
    first = collection_set.first
    if first is None or not first.data_points:
        return set()
    return set(first.point_ids())


# ---------------------------------------------------------------------------
# SuggestionValidator
# ---------------------------------------------------------------------------

class SuggestionValidator:
    """
    Zawęża niezaufaną odpowiedź wyroczni do zweryfikowanego CollectionSet.

    Użycie:
        doc       = DocumentModel(raw_html)
        validator = SuggestionValidator(doc)
        report    = validator.validate(oracle_output)
        for d in report.discarded:
            print(d.code, d.path, d.message)
    """

    def __init__(self, document: DocumentModel) -> None:
        self._doc = document

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, proposals: Any) -> ValidationReport:
        discarded: list[Discard] = []
        items = _as_proposals(proposals)
        if items is None:
            self._discard(
                discarded, DiscardCode.SHAPE_INVALID, "",
                "Odpowiedź wyroczni nie zawiera listy kolekcji.",
            )
            return ValidationReport(CollectionSet(), discarded)

        collections: list[DataCollection] = []
        for coll_index, proposal in enumerate(items):
            coll = self._validate_collection(coll_index, proposal, discarded)
            if coll is not None:
                collections.append(coll)

        return ValidationReport(CollectionSet(collections), discarded)

    # ------------------------------------------------------------------
    # Jedna kolekcja (etapy A–D)
    # ------------------------------------------------------------------

    def _validate_collection(
        self,
        coll_index: int,
        proposal: Any,
        discarded: list[Discard],
    ) -> DataCollection | None:
        path = f"/{coll_index}"
        proposal = normalize_collection(proposal)

        # A: kształt
        errors = _shape_errors(_COLLECTION_VALIDATOR, proposal)
        if errors:
            self._discard(discarded, DiscardCode.SHAPE_INVALID, path, "; ".join(errors))
            return None

        # B: selektor powtarzalny
        selector: str = proposal["repeatingElementSelector"]
        elements = self._doc.match_all(selector)
        if not elements:
            self._discard(
                discarded, DiscardCode.REPEATING_NO_MATCH, path,
                f'Selektor powtarzalny "{selector}" nie pasuje do żadnego elementu.',
            )
            return None

        # C: pola, próbka na pierwszym elemencie
        anchor = elements[0]
        points: list[DataPoint] = []
        for point_index, raw_point in enumerate(proposal["dataPoints"]):
            point_path = f"{path}/dataPoints/{point_index}"
            raw_point = normalize_point(raw_point)

            errors = _shape_errors(_POINT_VALIDATOR, raw_point)
            if errors:
                self._discard(discarded, DiscardCode.SHAPE_INVALID, point_path, "; ".join(errors))
                continue

            if self._doc.match_first(raw_point["selector"], scope=anchor) is None:
                self._discard(
                    discarded, DiscardCode.POINT_NO_MATCH, point_path,
                    f'Selektor pola "{raw_point["selector"]}" nie pasuje '
                    f'wewnątrz "{selector}".',
                )
                continue

            points.append(DataPoint(
                id=f"dp-{coll_index}-{len(points)}",
                label=raw_point["label"],
                selector=raw_point["selector"],
                attribute=raw_point.get("attribute"),
            ))

        # D: kolekcja bez pól jest odrzucana w całości
        if not points:
            self._discard(
                discarded, DiscardCode.NO_VALID_POINTS, path,
                f'Kolekcja "{proposal["collectionName"]}" nie ma żadnego poprawnego pola.',
            )
            return None

        return DataCollection(
            id=f"coll-{coll_index}",
            name=proposal["collectionName"],
            repeating_selector=selector,
            data_points=tuple(points),
        )

    @staticmethod
    def _discard(discarded: list[Discard], code: DiscardCode, path: str, message: str) -> None:
        logger.warning("Odrzucono sugestię %s (%s): %s", path or "/", code, message)
        discarded.append(Discard(code=code, path=path, message=message))

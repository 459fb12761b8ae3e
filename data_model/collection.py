"""
data_model/collection.py — zweryfikowane kolekcje i pola do ekstrakcji.

DataPoint      — jedno pole wyciągane z każdego powtarzalnego elementu
DataCollection — grupa powtarzalnych elementów (np. karty produktów)
CollectionSet  — uporządkowana lista kolekcji (kolejność wyroczni = ranking)
Row            — jeden wiersz wyniku: etykieta pola → wartość lub None

Obiekty tego modułu powstają wyłącznie w walidatorze (validator/) albo przy
odczycie wcześniej zwalidowanego zestawu z JSON (CollectionSet.from_dict).
Surowa odpowiedź wyroczni nigdy nie trafia tu bezpośrednio.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# np. "coll-0"
type CollectionId = str

# np. "dp-0-2"
type DataPointId = str

# Wiersz wyniku; kolejność kluczy = kolejność kolumn.
type Row = dict[str, str | None]


# ---------------------------------------------------------------------------
# DataPoint
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DataPoint:
    """
    Pole wyciągane z każdego powtarzalnego elementu kolekcji.

    - id:        nadawany przez walidator, stabilny w obrębie przebiegu
    - label:     nazwa kolumny; duplikaty są dozwolone
    - selector:  selektor CSS względem powtarzalnego elementu
    - attribute: nazwa atrybutu do odczytu; None → tekst elementu
    """
    id: DataPointId
    label: str
    selector: str
    attribute: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id, "label": self.label, "selector": self.selector}
        if self.attribute is not None:
            d["attribute"] = self.attribute
        return d


# ---------------------------------------------------------------------------
# DataCollection
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DataCollection:
    """
    Grupa powtarzalnych elementów dokumentu.

    Niezmiennik (po walidacji): repeating_selector pasuje do >= 1 elementu
    dokumentu, a data_points zawiera >= 1 pole.
    """
    id: CollectionId
    name: str
    repeating_selector: str
    data_points: tuple[DataPoint, ...]

    def point_ids(self) -> list[DataPointId]:
        return [dp.id for dp in self.data_points]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":                       self.id,
            "name":                     self.name,
            "repeatingElementSelector": self.repeating_selector,
            "dataPoints":               [dp.to_dict() for dp in self.data_points],
        }


# ---------------------------------------------------------------------------
# CollectionSet
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class CollectionSet:
    """
    Uporządkowany zestaw zweryfikowanych kolekcji.

    Kolejność jest kolejnością zaproponowaną przez wyrocznię i nie jest
    nigdy sortowana. Od niej zależy domyślne zaznaczenie i wybór kolekcji
    przy ekstrakcji.
    """
    collections: list[DataCollection] = field(default_factory=list)
    _points: dict[DataPointId, tuple[DataPoint, DataCollection]] = field(
        init=False, repr=False, compare=False, default_factory=dict,
    )

    def __post_init__(self) -> None:
        for coll in self.collections:
            for dp in coll.data_points:
                self._points[dp.id] = (dp, coll)

    def __iter__(self) -> Iterator[DataCollection]:
        return iter(self.collections)

    def __len__(self) -> int:
        return len(self.collections)

    def __bool__(self) -> bool:
        return bool(self.collections)

    @property
    def first(self) -> DataCollection | None:
        return self.collections[0] if self.collections else None

    def find_point(self, point_id: DataPointId) -> tuple[DataPoint, DataCollection] | None:
        """Zwraca (pole, kolekcja-właściciel) albo None dla nieznanego id."""
        return self._points.get(point_id)

    def all_point_ids(self) -> list[DataPointId]:
        return [dp.id for coll in self.collections for dp in coll.data_points]

    # ------------------------------------------------------------------
    # Serializacja (zapis zwalidowanego zestawu między wywołaniami CLI)
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {"collections": [c.to_dict() for c in self.collections]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CollectionSet:
        """
        Odtwarza zestaw zapisany przez to_dict().

        Ufa identyfikatorom nadanym wcześniej przez walidator. Nie służy
        do wczytywania surowej odpowiedzi wyroczni.
        """
        collections: list[DataCollection] = []
        for c in data.get("collections", []):
            points = tuple(
                DataPoint(
                    id=p["id"],
                    label=p["label"],
                    selector=p["selector"],
                    attribute=p.get("attribute"),
                )
                for p in c.get("dataPoints", [])
            )
            collections.append(DataCollection(
                id=c["id"],
                name=c.get("name", ""),
                repeating_selector=c["repeatingElementSelector"],
                data_points=points,
            ))
        return cls(collections)


# ---------------------------------------------------------------------------
# ExtractionResult
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ExtractionResult:
    """
    Wynik jednej ekstrakcji.

    - collection: kolekcja, z której wyciągnięto wiersze
    - columns:    etykiety kolumn w kolejności (bez duplikatów)
    - rows:       wiersze w kolejności dokumentu; każdy ma klucze == columns
    - notes:      komunikaty informacyjne (np. pominięte kolekcje)
    """
    collection: DataCollection
    columns: list[str]
    rows: list[Row]
    notes: list[str] = field(default_factory=list)

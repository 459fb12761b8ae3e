"""
validator/types.py — kody odrzuceń i struktura raportu walidacji sugestii.

Discard          — pojedyncza odrzucona propozycja (kolekcja lub pole) z kodem,
                   ścieżką JSON Pointer w odpowiedzi wyroczni i komunikatem.
ValidationReport — wynik walidacji: zweryfikowany CollectionSet oraz lista
                   odrzuceń (wyłącznie diagnostyka, nie błędy użytkownika).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from data_model import CollectionSet


class DiscardCode(StrEnum):
    """Stałe kody odrzuceń walidatora."""

    # kształt JSON propozycji (brak pól, złe typy, puste stringi)
    SHAPE_INVALID       = "D_SHAPE_INVALID"

    # selektor powtarzalny nie pasuje do żadnego elementu dokumentu
    REPEATING_NO_MATCH  = "D_REPEATING_NO_MATCH"

    # selektor pola nie pasuje w pierwszym powtarzalnym elemencie
    POINT_NO_MATCH      = "D_POINT_NO_MATCH"

    # po odrzuceniu pól kolekcja została pusta
    NO_VALID_POINTS     = "D_NO_VALID_POINTS"


@dataclass(slots=True)
class Discard:
    """
    Odrzucona propozycja wyroczni.

    - code:    klasa odrzucenia (DiscardCode)
    - path:    JSON Pointer w liście propozycji, np. "/1/dataPoints/0"
    - message: czytelny opis
    """

    code: DiscardCode
    path: str
    message: str


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik walidacji odpowiedzi wyroczni.

    - collections: tylko zweryfikowane kolekcje i pola, z nowymi id
    - discarded:   lista odrzuconych propozycji w kolejności napotkania
    """

    collections: CollectionSet
    discarded: list[Discard] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.collections

"""
validator — weryfikacja sugestii wyroczni względem rzeczywistego dokumentu.

Interfejs publiczny:
    SuggestionValidator — główny walidator (etapy A–D)
    initial_selection   — domyślne zaznaczenie po walidacji
    ValidationReport, Discard, DiscardCode — typy raportu

Typowe użycie:
    from html_parser import DocumentModel
    from validator import SuggestionValidator, initial_selection

    doc    = DocumentModel(raw_html)
    report = SuggestionValidator(doc).validate(oracle_output)
    if report.is_empty:
        print("Brak kolekcji.")
    selected = initial_selection(report.collections)
"""

from .types import Discard, DiscardCode, ValidationReport
from .suggestion_validator import (
    COLLECTION_SCHEMA,
    POINT_SCHEMA,
    SuggestionValidator,
    initial_selection,
)

__all__ = [
    "Discard",
    "DiscardCode",
    "ValidationReport",
    "COLLECTION_SCHEMA",
    "POINT_SCHEMA",
    "SuggestionValidator",
    "initial_selection",
]

"""
data_model/errors.py — taksonomia błędów ekstraktora.

Wszystkie błędy dziedziczą po HarvestError i są lokalne dla jednego
wywołania: żaden nie zmienia stanu zaznaczenia ani zestawu kolekcji,
więc po poprawce użytkownik może po prostu ponowić operację.

  HarvestError
  ├── ParseError              dokumentu nie da się w ogóle zinterpretować
  ├── FetchError              źródło dokumentu zawiodło (sieć / plik)
  ├── NoSelectionError        ekstrakcja bez zaznaczonych pól
  ├── NoElementsMatchedError  selektor powtarzalny nie pasuje już do niczego
  └── OracleError             wyrocznia sugestii zawiodła
      ├── MissingCredentialError
      ├── InvalidCredentialError
      ├── QuotaExceededError
      └── OracleResponseError
"""

from __future__ import annotations

from typing import Any


class HarvestError(Exception):
    """Bazowy błąd; message jest gotowy do pokazania użytkownikowi."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ParseError(HarvestError):
    pass


class FetchError(HarvestError):
    pass


class NoSelectionError(HarvestError):
    def __init__(self, message: str = "Zaznacz co najmniej jedno pole do ekstrakcji.") -> None:
        super().__init__(message)


class NoElementsMatchedError(HarvestError):
    def __init__(self, selector: str) -> None:
        super().__init__(
            f'Selektor "{selector}" nie pasuje do żadnego elementu dokumentu.',
            {"selector": selector},
        )
        self.selector = selector


# ---------------------------------------------------------------------------
# Wyrocznia sugestii
# ---------------------------------------------------------------------------

class OracleError(HarvestError):
    """Ogólny błąd wyroczni, ponowienie może pomóc."""


class MissingCredentialError(OracleError):
    pass


class InvalidCredentialError(OracleError):
    pass


class QuotaExceededError(OracleError):
    pass


class OracleResponseError(OracleError):
    """Odpowiedź wyroczni pusta lub niebędąca poprawnym JSON-em."""

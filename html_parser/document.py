"""
html_parser/document.py — model dokumentu HTML z zapytaniami CSS.

DocumentModel parsuje surowy HTML raz i udostępnia:
  match_all(selector, scope)              -> list[Tag]
  match_first(selector, scope)            -> Tag | None
  read_field(element, selector, attribute) -> str | None
  text_for_prompt(max_chars)              -> str

Niepoprawny selektor nigdy nie przerywa przebiegu: traktujemy go jak
selektor bez dopasowań (dane wejściowe pochodzą od wyroczni i z założenia
mogą być błędne).
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from soupsieve import SelectorSyntaxError

from data_model.errors import ParseError

logger = logging.getLogger(__name__)

# Tagi zawierające szum (nie treść), usuwane z tekstu dla wyroczni
_NOISE_TAGS = {"script", "style", "noscript"}

# Błędy silnika selektorów zamieniane na "brak dopasowań"
_SELECTOR_ERRORS = (SelectorSyntaxError, NotImplementedError, ValueError, TypeError)


class DocumentModel:
    """
    Sparsowany dokument HTML traktowany jako wartość niezmienna.

    Użycie:
        doc   = DocumentModel(raw_html)
        items = doc.match_all("li.item")
        name  = doc.read_field(items[0], "span.name")
    """

    def __init__(self, raw_html: str | bytes, features: str = "html.parser") -> None:
        if not isinstance(raw_html, (str, bytes)):
            raise ParseError(
                f"Oczekiwano tekstu HTML, otrzymano {type(raw_html).__name__}."
            )
        self._raw = raw_html
        try:
            self._soup = BeautifulSoup(raw_html, features)
        except ParserRejectedMarkup as e:
            raise ParseError(f"Nie można sparsować dokumentu HTML: {e}") from e

    # ------------------------------------------------------------------
    # Zapytania
    # ------------------------------------------------------------------

    def match_all(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        """
        Zwraca elementy pasujące do selektora w kolejności dokumentu.

        Bez scope: cały dokument. Ze scope: tylko potomkowie elementu.
        """
        root = self._soup if scope is None else scope
        if not isinstance(selector, str) or not selector.strip():
            return []
        try:
            return list(root.select(selector))
        except _SELECTOR_ERRORS as e:
            logger.debug("Niepoprawny selektor %r: %s", selector, e)
            return []

    def match_first(self, selector: str, scope: Tag | None = None) -> Tag | None:
        root = self._soup if scope is None else scope
        if not isinstance(selector, str) or not selector.strip():
            return None
        try:
            return root.select_one(selector)
        except _SELECTOR_ERRORS as e:
            logger.debug("Niepoprawny selektor %r: %s", selector, e)
            return None

    def read_field(
        self,
        element: Tag,
        selector: str,
        attribute: str | None = None,
    ) -> str | None:
        """
        Odczytuje wartość pola wewnątrz elementu.

        Zwraca None gdy selektor nic nie znajduje, gdy brak atrybutu albo gdy
        wartość po trim() jest pusta. Pusty string nigdy nie jest zwracany.
        """
        child = self.match_first(selector, scope=element)
        if child is None:
            return None

        if attribute:
            raw = child.get(attribute)
            if raw is None:
                return None
            # atrybuty wielowartościowe (class, rel) bs4 zwraca jako listę
            value = " ".join(raw) if isinstance(raw, list) else str(raw)
        else:
            value = child.get_text()

        value = value.strip()
        return value or None

    # ------------------------------------------------------------------
    # Tekst dla wyroczni
    # ------------------------------------------------------------------

    def text_for_prompt(self, max_chars: int | None = None) -> str:
        """
        Zwraca HTML dokumentu bez script/style/noscript, opcjonalnie przycięty.

        Operuje na świeżej kopii drzewa, model dokumentu pozostaje nietknięty.
        """
        soup = BeautifulSoup(self._raw, "html.parser")
        for tag in soup.find_all(_NOISE_TAGS):
            tag.decompose()
        text = str(soup)
        if max_chars is not None and len(text) > max_chars:
            text = text[:max_chars]
        return text

"""
llm_query/suggest.py — odpytanie wyroczni o kolekcje i pola.

Publiczne API:
  parse_suggestions(raw)                              -> list[dict]
  suggest_collections(document, api_key, model, ...)  -> list[dict]

Wynik jest ZAWSZE niezaufany: przed użyciem musi przejść przez
validator.SuggestionValidator. Błąd wyroczni to wyjątek OracleError,
nigdy pusta lista udająca sukces.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from data_model.errors import OracleResponseError
from html_parser import DocumentModel

from .gemini import DEFAULT_MODEL, call_gemini
from .prompt import build_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_PROMPT_CHARS = 200_000


def _strip_fence(raw: str) -> str:
    """Odrzuca otoczkę ```json``` wokół odpowiedzi modelu."""
    text = raw.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[-1]
    if text.endswith("```"):
        text = text.rsplit("```", 1)[0]
    return text.strip()


def parse_suggestions(raw: str) -> list[Any]:
    """
    Parsuje odpowiedź modelu do listy propozycji kolekcji.

    Akceptuje {"collections": [...]} albo samą listę. Elementy listy nie są
    sprawdzane, to zadanie walidatora.

    Raises:
        OracleResponseError: odpowiedź nie jest JSON-em o oczekiwanym kształcie.
    """
    try:
        data = json.loads(_strip_fence(raw))
    except json.JSONDecodeError as e:
        raise OracleResponseError(
            f"Nie można sparsować JSON z odpowiedzi wyroczni: {e}",
            {"raw": raw[:200]},
        ) from e

    if isinstance(data, dict):
        data = data.get("collections")
    if not isinstance(data, list):
        raise OracleResponseError(
            'Odpowiedź wyroczni nie zawiera listy "collections".',
            {"raw": raw[:200]},
        )
    return data


def suggest_collections(
    document: DocumentModel,
    api_key: str | None = None,
    model: str = DEFAULT_MODEL,
    max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS,
) -> list[Any]:
    """Buduje prompt z dokumentu, wysyła do Gemini i zwraca surowe propozycje."""
    prompt = build_prompt(document.text_for_prompt(max_prompt_chars))
    logger.info("Wysyłam dokument do Gemini (%s, %d znaków promptu)", model, len(prompt))
    raw = call_gemini(prompt, model=model, api_key=api_key)
    proposals = parse_suggestions(raw)
    logger.info("Wyrocznia zaproponowała %d kolekcji", len(proposals))
    return proposals

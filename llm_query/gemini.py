"""
llm_query/gemini.py — wywołanie Gemini API.

Zmienna środowiskowa:
  GEMINI_API_KEY   klucz API (wymagany przy wywołaniu wyroczni)

Publiczne API:
  call_gemini(prompt, model, api_key, max_retries, json_output) -> str

Błędy API są klasyfikowane na podklasy OracleError, żeby wywołujący mógł
pokazać konkretną wskazówkę (zły klucz, wyczerpany limit, inny błąd).
"""

from __future__ import annotations

import functools
import logging
import os
import re
import time
from typing import Any, Protocol, cast

import httpx
from google import genai as _genai
from google.genai import errors as _genai_errors
from google.genai import types as _genai_types

from data_model.errors import (
    InvalidCredentialError,
    MissingCredentialError,
    OracleError,
    OracleResponseError,
    QuotaExceededError,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL   = "gemini-2.5-flash"
DEFAULT_RETRIES = 3
ENV_KEY         = "GEMINI_API_KEY"


@functools.lru_cache(maxsize=4)
def _get_client(api_key: str) -> "_genai.Client":
    """Zwraca (i cache'uje) klienta Gemini dla danego klucza API.

    Jeden klient na klucz; trzyma własną pulę połączeń HTTP
    i jest współdzielony przez kolejne wywołania call_gemini().
    """
    return _genai.Client(api_key=api_key)

# Wzorzec do wyciągnięcia liczby sekund z komunikatu API (np. "retry in 18.8s")
_RETRY_DELAY_RE = re.compile(r"retry[^\d]*(\d+(?:\.\d+)?)\s*s", re.IGNORECASE)


class _GeminiGenerateResponse(Protocol):
    text: str | None


class _GeminiModelsAPI(Protocol):
    def generate_content(
        self, *, model: str, contents: str, config: Any = None,
    ) -> _GeminiGenerateResponse:
        ...


def _parse_retry_delay(error: Exception) -> float | None:
    """Wyciąga sugerowany czas oczekiwania z błędu 429, jeśli jest dostępny."""
    msg = str(error)
    m = _RETRY_DELAY_RE.search(msg)
    if m:
        return float(m.group(1))
    # google-genai może udostępniać retry_delay bezpośrednio na obiekcie błędu
    delay = getattr(error, "retry_delay", None)
    if delay is not None:
        return float(delay)
    return None


def _is_daily_quota(error: Exception) -> bool:
    """Zwraca True gdy to wyczerpany dzienny limit (retry nie pomoże)."""
    return "PerDay" in str(error)


def _classify(error: _genai_errors.APIError, model: str) -> OracleError:
    """Zamienia błąd google-genai na odpowiednią podklasę OracleError."""
    msg = str(error)
    if "API key not valid" in msg or "API_KEY_INVALID" in msg:
        return InvalidCredentialError(
            "Podany klucz Google AI API jest nieprawidłowy. Sprawdź ustawienia.",
            {"code": error.code},
        )
    if "quota" in msg.lower():
        return QuotaExceededError(
            f"Przekroczono limit zapytań Google AI API dla modelu {model}. "
            f"Sprawdź plan i billing: https://ai.dev/rate-limit",
            {"code": error.code},
        )
    return OracleError(f"Błąd Gemini API: {msg}", {"code": error.code})


def call_gemini(
    prompt: str,
    model: str = DEFAULT_MODEL,
    api_key: str | None = None,
    max_retries: int = DEFAULT_RETRIES,
    json_output: bool = True,
) -> str:
    """
    Wysyła prompt do Gemini i zwraca odpowiedź jako string.

    Przy błędzie 429 (rate-limit) czeka sugerowany czas i ponawia próbę
    (do max_retries razy). Dzienny limit quota nie jest ponawiany.

    Args:
        prompt:      Gotowy prompt tekstowy.
        model:       Identyfikator modelu (domyślnie gemini-2.5-flash).
        api_key:     Klucz API; jeśli None, odczytywany z GEMINI_API_KEY.
        max_retries: Maks. liczba ponowień przy rate-limit (domyślnie 3).
        json_output: Wymuś odpowiedź application/json.

    Returns:
        Tekst odpowiedzi modelu.

    Raises:
        MissingCredentialError: Brak klucza API.
        InvalidCredentialError: API odrzuciło klucz.
        QuotaExceededError:     Wyczerpany limit lub ponowienia.
        OracleResponseError:    Pusta odpowiedź modelu.
        OracleError:            Inny błąd API lub błąd połączenia.
    """
    key = api_key or os.getenv(ENV_KEY)
    if not key:
        raise MissingCredentialError(
            f"Brak klucza Gemini API. "
            f"Ustaw zmienną środowiskową {ENV_KEY} lub przekaż api_key."
        )

    config = (
        _genai_types.GenerateContentConfig(response_mime_type="application/json")
        if json_output else None
    )

    client  = _get_client(key)
    attempt = 0

    while True:
        try:
            models_api = cast(_GeminiModelsAPI, client.models)
            response = models_api.generate_content(model=model, contents=prompt, config=config)
            text = response.text
            if not text:
                raise OracleResponseError("Gemini zwrócił pustą odpowiedź tekstową.")
            return text

        except _genai_errors.ClientError as exc:
            if exc.code != 429:
                raise _classify(exc, model) from exc

            if _is_daily_quota(exc):
                raise QuotaExceededError(
                    f"Dzienny limit zapytań dla modelu {model} wyczerpany. "
                    f"Sprawdź plan i billing: https://ai.dev/rate-limit",
                    {"code": exc.code},
                ) from exc

            attempt += 1
            if attempt > max_retries:
                raise QuotaExceededError(
                    f"Rate-limit po {max_retries} próbach. Spróbuj później.",
                    {"code": exc.code},
                ) from exc

            delay = _parse_retry_delay(exc) or (2 ** attempt * 5)
            logger.warning(
                "429 rate-limit, czekam %.0fs (próba %d/%d)...",
                delay, attempt, max_retries,
            )
            time.sleep(delay)

        except _genai_errors.APIError as exc:
            raise _classify(exc, model) from exc

        except httpx.HTTPError as exc:
            # warstwa transportowa SDK (połączenie, timeout) nie jest APIError
            raise OracleError(
                f"Błąd połączenia z Gemini API: {exc}", {"transport": type(exc).__name__},
            ) from exc

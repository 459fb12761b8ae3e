"""
wh/config.py — konfiguracja przez zmienne środowiskowe.

Zmienne:
  GEMINI_API_KEY        klucz wyroczni (wymagany dopiero przy jej wywołaniu)
  WH_MODEL              model Gemini (domyślnie gemini-2.5-flash)
  WH_FETCH_TIMEOUT      timeout pobierania strony w sekundach (domyślnie 30)
  WH_MAX_PROMPT_CHARS   maks. długość dokumentu w prompcie (domyślnie 200000)

Opcjonalnie plik .env w katalogu głównym projektu:
  GEMINI_API_KEY=AIza...
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from html_parser import DEFAULT_TIMEOUT
from llm_query import DEFAULT_MAX_PROMPT_CHARS, DEFAULT_MODEL, ENV_KEY

ENV_FILE = pathlib.Path(__file__).resolve().parent.parent / ".env"


def load_env_file(path: pathlib.Path = ENV_FILE) -> None:
    load_dotenv(path, override=True)


def _positive_number(source: Mapping[str, str], name: str, default: float, cast: type) -> float:
    raw = source.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} musi być liczbą, otrzymano {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} musi być dodatnie, otrzymano {raw!r}")
    return value


@dataclass(frozen=True, slots=True)
class HarvestSettings:
    """Ustawienia uruchomieniowe ekstraktora."""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    fetch_timeout: float = DEFAULT_TIMEOUT
    max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HarvestSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        api_key = source.get(ENV_KEY, "").strip() or None
        model = source.get("WH_MODEL", "").strip() or DEFAULT_MODEL

        return cls(
            api_key=api_key,
            model=model,
            fetch_timeout=_positive_number(source, "WH_FETCH_TIMEOUT", DEFAULT_TIMEOUT, float),
            max_prompt_chars=int(
                _positive_number(source, "WH_MAX_PROMPT_CHARS", DEFAULT_MAX_PROMPT_CHARS, int)
            ),
        )

"""html_parser/source.py — źródło dokumentu: pobranie strony HTML lub odczyt pliku."""

from __future__ import annotations

from pathlib import Path

import requests

from data_model.errors import FetchError

DEFAULT_TIMEOUT = 30

# Nagłówki przeglądarki: część serwisów odrzuca domyślny UA biblioteki requests
_BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


def is_url(identifier: str) -> bool:
    return identifier.startswith(("http://", "https://"))


def fetch_html(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Pobiera stronę HTML spod podanego URL i zwraca jej treść jako tekst."""
    try:
        resp = requests.get(url, timeout=timeout, headers=_BROWSER_HEADERS)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Nie udało się pobrać {url}: {e}", {"url": url}) from e

    resp.encoding = resp.apparent_encoding or "utf-8"
    return resp.text


def read_html_file(path: str | Path) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FetchError(f"Nie można odczytać pliku {p}: {e}", {"path": str(p)}) from e


def load_source(identifier: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """URL (http/https) → fetch_html, w przeciwnym razie ścieżka pliku."""
    if is_url(identifier):
        return fetch_html(identifier, timeout=timeout)
    return read_html_file(identifier)

"""Komenda: wh scrape — cały przebieg: dokument → wyrocznia → walidacja → ekstrakcja → CSV."""

from __future__ import annotations

import argparse

from rich.console import Console

from data_model import HarvestError
from selection import SelectionState
from wh.commands.extract import _extract, _show_rows, _write_csv
from wh.commands.suggest import _fail, _load_document, _show_collections, _suggest
from wh.config import HarvestSettings

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    try:
        settings = HarvestSettings.from_env()
        doc = _load_document(args.source, settings)
        report = _suggest(doc, settings, args.model)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)
    except HarvestError as e:
        _fail(e)

    collections = report.collections
    if not collections:
        _show_collections(collections)
        return

    state = SelectionState(collections)
    if args.show:
        _show_collections(collections, state.selected_ids)

    try:
        result = _extract(collections, state, doc)
    except HarvestError as e:
        _fail(e)

    _write_csv(result, args.out)

    if args.show:
        _show_rows(result)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "scrape",
        help="Pełny przebieg: sugestie, walidacja i ekstrakcja pierwszej kolekcji (CSV).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje wh suggest i wh extract w jednym kroku, z domyślnym zaznaczeniem
(wszystkie pola pierwszej zweryfikowanej kolekcji).

Wymaga zmiennej środowiskowej GEMINI_API_KEY (lub pliku .env).

Przykłady:
  wh scrape https://example.com/produkty --out produkty.csv
  wh scrape strona.html --show
        """,
    )
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="URL strony (http/https) albo ścieżka do pliku HTML.",
    )
    p.add_argument(
        "--model", "-m",
        default=None,
        metavar="MODEL",
        help="Model Gemini (domyślnie: WH_MODEL lub gemini-2.5-flash).",
    )
    p.add_argument(
        "--out", "-o",
        metavar="PLIK",
        help="Zapisz CSV do pliku bez końcowego CRLF (domyślnie: stdout, zakończony CRLF).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl kolekcje i wiersze w terminalu.",
    )
    p.set_defaults(func=run)

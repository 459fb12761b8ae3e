"""Komenda: wh suggest — pobiera dokument, pyta wyrocznię i zapisuje zweryfikowane kolekcje."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich import box

from data_model import (
    CollectionSet,
    HarvestError,
    InvalidCredentialError,
    MissingCredentialError,
    QuotaExceededError,
)
from html_parser import DocumentModel, load_source
from llm_query import suggest_collections
from validator import SuggestionValidator, ValidationReport
from wh.config import HarvestSettings

# stdout bywa zarezerwowany dla CSV (wh scrape)
console = Console(stderr=True)

DEFAULT_OUT = "collections.json"


# ---------------------------------------------------------------------------
# Wspólne: dokument, błędy, zapis
# ---------------------------------------------------------------------------

def _load_document(source: str, settings: HarvestSettings) -> DocumentModel:
    console.print(f"Wczytywanie [bold]{escape(source)}[/bold] …")
    raw = load_source(source, timeout=settings.fetch_timeout)
    return DocumentModel(raw)


def _fail(e: HarvestError) -> NoReturn:
    """Wypisuje błąd z konkretną wskazówką i kończy z kodem 1."""
    console.print(f"[red]Błąd:[/red] {escape(e.message)}")
    if isinstance(e, MissingCredentialError | InvalidCredentialError):
        console.print("[yellow]Ustaw poprawny klucz:[/yellow] GEMINI_API_KEY (środowisko lub .env)")
    elif isinstance(e, QuotaExceededError):
        console.print("[yellow]Spróbuj ponownie później albo zmień model (--model).[/yellow]")
    raise SystemExit(1)


def _suggest(doc: DocumentModel, settings: HarvestSettings, model: str | None) -> ValidationReport:
    model = model or settings.model
    console.print(f"Wysyłam do Gemini ({model})...")
    proposals = suggest_collections(
        doc,
        api_key=settings.api_key,
        model=model,
        max_prompt_chars=settings.max_prompt_chars,
    )
    report = SuggestionValidator(doc).validate(proposals)
    if report.discarded:
        console.print(f"[dim]Odrzucono {len(report.discarded)} niezweryfikowanych sugestii.[/dim]")
    return report


def _write_json(collections: CollectionSet, json_path: Path) -> None:
    data = collections.to_dict()
    json_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    console.print(f"[green]JSON:[/green] {json_path}  ({len(collections)} kolekcji)")


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_collections(collections: CollectionSet, selected: frozenset[str] = frozenset()) -> None:
    if not collections:
        console.print(
            "[yellow]Brak kolekcji.[/yellow] Wyrocznia nie wskazała żadnej poprawnej "
            "kolekcji na tej stronie."
        )
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
    )
    table.add_column("",          no_wrap=True, width=1)
    table.add_column("ID",        no_wrap=True, style="bold cyan")
    table.add_column("ETYKIETA",  no_wrap=False, max_width=40)
    table.add_column("SELEKTOR",  no_wrap=False, style="dim", max_width=50)
    table.add_column("ATRYBUT",   no_wrap=True)

    for coll in collections:
        table.add_row(
            "", coll.id, Text(coll.name, style="bold"), Text(coll.repeating_selector), "",
            end_section=False,
        )
        for dp in coll.data_points:
            table.add_row(
                "✓" if dp.id in selected else "",
                "  " + dp.id,
                Text(dp.label),
                Text(dp.selector),
                Text(dp.attribute or "-"),
            )
        table.add_section()

    console.print()
    console.print(table)


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

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

    _write_json(report.collections, Path(args.out))

    if args.show or report.is_empty:
        _show_collections(report.collections)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "suggest",
        help="Pyta wyrocznię o kolekcje i zapisuje tylko zweryfikowane (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje dokument HTML (URL lub plik), wysyła go do Gemini z prośbą
o propozycje kolekcji powtarzalnych elementów i ich pól, a następnie
weryfikuje każdą propozycję względem dokumentu. Zapisywane są wyłącznie
kolekcje i pola, które faktycznie pasują.

Wymaga zmiennej środowiskowej GEMINI_API_KEY (lub pliku .env).

Przykłady:
  wh suggest https://example.com/produkty --show
  wh suggest strona.html --out kolekcje.json
  wh suggest strona.html --model gemini-2.5-pro
        """,
    )
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="URL strony (http/https) albo ścieżka do pliku HTML.",
    )
    p.add_argument(
        "--out", "-o",
        metavar="PLIK",
        default=DEFAULT_OUT,
        help=f"Plik JSON ze zweryfikowanymi kolekcjami (domyślnie: {DEFAULT_OUT}).",
    )
    p.add_argument(
        "--model", "-m",
        default=None,
        metavar="MODEL",
        help="Model Gemini (domyślnie: WH_MODEL lub gemini-2.5-flash).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę kolekcji w terminalu po zapisie.",
    )
    p.set_defaults(func=run)

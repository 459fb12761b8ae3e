"""Komenda: wh extract — wyciąga wiersze z dokumentu według zapisanych kolekcji i zapisuje CSV."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich import box

from data_model import CollectionSet, ExtractionResult, HarvestError
from extraction import extract, to_csv
from html_parser import DocumentModel
from selection import SelectionState, toggle_all_visible, visible_point_ids
from wh.commands.suggest import _fail, _load_document, _show_collections
from wh.config import HarvestSettings

# stdout jest zarezerwowany dla CSV
console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Kolekcje i zaznaczenie
# ---------------------------------------------------------------------------

def _read_collections(path: Path) -> CollectionSet:
    if not path.exists():
        console.print(f"[red]Plik kolekcji nie istnieje:[/red] {path}")
        raise SystemExit(1)
    try:
        return CollectionSet.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        console.print(f"[red]Niepoprawny plik kolekcji {path}:[/red] {e}")
        raise SystemExit(1)


def _build_selection(
    collections: CollectionSet,
    select: list[str] | None,
    filter_term: str,
    toggle_all: bool,
) -> SelectionState:
    """
    Domyślnie: wszystkie pola pierwszej kolekcji.
    --select zastępuje domyślne zaznaczenie listą id.
    --toggle-all działa jak przycisk "zaznacz/odznacz wszystko" dla pól
    widocznych po filtrze --filter.
    """
    state = SelectionState(collections)

    if select:
        state.clear()
        known = [pid for pid in select if collections.find_point(pid) is not None]
        for pid in sorted(set(select) - set(known)):
            console.print(f"[yellow]Pomijam nieznane id pola:[/yellow] {escape(pid)}")
        state.select_all_visible(known)

    if toggle_all:
        visible = visible_point_ids(collections, filter_term)
        if not visible:
            console.print(f"[yellow]Filtr '{escape(filter_term)}' nie pasuje do żadnego pola.[/yellow]")
        elif toggle_all_visible(state, visible):
            console.print(f"Zaznaczono {len(visible)} widocznych pól.")
        else:
            console.print(f"Odznaczono {len(visible)} widocznych pól.")

    return state


# ---------------------------------------------------------------------------
# Wynik
# ---------------------------------------------------------------------------

def _write_csv(result: ExtractionResult, out: str | None) -> None:
    csv_text = to_csv(result.rows)
    if out:
        out_path = Path(out)
        # newline="": CRLF z to_csv() trafia do pliku bez zmian
        out_path.write_text(csv_text, encoding="utf-8", newline="")
        console.print(f"[green]CSV:[/green] {out_path}  ({len(result.rows)} wierszy)")
    else:
        sys.stdout.write(csv_text)
        # stdout: to_csv() + końcowy CRLF; plik (--out): dokładnie to_csv()
        if csv_text:
            sys.stdout.write("\r\n")


def _show_rows(result: ExtractionResult, limit: int = 50) -> None:
    if not result.rows:
        console.print("[yellow]Brak wierszy.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("#", justify="right", no_wrap=True, style="dim")
    for col in result.columns:
        table.add_column(col, no_wrap=False, max_width=40)

    for i, row in enumerate(result.rows[:limit], start=1):
        table.add_row(str(i), *[
            Text(row[c]) if row[c] is not None else Text("-", style="dim")
            for c in result.columns
        ])

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(result.rows)} wierszy, kolekcja {result.collection.name!r}[/dim]\n")


def _extract(collections: CollectionSet, state: SelectionState, doc: DocumentModel) -> ExtractionResult:
    result = extract(collections, state, doc)
    for note in result.notes:
        console.print(f"[yellow]Uwaga:[/yellow] {escape(note)}")
    return result


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    collections = _read_collections(Path(args.collections))
    state = _build_selection(collections, args.select, args.filter, args.toggle_all)

    if args.show:
        _show_collections(collections, state.selected_ids)

    try:
        settings = HarvestSettings.from_env()
        doc = _load_document(args.source, settings)
        result = _extract(collections, state, doc)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)
    except HarvestError as e:
        _fail(e)

    _write_csv(result, args.out)

    if args.show:
        _show_rows(result)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "extract",
        help="Wyciąga wiersze z dokumentu według zweryfikowanych kolekcji (CSV).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje dokument HTML i plik kolekcji zapisany przez `wh suggest`,
buduje zaznaczenie pól i zapisuje jeden wiersz CSV na każdy powtarzalny
element wybranej kolekcji.

Zaznaczenie:
  - domyślnie wszystkie pola pierwszej kolekcji
  - --select ID (wielokrotnie) zastępuje domyślne zaznaczenie
  - --toggle-all zaznacza (lub odznacza, gdy już wszystkie są zaznaczone)
    pola widoczne po filtrze --filter (etykieta pola lub nazwa kolekcji)

Z kilku kolekcji z zaznaczonymi polami brana jest tylko pierwsza.

Przykłady:
  wh extract strona.html --collections kolekcje.json
  wh extract strona.html -c kolekcje.json --select dp-0-0 --select dp-0-2 --out dane.csv
  wh extract strona.html -c kolekcje.json --filter cena --toggle-all --show
        """,
    )
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="URL strony (http/https) albo ścieżka do pliku HTML.",
    )
    p.add_argument(
        "--collections", "-c",
        metavar="PLIK",
        required=True,
        help="Plik JSON ze zweryfikowanymi kolekcjami (z wh suggest).",
    )
    p.add_argument(
        "--select", "-s",
        metavar="ID",
        action="append",
        help="Id pola do zaznaczenia (można podać wielokrotnie).",
    )
    p.add_argument(
        "--filter", "-f",
        metavar="TEKST",
        default="",
        help="Filtr widoczności pól dla --toggle-all (bez rozróżniania wielkości liter).",
    )
    p.add_argument(
        "--toggle-all",
        action="store_true",
        help="Zaznacz / odznacz wszystkie widoczne pola.",
    )
    p.add_argument(
        "--out", "-o",
        metavar="PLIK",
        help="Zapisz CSV do pliku bez końcowego CRLF (domyślnie: stdout, zakończony CRLF).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl zaznaczenie i wiersze w terminalu.",
    )
    p.set_defaults(func=run)

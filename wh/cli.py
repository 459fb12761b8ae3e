"""
wh — narzędzie CLI ekstraktora tabel z dokumentów HTML.

Użycie:
  wh <komenda> [opcje]

Komendy:
  suggest   Pyta wyrocznię (Gemini) o kolekcje i zapisuje zweryfikowane do JSON.
  extract   Wyciąga wiersze według zapisanych kolekcji i zaznaczenia do CSV.
  scrape    Pełny przebieg: sugestie, walidacja, ekstrakcja pierwszej kolekcji.
"""

from __future__ import annotations

import argparse
import logging
import sys

# Windows: terminal może używać cp1252, wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from rich.console import Console
from rich.logging import RichHandler

from wh.commands import suggest as cmd_suggest
from wh.commands import extract as cmd_extract
from wh.commands import scrape as cmd_scrape
from wh.config import load_env_file

__version__ = "0.1.0"


def setup_logging(verbose: bool = False) -> None:
    """Logi bibliotek (walidator, wyrocznia) trafiają na stderr przez rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wh",
        description="Ekstraktor tabel z dokumentów HTML (CLI).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"wh {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowe logi diagnostyczne (m.in. odrzucone sugestie).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_suggest.add_parser(subparsers)
    cmd_extract.add_parser(subparsers)
    cmd_scrape.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    load_env_file()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()

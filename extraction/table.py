"""
extraction/table.py — zapis wierszy do CSV zgodnego z arkuszami i odczyt zwrotny.

Format:
  - nagłówek: etykiety kolumn połączone przecinkiem
  - komórka:  None → pusta; inna wartość → zawsze w cudzysłowach,
              wewnętrzne " podwojone
  - linie łączone CRLF, bez końcowego CRLF
  - brak wierszy → pusty string (bez nagłówka)
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from typing import Any

_CRLF = "\r\n"


def quote_cell(value: Any) -> str:
    if value is None:
        return ""
    return '"' + str(value).replace('"', '""') + '"'


def to_csv(rows: Sequence[dict[str, Any]]) -> str:
    if not rows:
        return ""

    headers = list(rows[0].keys())
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(quote_cell(row.get(h)) for h in headers))
    return _CRLF.join(lines)


def from_csv(text: str) -> list[dict[str, str | None]]:
    """
    Odczytuje tekst z to_csv() z powrotem do wierszy.

    Niecytowana pusta komórka → None; cytowana → string (także pusty).

    Przy jednej kolumnie wiersz z None to pusta linia: csv.reader zwraca
    dla niej [], a ostatnią taką linię (tekst kończy się CRLF) pomija.
    """
    if not text:
        return []

    reader = csv.reader(io.StringIO(text, newline=""), quoting=csv.QUOTE_NOTNULL)
    records = list(reader)
    headers = [h or "" for h in records[0]]
    empty = [None] * len(headers)

    rows = [dict(zip(headers, record or empty)) for record in records[1:]]
    # to_csv() nie dopisuje końcowego CRLF, więc kończy nim tylko pusty wiersz
    if len(headers) == 1 and text.endswith(_CRLF):
        rows.append(dict(zip(headers, empty)))
    return rows

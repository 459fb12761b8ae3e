"""
extraction — ekstrakcja wierszy i serializacja tabeli.

Publiczne API:
  extract(collection_set, selection, document)   -> ExtractionResult
  to_csv(rows)                                   -> str
  from_csv(text)                                 -> list[dict]
  quote_cell(value)                              -> str
"""

from .engine import extract
from .table import to_csv, from_csv, quote_cell

__all__ = [
    "extract",
    "to_csv",
    "from_csv",
    "quote_cell",
]

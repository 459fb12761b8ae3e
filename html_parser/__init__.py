"""
html_parser — dokument HTML i jego źródła.

Publiczne API:
  DocumentModel(raw_html)                 — zapytania CSS po sparsowanym drzewie
  fetch_html(url, timeout)                -> str
  read_html_file(path)                    -> str
  load_source(identifier, timeout)        -> str   (URL albo ścieżka pliku)
"""

from .document import DocumentModel
from .source import fetch_html, read_html_file, load_source, is_url, DEFAULT_TIMEOUT

__all__ = [
    "DocumentModel",
    "fetch_html",
    "read_html_file",
    "load_source",
    "is_url",
    "DEFAULT_TIMEOUT",
]

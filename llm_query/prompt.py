"""
llm_query/prompt.py — budowanie promptu dla wyroczni sugestii kolekcji.

Funkcje publiczne:
  read_template(path | None)            -> str
  build_prompt(document_text, template_path) -> str
"""

from __future__ import annotations

import pathlib

ROOT          = pathlib.Path(__file__).resolve().parent
TEMPLATE_PATH = ROOT / "templates" / "prompt-suggest.md"

_PLACEHOLDER = "{{DOCUMENT}}"


def read_template(path: pathlib.Path | None = None) -> str:
    template_path = path or TEMPLATE_PATH
    if not template_path.exists():
        raise FileNotFoundError(f"Brak szablonu promptu: {template_path}")
    return template_path.read_text(encoding="utf-8")


def build_prompt(document_text: str, template_path: pathlib.Path | None = None) -> str:
    """
    Wstawia tekst dokumentu w miejsce {{DOCUMENT}} w szablonie.

    Raises:
        FileNotFoundError: brak pliku szablonu.
        ValueError:        szablon nie zawiera znacznika {{DOCUMENT}}.
    """
    template = read_template(template_path)
    if _PLACEHOLDER not in template:
        raise ValueError(f"Szablon promptu nie zawiera znacznika {_PLACEHOLDER}.")
    return template.replace(_PLACEHOLDER, document_text)

"""
llm_query — wyrocznia sugestii: prompt i integracja z modelem językowym.

Publiczne API:
  build_prompt(document_text)                          -> str
  read_template(path)                                  -> str
  call_gemini(prompt, model, api_key)                  -> str
  parse_suggestions(raw)                               -> list[dict]
  suggest_collections(document, api_key, model)        -> list[dict]
"""

from .prompt import (
    build_prompt,
    read_template,
    TEMPLATE_PATH,
)
from .gemini import call_gemini, DEFAULT_MODEL, ENV_KEY
from .suggest import parse_suggestions, suggest_collections, DEFAULT_MAX_PROMPT_CHARS

__all__ = [
    "build_prompt",
    "read_template",
    "TEMPLATE_PATH",
    "call_gemini",
    "DEFAULT_MODEL",
    "ENV_KEY",
    "parse_suggestions",
    "suggest_collections",
    "DEFAULT_MAX_PROMPT_CHARS",
]

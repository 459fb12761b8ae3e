from __future__ import annotations

from pathlib import Path

import pytest

from data_model import OracleResponseError, QuotaExceededError
from html_parser import DocumentModel
from llm_query import build_prompt, parse_suggestions, suggest
from llm_query.prompt import TEMPLATE_PATH


def test_parse_accepts_wrapper_object() -> None:
    raw = '{"collections": [{"collectionName": "Items"}]}'

    assert parse_suggestions(raw) == [{"collectionName": "Items"}]


def test_parse_accepts_bare_list_in_code_fence() -> None:
    raw = '```json\n[{"collectionName": "Items"}]\n```'

    assert parse_suggestions(raw) == [{"collectionName": "Items"}]


@pytest.mark.parametrize("raw", ["not json", '{"items": []}', '"collections"', "{}"])
def test_parse_rejects_unexpected_shapes(raw: str) -> None:
    with pytest.raises(OracleResponseError):
        parse_suggestions(raw)


def test_empty_collection_list_is_a_valid_answer() -> None:
    assert parse_suggestions('{"collections": []}') == []


def test_build_prompt_inserts_document() -> None:
    prompt = build_prompt("<li>hello</li>")

    assert "<li>hello</li>" in prompt
    assert "{{DOCUMENT}}" not in prompt
    assert TEMPLATE_PATH.exists()


def test_build_prompt_requires_placeholder(tmp_path: Path) -> None:
    template = tmp_path / "prompt.md"
    template.write_text("no placeholder here", encoding="utf-8")

    with pytest.raises(ValueError):
        build_prompt("<p/>", template_path=template)


def test_build_prompt_missing_template(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        build_prompt("<p/>", template_path=tmp_path / "missing.md")


def test_suggest_collections_sends_cleaned_document(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_call(prompt: str, model: str, api_key: str | None) -> str:
        calls.append({"prompt": prompt, "model": model, "api_key": api_key})
        return '{"collections": [{"collectionName": "Items"}]}'

    monkeypatch.setattr(suggest, "call_gemini", fake_call)
    doc = DocumentModel("<script>secret()</script><ul><li class='item'>x</li></ul>")

    proposals = suggest.suggest_collections(doc, api_key="k", model="m")

    assert proposals == [{"collectionName": "Items"}]
    assert "li class" in calls[0]["prompt"]
    assert "secret()" not in calls[0]["prompt"]
    assert calls[0]["model"] == "m"
    assert calls[0]["api_key"] == "k"


def test_suggest_collections_propagates_oracle_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_call(prompt: str, model: str, api_key: str | None) -> str:
        raise QuotaExceededError("quota")

    monkeypatch.setattr(suggest, "call_gemini", fake_call)

    with pytest.raises(QuotaExceededError):
        suggest.suggest_collections(DocumentModel("<p>x</p>"), api_key="k")

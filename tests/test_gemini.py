from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as genai_errors

from data_model import (
    InvalidCredentialError,
    MissingCredentialError,
    OracleError,
    OracleResponseError,
    QuotaExceededError,
)
from llm_query import gemini


class _FakeModelsAPI:
    def __init__(self, responses: list[object]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, str]] = []

    def generate_content(self, *, model: str, contents: str, config: object = None) -> object:
        self.calls.append((model, contents))
        if not self._responses:
            raise RuntimeError("No fake response configured")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _install(monkeypatch: pytest.MonkeyPatch, responses: list[object]) -> _FakeModelsAPI:
    models = _FakeModelsAPI(responses)
    monkeypatch.setattr(gemini, "_get_client", lambda api_key: SimpleNamespace(models=models))
    return models


def _client_error(code: int, message: str, status: str = "INVALID_ARGUMENT") -> genai_errors.ClientError:
    return genai_errors.ClientError(code, {"error": {"code": code, "message": message, "status": status}})


def test_missing_key_raises_missing_credential(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(gemini.ENV_KEY, raising=False)

    with pytest.raises(MissingCredentialError):
        gemini.call_gemini("prompt")


def test_returns_text_and_reads_key_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(gemini.ENV_KEY, "AIza-test")
    models = _install(monkeypatch, [SimpleNamespace(text='{"collections": []}')])

    text = gemini.call_gemini("prompt", model="gemini-test")

    assert text == '{"collections": []}'
    assert models.calls == [("gemini-test", "prompt")]


def test_invalid_key_is_classified(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, [_client_error(400, "API key not valid. Please pass a valid API key.")])

    with pytest.raises(InvalidCredentialError):
        gemini.call_gemini("prompt", api_key="bad")


def test_rate_limit_is_retried_with_suggested_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    delays: list[float] = []
    monkeypatch.setattr(gemini.time, "sleep", delays.append)
    models = _install(
        monkeypatch,
        [
            _client_error(429, "Resource exhausted. Please retry in 2.5s.", "RESOURCE_EXHAUSTED"),
            SimpleNamespace(text="[]"),
        ],
    )

    assert gemini.call_gemini("prompt", api_key="k") == "[]"
    assert delays == [2.5]
    assert len(models.calls) == 2


def test_daily_quota_is_not_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gemini.time, "sleep", lambda s: pytest.fail("should not sleep"))
    _install(
        monkeypatch,
        [_client_error(429, "Quota exceeded for GenerateRequestsPerDayPerProjectPerModel", "RESOURCE_EXHAUSTED")],
    )

    with pytest.raises(QuotaExceededError):
        gemini.call_gemini("prompt", api_key="k")


def test_exhausted_retries_raise_quota_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gemini.time, "sleep", lambda s: None)
    err = _client_error(429, "Please retry in 1s.", "RESOURCE_EXHAUSTED")
    _install(monkeypatch, [err, err, err])

    with pytest.raises(QuotaExceededError):
        gemini.call_gemini("prompt", api_key="k", max_retries=2)


def test_server_error_is_generic_oracle_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, [genai_errors.ServerError(500, {"error": {"message": "boom", "status": "INTERNAL"}})])

    with pytest.raises(OracleError) as exc_info:
        gemini.call_gemini("prompt", api_key="k")

    assert type(exc_info.value) is OracleError


@pytest.mark.parametrize("text", [None, ""])
def test_empty_response_raises_response_error(monkeypatch: pytest.MonkeyPatch, text: str | None) -> None:
    _install(monkeypatch, [SimpleNamespace(text=text)])

    with pytest.raises(OracleResponseError):
        gemini.call_gemini("prompt", api_key="k")


@pytest.mark.parametrize(
    "error",
    [httpx.ConnectError("connection refused"), httpx.ReadTimeout("timed out")],
)
def test_transport_failure_is_generic_oracle_error(
    monkeypatch: pytest.MonkeyPatch, error: httpx.HTTPError,
) -> None:
    _install(monkeypatch, [error])

    with pytest.raises(OracleError) as exc_info:
        gemini.call_gemini("prompt", api_key="k")

    assert type(exc_info.value) is OracleError
    assert exc_info.value.__cause__ is error

import asyncio

import httpx
import openai
import pytest

from src.mavericks.config import Settings
from src.mavericks.services import llm_client
from src.mavericks.services.llm_client import (
    CompletionOptions,
    OpenAIChatClient,
    UpstreamConnectionError,
    UpstreamStatusError,
)


def _stub_llm(monkeypatch, behaviour):
    captured = {"init": [], "msgs": []}

    class StubLLM:
        def __init__(self, **kwargs):
            captured["init"].append(kwargs)

        async def ainvoke(self, msgs):
            captured["msgs"].append(msgs)
            return behaviour()

    monkeypatch.setattr(llm_client, "ChatOpenAI", StubLLM)
    return captured


def _request():
    return httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def test_complete_returns_content_and_configures_sdk(monkeypatch):
    captured = _stub_llm(monkeypatch, lambda: type("Resp", (), {"content": "OK"})())
    client = OpenAIChatClient.from_settings(Settings(openai_api_key="sk-test"))
    msgs = [{"role": "user", "content": "hi"}]

    out = asyncio.run(client.complete(msgs, CompletionOptions()))
    assert out == "OK"
    assert captured["msgs"] == [msgs]
    init = captured["init"][0]
    assert init["model"] == "gpt-4"
    assert init["temperature"] == 0.7
    assert init["max_tokens"] == 2000
    assert init["max_retries"] == 0


def test_llm_is_reused_per_options(monkeypatch):
    captured = _stub_llm(monkeypatch, lambda: type("Resp", (), {"content": "OK"})())
    client = OpenAIChatClient(api_key="sk-test")
    asyncio.run(client.complete([], CompletionOptions()))
    asyncio.run(client.complete([], CompletionOptions()))
    assert len(captured["init"]) == 1


def test_missing_api_key_is_auth_status(monkeypatch):
    _stub_llm(monkeypatch, lambda: None)
    client = OpenAIChatClient(api_key=None)
    with pytest.raises(UpstreamStatusError) as info:
        asyncio.run(client.complete([], CompletionOptions()))
    assert info.value.status_code == 401


def test_status_errors_are_translated(monkeypatch):
    def raise_rate_limit():
        raise openai.RateLimitError(
            "rate limited",
            response=httpx.Response(429, request=_request()),
            body=None,
        )

    _stub_llm(monkeypatch, raise_rate_limit)
    client = OpenAIChatClient(api_key="sk-test")
    with pytest.raises(UpstreamStatusError) as info:
        asyncio.run(client.complete([], CompletionOptions()))
    assert info.value.status_code == 429


def test_connection_errors_are_translated(monkeypatch):
    def raise_connection():
        raise openai.APIConnectionError(request=_request())

    _stub_llm(monkeypatch, raise_connection)
    client = OpenAIChatClient(api_key="sk-test")
    with pytest.raises(UpstreamConnectionError) as info:
        asyncio.run(client.complete([], CompletionOptions()))
    assert "network" in str(info.value)


def test_non_text_content_is_treated_as_empty(monkeypatch):
    _stub_llm(monkeypatch, lambda: type("Resp", (), {"content": [{"type": "image"}]})())
    client = OpenAIChatClient(api_key="sk-test")
    assert asyncio.run(client.complete([], CompletionOptions())) is None

"""Tests for the LLM text cleanup client."""

from types import SimpleNamespace

from openai import OpenAIError

from constants import CLEANUP_SYSTEM_PROMPT
from data_models import CleanupResult, CleanupError
from text_cleanup import TextCleanupClient


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


def make_client(response=None, error=None):
    completions = FakeCompletions(response, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_returns_cleaned_text():
    client, completions = make_client(reply("name | quantity | price\nTea | 1 | 2.00"))
    result = TextCleanupClient(client=client, model="test-model", temperature=0.2).clean("T3a 2.0O")

    assert result == CleanupResult(text="name | quantity | price\nTea | 1 | 2.00")
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.2
    assert call["messages"] == [
        {"role": "system", "content": CLEANUP_SYSTEM_PROMPT},
        {"role": "user", "content": "T3a 2.0O"},
    ]


def test_client_errors_become_cleanup_error():
    client, _ = make_client(error=OpenAIError("connection reset"))
    result = TextCleanupClient(client=client).clean("text")

    assert isinstance(result, CleanupError)
    assert result.message == "Failed to call OpenAI: connection reset"


def test_empty_response_is_an_error():
    client, _ = make_client(SimpleNamespace(choices=[]))
    result = TextCleanupClient(client=client).clean("text")

    assert isinstance(result, CleanupError)
    assert result.message.startswith("No response from LLM. Raw response:")


def test_missing_api_key_is_reported(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr("text_cleanup.LLM_API_KEY_ENV", "BILLSPLIT_TEST_UNSET_KEY")
    monkeypatch.delenv("BILLSPLIT_TEST_UNSET_KEY", raising=False)

    result = TextCleanupClient().clean("text")
    assert isinstance(result, CleanupError)
    assert result.message.startswith("Failed to call OpenAI:")

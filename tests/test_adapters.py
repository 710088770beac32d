"""
Tests for the OpenAI completion adapter and the MongoDB store handle.

External clients are replaced with mocks; no network access is needed.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest
from pymongo.errors import ServerSelectionTimeoutError

import adapters.mongo_adapter as mongo_adapter
from adapters.mongo_adapter import MongoStore
from adapters.openai_adapter import CompletionClient
from app.exceptions import StoreUnavailableError, UpstreamError


# =============================================================================
# COMPLETION CLIENT
# =============================================================================


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client_returning(result=None, error=None):
    sdk = MagicMock()
    if error is not None:
        sdk.chat.completions.create.side_effect = error
    else:
        sdk.chat.completions.create.return_value = result
    return sdk


def test_complete_returns_content_and_sends_prompt():
    sdk = _client_returning(_completion('{"meals": []}'))
    client = CompletionClient(api_key=None, model="gpt-4", temperature=0, client=sdk)

    assert client.complete("plan my week") == '{"meals": []}'
    sdk.chat.completions.create.assert_called_once_with(
        model="gpt-4",
        messages=[{"role": "user", "content": "plan my week"}],
        temperature=0,
    )


def test_missing_api_key_is_upstream_error():
    client = CompletionClient(api_key=None)
    assert not client.is_configured
    with pytest.raises(UpstreamError, match="not configured"):
        client.complete("hi")


@pytest.mark.parametrize("content", [None, "", "   \n"])
def test_empty_content_is_upstream_error(content):
    client = CompletionClient(api_key=None, client=_client_returning(_completion(content)))
    with pytest.raises(UpstreamError):
        client.complete("hi")


def test_no_choices_is_upstream_error():
    client = CompletionClient(api_key=None, client=_client_returning(SimpleNamespace(choices=[])))
    with pytest.raises(UpstreamError):
        client.complete("hi")


def test_error_status_is_upstream_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(429, request=request)
    error = openai.RateLimitError("Rate limit reached", response=response, body=None)
    client = CompletionClient(api_key=None, client=_client_returning(error=error))

    with pytest.raises(UpstreamError) as exc_info:
        client.complete("hi")
    assert exc_info.value.details["status"] == 429


def test_connection_failure_is_upstream_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    error = openai.APIConnectionError(request=request)
    client = CompletionClient(api_key=None, client=_client_returning(error=error))

    with pytest.raises(UpstreamError):
        client.complete("hi")


# =============================================================================
# MONGO STORE
# =============================================================================


def _unreachable_client():
    fake_client = MagicMock()
    fake_client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    return fake_client


def test_store_not_connected(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "MongoClient", MagicMock(return_value=_unreachable_client()))

    store = MongoStore("mongodb://localhost:27017")
    assert not store.is_ready
    assert store.status() == "disconnected"
    with pytest.raises(StoreUnavailableError):
        store.get_collection("users")


def test_connect_success_creates_indexes(monkeypatch):
    fake_client = MagicMock()
    monkeypatch.setattr(mongo_adapter, "MongoClient", MagicMock(return_value=fake_client))

    store = MongoStore("mongodb://db:27017", "mealplan")
    assert store.connect() is True
    assert store.is_ready
    fake_client.admin.command.assert_called_with("ping")
    # users.email and meal_plans.(userId, createdAt)
    assert fake_client["mealplan"]["users"].create_index.call_count == 2
    assert store.status() == "connected"

    store.close()
    fake_client.close.assert_called_once()
    assert not store.is_ready


def test_connect_failure_leaves_store_unready(monkeypatch):
    client_factory = MagicMock(return_value=_unreachable_client())
    monkeypatch.setattr(mongo_adapter, "MongoClient", client_factory)

    store = MongoStore("mongodb://db:27017")
    assert store.connect() is False
    assert not store.is_ready
    with pytest.raises(StoreUnavailableError):
        store.get_collection("meal_plans")
    # within the reconnect interval no new attempt is made
    assert client_factory.call_count == 1


def test_get_collection_reconnects_after_outage(monkeypatch):
    server = {"up": False}

    def ping(*args, **kwargs):
        if not server["up"]:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1}

    fake_client = MagicMock()
    fake_client.admin.command.side_effect = ping
    monkeypatch.setattr(mongo_adapter, "MongoClient", MagicMock(return_value=fake_client))

    store = MongoStore("mongodb://db:27017", "mealplan", reconnect_interval=0)
    assert store.connect() is False
    with pytest.raises(StoreUnavailableError):
        store.get_collection("users")

    server["up"] = True
    assert store.get_collection("users") is fake_client["mealplan"]["users"]
    assert store.is_ready
    assert store.status() == "connected"

import pytest

from roundtable_core.domain.exceptions import ApiError, NetworkError, ProviderUnavailableError, RateLimitError
from roundtable_core.domain.models import Message
from roundtable_core.providers.openai_client import OpenAIClient

from fakes import NoNetworkClient, OPENAI_OK, Resp, make_client


class SettingsStub:
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"


CONTEXT = [
    Message(sender="user", content="hi all"),
    Message(sender="Gemini", content="hello!"),
]


def test_build_request_role_tags_and_labels():
    oc = OpenAIClient("sk-test", SettingsStub())
    payload = oc.build_request(CONTEXT, "what now?", "Be brief.")
    assert payload["model"] == "gpt-4"
    assert payload["max_tokens"] == 150
    assert payload["temperature"] == 0.8
    msgs = payload["messages"]
    assert msgs[0] == {"role": "system", "content": "Be brief. You are OpenAI."}
    assert msgs[1] == {"role": "user", "content": "[user] hi all"}
    assert msgs[2] == {"role": "assistant", "content": "[Gemini] hello!"}
    assert msgs[3] == {"role": "user", "content": "what now?"}


def test_build_request_without_new_message():
    oc = OpenAIClient("sk-test", SettingsStub())
    msgs = oc.build_request(CONTEXT, "", "Be brief.")["messages"]
    assert len(msgs) == 3


def test_assistant_model_temperature():
    oc = OpenAIClient("sk-test", SettingsStub(), model="assistant")
    assert oc.build_request([], "x", "p")["temperature"] == 0.7


def test_extract_reply_handles_missing_fields():
    oc = OpenAIClient("sk-test", SettingsStub())
    assert oc.extract_reply(OPENAI_OK) == "hello from openai"
    assert oc.extract_reply({"choices": []}) == ""
    assert oc.extract_reply({"choices": [{"message": {}}]}) == ""
    assert oc.extract_reply([]) == ""


def test_invoke_posts_to_chat_completions(monkeypatch):
    calls = []
    monkeypatch.setattr("httpx.Client", make_client(lambda url: Resp(body=OPENAI_OK), calls))
    oc = OpenAIClient("sk-test", SettingsStub())
    assert oc.reply(CONTEXT, "hey", "p") == "hello from openai"
    assert calls[0]["url"] == "https://api.openai.com/v1/chat/completions"
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-test"


def test_invoke_without_key_skips_network(monkeypatch):
    monkeypatch.setattr("httpx.Client", NoNetworkClient)
    oc = OpenAIClient(None, SettingsStub())
    with pytest.raises(ProviderUnavailableError):
        oc.reply(CONTEXT, "hey", "p")


def test_invoke_error_statuses(monkeypatch):
    oc = OpenAIClient("sk-test", SettingsStub())
    monkeypatch.setattr("httpx.Client", make_client(lambda url: Resp(status_code=429), []))
    with pytest.raises(RateLimitError):
        oc.invoke({})
    monkeypatch.setattr("httpx.Client", make_client(lambda url: Resp(status_code=500, text="boom"), []))
    with pytest.raises(ApiError) as exc_info:
        oc.invoke({})
    assert exc_info.value.http_status == 500


def test_invoke_network_error(monkeypatch):
    import httpx

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("httpx.Client", Client)
    oc = OpenAIClient("sk-test", SettingsStub())
    with pytest.raises(NetworkError):
        oc.invoke({})


def test_reply_empty_content_is_failure(monkeypatch):
    monkeypatch.setattr("httpx.Client", make_client(lambda url: Resp(body={"choices": []}), []))
    oc = OpenAIClient("sk-test", SettingsStub())
    with pytest.raises(ApiError) as exc_info:
        oc.reply([], "hey", "p")
    assert exc_info.value.code == "EMPTY_REPLY"

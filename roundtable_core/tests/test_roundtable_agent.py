from roundtable_core.agents.roundtable_agent import RoundtableAgent
from roundtable_core.domain.models import Message

from fakes import CLAUDE_OK, GEMINI_OK, NoNetworkClient, OPENAI_OK, Resp, make_client


class SettingsStub:
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"
    gemini_base_url = "https://generativelanguage.googleapis.com/v1beta"
    claude_base_url = "https://api.anthropic.com/v1"


ALL_KEYS = {"openai": "sk-openai", "gemini": "g-gemini-key", "claude": "sk-ant-key"}


def test_no_credentials_all_fallback_without_network(monkeypatch):
    monkeypatch.setattr("httpx.Client", NoNetworkClient)
    agent = RoundtableAgent(SettingsStub())
    replies = agent.reply_all("hi", [], {})
    assert [r.bot_display_name for r in replies] == ["OpenAI", "Gemini", "Claude"]
    assert replies[0].content == "OpenAI says: [No API key or error. This is a demo response.]"
    assert replies[1].content == "Gemini (Google) says: [No API key or error. This is a demo response.]"
    assert replies[2].content == "Claude says: [No API key or error. This is a demo response.]"


def test_one_failure_does_not_affect_siblings(monkeypatch):
    def route(url):
        if "openai" in url:
            return Resp(body=OPENAI_OK)
        if "googleapis" in url:
            return Resp(body=GEMINI_OK)
        return Resp(status_code=500, text="overloaded")

    monkeypatch.setattr("httpx.Client", make_client(route, []))
    agent = RoundtableAgent(SettingsStub())
    replies = agent.reply_all("hi", [], ALL_KEYS)
    assert [r.content for r in replies] == [
        "hello from openai",
        "hello from gemini",
        "Claude says: [No API key or error. This is a demo response.]",
    ]


def test_malformed_response_yields_fallback(monkeypatch):
    monkeypatch.setattr("httpx.Client", make_client(lambda url: Resp(body={"unexpected": True}), []))
    agent = RoundtableAgent(SettingsStub())
    replies = agent.reply_all("hi", [], ALL_KEYS)
    assert len(replies) == 3
    assert replies[0].content.startswith("OpenAI says:")
    assert replies[1].content == "[Gemini: No response]"
    assert replies[2].content.startswith("Claude says:")


def test_every_bot_gets_same_message_and_last_ten(monkeypatch):
    calls = []
    monkeypatch.setattr("httpx.Client", make_client(lambda url: Resp(body=OPENAI_OK), calls))
    agent = RoundtableAgent(SettingsStub())
    conv = [Message(sender="user", content=f"m{i}") for i in range(12)]
    agent.reply_for("openai", "new one", conv, ALL_KEYS)
    msgs = calls[0]["json"]["messages"]
    # system + 10 context + new message
    assert len(msgs) == 12
    assert msgs[1]["content"] == "[user] m2"
    assert msgs[-2]["content"] == "[user] m11"
    assert msgs[-1]["content"] == "new one"


def test_unknown_bot_still_replies(monkeypatch):
    monkeypatch.setattr("httpx.Client", NoNetworkClient)
    agent = RoundtableAgent(SettingsStub())
    reply = agent.reply_for("mistral", "", [], ALL_KEYS)
    assert reply.bot_display_name == "Mistral"
    assert reply.content == "Bot is unavailable."


def test_persona_names_all_bots():
    captured = {}

    class FakeClient:
        def fallback_reply(self, error=None):
            return "fb"

        def reply(self, context, new_message, persona):
            captured["persona"] = persona
            return "ok"

    agent = RoundtableAgent(SettingsStub(), provider_factory=lambda *a, **kw: FakeClient())
    assert agent.reply_for("gemini", "x", [], ALL_KEYS).content == "ok"
    assert "(OpenAI, Gemini, Claude)" in captured["persona"]


def test_non_list_claude_content_keeps_batch(monkeypatch):
    def route(url):
        if "openai" in url:
            return Resp(body=OPENAI_OK)
        if "googleapis" in url:
            return Resp(body=GEMINI_OK)
        return Resp(body={"content": 5})

    monkeypatch.setattr("httpx.Client", make_client(route, []))
    agent = RoundtableAgent(SettingsStub())
    replies = agent.reply_all("hi", [], ALL_KEYS)
    assert [r.content for r in replies] == [
        "hello from openai",
        "hello from gemini",
        "Claude says: [No API key or error. This is a demo response.]",
    ]


def test_adapter_crash_resolves_to_fallback():
    class CrashingClient:
        def fallback_reply(self, error=None):
            return "fb"

        def reply(self, context, new_message, persona):
            raise KeyError("choices")

    agent = RoundtableAgent(SettingsStub(), provider_factory=lambda *a, **kw: CrashingClient())
    replies = agent.reply_all("hi", [], ALL_KEYS)
    assert [(r.bot_display_name, r.content) for r in replies] == [
        ("OpenAI", "fb"),
        ("Gemini", "fb"),
        ("Claude", "fb"),
    ]


def test_timeout_on_one_bot_falls_back(monkeypatch):
    import httpx

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            if "googleapis" in url:
                raise httpx.ReadTimeout("read timed out")
            if "openai" in url:
                return Resp(body=OPENAI_OK)
            return Resp(body=CLAUDE_OK)

    monkeypatch.setattr("httpx.Client", Client)
    agent = RoundtableAgent(SettingsStub())
    replies = agent.reply_all("hi", [], ALL_KEYS)
    assert [r.bot_display_name for r in replies] == ["OpenAI", "Gemini", "Claude"]
    assert replies[0].content == "hello from openai"
    assert replies[1].content == "Gemini (Google) error: read timed out"
    assert replies[2].content == "hello from claude"

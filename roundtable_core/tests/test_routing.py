from datetime import datetime, timezone

from roundtable_core.agents.routing import CONTEXT_WINDOW, build_context, classify_request
from roundtable_core.domain.models import Message


def test_classify_opening_message():
    assert classify_request("hi", None) == "roundtable"


def test_classify_bot_turn_wins_over_message():
    assert classify_request("", "claude") == "single"
    assert classify_request("hi", "gemini") == "single"


def test_classify_invalid():
    assert classify_request(None, None) == "invalid"
    assert classify_request("   ", None) == "invalid"
    assert classify_request("", "") == "invalid"


def test_build_context_keeps_last_ten_in_order():
    conv = [Message(sender="user", content=str(i)) for i in range(25)]
    ctx = build_context(conv)
    assert len(ctx) == CONTEXT_WINDOW == 10
    assert [m.content for m in ctx] == [str(i) for i in range(15, 25)]


def test_build_context_short_conversation():
    conv = [Message(sender="user", content="a"), Message(sender="Gemini", content="b")]
    assert build_context(conv) == conv
    assert build_context([]) == []


def test_message_from_payload():
    msg = Message.from_payload({"sender": "Claude", "content": "yo", "timestamp": "2024-05-01T10:00:00.000Z"})
    assert msg.sender == "Claude"
    assert msg.timestamp == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert Message.from_payload({"content": "x", "timestamp": "yesterday"}).timestamp is None

"""High-level entry point for the roundtable graph."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from roundtable_core.agents.roundtable_agent import RoundtableAgent
from roundtable_core.config.settings import settings
from roundtable_core.domain.exceptions import InvalidRequestError
from roundtable_core.domain.models import Message
from roundtable_core.flows.graph import build_graph
from roundtable_core.flows.state import RoundtableState

_agent = RoundtableAgent()
_graph = build_graph(_agent)


def to_messages(conversation: Optional[Iterable[Union[Message, Mapping[str, Any]]]]) -> list[Message]:
    """Accept either Message objects or raw JSON dicts from the caller."""

    messages = []
    for item in conversation or []:
        messages.append(item if isinstance(item, Message) else Message.from_payload(item))
    return messages


def run_roundtable(
    message: Optional[str] = None,
    conversation: Optional[Iterable[Union[Message, Mapping[str, Any]]]] = None,
    bot: Optional[str] = None,
    *,
    credentials: Optional[Mapping[str, Optional[str]]] = None,
    cfg=None,
) -> Dict[str, Any]:
    """Run one roundtable call and return the outbound payload.

    Args:
        message: 用户新消息，开场时必填
        conversation: 调用方保存的完整对话历史
        bot: 指定单个 bot 发言时的 provider key
        credentials: provider key -> API key；为空时从 settings 解析一次
        cfg: 配置对象（可选）；与全局 settings 不同时按它构建 agent 与 graph

    Returns:
        {"botMessages": [...]} for an opening message, {"botMessage": {...}} for a bot turn.

    Raises:
        InvalidRequestError: neither message nor bot was given.
    """

    cfg = cfg or settings
    graph = _graph if cfg is settings else build_graph(RoundtableAgent(cfg))
    creds = dict(credentials) if credentials is not None else cfg.provider_credentials()
    state: RoundtableState = {
        "message": message or "",
        "bot": bot or None,
        "conversation": to_messages(conversation),
        "credentials": creds,
    }
    result = graph.invoke(state)
    mode = result.get("mode")
    if mode == "invalid":
        raise InvalidRequestError(code="INVALID_REQUEST", message="Invalid request")
    replies = result.get("replies") or []
    if mode == "roundtable":
        return {"botMessages": [r.to_dict() for r in replies]}
    return {"botMessage": replies[0].to_dict()}

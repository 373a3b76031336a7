"""State definition for the roundtable LangGraph."""

from __future__ import annotations

from typing import Dict, List, Optional, TypedDict

from roundtable_core.domain.models import Message, ReplyResult, RequestMode


class RoundtableState(TypedDict, total=False):
    """State shared across LangGraph nodes."""

    message: str
    bot: Optional[str]
    conversation: List[Message]
    credentials: Dict[str, Optional[str]]
    mode: RequestMode
    replies: List[ReplyResult]

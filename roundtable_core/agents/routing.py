"""请求分类与上下文裁剪。"""

from typing import Optional, Sequence, List

from roundtable_core.domain.models import Message, RequestMode

# 每次调用最多带给 Provider 的历史消息条数
CONTEXT_WINDOW = 10


def classify_request(message: Optional[str], bot: Optional[str]) -> RequestMode:
    """判断本次调用是圆桌开场、单 bot 发言还是非法请求。

    - 有非空 message 且未指定 bot：roundtable，所有 bot 依次回复。
    - 指定了 bot：single，只让该 bot 基于上下文发言。
    - 其他情况：invalid。
    """

    if message and message.strip() and not bot:
        return "roundtable"
    if bot:
        return "single"
    return "invalid"


def build_context(conversation: Sequence[Message], limit: int = CONTEXT_WINDOW) -> List[Message]:
    """返回最近 limit 条消息，保持原有顺序。"""

    if limit <= 0:
        return []
    return list(conversation[-limit:])

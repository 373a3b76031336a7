"""兜底回复生成。

Provider 没有凭据或调用失败时，仍然要给调用方一条可读的回复。
"""

import random
from typing import Optional

from roundtable_core.providers.registry import PROVIDER_REGISTRY

UNKNOWN_BOT_REPLY = "Bot is unavailable."

FILLER_TEMPLATES = (
    'That\'s an interesting thought about "{message}". Tell me more!',
    'Hmm, "{message}"... I\'m running in demo mode, but I like where this is going.',
    'You said: "{message}". No model is connected right now, so this is a demo reply.',
    'Good question! "{message}" deserves a real answer once an API key is configured.',
    'I hear you on "{message}". This is a placeholder response for now.',
)


def fallback_reply(provider_key: str) -> str:
    """返回某个 Provider 的固定兜底文本，未知 Provider 返回通用提示。"""

    cfg = PROVIDER_REGISTRY.get(provider_key.lower())
    if cfg is None:
        return UNKNOWN_BOT_REPLY
    return f"{cfg.persona_name} says: [No API key or error. This is a demo response.]"


def filler_reply(message: str, rng: Optional[random.Random] = None) -> str:
    """单助手模式的兜底：随机选一个模板，回显用户消息。"""

    rng = rng or random.Random()
    return rng.choice(FILLER_TEMPLATES).format(message=message.strip())

"""单助手 Agent。

与圆桌模式共用 Provider 适配器，但只有一个通用助手：
按 openai → claude 的顺序选第一个配置了凭据的 Provider，只尝试一次，
没有凭据或调用失败时用随机模板回显用户消息。
"""

import logging
import random
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple
from uuid import uuid4

from roundtable_core.agents.routing import build_context
from roundtable_core.config.settings import settings
from roundtable_core.domain.exceptions import BusinessError, InvalidRequestError
from roundtable_core.domain.models import Message
from roundtable_core.infrastructure.logging.logger import logger
from roundtable_core.prompts import load_system_prompt
from roundtable_core.providers import create_provider
from roundtable_core.providers.base import ProviderClient
from roundtable_core.providers.fallback import filler_reply

# 单助手模式可用的 Provider，按优先级排列
ASSISTANT_PROVIDERS: Tuple[str, ...] = ("openai", "claude")


def select_provider(credentials: Mapping[str, Optional[str]]) -> Optional[str]:
    """返回第一个配置了凭据的 Provider，没有则返回 None。"""

    for key in ASSISTANT_PROVIDERS:
        if credentials.get(key):
            return key
    return None


class AssistantAgent:
    """通用单助手对话。"""

    def __init__(
        self,
        cfg=settings,
        provider_factory: Callable[..., ProviderClient] = create_provider,
        rng: Optional[random.Random] = None,
    ):
        self._settings = cfg
        self._provider_factory = provider_factory
        self._rng = rng or random.Random()
        self._persona = load_system_prompt("assistant")

    def chat(
        self,
        message: Optional[str],
        conversation: Sequence[Message],
        credentials: Mapping[str, Optional[str]],
        user_id: str = "anonymous",
    ) -> Dict[str, Any]:
        """生成一条助手回复。

        Returns:
            {"userMessage": {...}, "botMessage": {...}}，两条消息都带
            生成的 id 和 ISO 时间戳。

        Raises:
            InvalidRequestError: message 为空。
        """

        if not message or not message.strip():
            raise InvalidRequestError(code="INVALID_REQUEST", message="Invalid request")

        user_message = {
            "id": uuid4().hex,
            "sender": "user",
            "userId": user_id,
            "content": message,
            "timestamp": _now_iso(),
        }
        content = self._generate(message, conversation, credentials)
        bot_message = {
            "id": uuid4().hex,
            "sender": "bot",
            "content": content,
            "timestamp": _now_iso(),
        }
        return {"userMessage": user_message, "botMessage": bot_message}

    def _generate(
        self,
        message: str,
        conversation: Sequence[Message],
        credentials: Mapping[str, Optional[str]],
    ) -> str:
        provider_key = select_provider(credentials)
        if provider_key is None:
            logger.info("No assistant provider configured, using filler reply")
            return filler_reply(message, self._rng)

        client = self._provider_factory(provider_key, credentials[provider_key], self._settings, model="assistant")
        try:
            return client.reply(build_context(conversation), message, self._persona)
        except BusinessError as exc:
            logger.log(
                logging.WARNING,
                "Assistant provider failed, using filler reply",
                extra={"extra": {"provider": provider_key, "code": exc.code, "error": exc.message}},
            )
            return filler_reply(message, self._rng)
        except Exception as exc:
            logger.error(
                "Assistant provider crashed, using filler reply",
                extra={"extra": {"provider": provider_key, "error": f"{type(exc).__name__}: {exc}"}},
            )
            return filler_reply(message, self._rng)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

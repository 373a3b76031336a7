"""圆桌 Agent。

负责对单个 bot 调用 Provider 适配器并在失败时兜底，
以及在圆桌模式下并发调用所有 bot、按固定顺序汇总结果。
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from roundtable_core.agents.routing import build_context
from roundtable_core.config.settings import settings
from roundtable_core.domain.exceptions import BusinessError
from roundtable_core.domain.models import BotSpec, Message, ReplyResult
from roundtable_core.infrastructure.logging.logger import logger
from roundtable_core.prompts import roundtable_persona
from roundtable_core.providers import create_provider
from roundtable_core.providers.base import ProviderClient
from roundtable_core.providers.fallback import UNKNOWN_BOT_REPLY
from roundtable_core.providers.registry import BOT_ORDER

ProviderFactory = Callable[..., ProviderClient]


class RoundtableAgent:
    """多 bot 圆桌对话。

    Agent 本身无状态：凭据、对话历史都在每次调用时显式传入，
    同一个实例可以被多个请求并发使用。
    """

    def __init__(
        self,
        cfg=settings,
        bots: Sequence[BotSpec] = BOT_ORDER,
        provider_factory: ProviderFactory = create_provider,
    ):
        self._settings = cfg
        self._bots = tuple(bots)
        self._provider_factory = provider_factory
        self._persona = roundtable_persona(b.display_name for b in self._bots)

    @property
    def bots(self) -> Sequence[BotSpec]:
        return self._bots

    def find_bot(self, key: str) -> Optional[BotSpec]:
        key = key.lower()
        for bot in self._bots:
            if bot.key == key:
                return bot
        return None

    def reply_all(
        self,
        message: str,
        conversation: Sequence[Message],
        credentials: Mapping[str, Optional[str]],
    ) -> List[ReplyResult]:
        """所有 bot 对同一条用户消息作答，结果顺序与 bots 一致。"""

        with ThreadPoolExecutor(max_workers=len(self._bots) or 1, thread_name_prefix="roundtable") as pool:
            futures = [
                pool.submit(self.reply_for, bot.key, message, conversation, credentials)
                for bot in self._bots
            ]
            return [f.result() for f in futures]

    def reply_for(
        self,
        bot_key: str,
        message: str,
        conversation: Sequence[Message],
        credentials: Mapping[str, Optional[str]],
    ) -> ReplyResult:
        """调用单个 bot，任何 Provider 侧失败都转成兜底回复。"""

        bot = self.find_bot(bot_key)
        if bot is None:
            self._log(logging.WARNING, "Unknown bot requested", bot=bot_key)
            return ReplyResult(bot_display_name=bot_key.capitalize(), content=UNKNOWN_BOT_REPLY)

        api_key = credentials.get(bot.key)
        client = self._provider_factory(bot.key, api_key, self._settings, model="roundtable")
        if not api_key:
            self._log(logging.INFO, "Provider not configured, using fallback", bot=bot.key)
            return ReplyResult(bot_display_name=bot.display_name, content=client.fallback_reply())

        context = build_context(conversation)
        start_time = time.time()
        try:
            content = client.reply(context, message, self._persona)
        except BusinessError as exc:
            self._log(
                logging.WARNING,
                "Provider call failed, using fallback",
                bot=bot.key,
                code=exc.code,
                http_status=exc.http_status,
                error=exc.message,
            )
            content = client.fallback_reply(exc)
        except Exception as exc:
            # 适配器内部的意外错误同样只影响这一个 bot
            self._log(
                logging.ERROR,
                "Provider adapter crashed, using fallback",
                bot=bot.key,
                error=f"{type(exc).__name__}: {exc}",
            )
            content = client.fallback_reply()
        else:
            self._log(
                logging.INFO,
                "Provider replied",
                bot=bot.key,
                context_messages=len(context),
                elapsed_seconds=round(time.time() - start_time, 2),
            )
        return ReplyResult(bot_display_name=bot.display_name, content=content)

    @staticmethod
    def _log(level: int, msg: str, **fields: Any) -> None:
        payload: Dict[str, Any] = {"agent_type": "roundtable"}
        payload.update(fields)
        logger.log(level, msg, extra={"extra": payload})

"""对外 API 服务模块。

提供与 HTTP 框架无关的函数接口，上层（Vercel/ASGI/Flask 等）
只负责 CORS、方法分发和把 (status, body) 序列化出去。
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from roundtable_core import __version__
from roundtable_core.agents.assistant_agent import AssistantAgent, select_provider
from roundtable_core.config.settings import settings
from roundtable_core.domain.exceptions import InvalidRequestError
from roundtable_core.flows.runner import run_roundtable, to_messages
from roundtable_core.infrastructure.logging.logger import logger
from roundtable_core.providers.registry import BOT_ORDER, get_provider_config


_assistant: Optional[AssistantAgent] = None


def get_assistant_agent() -> AssistantAgent:
    """获取单助手 Agent 实例（单例）。"""
    global _assistant
    if _assistant is None:
        _assistant = AssistantAgent(settings)
    return _assistant


def handle_chat(payload: Mapping[str, Any], cfg=None) -> Dict[str, Any]:
    """处理一次聊天调用。

    Args:
        payload: {"message"?, "userId"?, "conversation"?, "bot"?}
        cfg: 配置对象（可选，默认使用全局 settings）

    Returns:
        圆桌模式: {"botMessages": [...]} 或 {"botMessage": {...}}；
        单助手模式: {"userMessage": {...}, "botMessage": {...}}

    Raises:
        InvalidRequestError: 既没有 message 也没有 bot
        其他异常视为内部错误，记录日志后原样抛出
    """
    cfg = cfg or settings
    credentials = cfg.provider_credentials()
    try:
        conversation = to_messages(payload.get("conversation"))
        if cfg.chat_mode == "assistant":
            agent = get_assistant_agent() if cfg is settings else AssistantAgent(cfg)
            return agent.chat(
                payload.get("message"),
                conversation,
                credentials,
                user_id=payload.get("userId") or "anonymous",
            )
        return run_roundtable(
            payload.get("message"),
            conversation,
            payload.get("bot"),
            credentials=credentials,
            cfg=cfg,
        )
    except InvalidRequestError:
        raise
    except Exception as e:
        logger.error(f"Chat failed: {e}", extra={"extra": {
            "chat_mode": cfg.chat_mode,
            "error": str(e),
        }})
        raise


def dispatch_chat(payload: Any, cfg=None) -> Tuple[int, Dict[str, Any]]:
    """把 handle_chat 的结果映射为 (HTTP 状态码, 响应体)。"""
    try:
        if not isinstance(payload, Mapping):
            raise TypeError(f"request body must be an object, got {type(payload).__name__}")
        return 200, handle_chat(payload, cfg)
    except InvalidRequestError as e:
        return e.http_status, {"error": e.message}
    except Exception as e:
        logger.error(f"Unexpected chat error: {e}")
        return 500, {"error": "Internal server error"}


def health_status(cfg=None) -> Dict[str, Any]:
    """健康检查。"""
    cfg = cfg or settings
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": cfg.service_name,
        "version": __version__,
    }


def model_info(credentials: Optional[Mapping[str, Optional[str]]] = None) -> Dict[str, Any]:
    """返回当前生效的模型配置。

    provider/model/hasApiKey 描述单助手模式会使用的 Provider；
    providers 列出圆桌中每个 bot 是否配置了凭据。
    """
    creds = credentials if credentials is not None else settings.provider_credentials()
    info: Dict[str, Any] = {"provider": "demo", "model": "Fun Responses", "hasApiKey": False}
    provider_key = select_provider(creds)
    if provider_key:
        cfg = get_provider_config(provider_key)
        info = {
            "provider": provider_key,
            "model": cfg.models["assistant"].provider_model,
            "hasApiKey": True,
        }
    info["providers"] = {bot.key: bool(creds.get(bot.key)) for bot in BOT_ORDER}
    return info

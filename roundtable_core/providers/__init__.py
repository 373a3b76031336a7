"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口与公共 HTTP 流程 (base)。
- 维护 Provider、模型配置与圆桌顺序 (registry)。
- 提供各厂商的具体实现 (openai_client、gemini_client、claude_client)。
- 生成失败兜底文本 (fallback)。
"""

from typing import Dict, Optional, Type

from roundtable_core.config.settings import settings
from roundtable_core.providers.base import HttpProviderClient, ProviderClient
from roundtable_core.providers.claude_client import ClaudeClient
from roundtable_core.providers.gemini_client import GeminiClient
from roundtable_core.providers.openai_client import OpenAIClient

_CLIENTS: Dict[str, Type[HttpProviderClient]] = {
    "openai": OpenAIClient,
    "gemini": GeminiClient,
    "claude": ClaudeClient,
}


def create_provider(
    name: str,
    api_key: Optional[str],
    cfg=None,
    model: str = "roundtable",
) -> ProviderClient:
    """根据名称创建 Provider 实例，未知名称抛出 KeyError。"""

    client_cls = _CLIENTS.get(name.lower())
    if client_cls is None:
        raise KeyError(f"Unknown provider: {name!r}")
    return client_cls(api_key, cfg or settings, model=model)



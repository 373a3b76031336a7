"""Provider 与模型配置。

本模块将“逻辑模型名”与“具体厂商模型名”解耦：

- 逻辑名（logical_name）：在代码里使用的统一名称，例如 "roundtable"。
- provider_model：厂商实际提供的模型 ID，例如 "gpt-4"。

同时维护圆桌的固定发言顺序 BOT_ORDER。"""

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from roundtable_core.domain.models import BotSpec


@dataclass
class ModelConfig:
    """单个逻辑模型的配置。"""

    logical_name: str
    provider_model: str
    max_tokens: int
    default_temperature: float


@dataclass
class ProviderConfig:
    """某个 Provider 的整体配置。

    - display_name: 圆桌中展示的名字，同时用于消息的 sender 标签。
    - persona_name: 兜底消息与错误消息中使用的名字。
    """

    name: str
    display_name: str
    persona_name: str
    base_url: str
    models: Dict[str, ModelConfig]


def _models(provider_model: str) -> Dict[str, ModelConfig]:
    return {
        "roundtable": ModelConfig(
            logical_name="roundtable",
            provider_model=provider_model,
            max_tokens=150,
            default_temperature=0.8,
        ),
        "assistant": ModelConfig(
            logical_name="assistant",
            provider_model=provider_model,
            max_tokens=150,
            default_temperature=0.7,
        ),
    }


OPENAI_CONFIG = ProviderConfig(
    name="openai",
    display_name="OpenAI",
    persona_name="OpenAI",
    base_url="https://api.openai.com/v1",
    models=_models("gpt-4"),
)

GEMINI_CONFIG = ProviderConfig(
    name="gemini",
    display_name="Gemini",
    persona_name="Gemini (Google)",
    base_url="https://generativelanguage.googleapis.com/v1beta",
    models=_models("gemini-2.0-flash"),
)

# Anthropic 要求显式声明 API 版本
ANTHROPIC_VERSION = "2023-06-01"

CLAUDE_CONFIG = ProviderConfig(
    name="claude",
    display_name="Claude",
    persona_name="Claude",
    base_url="https://api.anthropic.com/v1",
    models=_models("claude-3-haiku-20240307"),
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "openai": OPENAI_CONFIG,
    "gemini": GEMINI_CONFIG,
    "claude": CLAUDE_CONFIG,
}

# 圆桌发言顺序
BOT_ORDER: Tuple[BotSpec, ...] = tuple(
    BotSpec(key=cfg.name, display_name=cfg.display_name) for cfg in PROVIDER_REGISTRY.values()
)


def get_provider_config(name: str) -> ProviderConfig:
    """根据名称获取 ProviderConfig，名称不区分大小写。"""

    key = name.lower()
    for k, cfg in PROVIDER_REGISTRY.items():
        if k.lower() == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")



"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
API 密钥只在这里读取一次，核心逻辑通过 provider_credentials()
拿到显式的凭据映射，不直接访问进程环境。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("ROUNDTABLE_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- 模式 ----
    chat_mode: Literal["roundtable", "assistant"] = Field(
        default="roundtable",
        description="roundtable: 三个 bot 轮流回复；assistant: 单一助手",
    )

    # ---- Provider 凭据 ----
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API 密钥")
    gemini_api_key: Optional[str] = Field(default=None, description="Gemini API 密钥")
    anthropic_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("anthropic_api_key", "claude_api_key"),
        description="Anthropic (Claude) API 密钥",
    )

    # ---- Provider 地址 ----
    openai_base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI API 基础URL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini API 基础URL",
    )
    claude_base_url: str = Field(default="https://api.anthropic.com/v1", description="Anthropic API 基础URL")

    http_timeout: float = Field(default=30.0, ge=1.0, description="单个 Provider 调用的超时时间（秒）")
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")
    service_name: str = Field(default="Roundtable Chat API", description="健康检查中展示的服务名")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("openai_api_key", "gemini_api_key", "anthropic_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )

    def provider_credentials(self) -> Dict[str, Optional[str]]:
        """按 provider key 返回凭据，未配置的为 None。"""

        return {
            "openai": self.openai_api_key,
            "gemini": self.gemini_api_key,
            "claude": self.anthropic_api_key,
        }


settings = Settings()

"""OpenAI Provider 适配器。

- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>

OpenAI 接受带 role 的多轮消息，因此每条历史消息保留各自的 role，
并在内容前加上 "[sender]" 标签，让模型能分辨是哪个 bot 说的。
"""

from typing import Any, Dict, List, Sequence

from roundtable_core.domain.models import Message
from roundtable_core.providers.base import HttpProviderClient, dig
from roundtable_core.providers.registry import OPENAI_CONFIG


class OpenAIClient(HttpProviderClient):
    """OpenAI chat/completions 客户端实现。"""

    name = "openai"
    config = OPENAI_CONFIG

    def build_request(self, context: Sequence[Message], new_message: str, persona: str) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": f"{persona} {self.identity()}".strip()},
        ]
        for msg in context:
            role = "user" if msg.sender == "user" else "assistant"
            messages.append({"role": role, "content": f"[{msg.sender}] {msg.content}"})
        if new_message:
            messages.append({"role": "user", "content": new_message})
        return {
            "model": self._model_cfg.provider_model,
            "messages": messages,
            "max_tokens": self._model_cfg.max_tokens,
            "temperature": self._model_cfg.default_temperature,
        }

    def extract_reply(self, data: Any) -> str:
        content = dig(data, "choices", 0, "message", "content")
        return content.strip() if isinstance(content, str) else ""

    def _endpoint(self) -> str:
        return f"{self._base_url()}/chat/completions"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

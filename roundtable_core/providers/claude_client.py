"""Claude (Anthropic) Provider 适配器。

- URL: {base_url}/messages
- 认证: x-api-key: <api_key>，并携带 anthropic-version 头

整段圆桌上下文被压平成一条 user 消息，每行形如 "sender: content"。
"""

from typing import Any, Dict, Sequence

from roundtable_core.domain.models import Message
from roundtable_core.providers.base import HttpProviderClient, dig
from roundtable_core.providers.registry import ANTHROPIC_VERSION, CLAUDE_CONFIG


class ClaudeClient(HttpProviderClient):
    """Anthropic messages 客户端实现。"""

    name = "claude"
    config = CLAUDE_CONFIG

    def build_request(self, context: Sequence[Message], new_message: str, persona: str) -> Dict[str, Any]:
        prompt = f"{persona} {self.identity()}\n"
        for msg in context:
            prompt += f"{msg.sender}: {msg.content}\n"
        if new_message:
            prompt += f"user: {new_message}\n"
        return {
            "model": self._model_cfg.provider_model,
            "max_tokens": self._model_cfg.max_tokens,
            "temperature": self._model_cfg.default_temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_reply(self, data: Any) -> str:
        # content 是 block 列表，取第一个 text block
        blocks = dig(data, "content")
        if not isinstance(blocks, list):
            return ""
        for block in blocks:
            if isinstance(block, dict) and isinstance(block.get("text"), str):
                return block["text"]
        return ""

    def _endpoint(self) -> str:
        return f"{self._base_url()}/messages"

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._api_key or "",
            "Content-Type": "application/json",
            "anthropic-version": ANTHROPIC_VERSION,
        }

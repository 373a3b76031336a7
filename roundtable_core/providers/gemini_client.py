"""Gemini (Google) Provider 适配器。

Gemini 的 generateContent 接口这里按单条 prompt 使用：
系统设定、历史消息（"sender: content"）和新消息拼成一段文本。

- URL: {base_url}/models/{model}:generateContent
- 认证: X-goog-api-key: <api_key>

与其他 Provider 不同，Gemini 失败时的兜底文本会带上具体错误信息。
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from roundtable_core.domain.exceptions import BusinessError
from roundtable_core.domain.models import Message
from roundtable_core.providers.base import HttpProviderClient, dig
from roundtable_core.providers.registry import GEMINI_CONFIG

NO_RESPONSE_REPLY = "[Gemini: No response]"


class GeminiClient(HttpProviderClient):
    """Gemini generateContent 客户端实现。"""

    name = "gemini"
    config = GEMINI_CONFIG

    def build_request(self, context: Sequence[Message], new_message: str, persona: str) -> Dict[str, Any]:
        lines: List[str] = [f"System: {persona} {self.identity()}"]
        for msg in context:
            lines.append(f"{msg.sender}: {msg.content}")
        if new_message:
            lines.append(f"User: {new_message}")
        return {
            "contents": [{"parts": [{"text": "\n".join(lines)}]}],
            "generationConfig": {
                "maxOutputTokens": self._model_cfg.max_tokens,
                "temperature": self._model_cfg.default_temperature,
            },
        }

    def extract_reply(self, data: Any) -> str:
        text = dig(data, "candidates", 0, "content", "parts", 0, "text")
        return text if isinstance(text, str) else ""

    def fallback_reply(self, error: Optional[BusinessError] = None) -> str:
        if error is None:
            return super().fallback_reply()
        if error.code == "EMPTY_REPLY":
            return NO_RESPONSE_REPLY
        return f"{self.config.persona_name} error: {error.message}"

    def _endpoint(self) -> str:
        return f"{self._base_url()}/models/{self._model_cfg.provider_model}:generateContent"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-goog-api-key": self._api_key or "",
        }

    def _error_message(self, resp: httpx.Response) -> str:
        """优先使用响应体中的 error.message。"""

        detail = getattr(resp, "reason_phrase", "") or str(resp.status_code)
        try:
            message = dig(resp.json(), "error", "message")
        except ValueError:
            message = None
        if isinstance(message, str) and message:
            detail = message
        return f"Gemini API error: {detail}"

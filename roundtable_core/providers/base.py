"""Provider 抽象接口。

上层 Agent 不直接依赖具体厂商的 HTTP 接口，而是依赖此协议：

- build_request: 上下文 + 新消息 + 角色设定 → 厂商请求体。
- extract_reply: 厂商响应体 → 纯文本，缺失时返回空字符串。
- invoke: 发送请求并把网络/API 错误包装为业务异常。

HttpProviderClient 实现了公共的 invoke/reply/fallback_reply，
具体厂商只需给出端点、请求头以及请求/响应的形状。
"""

from typing import Any, Dict, Optional, Protocol, Sequence

import httpx

from roundtable_core.config.settings import settings
from roundtable_core.domain.exceptions import (
    ApiError,
    BusinessError,
    NetworkError,
    ProviderUnavailableError,
    RateLimitError,
)
from roundtable_core.domain.models import Message
from roundtable_core.providers.fallback import fallback_reply
from roundtable_core.providers.registry import ModelConfig, ProviderConfig


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。"""

    name: str
    display_name: str

    def build_request(self, context: Sequence[Message], new_message: str, persona: str) -> Dict[str, Any]:
        ...

    def extract_reply(self, data: Any) -> str:
        ...

    def invoke(self, payload: Dict[str, Any]) -> Any:
        ...

    def reply(self, context: Sequence[Message], new_message: str, persona: str) -> str:
        ...

    def fallback_reply(self, error: Optional[BusinessError] = None) -> str:
        ...


class HttpProviderClient:
    """基于 httpx 的 Provider 公共实现。"""

    name = ""
    config: ProviderConfig

    def __init__(self, api_key: Optional[str], cfg=settings, model: str = "roundtable"):
        # cfg 提供 base_url 覆盖与超时
        self._api_key = api_key
        self._settings = cfg
        self._model_cfg: ModelConfig = self.config.models[model]

    @property
    def display_name(self) -> str:
        return self.config.display_name

    def identity(self) -> str:
        return f"You are {self.config.display_name}."

    # ---- 子类实现 ----

    def build_request(self, context: Sequence[Message], new_message: str, persona: str) -> Dict[str, Any]:
        raise NotImplementedError

    def extract_reply(self, data: Any) -> str:
        raise NotImplementedError

    def _endpoint(self) -> str:
        raise NotImplementedError

    def _headers(self) -> Dict[str, str]:
        raise NotImplementedError

    # ---- 公共流程 ----

    def invoke(self, payload: Dict[str, Any]) -> Any:
        """发送请求，返回解析后的 JSON。"""

        if not self._api_key:
            raise ProviderUnavailableError(
                code="MISSING_API_KEY",
                message=f"{self.config.display_name} API key not set",
                provider=self.name,
            )
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(self._endpoint(), json=payload, headers=self._headers())
        except httpx.RequestError as e:
            # DNS 失败、连接超时、读超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__, provider=self.name)
        if resp.status_code == 429:
            raise RateLimitError(
                code="RATE_LIMIT",
                message=f"{self.config.display_name} rate limit",
                http_status=429,
                provider=self.name,
            )
        if resp.status_code >= 400:
            raise ApiError(
                code="API_ERROR",
                message=self._error_message(resp),
                http_status=resp.status_code,
                provider=self.name,
            )
        try:
            return resp.json()
        except ValueError:
            raise ApiError(code="BAD_RESPONSE", message="response is not valid JSON", provider=self.name)

    def reply(self, context: Sequence[Message], new_message: str, persona: str) -> str:
        """build → invoke → extract；回复为空视为调用失败。"""

        payload = self.build_request(context, new_message, persona)
        data = self.invoke(payload)
        text = self.extract_reply(data)
        if not text:
            raise ApiError(code="EMPTY_REPLY", message=f"{self.config.display_name} returned no content", provider=self.name)
        return text

    def fallback_reply(self, error: Optional[BusinessError] = None) -> str:
        return fallback_reply(self.name)

    def _base_url(self) -> str:
        return getattr(self._settings, f"{self.name}_base_url", None) or self.config.base_url

    def _error_message(self, resp: httpx.Response) -> str:
        return f"{self.config.display_name} API error: {resp.status_code}"


def dig(data: Any, *path: Any) -> Any:
    """按 key/下标逐层取值，任何一层缺失或类型不符都返回 None。"""

    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[step] if isinstance(step, int) else current.get(step)
        if current is None:
            return None
    return current

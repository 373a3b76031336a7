"""统一的对话与结果数据模型。

- Message: 调用方传入的一条对话消息（用户或某个 bot 发出）。
- BotSpec: 圆桌中的一个参与者，顺序即发言顺序。
- ReplyResult: 单个 Provider 适配器的统一输出，无论成功还是兜底。

所有 Provider 适配器都只依赖这些模型，不关心 HTTP 层的请求格式。
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Literal, Mapping, Optional


# 请求分类结果
RequestMode = Literal["roundtable", "single", "invalid"]


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    try:
        # 前端使用 JS 的 toISOString()，末尾带 "Z"
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class Message:
    """一条对话消息。

    - sender: "user" 或某个 bot 的展示名（如 "Gemini"）。
    - content: 纯文本内容。
    - timestamp: 消息时间，可能缺失。
    """

    sender: str
    content: str
    timestamp: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Message":
        """从调用方传入的 JSON 对象构造 Message。"""

        return cls(
            sender=str(payload.get("sender") or "user"),
            content=str(payload.get("content") or ""),
            timestamp=_parse_timestamp(payload.get("timestamp")),
        )


@dataclass(frozen=True)
class BotSpec:
    """圆桌参与者：provider key + 展示名。"""

    key: str
    display_name: str


@dataclass(frozen=True)
class ReplyResult:
    """一次适配器调用的统一结果。"""

    bot_display_name: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.bot_display_name, "content": self.content}

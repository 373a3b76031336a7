"""系统提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取 system prompt 文本。
圆桌提示词中的 {bots} 会被替换为参与者名单。
"""

from pathlib import Path
from typing import Iterable


PROMPTS_DIR = Path(__file__).resolve().parent

_PROMPT_FILES = {
    "roundtable": "roundtable_system.md",
    "assistant": "assistant_system.md",
}


def load_system_prompt(kind: str, locale: str = "en") -> str:
    """根据场景加载系统提示词文本，kind 为 "roundtable" 或 "assistant"。"""

    fname = PROMPTS_DIR / locale / _PROMPT_FILES[kind]
    return fname.read_text(encoding="utf-8").strip()


def roundtable_persona(bot_names: Iterable[str], locale: str = "en") -> str:
    """生成所有圆桌 bot 共享的角色设定。"""

    return load_system_prompt("roundtable", locale).format(bots=", ".join(bot_names))

"""Roundtable Core 顶层包。

该包实现多 Provider 的圆桌对话路由：
请求分类、上下文裁剪、各厂商请求/响应适配、失败兜底与结果聚合。
HTTP 服务层只需包装 api.service 中的函数即可。
"""

__version__ = "1.0.0"

from roundtable_core.flows import run_roundtable

__all__ = ["run_roundtable", "__version__"]

"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 Agent 层做兜底、在 API 层做统一的状态码映射。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class InvalidRequestError(BusinessError):
    """调用方既没有给出 message 也没有指定 bot。"""


class ProviderUnavailableError(BusinessError):
    """Provider 未配置凭据，不会发起网络请求。"""


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """第三方 API 返回非 2xx/429 错误，或响应中缺少回复文本时抛出。"""


class RateLimitError(BusinessError):
    """Provider 限流错误（429）。"""

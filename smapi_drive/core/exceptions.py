"""
通用异常定义

每个异常携带 SMAPI 故障码，由传输层转换为协议故障
"""
from typing import Any, Optional


class SmapiError(Exception):
    """网关基础异常"""
    fault_code = "Client.ServiceUnknownError"


class SessionInvalidError(SmapiError):
    """请求未携带可用凭证"""
    fault_code = "Client.SessionIdInvalid"


class TokenRefreshRequiredError(SmapiError):
    """上游返回 401，调用方需要刷新令牌后重试一次"""
    fault_code = "Client.TokenRefreshRequired"


class LinkPendingError(SmapiError):
    """设备授权尚未完成（authorization_pending）"""
    fault_code = "Client.NOT_LINKED_RETRY"


class LinkFailedError(SmapiError):
    """设备关联失败"""
    fault_code = "Client.NOT_LINKED_FAILURE"

    def __init__(
        self,
        message: str = "Device link failed",
        status_code: Optional[int] = None,
        payload: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class MalformedTokenError(LinkFailedError):
    """令牌不是 header.payload.signature 三段结构"""
    pass


class ItemNotFoundError(SmapiError):
    """ID 无法解析为任何上游路径或条目"""
    fault_code = "Client.ItemNotFound"


class UpstreamError(SmapiError):
    """存储或认证服务返回非 2xx 或网络错误

    status_code 和 payload 保留上游原始信息用于诊断
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

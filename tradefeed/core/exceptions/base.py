"""tradefeed核心异常类."""

from typing import Any


class TradeFeedError(Exception):
    """tradefeed基础异常类."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class SourceError(TradeFeedError):
    """数据源相关异常."""

    def __init__(
        self,
        message: str,
        source_name: str,
        error_code: str = "SOURCE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.source_name = source_name


class NetworkError(SourceError):
    """网络异常: 请求失败或非2xx响应."""

    def __init__(
        self,
        message: str,
        source_name: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, source_name, "NETWORK_ERROR", super_details)
        self.status_code = status_code


class ParseError(SourceError):
    """解析异常: 响应已收到但缺少预期的模式或字段."""

    def __init__(
        self,
        message: str,
        source_name: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, source_name, "PARSE_ERROR", details)


class StorageError(TradeFeedError):
    """时间序列文件读写异常."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if path:
            super_details["path"] = path
        super().__init__(message, "STORAGE_ERROR", super_details)
        self.path = path


FetchError = NetworkError

"""配置管理模块 - 处理tradefeed抓取流水线的配置"""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_USER_AGENT = "trade-dashboard/1.0 (+https://github.com)"


@dataclass
class HttpConfig:
    """HTTP客户端配置"""

    timeout: float = 20.0
    max_redirects: int = 5
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "zh-CN,zh;q=0.9,en;q=0.8"


@dataclass
class RetrySettings:
    """重试配置"""

    attempts: int = 3
    backoff: float = 0.8  # 秒, 第 i 次失败后等待 backoff * i
    mid_rate_backoff: float = 1.0


@dataclass
class StorageConfig:
    """时间序列存储配置"""

    path: str = "public/trade-data.json"
    retention: int = 2000
    dedup_minutes: float = 10.0

    def __post_init__(self) -> None:
        if self.retention < 1:
            raise ValueError("retention must be at least 1")


@dataclass
class LoggingConfig:
    """日志配置"""

    level: str = "INFO"
    file: str | None = None


@dataclass
class TradeFeedConfig:
    """tradefeed主配置"""

    http: HttpConfig = field(default_factory=HttpConfig)
    retry: RetrySettings = field(default_factory=RetrySettings)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "TradeFeedConfig":
        """从字典创建配置"""
        return cls(
            http=HttpConfig(**config_dict.get("http", {})),
            retry=RetrySettings(**config_dict.get("retry", {})),
            storage=StorageConfig(**config_dict.get("storage", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "http": asdict(self.http),
            "retry": asdict(self.retry),
            "storage": asdict(self.storage),
            "logging": asdict(self.logging),
        }


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    """深度更新字典"""
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_path: Path | None = None, *, use_env: bool = True):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，如果为None则使用当前目录下的 tradefeed.toml
            use_env: 是否应用 TRADEFEED_* 环境变量覆盖
        """
        self.config_path = config_path or Path("tradefeed.toml")
        self.use_env = use_env
        self.config = self._load_config()

    def _load_config(self) -> TradeFeedConfig:
        """加载配置"""
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
                TradeFeedConfig.from_dict(config_dict)
            except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
                # 如果配置文件有问题，使用默认配置
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        if self.use_env:
            _deep_update(config_dict, load_config_from_env())
        return TradeFeedConfig.from_dict(config_dict)

    def get_config(self) -> TradeFeedConfig:
        """获取当前配置"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """更新配置"""
        config_dict = self.config.to_dict()
        _deep_update(config_dict, updates)
        self.config = TradeFeedConfig.from_dict(config_dict)


def get_default_config() -> TradeFeedConfig:
    """获取默认配置"""
    return TradeFeedConfig()


def load_config_from_env() -> dict[str, Any]:
    """从环境变量加载配置"""
    config: dict[str, Any] = {}

    # 存储配置
    storage_config: dict[str, Any] = {}
    data_file = os.getenv("TRADEFEED_DATA_FILE")
    if data_file:
        storage_config["path"] = data_file
    retention = os.getenv("TRADEFEED_RETENTION")
    if retention is not None:
        storage_config["retention"] = int(retention)
    if storage_config:
        config["storage"] = storage_config

    # HTTP配置
    http_timeout = os.getenv("TRADEFEED_HTTP_TIMEOUT")
    if http_timeout is not None:
        config["http"] = {"timeout": float(http_timeout)}

    # 重试配置
    retry_attempts = os.getenv("TRADEFEED_RETRY_ATTEMPTS")
    if retry_attempts is not None:
        config["retry"] = {"attempts": int(retry_attempts)}

    # 日志配置
    logging_config: dict[str, Any] = {}
    log_level = os.getenv("TRADEFEED_LOG_LEVEL")
    if log_level is not None:
        logging_config["level"] = log_level
    log_file = os.getenv("TRADEFEED_LOG_FILE")
    if log_file is not None:
        logging_config["file"] = log_file
    if logging_config:
        config["logging"] = logging_config

    return config

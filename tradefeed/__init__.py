"""tradefeed - 贸易看板数据采集

定时抓取汇率（即期、中间价）与大宗商品价格，合并写入看板使用的 JSON 时间序列文件。
单个数据源失败只会记录为空值和错误信息，不会中断整次采集。
"""

from tradefeed.core.config import ConfigManager, TradeFeedConfig
from tradefeed.core.models import Record
from tradefeed.core.services import run_compaction, run_pipeline

__version__ = "0.1.0"

__all__ = ["ConfigManager", "Record", "TradeFeedConfig", "__version__", "run_compaction", "run_pipeline"]

#!/usr/bin/env python3
"""
tradefeed - 贸易看板数据采集
定时任务入口：抓取一次快照并写入时间序列文件
"""

from tradefeed.cli.main import fetch_entry

if __name__ == "__main__":
    fetch_entry()

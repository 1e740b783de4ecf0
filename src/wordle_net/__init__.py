"""
Wordle Net - 基于 TCP 的猜词游戏服务器

A line-oriented Wordle server: every connected client plays its own
sequence of rounds against a shared answer list.
"""

__version__ = "0.1.0"
__author__ = "Wordle Net Team"
__license__ = "MIT"

# 导出主要组件
from . import server, shared

__all__ = ["server", "shared", "__version__"]

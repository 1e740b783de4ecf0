"""
服务器端模块

负责处理客户端连接、游戏逻辑等服务器功能。

模块组成：
- game: 提示生成与单会话多回合状态机
- network: TCP accept 循环、每连接一个会话线程
- main: 命令行入口与配置

使用方式：
- 入口参见 wordle_net/server/main.py，加载 WordStore 后启动 NetworkServer
"""

from . import game, network

__all__ = ["game", "network"]

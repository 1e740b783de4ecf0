"""
共享模块

存放服务器各层共用的代码，如常量、协议文本、词库工具等。

组件说明：
- constants: 网络端口、游戏参数、提示规则与 accept 策略名
- protocols: 服务器发往客户端的全部文本消息（按行、可读）
- words: 词库加载与单词规范化（WordStore）

提示：
- 协议层不做额外分帧，服务器消息以换行结尾，提示语不带换行
- 若新增公共工具，可在此模块下添加并在 __all__ 中显式导出
"""

from . import constants, protocols, words

__all__ = ["constants", "protocols", "words"]

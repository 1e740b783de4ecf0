"""
游戏逻辑模块

实现游戏核心逻辑，包括提示生成、回合控制、会话状态管理等。
"""

from .hint import LetterState, generate_hint, render_hint, score_guess
from .session import SessionClosedError, WordleSession

__all__ = [
    "LetterState",
    "SessionClosedError",
    "WordleSession",
    "generate_hint",
    "render_hint",
    "score_guess",
]

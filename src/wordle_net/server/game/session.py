"""
会话状态机

单个客户端的多回合 Wordle 会话：校验猜测、生成提示、计算剩余次数，
回合结束后询问是否继续。不涉及 socket，由网络层驱动。
"""

import logging
from typing import List, Optional

from wordle_net.shared import protocols
from wordle_net.shared.constants import (
    DEFAULT_HINT_RULES,
    HINT_RULES,
    MAX_ATTEMPTS,
    STATE_ALL_COMPLETE,
    STATE_AWAITING_CONTINUE,
    STATE_AWAITING_GUESS,
    STATE_CLOSED,
    STATE_ROUND_LOST,
    STATE_ROUND_WON,
    WORD_LENGTH,
)
from wordle_net.shared.words import WordStore, normalize_word
from wordle_net.server.game.hint import generate_hint

logger = logging.getLogger(__name__)


class SessionClosedError(Exception):
    """会话已关闭后仍收到输入"""


class WordleSession:
    """
    单个客户端的游戏会话，按答案列表顺序进行多轮游戏。

    与传输层解耦：start() / handle_input() 返回需要发给客户端的文本列表，
    由网络层负责实际收发。

    状态流转：
        awaiting_guess -> (round_won | round_lost) -> awaiting_continue
        awaiting_continue --y--> awaiting_guess（下一轮）
        awaiting_continue --n--> closed
        最后一轮结束 -> all_complete -> closed（不再询问是否继续）
    """

    def __init__(
        self,
        store: WordStore,
        session_id: Optional[int] = None,
        hint_rules: str = DEFAULT_HINT_RULES,
        max_attempts: int = MAX_ATTEMPTS,
    ):
        if len(store) == 0:
            raise ValueError("word store has no answers")
        if hint_rules not in HINT_RULES:
            raise ValueError(f"unknown hint rules: {hint_rules!r}")
        self.store = store
        self.session_id = session_id
        self.hint_rules = hint_rules
        self.max_attempts = max_attempts
        self.round = 0
        self.attempts_remaining = max_attempts
        # awaiting_guess / awaiting_continue / closed，
        # round_won / round_lost / all_complete 只在处理单次输入时短暂出现
        self.state = STATE_AWAITING_GUESS
        self.rounds_won = 0
        self.rounds_lost = 0

    @property
    def answer(self) -> str:
        return self.store.answer_at(self.round)

    @property
    def closed(self) -> bool:
        return self.state == STATE_CLOSED

    @property
    def is_last_round(self) -> bool:
        return self.round + 1 >= len(self.store)

    def start(self) -> List[str]:
        """会话开始：发出第一轮的猜词提示"""
        logger.info(f"session={self.session_id} 开始第 {self.round + 1} 轮")
        return [protocols.guess_prompt(self.attempts_remaining)]

    def close(self) -> None:
        if self.state != STATE_CLOSED:
            logger.info(
                f"session={self.session_id} 关闭 (round={self.round + 1}, "
                f"won={self.rounds_won}, lost={self.rounds_lost})"
            )
        self.state = STATE_CLOSED

    def handle_input(self, text: str) -> List[str]:
        """处理客户端的一次输入，返回需要发送的消息"""
        if self.state == STATE_CLOSED:
            raise SessionClosedError(f"session {self.session_id} is closed")
        if self.state == STATE_AWAITING_CONTINUE:
            return self._handle_continue(text)
        return self._handle_guess(text)

    # 猜词阶段
    def _handle_guess(self, text: str) -> List[str]:
        guess = normalize_word(text)

        if len(guess) != WORD_LENGTH:
            return [protocols.MSG_INVALID_LENGTH, protocols.guess_prompt(self.attempts_remaining)]
        if not self.store.is_valid(guess):
            return [protocols.MSG_NOT_IN_LIST, protocols.guess_prompt(self.attempts_remaining)]

        answer = self.answer
        out = [protocols.hint_line(generate_hint(guess, answer, self.hint_rules))]

        if guess == answer:
            self.state = STATE_ROUND_WON
            self.rounds_won += 1
            logger.info(
                f"session={self.session_id} 第 {self.round + 1} 轮胜利，"
                f"用了 {self.max_attempts - self.attempts_remaining + 1} 次"
            )
            out.append(protocols.MSG_WON)
            out.extend(self._enter_continue())
            return out

        self.attempts_remaining -= 1
        if self.attempts_remaining <= 0:
            self.state = STATE_ROUND_LOST
            self.rounds_lost += 1
            logger.info(f"session={self.session_id} 第 {self.round + 1} 轮失败，答案 {answer}")
            out.append(protocols.lost_message(answer))
            out.extend(self._enter_continue())
            return out

        out.append(protocols.guess_prompt(self.attempts_remaining))
        return out

    # 回合结束 / 是否继续
    def _enter_continue(self) -> List[str]:
        if self.is_last_round:
            # 没有下一轮了：直接结束，不再询问
            self.state = STATE_ALL_COMPLETE
            self.close()
            return [protocols.MSG_ALL_COMPLETE]
        self.state = STATE_AWAITING_CONTINUE
        return [protocols.MSG_CONTINUE_PROMPT]

    def _handle_continue(self, text: str) -> List[str]:
        reply = text[:1].lower()
        if reply == "y":
            self.next_round()
            return [protocols.MSG_NEW_GAME, protocols.guess_prompt(self.attempts_remaining)]
        if reply == "n":
            self.close()
            return []
        # 其他输入：保持等待，不重复提示
        return []

    def next_round(self) -> None:
        """进入下一轮，重置剩余次数"""
        self.round += 1
        self.attempts_remaining = self.max_attempts
        self.state = STATE_AWAITING_GUESS
        logger.info(f"session={self.session_id} 开始第 {self.round + 1} 轮")


__all__ = ["SessionClosedError", "WordleSession"]

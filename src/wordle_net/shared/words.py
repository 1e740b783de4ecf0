"""
词库模块

负责加载合法猜词集合（WordSet）与有序答案列表（AnswerList）。
两者在服务器启动前加载一次，之后只读，由所有会话共享。
"""

from __future__ import annotations

import logging
import string
from typing import FrozenSet, Iterable, Iterator, Tuple

from wordle_net.shared.constants import WORD_LENGTH

logger = logging.getLogger(__name__)

_LETTERS = frozenset(string.ascii_letters)


class WordListError(Exception):
    """词库文件无法读取或内容不可用（启动期致命错误）"""


def normalize_word(text: str) -> str:
    """去掉非字母字符并转为小写，例如 "CrAnE!" -> "crane"。"""
    return "".join(c for c in text if c in _LETTERS).lower()


def _read_tokens(path: str) -> Iterator[str]:
    """按空白切分文件内容，逐个产出 token"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise WordListError(f"Could not open file: {path} ({e})") from e
    yield from content.split()


def load_valid_words(path: str) -> FrozenSet[str]:
    """加载合法猜词集合。

    只接受恰好 5 个 ASCII 字母的 token（统一转小写），
    其他 token 记录警告后跳过。
    """
    words = set()
    for token in _read_tokens(path):
        if len(token) != WORD_LENGTH:
            logger.warning(f"跳过单词 {token!r}: 长度不是 {WORD_LENGTH}")
            continue
        if not all(c in _LETTERS for c in token):
            logger.warning(f"跳过单词 {token!r}: 包含非字母字符")
            continue
        words.add(token.lower())
    logger.info(f"从 {path} 加载了 {len(words)} 个合法单词")
    return frozenset(words)


def load_answers(path: str, valid_words: Iterable[str]) -> Tuple[str, ...]:
    """加载答案列表，保持文件中的顺序；不在词库中的答案被丢弃。"""
    valid = frozenset(valid_words)
    answers = []
    for token in _read_tokens(path):
        word = token.lower()
        if word not in valid:
            logger.warning(f"丢弃答案 {token!r}: 不在词库中")
            continue
        answers.append(word)
    logger.info(f"从 {path} 加载了 {len(answers)} 个答案")
    return tuple(answers)


class WordStore:
    """只读词库：合法猜词集合 + 有序答案列表"""

    def __init__(self, valid_words: Iterable[str], answers: Iterable[str]):
        self._valid_words = frozenset(valid_words)
        self._answers = tuple(answers)
        missing = [a for a in self._answers if a not in self._valid_words]
        if missing:
            raise ValueError(f"answers not in word list: {missing}")

    @classmethod
    def load(cls, wordlist_path: str, answers_path: str) -> "WordStore":
        valid_words = load_valid_words(wordlist_path)
        if not valid_words:
            raise WordListError(f"No valid words loaded from {wordlist_path}")
        answers = load_answers(answers_path, valid_words)
        if not answers:
            raise WordListError(f"No usable answers loaded from {answers_path}")
        return cls(valid_words, answers)

    @property
    def valid_words(self) -> FrozenSet[str]:
        return self._valid_words

    @property
    def answers(self) -> Tuple[str, ...]:
        return self._answers

    def is_valid(self, word: str) -> bool:
        return word in self._valid_words

    def answer_at(self, index: int) -> str:
        return self._answers[index]

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return f"WordStore(words={len(self._valid_words)}, answers={len(self._answers)})"


__all__ = [
    "WordListError",
    "WordStore",
    "load_answers",
    "load_valid_words",
    "normalize_word",
]

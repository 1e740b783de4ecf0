"""
提示生成

根据猜测词与答案计算逐字母反馈：
- 位置正确：大写字母
- 存在但位置错误：小写字母
- 不存在：*

纯函数，无副作用。
"""

from collections import Counter
from enum import Enum
from typing import List

from wordle_net.shared.constants import (
    ABSENT_MARKER,
    DEFAULT_HINT_RULES,
    HINT_RULES_CANONICAL,
    HINT_RULES_CLASSIC,
    WORD_LENGTH,
)


class LetterState(Enum):
    EXACT = "exact"
    PRESENT = "present"
    ABSENT = "absent"


def _check_pair(guess: str, answer: str) -> None:
    if len(guess) != WORD_LENGTH or len(answer) != WORD_LENGTH:
        raise ValueError(
            f"guess and answer must both have {WORD_LENGTH} letters: {guess!r}, {answer!r}"
        )


def _score_classic(guess: str, answer: str) -> List[LetterState]:
    """不做字母计数：只要答案其他位置有该字母且那个位置未被精确命中即视为存在。

    重复字母的猜测可能被多次标记为存在。
    """
    states = []
    for i, letter in enumerate(guess):
        if letter == answer[i]:
            states.append(LetterState.EXACT)
            continue
        present = any(
            j != i and letter == answer[j] and guess[j] != answer[j]
            for j in range(WORD_LENGTH)
        )
        states.append(LetterState.PRESENT if present else LetterState.ABSENT)
    return states


def _score_canonical(guess: str, answer: str) -> List[LetterState]:
    """标准规则：先标记精确命中并消耗字母，再从左到右按剩余数量标记存在。"""
    states = [LetterState.ABSENT] * WORD_LENGTH
    remaining = Counter(answer)
    for i, letter in enumerate(guess):
        if letter == answer[i]:
            states[i] = LetterState.EXACT
            remaining[letter] -= 1
    for i, letter in enumerate(guess):
        if states[i] is LetterState.ABSENT and remaining[letter] > 0:
            states[i] = LetterState.PRESENT
            remaining[letter] -= 1
    return states


_SCORERS = {
    HINT_RULES_CLASSIC: _score_classic,
    HINT_RULES_CANONICAL: _score_canonical,
}


def score_guess(guess: str, answer: str, rules: str = DEFAULT_HINT_RULES) -> List[LetterState]:
    """计算每个字母的状态（大小写不敏感）"""
    guess = guess.lower()
    answer = answer.lower()
    _check_pair(guess, answer)
    try:
        scorer = _SCORERS[rules]
    except KeyError:
        raise ValueError(f"unknown hint rules: {rules!r}") from None
    return scorer(guess, answer)


def render_hint(guess: str, states: List[LetterState]) -> str:
    out = []
    for letter, state in zip(guess.lower(), states):
        if state is LetterState.EXACT:
            out.append(letter.upper())
        elif state is LetterState.PRESENT:
            out.append(letter)
        else:
            out.append(ABSENT_MARKER)
    return "".join(out)


def generate_hint(guess: str, answer: str, rules: str = DEFAULT_HINT_RULES) -> str:
    """生成 5 个字符的提示串，例如 generate_hint("train", "crane") == "*RA*n"。"""
    return render_hint(guess, score_guess(guess, answer, rules))


__all__ = ["LetterState", "generate_hint", "render_hint", "score_guess"]

"""
协议文本

服务器 -> 客户端的全部消息。协议按行、纯文本：
普通通知以 "\n" 结尾，输入提示（猜词 / 是否继续）不带换行。
"""

MSG_INVALID_LENGTH = "Invalid input! Please enter exactly 5 letters.\n"
MSG_NOT_IN_LIST = "Word not in word list. Try again\n"
MSG_WON = "You Won!\n"
MSG_CONTINUE_PROMPT = "Would you like to continue? (y/n) "
MSG_NEW_GAME = "Starting a new game\n"
MSG_ALL_COMPLETE = "Congratulations! You have solved all the wordle games\n"


def guess_prompt(attempts_remaining: int) -> str:
    """猜词提示，N 为剩余次数。"""
    return f"Please enter 5-letter word ({attempts_remaining} attempts remaining): "


def hint_line(hint: str) -> str:
    return hint + "\n"


def lost_message(answer: str) -> str:
    """失败通知，同时揭晓答案。"""
    return f"Game Over!\nThe correct word was {answer}\n"


__all__ = [
    "MSG_INVALID_LENGTH",
    "MSG_NOT_IN_LIST",
    "MSG_WON",
    "MSG_CONTINUE_PROMPT",
    "MSG_NEW_GAME",
    "MSG_ALL_COMPLETE",
    "guess_prompt",
    "hint_line",
    "lost_message",
]

"""
常量定义

定义服务器中使用的各种常量。
"""

# 网络配置
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
BUFFER_SIZE = 1024
LISTEN_BACKLOG = 32
ACCEPT_RETRY_DELAY = 0.1  # 秒

# 日志
DEFAULT_LOG_FILE = "server.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 游戏配置
WORD_LENGTH = 5
MAX_ATTEMPTS = 6
ABSENT_MARKER = "*"

# 提示规则
HINT_RULES_CLASSIC = "classic"  # 不按字母数量消耗，重复字母可能多报
HINT_RULES_CANONICAL = "canonical"  # 标准 Wordle：每个字母按出现次数消耗
HINT_RULES = (HINT_RULES_CLASSIC, HINT_RULES_CANONICAL)
DEFAULT_HINT_RULES = HINT_RULES_CLASSIC

# accept() 失败时的处理策略
ACCEPT_POLICY_CONTINUE = "continue"
ACCEPT_POLICY_EXIT = "exit"
ACCEPT_POLICIES = (ACCEPT_POLICY_CONTINUE, ACCEPT_POLICY_EXIT)
DEFAULT_ACCEPT_POLICY = ACCEPT_POLICY_CONTINUE

# 会话状态
STATE_AWAITING_GUESS = "awaiting_guess"
STATE_AWAITING_CONTINUE = "awaiting_continue"
STATE_ROUND_WON = "round_won"
STATE_ROUND_LOST = "round_lost"
STATE_ALL_COMPLETE = "all_complete"
STATE_CLOSED = "closed"

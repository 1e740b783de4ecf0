"""
服务器主程序入口

加载词库，启动 Wordle 游戏服务器，监听客户端连接。

用法: wordle-server <wordlist-file> <answerlist-file>
"""

import logging
import os
import sys
import time

from wordle_net.shared.constants import (
    ACCEPT_POLICIES,
    DEFAULT_ACCEPT_POLICY,
    DEFAULT_HINT_RULES,
    DEFAULT_HOST,
    DEFAULT_LOG_FILE,
    DEFAULT_PORT,
    HINT_RULES,
    LOG_FORMAT,
)
from wordle_net.shared.words import WordListError, WordStore

logger = logging.getLogger(__name__)

USAGE = "Usage: wordle-server <wordlist_file> <answerlist_file>"


def setup_logging(log_file: str = DEFAULT_LOG_FILE) -> None:
    """配置日志：同时输出到文件和终端"""
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(log_file), logging.StreamHandler()],
    )


def _env_choice(name: str, choices, default: str) -> str:
    value = os.environ.get(name, default).strip().lower()
    if value not in choices:
        logger.warning(f"环境变量 {name}={value!r} 无效，使用默认值 {default}")
        return default
    return value


def load_config() -> dict:
    """读取环境变量配置，非法值回退到默认值"""
    # 支持通过环境变量覆盖主机与端口
    host = os.environ.get("HOST", DEFAULT_HOST)
    try:
        port = int(os.environ.get("PORT", DEFAULT_PORT))
    except ValueError:
        logger.warning(f"环境变量 PORT 无效，使用默认端口 {DEFAULT_PORT}")
        port = DEFAULT_PORT
    return {
        "host": host,
        "port": port,
        "hint_rules": _env_choice("WORDLE_HINT_RULES", HINT_RULES, DEFAULT_HINT_RULES),
        "accept_error_policy": _env_choice("ACCEPT_ERROR_POLICY", ACCEPT_POLICIES, DEFAULT_ACCEPT_POLICY),
    }


def main(argv=None) -> int:
    """启动服务器主函数，返回进程退出码"""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print(USAGE, file=sys.stderr)
        return 1

    setup_logging(os.environ.get("LOG_FILE", DEFAULT_LOG_FILE))
    wordlist_path, answers_path = args

    try:
        store = WordStore.load(wordlist_path, answers_path)
    except WordListError as e:
        logger.error(f"词库加载失败: {e}")
        return 1

    config = load_config()
    logger.info("=" * 50)
    logger.info("Wordle 游戏服务器启动中...")
    logger.info(f"词库: {len(store.valid_words)} 个单词, {len(store)} 个答案")
    logger.info(f"提示规则: {config['hint_rules']}, accept 失败策略: {config['accept_error_policy']}")
    logger.info("=" * 50)

    from wordle_net.server.network import NetworkServer

    server = NetworkServer(store, **config)
    try:
        server.start()
    except OSError as e:
        logger.error(f"无法监听 {config['host']}:{config['port']}: {e}")
        return 1

    try:
        logger.info("服务器运行中，按 Ctrl+C 停止")
        # 保持服务器运行
        while server.is_running():
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("服务器正在关闭...")
        server.stop()
    finally:
        logger.info(f"服务器已停止，共处理 {server.sessions_spawned} 个会话")

    return 1 if server.fatal_error is not None else 0


if __name__ == "__main__":
    sys.exit(main())

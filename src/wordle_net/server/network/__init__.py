"""
网络通信模块

处理 Socket 连接、按行读取客户端输入、把输入交给会话状态机并回写结果。
每个连接一个独立线程，线程之间只共享只读的 WordStore。
"""

from __future__ import annotations

import logging
import socket
import threading
import time
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

from wordle_net.shared.constants import (
	ACCEPT_POLICIES,
	ACCEPT_POLICY_EXIT,
	ACCEPT_RETRY_DELAY,
	BUFFER_SIZE,
	DEFAULT_ACCEPT_POLICY,
	DEFAULT_HINT_RULES,
	DEFAULT_HOST,
	DEFAULT_PORT,
	HINT_RULES,
	LISTEN_BACKLOG,
)
from wordle_net.shared.words import WordStore
from wordle_net.server.game import WordleSession


class ClientSession:
	"""客户端连接，封装 socket 与接收缓冲"""

	def __init__(self, conn: socket.socket, addr: Tuple[str, int], session_id: int):
		self.conn = conn
		self.addr = addr
		self.session_id = session_id
		self._recv_buffer = bytearray()

	def feed(self, data: bytes) -> List[str]:
		"""追加一次 recv 收到的数据，返回其中的全部输入。

		一次读取可能包含多行，按换行符切分；没有换行结尾的剩余部分
		同样作为一次输入，缓冲区在每次调用后清空。
		"""
		self._recv_buffer.extend(data)
		lines = []
		# // 简单分包：按换行符划分输入
		while True:
			try:
				idx = self._recv_buffer.index(ord("\n"))
			except ValueError:
				break
			raw = bytes(self._recv_buffer[:idx])
			del self._recv_buffer[: idx + 1]
			lines.append(raw.decode("utf-8", errors="replace").rstrip("\r"))
		if self._recv_buffer:
			rest = bytes(self._recv_buffer)
			self._recv_buffer.clear()
			lines.append(rest.decode("utf-8", errors="replace").rstrip("\r"))
		return lines

	def send_text(self, text: str) -> None:
		self.conn.sendall(text.encode("utf-8"))

	def close(self) -> None:
		try:
			self.conn.close()
		except OSError:
			pass


class NetworkServer:
	"""网络服务器：accept 循环 + 每连接一个会话线程"""

	def __init__(
		self,
		store: WordStore,
		host: str = DEFAULT_HOST,
		port: int = DEFAULT_PORT,
		hint_rules: str = DEFAULT_HINT_RULES,
		accept_error_policy: str = DEFAULT_ACCEPT_POLICY,
	):
		if hint_rules not in HINT_RULES:
			raise ValueError(f"unknown hint rules: {hint_rules!r}")
		if len(store) == 0:
			raise ValueError("word store has no answers")
		if accept_error_policy not in ACCEPT_POLICIES:
			raise ValueError(f"unknown accept error policy: {accept_error_policy!r}")
		self.store = store
		self.host = host
		self.port = port
		self.hint_rules = hint_rules
		self.accept_error_policy = accept_error_policy
		self.fatal_error: Optional[OSError] = None
		self._sock: Optional[socket.socket] = None
		self._accept_thread: Optional[threading.Thread] = None
		self._running = threading.Event()
		self.sessions: Dict[int, ClientSession] = {}
		self._sessions_lock = threading.Lock()
		self._sessions_spawned = 0

	@property
	def address(self) -> Tuple[str, int]:
		"""实际绑定的地址（port=0 时由系统分配端口）"""
		if self._sock is None:
			return (self.host, self.port)
		return self._sock.getsockname()[:2]

	@property
	def sessions_spawned(self) -> int:
		with self._sessions_lock:
			return self._sessions_spawned

	def is_running(self) -> bool:
		return self._running.is_set()

	# 服务器生命周期
	def start(self) -> None:
		"""绑定端口并在后台线程中进入 Accept 循环"""
		self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
		# // 允许快速重启服务
		self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
		try:
			self._sock.bind((self.host, self.port))
			self._sock.listen(LISTEN_BACKLOG)
		except OSError:
			self._sock.close()
			self._sock = None
			raise
		host, port = self.address
		logger.info(f"监听地址: {host}:{port}")
		self._running.set()
		self._accept_thread = threading.Thread(target=self._accept_loop, name="accept-loop", daemon=True)
		self._accept_thread.start()

	def stop(self) -> None:
		"""停止服务器并关闭所有会话连接"""
		self._running.clear()
		try:
			if self._sock:
				# // 触发 accept 退出
				try:
					self._sock.shutdown(socket.SHUT_RDWR)
				except OSError:
					pass
				self._sock.close()
		finally:
			self._sock = None
		with self._sessions_lock:
			sessions = list(self.sessions.values())
			self.sessions.clear()
		for sess in sessions:
			try:
				sess.conn.shutdown(socket.SHUT_RDWR)
			except OSError:
				pass
			sess.close()

	# 接入与会话线程
	def _accept_loop(self) -> None:
		"""Accept 新连接并为其创建会话线程"""
		sock = self._sock
		while self._running.is_set():
			try:
				conn, addr = sock.accept()  # type: ignore[union-attr]
			except OSError as e:
				if not self._running.is_set():
					# // 套接字已被 stop() 关闭，正常退出
					break
				if self.accept_error_policy == ACCEPT_POLICY_EXIT:
					logger.error(f"accept 失败，服务器退出: {e}")
					self.fatal_error = e
					self.stop()
					break
				logger.warning(f"accept 失败，继续等待新连接: {e}")
				time.sleep(ACCEPT_RETRY_DELAY)
				continue
			sess = self._register(conn, addr)
			t = threading.Thread(
				target=self._session_loop,
				args=(sess,),
				name=f"session-{sess.session_id}",
				daemon=True,
			)
			try:
				t.start()
			except RuntimeError as e:
				logger.error(f"session={sess.session_id} 无法创建会话线程: {e}")
				self._on_disconnect(sess)

	def _register(self, conn: socket.socket, addr: Tuple[str, int]) -> ClientSession:
		with self._sessions_lock:
			self._sessions_spawned += 1
			sess = ClientSession(conn, addr, self._sessions_spawned)
			self.sessions[sess.session_id] = sess
		logger.info(f"session={sess.session_id} 新连接: {addr[0]}:{addr[1]}")
		return sess

	def _session_loop(self, sess: ClientSession) -> None:
		"""单会话循环：读取输入，交给 WordleSession，回写结果"""
		game: Optional[WordleSession] = None
		try:
			game = WordleSession(self.store, session_id=sess.session_id, hint_rules=self.hint_rules)
			if not self._send(sess, game.start()):
				return
			while not game.closed and self._running.is_set():
				try:
					data = sess.conn.recv(BUFFER_SIZE)
				except OSError as e:
					logger.warning(f"session={sess.session_id} 读取失败，关闭会话: {e}")
					return
				if not data:
					logger.info(f"session={sess.session_id} 客户端断开")
					return
				for line in sess.feed(data):
					if not self._send(sess, game.handle_input(line)):
						return
					if game.closed:
						return
		except Exception:
			logger.error(f"session={sess.session_id} 会话异常", exc_info=True)
		finally:
			if game is not None:
				game.close()
			self._on_disconnect(sess)

	# 发送
	def _send(self, sess: ClientSession, messages: Iterable[str]) -> bool:
		text = "".join(messages)
		if not text:
			return True
		try:
			sess.send_text(text)
		except OSError as e:
			logger.warning(f"session={sess.session_id} 发送失败，关闭会话: {e}")
			return False
		return True

	# 断开清理
	def _on_disconnect(self, sess: ClientSession) -> None:
		try:
			sess.close()
		finally:
			with self._sessions_lock:
				self.sessions.pop(sess.session_id, None)


__all__ = [
	"ClientSession",
	"NetworkServer",
]

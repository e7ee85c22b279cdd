"""
Session Manager：管理記憶體內所有玩家的 RoundEngine

職責：
1. 建立 session（每個 session 一個 RoundEngine）
2. 查詢 / 結束 session
3. 超過上限時淘汰最舊的 session

RoundEngine 本身是單執行緒設計；FastAPI 會在 thread pool 執行同步 handler，
所以 session 字典的存取用 lock 保護。
"""
import random
import threading
from collections import OrderedDict
from typing import Optional
import logging

from config import Settings, get_settings
from core.exceptions import SessionNotFound
from core.round_engine import RoundEngine

logger = logging.getLogger(__name__)


class SessionManager:
    """Session 生命週期管理器"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._engines: "OrderedDict[str, RoundEngine]" = OrderedDict()
        self._lock = threading.Lock()

    def _new_rng(self) -> random.Random:
        # 固定種子時每個 session 都從同一序列開始
        return random.Random(self.settings.random_seed)

    def create_session(self) -> RoundEngine:
        """
        建立新 session 並開始第一回合

        注意：
            - 超過 max_sessions 時淘汰最早建立的 session
        """
        engine = RoundEngine(rng=self._new_rng(), allow_retry=self.settings.allow_retry)

        with self._lock:
            self._engines[engine.session_id] = engine
            while len(self._engines) > self.settings.max_sessions:
                evicted_id, _ = self._engines.popitem(last=False)
                logger.warning(f"Session limit reached, evicted session {evicted_id}")

        logger.info(f"Created session {engine.session_id}")
        return engine

    def get_engine(self, session_id: str) -> RoundEngine:
        """
        異常：
            SessionNotFound: session 不存在（或已被淘汰）
        """
        with self._lock:
            engine = self._engines.get(session_id)
        if engine is None:
            raise SessionNotFound(session_id)
        return engine

    def end_session(self, session_id: str) -> None:
        with self._lock:
            if self._engines.pop(session_id, None) is None:
                raise SessionNotFound(session_id)
        logger.info(f"Ended session {session_id}")

    def count(self) -> int:
        with self._lock:
            return len(self._engines)


_manager = SessionManager()


def get_session_manager() -> SessionManager:
    """
    FastAPI dependency：提供全域 SessionManager

    測試可以用 app.dependency_overrides 換成自己的實例
    """
    return _manager

"""
Round Engine：管理一個 GameSession 的回合生命週期

職責：
1. 開新回合（目標色 + 5 個干擾色，洗牌）
2. 判定玩家的猜測並更新分數
3. 重設 session
4. 通知訂閱者（前端重新渲染）

不負責：
- 畫面、動畫、「猜完後停用按鈕」的計時（呈現層自己排程）
- 多個 session 的管理（SessionManager）
"""
import random
import threading
from enum import Enum
from typing import Callable, List, Optional
import logging

from core.exceptions import InvalidColor
from core.state_machine import RoundStateMachine
from models import GameSession, Outcome, Round, RoundStatus
from services.color_service import (
    coerce_color,
    generate_decoys,
    generate_random_color,
    random_base_hue,
)

logger = logging.getLogger(__name__)


class EngineEvent(str, Enum):
    ROUND_STARTED = "round_started"
    GUESS_RESOLVED = "guess_resolved"
    SESSION_RESET = "session_reset"


Listener = Callable[[EngineEvent, "RoundEngine"], None]

class RoundEngine:
    """
    單一玩家的回合引擎

    建立時就會開始第一回合，所以 get_current_round() 永遠有值。
    start_round / submit_guess / reset_session 在 engine 自己的 lock 內執行，
    同一個 session 同時收到兩個猜測也只會計分一次。
    訂閱者在 lock 釋放後才被通知。

    參數：
        rng: 亂數來源；不給的話每個 engine 各自建立一個 random.Random
        allow_retry: 猜錯後能否在同一回合繼續猜（預設可以）
    """

    def __init__(self, rng: Optional[random.Random] = None, allow_retry: bool = True):
        self.rng = rng if rng is not None else random.Random()
        self.allow_retry = allow_retry
        self.session = GameSession()
        self._round_counter = 0
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self.start_round()

    @property
    def session_id(self) -> str:
        return self.session.id

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        訂閱狀態變化

        返回：
            取消訂閱的函式
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: EngineEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    def _new_round(self) -> Round:
        """
        產生並換上新回合（呼叫者必須持有 lock）

        流程：
        1. 隨機取基準色相
        2. 以基準色相產生目標色
        3. 產生 5 個不重複的相近干擾色
        4. 目標色 + 干擾色洗牌
        """
        # 1. 基準色相
        base_hue = random_base_hue(self.rng)

        # 2. 目標色
        target = generate_random_color(self.rng, base_hue)

        # 3. 干擾色
        decoys = generate_decoys(self.rng, base_hue, target)

        # 4. 洗牌
        candidates = [target] + decoys
        self.rng.shuffle(candidates)

        self._round_counter += 1
        self.session.round = Round(
            round_number=self._round_counter,
            base_hue=base_hue,
            target=target,
            candidates=tuple(candidates),
        )

        logger.info(
            f"Session {self.session.id} started round {self._round_counter} "
            f"(base_hue={base_hue}, target={target.to_css()})"
        )
        return self.session.round

    def start_round(self) -> Round:
        """開始新回合（取代目前的回合，分數不變）"""
        with self._lock:
            round_obj = self._new_round()
        self._notify(EngineEvent.ROUND_STARTED)
        return round_obj

    def submit_guess(self, color) -> Outcome:
        """
        判定一次猜測

        參數：
            color: Color，或 coerce_color 接受的原始格式

        返回：
            CORRECT: 猜對，分數 +1，回合結束
            INCORRECT: 猜錯，分數不變，回合仍是目前回合
            ALREADY_RESOLVED: 回合已結束，這次猜測被忽略
            INVALID_COLOR: 顏色格式錯誤或超出範圍，狀態不變

        注意：
            不會拋出 InvalidColor，一律轉成 INVALID_COLOR
        """
        try:
            guess = coerce_color(color)
        except InvalidColor as e:
            logger.debug(f"Session {self.session.id} rejected guess: {e}")
            return Outcome.INVALID_COLOR

        with self._lock:
            current = self.session.round
            if not RoundStateMachine.accepts_guess(current, self.allow_retry):
                logger.debug(
                    f"Session {self.session.id} round {current.round_number} "
                    f"already {current.status.value}, ignoring guess"
                )
                return Outcome.ALREADY_RESOLVED

            if guess == current.target:
                self.session.round = RoundStateMachine.transition(
                    current, RoundStatus.CORRECT, self.allow_retry
                )
                self.session.score += 1
                outcome = Outcome.CORRECT
            else:
                self.session.round = RoundStateMachine.transition(
                    current, RoundStatus.INCORRECT, self.allow_retry
                )
                outcome = Outcome.INCORRECT

            logger.debug(
                f"Session {self.session.id} round {current.round_number} "
                f"guess {guess.to_css()} -> {outcome.value} (score={self.session.score})"
            )

        self._notify(EngineEvent.GUESS_RESOLVED)
        return outcome

    def reset_session(self) -> Round:
        """分數歸零並開新回合（回合編號從 1 重新計算）"""
        with self._lock:
            self.session.score = 0
            self._round_counter = 0
            logger.info(f"Session {self.session.id} reset")
            round_obj = self._new_round()
        self._notify(EngineEvent.ROUND_STARTED)
        self._notify(EngineEvent.SESSION_RESET)
        return round_obj

    def get_score(self) -> int:
        return self.session.score

    def get_current_round(self) -> Round:
        return self.session.round

"""
回合狀態機：集中管理 Round 的狀態轉換

  PENDING ──猜對──> CORRECT（終止）
     │
     └──猜錯──> INCORRECT ──(allow_retry)──> CORRECT / INCORRECT

allow_retry 關閉時 INCORRECT 也是終止狀態。
"""
from dataclasses import replace

from core.exceptions import InvalidStateTransition
from models import Round, RoundStatus


class RoundStateMachine:
    """Round 狀態轉換規則"""

    TRANSITIONS = {
        RoundStatus.PENDING: {RoundStatus.CORRECT, RoundStatus.INCORRECT},
        RoundStatus.INCORRECT: set(),
        RoundStatus.CORRECT: set(),
    }

    RETRY_TRANSITIONS = {
        RoundStatus.INCORRECT: {RoundStatus.CORRECT, RoundStatus.INCORRECT},
    }

    @classmethod
    def allowed(cls, current: RoundStatus, allow_retry: bool) -> set:
        targets = set(cls.TRANSITIONS[current])
        if allow_retry:
            targets |= cls.RETRY_TRANSITIONS.get(current, set())
        return targets

    @classmethod
    def accepts_guess(cls, round_obj: Round, allow_retry: bool) -> bool:
        """回合是否還能受理猜測"""
        return bool(cls.allowed(round_obj.status, allow_retry))

    @classmethod
    def transition(cls, round_obj: Round, new_status: RoundStatus, allow_retry: bool) -> Round:
        """
        轉換狀態並回傳新的 Round（guesses + 1）

        異常：
            InvalidStateTransition: 不允許的轉換
        """
        if new_status not in cls.allowed(round_obj.status, allow_retry):
            raise InvalidStateTransition(
                f"Round {round_obj.round_number}: "
                f"{round_obj.status.value} -> {new_status.value} is not allowed"
            )
        return replace(round_obj, status=new_status, guesses=round_obj.guesses + 1)

"""
回饋服務：依猜測結果決定要顯示給玩家的訊息

純對照邏輯。計時（多久後開新回合、多久後解除按鈕鎖定）由前端排程，
這裡只告訴前端要等多久。
"""
from dataclasses import dataclass
from typing import Optional

from config import Settings
from models import Outcome


@dataclass(frozen=True)
class Feedback:
    message: str
    tone: str
    advance_after_ms: Optional[int] = None
    unlock_after_ms: Optional[int] = None


MESSAGES = {
    Outcome.CORRECT: ("Correct! Well done! 🎉", "success"),
    Outcome.INCORRECT: ("Wrong guess! Try again! 😢", "error"),
    Outcome.ALREADY_RESOLVED: ("Round already resolved", "neutral"),
    Outcome.INVALID_COLOR: ("Invalid color", "error"),
}


def build_feedback(outcome: Outcome, settings: Settings) -> Feedback:
    """
    根據結果產生回饋

    規則：
    - CORRECT：前端在 feedback_delay_ms 後呼叫開新回合
    - INCORRECT：前端在 feedback_delay_ms 後重新開放作答（不換回合）
    - 其他：不需要計時

    範例：
        build_feedback(Outcome.CORRECT, settings).advance_after_ms -> 1500
    """
    message, tone = MESSAGES[outcome]
    delay = settings.feedback_delay_ms

    if outcome == Outcome.CORRECT:
        return Feedback(message, tone, advance_after_ms=delay)
    elif outcome == Outcome.INCORRECT:
        return Feedback(message, tone, unlock_after_ms=delay)
    else:
        return Feedback(message, tone)


def is_terminal(outcome: Outcome) -> bool:
    """這個結果之後，前端是否應該開新回合"""
    return outcome == Outcome.CORRECT

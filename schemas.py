"""
Pydantic schemas：API 的 request / response 格式
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from models import Color, GameSession, Outcome, Round, RoundStatus
from services.feedback_service import Feedback


class ColorResponse(BaseModel):
    hue: float
    saturation: float
    lightness: float
    css: str

    @classmethod
    def from_color(cls, color: Color) -> "ColorResponse":
        return cls(
            hue=color.hue,
            saturation=color.saturation,
            lightness=color.lightness,
            css=color.to_css()
        )


class RoundResponse(BaseModel):
    round_number: int
    target: ColorResponse
    options: List[ColorResponse]
    status: RoundStatus
    guesses: int

    @classmethod
    def from_round(cls, round_obj: Round) -> "RoundResponse":
        return cls(
            round_number=round_obj.round_number,
            target=ColorResponse.from_color(round_obj.target),
            options=[ColorResponse.from_color(c) for c in round_obj.candidates],
            status=round_obj.status,
            guesses=round_obj.guesses
        )


class SessionResponse(BaseModel):
    session_id: str
    score: int
    created_at: datetime
    round: RoundResponse

    @classmethod
    def from_session(cls, session: GameSession) -> "SessionResponse":
        return cls(
            session_id=session.id,
            score=session.score,
            created_at=session.created_at,
            round=RoundResponse.from_round(session.round)
        )


class FeedbackResponse(BaseModel):
    message: str
    tone: str
    advance_after_ms: Optional[int] = None
    unlock_after_ms: Optional[int] = None

    @classmethod
    def from_feedback(cls, feedback: Feedback) -> "FeedbackResponse":
        return cls(
            message=feedback.message,
            tone=feedback.tone,
            advance_after_ms=feedback.advance_after_ms,
            unlock_after_ms=feedback.unlock_after_ms
        )


class GuessSubmit(BaseModel):
    # 接受 {"hue":..,"saturation":..,"lightness":..}、[h, s, l] 或 "hsl(...)"
    # 格式檢查交給 RoundEngine，錯誤會變成 invalid_color 結果而不是 422
    color: Any = None


class GuessResponse(BaseModel):
    outcome: Outcome
    score: int
    round_over: bool
    round: RoundResponse
    feedback: FeedbackResponse

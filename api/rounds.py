"""
Round API Endpoints

重點：
1. 所有遊戲邏輯集中在 RoundEngine
2. 猜錯、回合已結束、顏色格式錯誤都是正常結果（HTTP 200），不是錯誤
3. 猜對後開新回合的時機由前端決定（依 feedback.advance_after_ms）
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from config import Settings, get_settings
from core.exceptions import SessionNotFound
from core.session_manager import SessionManager, get_session_manager
from schemas import FeedbackResponse, GuessResponse, GuessSubmit, RoundResponse
from services.feedback_service import build_feedback, is_terminal

router = APIRouter(prefix="/api/sessions", tags=["rounds"])
logger = logging.getLogger(__name__)


@router.get("/{session_id}/rounds/current", response_model=RoundResponse)
def get_current_round(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """
    取得目前回合

    返回：
        - round_number: 回合數
        - target: 目標色
        - options: 6 個候選色（已洗牌）
        - status: PENDING / CORRECT / INCORRECT
    """
    try:
        engine = manager.get_engine(session_id)
        return RoundResponse.from_round(engine.get_current_round())

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to get current round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{session_id}/rounds", response_model=RoundResponse, status_code=201)
def start_round(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """
    開始下一回合（取代目前回合，分數不變）

    用途：
    - 猜對後的自動換題
    - 玩家放棄目前回合
    """
    try:
        engine = manager.get_engine(session_id)
        return RoundResponse.from_round(engine.start_round())

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to start round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{session_id}/guess", response_model=GuessResponse)
def submit_guess(
    session_id: str,
    guess_data: GuessSubmit,
    manager: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings)
):
    """
    提交猜測

    流程：
    1. 找到 session
    2. 交給 RoundEngine 判定
    3. 附上回饋訊息與前端計時提示

    返回：
        - outcome: correct / incorrect / already_resolved / invalid_color
        - score: 最新分數
        - round_over: 前端是否應該開新回合
        - round: 目前回合
        - feedback: 訊息、語氣、計時
    """
    try:
        engine = manager.get_engine(session_id)

        outcome = engine.submit_guess(guess_data.color)
        logger.info(
            f"Guess in session {session_id} "
            f"round {engine.get_current_round().round_number}: {outcome.value}"
        )

        return GuessResponse(
            outcome=outcome,
            score=engine.get_score(),
            round_over=is_terminal(outcome),
            round=RoundResponse.from_round(engine.get_current_round()),
            feedback=FeedbackResponse.from_feedback(build_feedback(outcome, settings))
        )

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to submit guess: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")

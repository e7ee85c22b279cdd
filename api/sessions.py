"""
Session API Endpoints

職責：
1. 建立 / 查詢 / 結束 session
2. 重設 session（New Game：分數歸零 + 新回合）
"""
from fastapi import APIRouter, Depends, HTTPException, Response
import logging

from core.exceptions import SessionNotFound
from core.session_manager import SessionManager, get_session_manager
from schemas import SessionResponse

router = APIRouter(prefix="/api/sessions", tags=["sessions"])
logger = logging.getLogger(__name__)


@router.post("", response_model=SessionResponse, status_code=201)
def create_session(manager: SessionManager = Depends(get_session_manager)):
    """
    建立新 session（分數 0，第一回合已開始）
    """
    try:
        engine = manager.create_session()
        return SessionResponse.from_session(engine.session)

    except Exception as e:
        logger.error(f"Failed to create session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """
    取得 session 狀態

    返回：
        - score: 目前分數
        - round: 目前回合（目標色、選項、狀態）
    """
    try:
        engine = manager.get_engine(session_id)
        return SessionResponse.from_session(engine.session)

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to get session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{session_id}/reset", response_model=SessionResponse)
def reset_session(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """
    重新開始遊戲（New Game 按鈕）

    效果：
    - 分數歸零
    - 回合編號從 1 開始
    - 立即開新回合
    """
    try:
        engine = manager.get_engine(session_id)
        engine.reset_session()
        return SessionResponse.from_session(engine.session)

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to reset session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.delete("/{session_id}", status_code=204)
def end_session(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    try:
        manager.end_session(session_id)
        return Response(status_code=204)

    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except Exception as e:
        logger.error(f"Failed to end session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")

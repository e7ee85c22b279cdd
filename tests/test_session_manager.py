import pytest

from config import Settings
from core.exceptions import SessionNotFound
from core.session_manager import SessionManager, get_session_manager
from models import Outcome
from services.feedback_service import build_feedback, is_terminal


def test_create_and_get(manager):
    engine = manager.create_session()
    assert manager.get_engine(engine.session_id) is engine
    assert manager.count() == 1


def test_sessions_are_independent(manager):
    a = manager.create_session()
    b = manager.create_session()
    a.submit_guess(a.get_current_round().target)

    assert a.get_score() == 1
    assert b.get_score() == 0


def test_seeded_sessions_repeat(manager):
    a = manager.create_session()
    b = manager.create_session()
    assert a.get_current_round().candidates == b.get_current_round().candidates


def test_end_session(manager):
    engine = manager.create_session()
    manager.end_session(engine.session_id)

    with pytest.raises(SessionNotFound):
        manager.get_engine(engine.session_id)
    with pytest.raises(SessionNotFound):
        manager.end_session(engine.session_id)


def test_oldest_session_evicted(manager):
    first = manager.create_session()
    for _ in range(3):
        manager.create_session()

    assert manager.count() == 3
    with pytest.raises(SessionNotFound):
        manager.get_engine(first.session_id)


def test_allow_retry_setting_reaches_engine():
    manager = SessionManager(Settings(allow_retry=False))
    assert manager.create_session().allow_retry is False


def test_feedback_for_each_outcome(test_settings):
    correct = build_feedback(Outcome.CORRECT, test_settings)
    assert correct.tone == "success"
    assert correct.advance_after_ms == 1500
    assert correct.unlock_after_ms is None

    wrong = build_feedback(Outcome.INCORRECT, test_settings)
    assert wrong.message == "Wrong guess! Try again! 😢"
    assert wrong.unlock_after_ms == 1500
    assert wrong.advance_after_ms is None

    for outcome in (Outcome.ALREADY_RESOLVED, Outcome.INVALID_COLOR):
        feedback = build_feedback(outcome, test_settings)
        assert feedback.advance_after_ms is None
        assert feedback.unlock_after_ms is None

    assert is_terminal(Outcome.CORRECT)
    assert not is_terminal(Outcome.INCORRECT)


def test_default_manager_is_shared():
    assert get_session_manager() is get_session_manager()

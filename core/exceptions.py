"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理
"""


class ColorGameException(Exception):
    """所有遊戲異常的基類"""
    pass


# ============ Color 相關異常 ============

class InvalidColor(ColorGameException):
    """顏色缺少分量或分量超出範圍"""
    def __init__(self, component, value, reason="out of range"):
        self.component = component
        self.value = value
        super().__init__(f"Invalid {component}: {value!r} ({reason})")


class DecoyGenerationExhausted(ColorGameException):
    """嘗試次數用完仍湊不到足夠的干擾色（亂數來源異常）"""
    pass


# ============ Round 相關異常 ============

class InvalidStateTransition(ColorGameException):
    """非法的狀態轉換"""
    pass


# ============ Session 相關異常 ============

class SessionNotFound(ColorGameException):
    """Session 不存在"""
    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")

"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- 狀態機：集中管理回合的狀態轉換
- RoundEngine：管理單一 session 的回合生命週期
- SessionManager：管理記憶體內的所有 session
- Exceptions：業務邏輯異常
"""

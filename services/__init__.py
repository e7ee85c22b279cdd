"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- ColorService：目標色、干擾色產生與顏色解析
- FeedbackService：猜測結果的回饋訊息
"""

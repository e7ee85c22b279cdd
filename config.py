from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """
    遊戲設定（可由環境變數或 .env 覆寫，前綴 COLOR_GAME_）

    欄位：
        random_seed: 固定亂數種子（測試或 demo 用），None 表示每局隨機
        allow_retry: 猜錯後是否可以在同一回合繼續猜
        feedback_delay_ms: 回饋訊息顯示時間，猜對後前端在此時間後開新回合
        max_sessions: 記憶體內最多保留的 session 數量
        log_level: root logger 等級
        cors_allow_origins: 允許的前端來源
    """
    random_seed: Optional[int] = None
    allow_retry: bool = True
    feedback_delay_ms: int = 1500
    max_sessions: int = 1000
    log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_prefix = "COLOR_GAME_"


@lru_cache()
def get_settings():
    return Settings()

"""
資料模型：Color / Round / GameSession

全部存在記憶體中，不做持久化。
Round 是不可變的快照，狀態改變時由 RoundEngine 換成新的物件。
"""
import math
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from numbers import Real
from typing import Optional, Tuple

from core.exceptions import InvalidColor


# 分量範圍：[low, high)
HUE_RANGE = (0, 360)
SATURATION_RANGE = (70, 100)
LIGHTNESS_RANGE = (45, 65)

# 每回合 1 個目標色 + 5 個干擾色
CANDIDATE_COUNT = 6
HUE_JITTER = 15

_CSS_PATTERN = re.compile(
    r"^\s*hsl\(\s*([-+]?\d+(?:\.\d+)?)\s*,\s*([-+]?\d+(?:\.\d+)?)%\s*,"
    r"\s*([-+]?\d+(?:\.\d+)?)%\s*\)\s*$"
)


class RoundStatus(str, Enum):
    PENDING = "pending"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    ALREADY_RESOLVED = "already_resolved"
    INVALID_COLOR = "invalid_color"


def _check_component(name: str, value, bounds: Tuple[int, int]) -> None:
    if value is None:
        raise InvalidColor(name, value, "missing")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidColor(name, value, "not a number")
    if math.isnan(value):
        raise InvalidColor(name, value, "not a number")
    low, high = bounds
    if not low <= value < high:
        raise InvalidColor(name, value, f"expected [{low}, {high})")


@dataclass(frozen=True)
class Color:
    """
    HSL 顏色

    兩個顏色只有在三個分量完全相同時才相等（dataclass 預設的 __eq__）。
    建構時檢查範圍，不合法直接拋出 InvalidColor。
    """
    hue: float
    saturation: float
    lightness: float

    def __post_init__(self):
        _check_component("hue", self.hue, HUE_RANGE)
        _check_component("saturation", self.saturation, SATURATION_RANGE)
        _check_component("lightness", self.lightness, LIGHTNESS_RANGE)

    def to_css(self) -> str:
        """範例：hsl(200, 85%, 50%)"""
        return f"hsl({_fmt(self.hue)}, {_fmt(self.saturation)}%, {_fmt(self.lightness)}%)"

    @classmethod
    def from_css(cls, text: str) -> "Color":
        match = _CSS_PATTERN.match(text)
        if not match:
            raise InvalidColor("css", text, "expected hsl(h, s%, l%)")
        try:
            hue, saturation, lightness = (_parse_number(g) for g in match.groups())
        except ValueError as e:
            raise InvalidColor("css", text, str(e))
        return cls(hue, saturation, lightness)


def _fmt(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_number(text: str):
    return float(text) if "." in text else int(text)


@dataclass(frozen=True)
class Round:
    """
    一個回合的快照

    欄位：
        round_number: 這個 session 的第幾回合（從 1 開始）
        base_hue: 產生目標色與干擾色時使用的基準色相
        target: 目標色
        candidates: 6 個候選色（已洗牌，目標色只出現一次）
        status: PENDING / CORRECT / INCORRECT
        guesses: 本回合已受理的猜測次數
    """
    round_number: int
    base_hue: int
    target: Color
    candidates: Tuple[Color, ...]
    status: RoundStatus = RoundStatus.PENDING
    guesses: int = 0

    @property
    def decoys(self) -> Tuple[Color, ...]:
        return tuple(c for c in self.candidates if c != self.target)


@dataclass
class GameSession:
    """單一玩家的遊戲狀態：目前回合 + 分數"""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    score: int = 0
    round: Optional[Round] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

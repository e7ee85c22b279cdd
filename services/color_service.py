"""
顏色服務：產生目標色、相近的干擾色，以及解析玩家送來的顏色

純計算邏輯，不涉及狀態轉換。
所有亂數都來自呼叫者傳入的 random.Random，方便測試時固定結果。
"""
import random
from collections.abc import Mapping, Sequence
from typing import List, Optional

from core.exceptions import DecoyGenerationExhausted, InvalidColor
from models import (
    CANDIDATE_COUNT,
    HUE_JITTER,
    HUE_RANGE,
    LIGHTNESS_RANGE,
    SATURATION_RANGE,
    Color,
)

import logging

logger = logging.getLogger(__name__)

# 正常情況下碰撞機率極低，超過這個次數代表亂數來源有問題
MAX_DECOY_ATTEMPTS = 1000


def random_base_hue(rng: random.Random) -> int:
    """在 [0, 360) 之間均勻取一個整數色相"""
    return rng.randrange(HUE_RANGE[1])


def generate_random_color(rng: random.Random, base_hue: Optional[int] = None) -> Color:
    """
    產生一個隨機 HSL 顏色

    參數：
        rng: 亂數來源
        base_hue: 指定色相；None 時隨機取

    返回：
        Color，飽和度 [70, 100)、亮度 [45, 65)
    """
    hue = random_base_hue(rng) if base_hue is None else base_hue
    saturation = rng.randrange(*SATURATION_RANGE)
    lightness = rng.randrange(*LIGHTNESS_RANGE)
    return Color(hue, saturation, lightness)


def generate_similar_color(rng: random.Random, base_hue: int) -> Color:
    """以 base_hue 為中心，色相偏移 [-15, 15] 度（環狀取模）"""
    offset = rng.randint(-HUE_JITTER, HUE_JITTER)
    return generate_random_color(rng, (base_hue + offset) % HUE_RANGE[1])


def generate_decoys(rng: random.Random, base_hue: int, target: Color,
                    count: int = CANDIDATE_COUNT - 1) -> List[Color]:
    """
    產生 count 個彼此不同、也不等於目標色的干擾色

    碰撞時直接重抽。

    異常：
        DecoyGenerationExhausted: 嘗試 MAX_DECOY_ATTEMPTS 次仍湊不齊
    """
    decoys: List[Color] = []
    seen = {target}

    for _ in range(MAX_DECOY_ATTEMPTS):
        if len(decoys) == count:
            break
        color = generate_similar_color(rng, base_hue)
        if color in seen:
            logger.warning(f"Decoy collision detected, regenerating: {color.to_css()}")
            continue
        seen.add(color)
        decoys.append(color)

    if len(decoys) < count:
        raise DecoyGenerationExhausted(
            f"Only {len(decoys)}/{count} distinct decoys after {MAX_DECOY_ATTEMPTS} attempts"
        )
    return decoys


def hue_distance(a: float, b: float) -> float:
    """
    兩個色相在色環上的距離（0-180）

    範例：
        hue_distance(355, 5) -> 10
    """
    diff = abs(a - b) % HUE_RANGE[1]
    return min(diff, HUE_RANGE[1] - diff)


def coerce_color(value) -> Color:
    """
    把玩家送來的原始資料轉成 Color

    接受：
        - Color
        - dict：hue/saturation/lightness 或 h/s/l
        - 長度 3 的 list/tuple
        - "hsl(200, 85%, 50%)" 字串

    異常：
        InvalidColor: 格式不對或分量超出範圍
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_css(value)
    if isinstance(value, Mapping):
        return Color(
            _pick(value, "hue", "h"),
            _pick(value, "saturation", "s"),
            _pick(value, "lightness", "l"),
        )
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)) \
            and len(value) == 3:
        return Color(*value)
    raise InvalidColor("color", value, "unsupported format")


def _pick(mapping: Mapping, long_key: str, short_key: str):
    if long_key in mapping:
        return mapping[long_key]
    return mapping.get(short_key)

"""
どこで: `scribble.common` の数値ヘルパ。
何を: クランプ・角度の折り返しなど、パラメータ処理で繰り返し使う純関数。
なぜ: 生成器/アニメータ/レンダラで同じ境界処理を共有するため。
"""

from __future__ import annotations

import math


def clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else x


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x <= lo else hi if x >= hi else x


def wrap_angle(rad: float) -> float:
    """角度を `[0, 2π)` に折り返す。"""
    wrapped = math.fmod(float(rad), math.tau)
    if wrapped < 0.0:
        wrapped += math.tau
    # fmod の丸めで tau ちょうどになる場合がある
    return 0.0 if wrapped >= math.tau else wrapped


__all__ = ["clamp01", "clamp", "wrap_angle"]

"""
random_in_sphere 戦略（球内一様ランダム点）

- 半径 `R * cbrt(U)`、極角 `acos(2U - 1)`、方位角 `2πU` を独立な一様乱数から作り、
  体積に対して一様な点を得る（半径を立方根で歪めないと中心付近に偏る）。
- 乱数は必ずこの順（半径 → 極角 → 方位角）に 1 回ずつ消費する。

パスが 2 点未満のときの種まきと、RANDOM モードの全生成に使う。
"""

from __future__ import annotations

import math

import numpy as np

from scribble.common.types import RandomSource
from scribble.engine.core.geometry import to_cartesian

from .bounds import BoundingSphere


def random_in_sphere(bounds: BoundingSphere, rng: RandomSource) -> np.ndarray:
    """境界球内の一様ランダム点を返す。"""
    r = bounds.radius * float(np.cbrt(rng.random()))
    theta = math.acos(2.0 * rng.random() - 1.0)
    phi = math.tau * rng.random()
    x, y, z = to_cartesian(r, theta, phi)
    return np.array([x + bounds.cx, y + bounds.cy, z], dtype=np.float64)


__all__ = ["random_in_sphere"]

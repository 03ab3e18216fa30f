"""
どこで: `scribble.generators.bounds`
何を: 生成を拘束する境界球（中心はビューポート平面 z=0 上）。
なぜ: reset ごとにビューポート寸法から 1 度だけ再計算し、次の reset まで不変に保つため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from scribble.common.types import PointLike


@dataclass(frozen=True)
class BoundingSphere:
    cx: float
    cy: float
    radius: float

    @classmethod
    def from_viewport(cls, width: float, height: float, ratio: float = 0.67) -> "BoundingSphere":
        """ビューポート中心を中心、`min(width, height) * ratio` を半径とする球。"""
        w = float(width)
        h = float(height)
        return cls(cx=w * 0.5, cy=h * 0.5, radius=min(w, h) * float(ratio))

    @property
    def center(self) -> np.ndarray:
        return np.array([self.cx, self.cy, 0.0], dtype=np.float64)

    def distance_from_center(self, p: PointLike) -> float:
        dx = float(p[0]) - self.cx
        dy = float(p[1]) - self.cy
        dz = float(p[2])
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def contains(self, p: PointLike, eps: float = 1e-6) -> bool:
        return self.distance_from_center(p) <= self.radius + eps


__all__ = ["BoundingSphere"]

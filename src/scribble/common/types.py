"""
どこで: `scribble.common` の型定義。
何を: Vec2/Vec3/RGBA などの軽量エイリアスと、一様乱数源の Protocol。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from __future__ import annotations

from typing import Protocol, Sequence, Union

import numpy as np

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
RGBA = tuple[float, float, float, float]
PointLike = Union[np.ndarray, Sequence[float]]


class RandomSource(Protocol):
    """`[0, 1)` の一様乱数を 1 つずつ返す乱数源。

    `numpy.random.Generator` はそのまま適合する。テストでは決められた列を返す
    スタブを注入して生成結果を厳密に検証できる。
    """

    def random(self) -> float: ...


__all__ = ["Vec2", "Vec3", "RGBA", "PointLike", "RandomSource"]

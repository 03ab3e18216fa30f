"""
幾何プリミティブ（3D 点・距離・線形補間・直交⇄球座標変換）

本モジュールは、PathStore と生成器が共有する最小の幾何演算を提供する。

データモデル:
- 点は `float64 ndarray (3,)`（XYZ、ビューポートのピクセル単位）。
- 入力は長さ 3 の任意の数値列を受け付け、`as_point()` で正規化する。

球座標の約束:
- `r` は原点からの距離、`theta` は +Z 軸からの極角 `[0, π]`、
  `phi` は XY 平面内の +X からの方位角 `(-π, π]`。
- 零ベクトル（`r < 1e-9`）は方向が定まらないため `theta = phi = 0` とする。
  `acos`/`atan2` に零ベクトルを渡して NaN を生むのを避ける。

直感図:

    #        +Z
    #         |  theta
    #         | /
    #         |/______ +Y
    #        /  phi
    #      +X
"""

from __future__ import annotations

import math

import numpy as np

from scribble.common.types import PointLike

DEGENERATE_EPS = 1e-9


def as_point(p: PointLike) -> np.ndarray:
    """点を `float64 (3,)` の新しい配列へ正規化する。

    Raises
    ------
    ValueError
        要素数が 3 でない場合。
    """
    arr = np.array(p, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"point must have exactly 3 components, got shape {np.shape(p)}")
    return arr


def distance(a: PointLike, b: PointLike) -> float:
    """2 点間のユークリッド距離（常に非負）。

    `hypot` を使うので、成分が非常に小さい（二乗で 0 に潰れる）場合でも長さを失わない。
    """
    dx = float(b[0]) - float(a[0])
    dy = float(b[1]) - float(a[1])
    dz = float(b[2]) - float(a[2])
    return math.hypot(dx, dy, dz)


def lerp(a: PointLike, b: PointLike, t: float) -> np.ndarray:
    """`a + t*(b - a)` を返す。

    `t` はクランプしない。`[0, 1]` 外は外挿になるが失敗はしない。
    """
    pa = np.asarray(a, dtype=np.float64)
    pb = np.asarray(b, dtype=np.float64)
    return pa + float(t) * (pb - pa)


def to_spherical(dx: float, dy: float, dz: float) -> tuple[float, float, float]:
    """直交座標ベクトルを `(r, theta, phi)` に変換する。"""
    r = math.sqrt(dx * dx + dy * dy + dz * dz)
    if r < DEGENERATE_EPS:
        return r, 0.0, 0.0
    # 丸めで |dz/r| が 1 をわずかに超えても acos が失敗しないようにする
    cos_theta = max(-1.0, min(1.0, dz / r))
    return r, math.acos(cos_theta), math.atan2(dy, dx)


def to_cartesian(r: float, theta: float, phi: float) -> tuple[float, float, float]:
    """球座標 `(r, theta, phi)` を直交座標 `(x, y, z)` に変換する。"""
    sin_theta = math.sin(theta)
    return (
        r * sin_theta * math.cos(phi),
        r * sin_theta * math.sin(phi),
        r * math.cos(theta),
    )


__all__ = [
    "DEGENERATE_EPS",
    "as_point",
    "distance",
    "lerp",
    "to_spherical",
    "to_cartesian",
]

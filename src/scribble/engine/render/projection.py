"""
どこで: `scribble.engine.render.projection`（純関数）。
何を: 3D 点列をビューポート中心まわりの Y 軸回転で 2D に落とす投影と、ピクセル化バッファ寸法の解決。
なぜ: GL/matplotlib どちらの描画経路でも同じ投影を使い、GL なしでテストできるようにするため。

投影（カメラモデルなしの単純な軸回転）:
    x' = (x - w/2) * cos(r) - z * sin(r) + w/2
    y' = y
"""

from __future__ import annotations

import math

import numpy as np

DEFAULT_FALLBACK_SCALE = 0.1


def project_points(points: np.ndarray, rotation: float, width: float, height: float) -> np.ndarray:
    """`(k, 3)` の点列を `(k, 2)` のビューポート座標へ投影する。

    `height` は現状の式には現れないが、呼び出し側の対称性のために受け取る。
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    half_w = float(width) * 0.5
    c = math.cos(rotation)
    s = math.sin(rotation)
    out = np.empty((pts.shape[0], 2), dtype=np.float64)
    out[:, 0] = (pts[:, 0] - half_w) * c - pts[:, 2] * s + half_w
    out[:, 1] = pts[:, 1]
    return out


def resolve_scale_factor(scale_factor: float) -> float:
    """ピクセル化倍率を解決する（0 以下は既定の 0.1、1 超は 1 に丸める）。"""
    s = float(scale_factor)
    if not s > 0.0:
        return DEFAULT_FALLBACK_SCALE
    return min(s, 1.0)


def pixel_buffer_size(width: float, height: float, scale_factor: float) -> tuple[int, int]:
    """低解像度バッファの寸法 `(max(1, floor(w*s)), max(1, floor(h*s)))` を返す。"""
    s = resolve_scale_factor(scale_factor)
    return max(1, int(math.floor(float(width) * s))), max(1, int(math.floor(float(height) * s)))


__all__ = ["project_points", "resolve_scale_factor", "pixel_buffer_size"]

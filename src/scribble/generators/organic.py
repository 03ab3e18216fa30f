"""
organic_steered 戦略（有機的ステアリング）

直前の進行方向（末尾 2 点の差）を球座標で表し、極角/方位角をランダムに曲げて
ランダム長のセグメントを伸ばす。境界球の外へ出ないよう 2 段階で補正する。

処理:
1. 進行方向 `last - second_last` を `(r, theta, phi)` へ変換（零ベクトルは theta=phi=0）。
2. `dTheta, dPhi ∈ [-maxBend, +maxBend]` を加え、theta は `[0, π]` にクランプ（phi は自然に周回）。
3. セグメント長 `segLen ∈ [min, max]` を一様に選び、直交座標の変位に戻す。
4. ソフト補正: `ratio = |last - center| / R` が閾値（既定 0.6）を超えたら、変位を中心方向へ
   `pull = clamp((ratio - th) / (1 - th), 0, 1)` でブレンドし、長さを `segLen` に戻す
   （ブレンド後の長さが 1e-9 未満ならスケールしない）。
5. ハード補正: 候補点がなお球外なら、`scale = (R - d) / (cd - d)` で変位を縮めて球面上に置く。
   `scale` が `[0, 1]` 外（数値的に退化）なら `scale = R / cd` にフォールバックする。

乱数消費順: dTheta → dPhi → segLen（各 1 回）。2 点未満のときは `random_in_sphere` に委譲する。

注意:
- 5 のフォールバックは、`last` 自体が既に球外にある場合、候補点を球内に戻しきれないことがある。
  境界への「できる限りの引き戻し」として現状の挙動を保っている。
"""

from __future__ import annotations

import math

import numpy as np

from scribble.common.param_utils import clamp, clamp01
from scribble.common.types import RandomSource
from scribble.engine.core.geometry import DEGENERATE_EPS, to_cartesian, to_spherical
from scribble.engine.core.params import AnimationParams
from scribble.engine.core.path_store import PathStore

from .bounds import BoundingSphere
from .random_sphere import random_in_sphere


def _bend(rng: RandomSource, max_bend: float) -> float:
    return (rng.random() - 0.5) * 2.0 * max_bend


def organic_steered(
    store: PathStore,
    bounds: BoundingSphere,
    params: AnimationParams,
    rng: RandomSource,
) -> np.ndarray:
    """直前の進行方向を曲げて伸ばした新しい終端点を返す（store は変更しない）。"""
    if len(store) < 2:
        return random_in_sphere(bounds, rng)

    last = store.point(-1)
    prev = store.point(-2)
    heading = last - prev
    _, theta, phi = to_spherical(float(heading[0]), float(heading[1]), float(heading[2]))

    max_bend = params.max_bend_rad
    theta = clamp(theta + _bend(rng, max_bend), 0.0, math.pi)
    phi = phi + _bend(rng, max_bend)

    lo = float(params.min_segment_length)
    hi = float(params.max_segment_length)
    seg_len = lo + rng.random() * (hi - lo)
    seg = np.array(to_cartesian(seg_len, theta, phi), dtype=np.float64)

    dist = bounds.distance_from_center(last)
    radius = bounds.radius
    ratio = dist / radius if radius > 0.0 else math.inf
    threshold = float(params.boundary_threshold)
    if ratio > threshold:
        pull = clamp01((ratio - threshold) / (1.0 - threshold))
        inward = bounds.center - last
        mixed = (1.0 - pull) * seg + pull * inward
        mixed_len = float(np.linalg.norm(mixed))
        if mixed_len > DEGENERATE_EPS:
            mixed *= seg_len / mixed_len
        seg = mixed

    candidate = last + seg
    candidate_dist = bounds.distance_from_center(candidate)
    if candidate_dist > radius:
        denom = candidate_dist - dist
        scale = (radius - dist) / denom if denom != 0.0 else -1.0
        if scale < 0.0 or scale > 1.0:
            scale = radius / candidate_dist
        candidate = last + scale * seg
    return candidate


__all__ = ["organic_steered"]

"""
どこで: `scribble.generators.strategy`
何を: 生成戦略の閉じた列挙 `Strategy` と、戦略ごとの生成関数へのディスパッチ。
なぜ: 戦略をサブクラス階層ではなく列挙値 + 純関数として扱い、モード（`GenerationMode`）から
      戦略への対応を 1 か所に集約するため。
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

import numpy as np

from scribble.common.types import RandomSource
from scribble.engine.core.params import AnimationParams, GenerationMode
from scribble.engine.core.path_store import PathStore

from .bounds import BoundingSphere
from .organic import organic_steered
from .random_sphere import random_in_sphere


class Strategy(Enum):
    RANDOM_IN_SPHERE = "random_in_sphere"
    ORGANIC_STEERED = "organic_steered"


_GENERATORS: dict[
    Strategy, Callable[[PathStore, BoundingSphere, AnimationParams, RandomSource], np.ndarray]
] = {
    Strategy.RANDOM_IN_SPHERE: lambda store, bounds, params, rng: random_in_sphere(bounds, rng),
    Strategy.ORGANIC_STEERED: organic_steered,
}


def generate(
    strategy: Strategy,
    store: PathStore,
    bounds: BoundingSphere,
    params: AnimationParams,
    rng: RandomSource,
) -> np.ndarray:
    """`strategy` で新しい終端点を 1 つ生成して返す（追加は呼び出し側が行う）。"""
    try:
        fn = _GENERATORS[strategy]
    except KeyError as e:
        raise ValueError(f"unknown strategy: {strategy!r}") from e
    return fn(store, bounds, params, rng)


def strategy_for_mode(mode: GenerationMode, *, using_organic: bool = False) -> Strategy:
    """モードと（混合モード時の）トグル状態から使う戦略を決める。"""
    if mode is GenerationMode.RANDOM:
        return Strategy.RANDOM_IN_SPHERE
    if mode is GenerationMode.ORGANIC:
        return Strategy.ORGANIC_STEERED
    return Strategy.ORGANIC_STEERED if using_organic else Strategy.RANDOM_IN_SPHERE


__all__ = ["Strategy", "generate", "strategy_for_mode"]

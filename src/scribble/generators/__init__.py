"""
どこで: `scribble.generators` サブパッケージ。
何を: 境界球 `BoundingSphere` と、新しい終端点を 1 つ生成する 2 つの戦略
      （球内一様ランダム / 進行方向を曲げる有機的ステアリング）、および混合モードのトグルを提供。
なぜ: 生成戦略を小さな閉じた列挙（`Strategy`）として表し、アニメータからは
      `generate()` 1 つで呼び分けられるようにするため。
"""

from __future__ import annotations

from .bounds import BoundingSphere
from .mixed import MixedToggle
from .organic import organic_steered
from .random_sphere import random_in_sphere
from .strategy import Strategy, generate, strategy_for_mode

__all__ = [
    "BoundingSphere",
    "MixedToggle",
    "Strategy",
    "generate",
    "organic_steered",
    "random_in_sphere",
    "strategy_for_mode",
]

"""
どこで: `scribble.generators.mixed`
何を: 混合モードの「現在 organic か」フラグと、フレームごとの確率トグル。
なぜ: 一定周期のタイマではなく無記憶なコイン投げで切り替え、平均滞在 1/p フレーム
      （p=0.01 なら約 100 フレーム）の不規則なリズムを作るため。
"""

from __future__ import annotations

from scribble.common.types import RandomSource

from .strategy import Strategy


class MixedToggle:
    def __init__(self, toggle_probability: float = 0.01, *, using_organic: bool = False) -> None:
        self.toggle_probability = float(toggle_probability)
        self.using_organic = bool(using_organic)
        self.switches = 0

    @property
    def active_strategy(self) -> Strategy:
        return Strategy.ORGANIC_STEERED if self.using_organic else Strategy.RANDOM_IN_SPHERE

    def update(self, rng: RandomSource) -> bool:
        """一様乱数を 1 つ引き、`toggle_probability` 未満ならフラグを反転する。

        Returns
        -------
        bool
            このフレームで反転したかどうか。
        """
        if rng.random() < self.toggle_probability:
            self.using_organic = not self.using_organic
            self.switches += 1
            return True
        return False

    def __repr__(self) -> str:
        return (
            f"MixedToggle(p={self.toggle_probability}, using_organic={self.using_organic}, "
            f"switches={self.switches})"
        )


__all__ = ["MixedToggle"]

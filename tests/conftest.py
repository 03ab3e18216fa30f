"""共通フィクスチャ。

- 乱数シード固定
- 決められた列を返す乱数源スタブ（生成器の厳密検証用）
- 小さな PathStore 試料
"""

from __future__ import annotations

from typing import Callable, Iterable

import numpy as np
import pytest

from scribble.engine.core.path_store import PathStore


class ScriptedRng:
    """`random()` が与えた値を順に（末尾まで来たら先頭から）返す乱数源。"""

    def __init__(self, values: Iterable[float]) -> None:
        self.values = [float(v) for v in values]
        if not self.values:
            raise ValueError("ScriptedRng needs at least one value")
        self.calls = 0

    def random(self) -> float:
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        return v


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy のグローバル乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture()
def scripted_rng() -> Callable[[Iterable[float]], ScriptedRng]:
    return ScriptedRng


@pytest.fixture()
def store_two() -> PathStore:
    return PathStore.from_points([(0.0, 0.0, 0.0), (3.0, 4.0, 0.0)])


@pytest.fixture()
def store_line3() -> PathStore:
    return PathStore.from_points([(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (20.0, 0.0, 0.0)])

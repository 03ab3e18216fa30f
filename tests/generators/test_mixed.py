from __future__ import annotations

import pytest

from scribble.engine.core.params import AnimationParams, GenerationMode
from scribble.engine.core.path_store import PathStore
from scribble.generators import BoundingSphere, MixedToggle, Strategy, generate, strategy_for_mode


def test_toggle_probability_zero_never_flips(rng) -> None:
    t = MixedToggle(0.0)
    for _ in range(10_000):
        assert t.update(rng) is False
    assert t.using_organic is False
    assert t.switches == 0


def test_toggle_probability_one_flips_every_step(rng) -> None:
    t = MixedToggle(1.0)
    for i in range(1, 1001):
        assert t.update(rng) is True
        assert t.using_organic is (i % 2 == 1)
    assert t.switches == 1000


def test_toggle_threshold_is_strict(scripted_rng) -> None:
    t = MixedToggle(0.01)
    assert t.update(scripted_rng([0.0099])) is True
    assert t.update(scripted_rng([0.01])) is False
    assert t.active_strategy is Strategy.ORGANIC_STEERED


def test_toggle_rate_matches_probability(rng) -> None:
    t = MixedToggle(0.1)
    n = 20_000
    for _ in range(n):
        t.update(rng)
    assert t.switches / n == pytest.approx(0.1, abs=0.015)


def test_strategy_for_mode() -> None:
    assert strategy_for_mode(GenerationMode.RANDOM, using_organic=True) is Strategy.RANDOM_IN_SPHERE
    assert strategy_for_mode(GenerationMode.ORGANIC) is Strategy.ORGANIC_STEERED
    assert strategy_for_mode(GenerationMode.MIXED) is Strategy.RANDOM_IN_SPHERE
    assert strategy_for_mode(GenerationMode.MIXED, using_organic=True) is Strategy.ORGANIC_STEERED


def test_generate_rejects_unknown_strategy(rng) -> None:
    b = BoundingSphere(cx=0.0, cy=0.0, radius=1.0)
    with pytest.raises(ValueError):
        generate("zigzag", PathStore(), b, AnimationParams(), rng)  # type: ignore[arg-type]


def test_generate_does_not_mutate_store(rng) -> None:
    b = BoundingSphere(cx=0.0, cy=0.0, radius=50.0)
    store = PathStore.from_points([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)])
    for s in Strategy:
        generate(s, store, b, AnimationParams(), rng)
    assert len(store) == 2

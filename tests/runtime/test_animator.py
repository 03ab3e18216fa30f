from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from scribble.common import settings
from scribble.engine.core.params import AnimationParams, GenerationMode
from scribble.engine.runtime.animator import AnimatorState, ScribbleAnimator
from scribble.generators import Strategy


def _small_params(**kw) -> AnimationParams:
    base = dict(
        draw_speed=100.0,
        speed_divisor=10.0,
        draw_length=200.0,
        lookahead_factor=2.0,
        keep_behind=300.0,
    )
    base.update(kw)
    return AnimationParams(**base)


def test_initial_state_is_idle_and_step_is_noop() -> None:
    a = ScribbleAnimator(seed=1)
    assert a.state is AnimatorState.IDLE
    assert a.step() is False
    assert len(a.store) == 0
    assert a.visible_points().shape == (0, 3)


def test_reset_seeds_path_and_runs() -> None:
    a = ScribbleAnimator(seed=1)
    a.reset(800, 600)
    assert a.state is AnimatorState.RUNNING
    assert len(a.store) == 20
    assert a.bounds is not None and a.bounds.radius == pytest.approx(402.0)
    assert a.trim_cursor == 0.0
    assert a.current_rotation() == 0.0
    assert a.consume_redraw() is True
    assert a.consume_redraw() is False
    for p in a.store.points:
        assert a.bounds.contains(p)


@pytest.mark.parametrize("w,h", [(0, 600), (800, 0), (-1, 10)])
def test_reset_rejects_non_positive_viewport(w, h) -> None:
    with pytest.raises(ValueError):
        ScribbleAnimator(seed=1).reset(w, h)


def test_step_advances_rotation_cursor_and_grows() -> None:
    a = ScribbleAnimator(_small_params(), seed=2)
    a.reset(800, 600)
    assert a.step() is True
    p = a.params
    assert a.current_rotation() == pytest.approx(p.rotation_step)
    assert a.trim_cursor == pytest.approx(p.frame_speed)
    assert a.store.total_length() >= a.trim_cursor + p.lookahead_length
    assert a.frame_count == 1


def test_cursor_is_bounded_by_keep_behind_after_purges() -> None:
    p = _small_params()
    a = ScribbleAnimator(p, seed=3)
    a.reset(800, 600)
    for _ in range(200):
        a.step()
        assert a.trim_cursor <= p.keep_behind_margin + 1e-9
        assert a.store.total_length() >= a.trim_cursor + p.lookahead_length
        assert a.store.cumulative[0] == 0.0
    assert a.trim_cursor == pytest.approx(p.keep_behind_margin)


def test_visible_points_window() -> None:
    p = _small_params()
    a = ScribbleAnimator(p, seed=4)
    a.reset(800, 600)
    for _ in range(5):
        a.step()
    pts = a.visible_points()
    assert pts.shape[0] >= 2 and pts.shape[1] == 3
    # 窓は [0, cursor]（cursor < draw_length の間）
    np.testing.assert_allclose(pts[0], a.store.first())
    np.testing.assert_allclose(pts[-1], a.store.point_at_distance(a.trim_cursor))
    seg = np.linalg.norm(np.diff(pts, axis=0), axis=1).sum()
    assert seg == pytest.approx(a.trim_cursor)


def test_visible_window_length_caps_at_draw_length() -> None:
    p = _small_params()
    a = ScribbleAnimator(p, seed=5)
    a.reset(800, 600)
    for _ in range(100):
        a.step()
    pts = a.visible_points()
    length = np.linalg.norm(np.diff(pts, axis=0), axis=1).sum()
    assert length == pytest.approx(p.draw_length)


def test_rotation_wraps_to_two_pi() -> None:
    p = _small_params(rotation_speed=60.0, fps=30)  # 1 回転/秒
    a = ScribbleAnimator(p, seed=6)
    a.reset(100, 100)
    for _ in range(45):
        a.step()
        assert 0.0 <= a.current_rotation() < math.tau
    assert a.current_rotation() == pytest.approx(math.pi, abs=1e-9)


def test_stop_and_resume() -> None:
    a = ScribbleAnimator(_small_params(), seed=7)
    a.reset(320, 240)
    a.step()
    a.stop()
    assert a.state is AnimatorState.STOPPED
    cursor = a.trim_cursor
    assert a.step() is False
    assert a.trim_cursor == cursor
    a.resume()
    assert a.is_running
    assert a.step() is True


def test_reset_from_stopped_restarts() -> None:
    a = ScribbleAnimator(_small_params(), seed=8)
    a.reset(320, 240)
    a.step()
    a.stop()
    a.reset(640, 480)
    assert a.state is AnimatorState.RUNNING
    assert a.trim_cursor == 0.0
    assert a.frame_count == 0


def test_same_seed_is_deterministic() -> None:
    a = ScribbleAnimator(_small_params(mode=GenerationMode.MIXED), seed=42)
    b = ScribbleAnimator(_small_params(mode=GenerationMode.MIXED), seed=42)
    a.reset(800, 600)
    b.reset(800, 600)
    for _ in range(30):
        a.step()
        b.step()
    np.testing.assert_array_equal(a.visible_points(), b.visible_points())


def test_redraw_callbacks_are_notified() -> None:
    hits: list[int] = []
    a = ScribbleAnimator(_small_params(), seed=9)
    a.add_redraw_callback(lambda: hits.append(1))
    a.reset(320, 240)
    a.step()
    a.step()
    assert len(hits) == 3


def test_tick_is_one_step() -> None:
    a = ScribbleAnimator(_small_params(), seed=10)
    a.reset(320, 240)
    a.tick(123.0)
    assert a.frame_count == 1


def test_random_mode_keeps_points_in_sphere() -> None:
    a = ScribbleAnimator(_small_params(mode=GenerationMode.RANDOM), seed=11)
    a.reset(640, 480)
    for _ in range(50):
        a.step()
    assert a.active_strategy is Strategy.RANDOM_IN_SPHERE
    assert all(a.bounds.contains(p) for p in a.store.points)


def test_mixed_mode_probability_zero_never_switches() -> None:
    a = ScribbleAnimator(_small_params(mode=GenerationMode.MIXED, toggle_probability=0.0), seed=12)
    a.reset(320, 240)
    for _ in range(10_000):
        a.step()
        assert a.active_strategy is Strategy.RANDOM_IN_SPHERE
    assert a.toggle.switches == 0


def test_mixed_mode_probability_one_switches_every_frame() -> None:
    a = ScribbleAnimator(_small_params(mode=GenerationMode.MIXED, toggle_probability=1.0), seed=13)
    a.reset(320, 240)
    for i in range(1, 501):
        a.step()
        assert a.toggle.using_organic is (i % 2 == 1)
    assert a.toggle.switches == 500


def test_mixed_mode_can_start_organic() -> None:
    a = ScribbleAnimator(
        _small_params(mode=GenerationMode.MIXED, toggle_probability=0.0, start_organic=True), seed=14
    )
    a.reset(320, 240)
    assert a.active_strategy is Strategy.ORGANIC_STEERED


def test_stalled_growth_stops_with_warning(monkeypatch, caplog) -> None:
    monkeypatch.setattr(settings.get(), "MAX_STALLED_SEGMENTS", 5)
    p = _small_params(min_segment_length=0.0, max_segment_length=0.0)
    a = ScribbleAnimator(p, seed=15)
    with caplog.at_level(logging.WARNING, logger="scribble.engine.runtime.animator"):
        a.reset(320, 240)
        assert a.step() is True
    assert "stalled" in caplog.text

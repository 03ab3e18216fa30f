from __future__ import annotations

import math

import pytest

from scribble.engine.core.params import AnimationParams, GenerationMode


def test_defaults_and_derived_values() -> None:
    p = AnimationParams()
    assert p.mode is GenerationMode.ORGANIC
    assert p.frame_speed == pytest.approx(10.0)
    assert p.lookahead_length == pytest.approx(120_000.0)
    assert p.keep_behind_margin == pytest.approx(180_000.0)
    assert p.max_bend_rad == pytest.approx(math.radians(30.0))
    # 1 回転/分 @ 30 FPS → 1800 フレームで 1 周
    assert p.rotation_step * 1800 == pytest.approx(math.tau)
    assert p.validate() is p


def test_explicit_keep_behind_overrides_default() -> None:
    assert AnimationParams(keep_behind=500.0).keep_behind_margin == 500.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_segment_length": 0.0},
        {"min_segment_length": 20.0, "max_segment_length": 10.0},
        {"draw_length": 0.0},
        {"speed_divisor": 0.0},
        {"fps": 0},
        {"toggle_probability": 1.5},
        {"toggle_probability": -0.1},
        {"boundary_threshold": 1.0},
        {"sphere_radius_ratio": 0.0},
        {"keep_behind": -1.0},
        {"seed_segments": -1},
    ],
)
def test_validate_rejects_misconfiguration(kwargs) -> None:
    with pytest.raises(ValueError):
        AnimationParams(**kwargs).validate()


def test_validate_reports_all_problems() -> None:
    with pytest.raises(ValueError) as ei:
        AnimationParams(min_segment_length=0.0, fps=0).validate()
    msg = str(ei.value)
    assert "min_segment_length" in msg and "fps" in msg


@pytest.mark.parametrize(
    "value,expected",
    [
        ("random", GenerationMode.RANDOM),
        ("Organic", GenerationMode.ORGANIC),
        (" MIXED ", GenerationMode.MIXED),
        ("old", GenerationMode.RANDOM),
        ("smooth", GenerationMode.ORGANIC),
        ("3", GenerationMode.MIXED),
        (1, GenerationMode.RANDOM),
        (GenerationMode.MIXED, GenerationMode.MIXED),
    ],
)
def test_generation_mode_parse(value, expected) -> None:
    assert GenerationMode.parse(value) is expected


@pytest.mark.parametrize("bad", ["zigzag", 4, True, 2.0])
def test_generation_mode_parse_invalid(bad) -> None:
    with pytest.raises(ValueError):
        GenerationMode.parse(bad)


def test_from_mapping_converts_and_ignores_unknown() -> None:
    p = AnimationParams.from_mapping(
        {"mode": "mixed", "fps": "24", "draw_length": 500, "bogus": 1, "start_organic": 1}
    )
    assert p.mode is GenerationMode.MIXED
    assert p.fps == 24
    assert p.draw_length == 500.0
    assert p.start_organic is True


def test_from_mapping_empty_gives_defaults() -> None:
    assert AnimationParams.from_mapping(None) == AnimationParams()
    assert AnimationParams.from_mapping({}) == AnimationParams()


def test_from_config_reads_scribble_section() -> None:
    p = AnimationParams.from_config({"scribble": {"mode": "random", "scale_factor": 0.25}})
    assert p.mode is GenerationMode.RANDOM
    assert p.scale_factor == 0.25
    assert AnimationParams.from_config({"other": {}}) == AnimationParams()


def test_with_overrides_ignores_none() -> None:
    base = AnimationParams()
    assert base.with_overrides(mode=None, fps=None) is base
    p = base.with_overrides(mode="mixed", fps=60)
    assert p.mode is GenerationMode.MIXED
    assert p.fps == 60
    assert base.fps == 30

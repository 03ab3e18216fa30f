from __future__ import annotations

import math

import numpy as np
import pytest

from scribble.engine.core.geometry import as_point, distance, lerp, to_cartesian, to_spherical


def test_as_point_normalizes_to_float64_copy() -> None:
    src = [1, 2, 3]
    p = as_point(src)
    assert p.dtype == np.float64
    assert p.shape == (3,)
    p[0] = 99.0
    assert src[0] == 1


@pytest.mark.parametrize("bad", [(1.0, 2.0), (1.0, 2.0, 3.0, 4.0), [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]])
def test_as_point_rejects_wrong_arity(bad) -> None:
    with pytest.raises(ValueError):
        as_point(bad)


def test_distance_is_euclidean_and_symmetric() -> None:
    assert distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
    assert distance((1, 2, 3), (1, 2, 3)) == 0.0
    a, b = (1.0, -2.0, 5.0), (-3.0, 0.5, 2.0)
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_distance_keeps_subnormal_lengths() -> None:
    # 二乗すると 0 に潰れる大きさでも正の長さを返す
    tiny = 2.225073858507203e-309
    assert distance((0.0, 0.0, 0.0), (0.0, 0.0, tiny)) == tiny
    assert distance((0.0, 0.0, 0.0), (1e-200, 1e-200, 0.0)) > 0.0


def test_lerp_endpoints_and_extrapolation() -> None:
    a, b = (0.0, 0.0, 0.0), (10.0, -10.0, 2.0)
    np.testing.assert_allclose(lerp(a, b, 0.0), a)
    np.testing.assert_allclose(lerp(a, b, 1.0), b)
    np.testing.assert_allclose(lerp(a, b, 0.5), (5.0, -5.0, 1.0))
    # t はクランプしない
    np.testing.assert_allclose(lerp(a, b, 2.0), (20.0, -20.0, 4.0))


def test_to_spherical_zero_vector_is_degenerate_safe() -> None:
    r, theta, phi = to_spherical(0.0, 0.0, 0.0)
    assert (r, theta, phi) == (0.0, 0.0, 0.0)


def test_to_spherical_axes() -> None:
    r, theta, phi = to_spherical(0.0, 0.0, 2.0)
    assert r == pytest.approx(2.0)
    assert theta == pytest.approx(0.0)
    _, theta, phi = to_spherical(0.0, 0.0, -1.0)
    assert theta == pytest.approx(math.pi)
    _, theta, phi = to_spherical(0.0, 1.0, 0.0)
    assert theta == pytest.approx(math.pi / 2)
    assert phi == pytest.approx(math.pi / 2)


def test_spherical_cartesian_round_trip() -> None:
    for v in [(1.0, 2.0, 3.0), (-4.0, 0.5, -1.0), (0.0, -3.0, 0.0)]:
        r, theta, phi = to_spherical(*v)
        np.testing.assert_allclose(to_cartesian(r, theta, phi), v, atol=1e-9)

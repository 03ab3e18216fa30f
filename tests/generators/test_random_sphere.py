from __future__ import annotations

import numpy as np
import pytest

from scribble.generators import BoundingSphere, random_in_sphere


def test_bounding_sphere_from_viewport() -> None:
    b = BoundingSphere.from_viewport(800, 600)
    assert (b.cx, b.cy) == (400.0, 300.0)
    assert b.radius == pytest.approx(402.0)
    np.testing.assert_allclose(b.center, (400.0, 300.0, 0.0))


def test_random_in_sphere_consumes_radius_theta_phi_in_order(scripted_rng) -> None:
    b = BoundingSphere(cx=100.0, cy=50.0, radius=10.0)
    rng = scripted_rng([1.0, 0.5, 0.0])
    p = random_in_sphere(b, rng)
    assert rng.calls == 3
    # r = R, theta = pi/2, phi = 0 → +X 方向の球面上
    np.testing.assert_allclose(p, (110.0, 50.0, 0.0), atol=1e-9)


def test_random_in_sphere_zero_radius_draw_is_center(scripted_rng) -> None:
    b = BoundingSphere(cx=3.0, cy=4.0, radius=10.0)
    p = random_in_sphere(b, scripted_rng([0.0, 0.3, 0.7]))
    np.testing.assert_allclose(p, (3.0, 4.0, 0.0), atol=1e-12)


def test_random_in_sphere_points_stay_inside(rng) -> None:
    b = BoundingSphere.from_viewport(640, 480)
    for _ in range(2000):
        assert b.contains(random_in_sphere(b, rng))


def test_random_in_sphere_is_volume_uniform(rng) -> None:
    # 体積一様なら r/R <= 0.5 の割合は 1/8 付近
    b = BoundingSphere(cx=0.0, cy=0.0, radius=1.0)
    n = 4000
    inner = sum(b.distance_from_center(random_in_sphere(b, rng)) <= 0.5 for _ in range(n))
    assert 0.09 < inner / n < 0.16

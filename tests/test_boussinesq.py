"""Tests for the strip-load stress engine."""

import numpy as np
import pytest

from stripstress.parameters import GridSpec, LoadParameters
from stripstress.solvers.boussinesq import (
    SURFACE_EPSILON,
    StripLoadSolver,
    angle_from_vertical_axis,
    angle_span,
    build_stress_field,
    stress_at_point,
    vertical_stress,
)
from stripstress.solvers.field import StressField


class TestAngles:
    def test_beta(self):
        assert angle_from_vertical_axis(0.0, 1.0, 2.0) == pytest.approx(-np.pi / 4)

    def test_alpha(self):
        assert angle_span(0.0, 1.0, 2.0) == pytest.approx(np.pi / 2)

    def test_beta_at_surface(self):
        assert angle_from_vertical_axis(5.0, 0.0, 2.0) == pytest.approx(np.pi / 2)
        assert angle_from_vertical_axis(-5.0, 0.0, 2.0) == pytest.approx(-np.pi / 2)

    def test_beta_undefined_at_load_edge(self):
        assert np.isnan(angle_from_vertical_axis(1.0, 0.0, 2.0))

    def test_broadcasting(self):
        x = np.linspace(-5, 5, 7)[np.newaxis, :]
        z = np.linspace(1, 3, 4)[:, np.newaxis]
        assert angle_span(x, z, 2.0).shape == (4, 7)


class TestVerticalStress:
    def test_full_load(self):
        assert vertical_stress(np.pi, -np.pi / 2, 10.0) == pytest.approx(10.0)

    def test_zero_angle(self):
        assert vertical_stress(0.0, 0.3, 10.0) == pytest.approx(0.0)

    def test_formula(self):
        alpha, beta, q = 0.7, -0.2, 25.0
        expected = q / np.pi * (alpha + np.sin(alpha) * np.cos(alpha + 2 * beta))
        assert vertical_stress(alpha, beta, q) == pytest.approx(expected)


class TestStressAtPoint:
    def test_centreline_closed_form(self):
        """Under the centre σz/q = (α + sin α)/π with α = 2 atan(b / 2z)."""
        b, q = 5.0, 10.0
        z = np.linspace(0.1, 30.0, 50)
        alpha = 2.0 * np.arctan(b / (2.0 * z))
        expected = q * (alpha + np.sin(alpha)) / np.pi
        np.testing.assert_allclose(stress_at_point(b, 0.0, z, q), expected, rtol=1e-12)

    def test_half_width_depth(self):
        # α = π/2 at z = b/2
        assert stress_at_point(5.0, 0.0, 2.5, 1.0) == pytest.approx((np.pi / 2 + 1) / np.pi)

    def test_bounded_by_load(self):
        for b in (0.5, 2.0, 5.0, 20.0):
            z = np.linspace(0.1, 100.0, 200)
            sigma = stress_at_point(b, 0.0, z, 10.0)
            assert np.all(sigma >= 0.0)
            assert np.all(sigma < 10.0)

    def test_symmetry(self):
        x = np.linspace(-20, 20, 81)
        for z in (0.5, 3.0, 10.0):
            np.testing.assert_allclose(
                stress_at_point(5.0, x, z, 10.0),
                stress_at_point(5.0, -x, z, 10.0),
                rtol=1e-12, atol=1e-12,
            )

    def test_decreases_with_depth_under_load(self):
        z = np.linspace(0.05, 50.0, 500)
        for x in (0.0, 1.0, -2.0, 2.4):
            sigma = stress_at_point(5.0, x, z, 10.0)
            assert np.all(np.diff(sigma) < 0)

    def test_vanishes_at_depth(self):
        assert stress_at_point(5.0, 0.0, 1e6, 10.0) < 1e-4
        assert stress_at_point(5.0, 7.0, 1e6, 10.0) < 1e-4

    def test_outside_load_positive(self):
        assert 0.0 < stress_at_point(5.0, 10.0, 4.0, 10.0) < 10.0


class TestSurfacePolicy:
    def test_under_load(self):
        assert stress_at_point(5.0, 0.0, 0.0, 10.0) == pytest.approx(10.0, rel=1e-6)

    def test_load_edge(self):
        assert stress_at_point(5.0, 2.5, 0.0, 10.0) == pytest.approx(5.0, rel=1e-6)
        assert stress_at_point(5.0, -2.5, 0.0, 10.0) == pytest.approx(5.0, rel=1e-6)

    def test_outside_load(self):
        assert stress_at_point(5.0, 10.0, 0.0, 10.0) == pytest.approx(0.0, abs=1e-6)

    def test_finite_everywhere(self):
        x = np.linspace(-10, 10, 401)
        sigma = stress_at_point(5.0, x, 0.0, 10.0)
        assert np.all(np.isfinite(sigma))

    def test_strictly_below_load_near_surface(self):
        z = np.logspace(-12, -1, 200)[:, np.newaxis] * 5.0
        x = np.linspace(-2.4, 2.4, 25)[np.newaxis, :]
        sigma = stress_at_point(5.0, x, z, 10.0)
        assert sigma.min() >= 0.0
        assert sigma.max() < 10.0

    def test_negative_depth_clamped(self):
        assert stress_at_point(5.0, 0.0, -1.0, 10.0) == pytest.approx(
            stress_at_point(5.0, 0.0, SURFACE_EPSILON * 5.0, 10.0)
        )


class TestBuildStressField:
    def _small(self, **kwargs):
        return build_stress_field(
            LoadParameters(b=5, q=10), GridSpec(s=5, w=1, h=1), **kwargs,
        )

    def test_shape(self):
        field = self._small()
        assert isinstance(field, StressField)
        assert field.shape == (5, 10)

    def test_coordinates(self):
        field = self._small()
        assert field.x[0] == pytest.approx(-5.0)
        assert field.x[5] == pytest.approx(0.0)
        assert field.x[-1] == pytest.approx(4.0)
        np.testing.assert_allclose(field.z, [0.0, 1.0, 2.0, 3.0, 4.0])

    def test_surface_centre_near_q(self):
        field = self._small()
        assert field[0, 5] == pytest.approx(10.0, rel=1e-6)

    @pytest.mark.parametrize("b, q, s", [(3.0, 7.0, 37), (5.0, 10.0, 200), (0.5, 250.0, 64)])
    def test_values_within_load_range(self, b, q, s):
        field = build_stress_field(LoadParameters(b=b, q=q), GridSpec(s=s, w=2, h=2))
        assert field.values.min() >= 0.0
        assert field.values.max() < q
        assert field.values[0].max() < q
        assert field.percent.max() < 1.0

    def test_deep_corner_small(self):
        field = self._small()
        assert 0.0 < field[4, 0] < 3.0

    def test_matches_point_evaluation(self):
        field = self._small()
        for iz in range(field.rows):
            for ix in range(field.columns):
                x = (ix - 5) * 1.0
                z = iz * 1.0
                assert field[iz, ix] == pytest.approx(float(stress_at_point(5.0, x, z, 10.0)))

    def test_no_nan(self):
        field = build_stress_field(LoadParameters(b=2, q=100), GridSpec(s=8, w=3, h=2))
        assert np.all(np.isfinite(field.values))

    def test_symmetric_columns(self):
        field = build_stress_field(LoadParameters(b=5, q=10), GridSpec(s=6, w=2, h=2))
        half = field.grid.half_columns
        for k in range(1, half):
            np.testing.assert_allclose(field[:, half + k], field[:, half - k], rtol=1e-12)

    def test_parallel_matches_serial(self):
        load = LoadParameters(b=3, q=50)
        grid = GridSpec(s=10, w=2, h=3)
        serial = build_stress_field(load, grid)
        parallel = build_stress_field(load, grid, workers=3, chunk_cells=50)
        np.testing.assert_array_equal(serial.values, parallel.values)

    def test_small_chunks(self):
        load = LoadParameters(b=3, q=50)
        grid = GridSpec(s=4, w=1, h=2)
        np.testing.assert_array_equal(
            build_stress_field(load, grid).values,
            build_stress_field(load, grid, chunk_cells=1).values,
        )

    def test_fractional_extents(self):
        field = build_stress_field(LoadParameters(b=1, q=1), GridSpec(s=4, w=1.5, h=0.5))
        assert field.shape == (2, 12)


class TestStripLoadSolver:
    def test_solve(self):
        load = LoadParameters(b=5, q=10)
        grid = GridSpec(s=5, w=1, h=1)
        field = StripLoadSolver(workers=2, chunk_cells=10).solve(load, grid)
        np.testing.assert_array_equal(field.values, build_stress_field(load, grid).values)

    def test_repr(self):
        assert "StripLoadSolver" in repr(StripLoadSolver())

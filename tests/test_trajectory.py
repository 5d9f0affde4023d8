"""Tests for the trajectory engine."""

import math

import numpy as np
import pytest

from chaosminer.data.modifiers import ModifierPair
from chaosminer.data.schemas import AttractorParameters
from chaosminer.data.synthesis import params_from_seed
from chaosminer.indicators.trajectory import integrate, step

# Published prefix for seed "abcdef", identity modifiers, rounded parameters.
ABCDEF_PREFIX = [
    (0.332, 0.0857),
    (-0.65539256864500006, 1.2037215360650000),
    (-2.0539251878770681, 0.31662213302765618),
    (1.5594166990090699, 6.1894775109516376),
    (-72.945995761959026, -66.152533637706824),
]

ABCDEF_RAW_PREFIX = [
    (0.33200753945857286, 0.085685253841802478),
    (-0.65542580758631119, 1.2036827850880112),
    (-2.0538123809745117, 0.31671149301659796),
    (1.5591674109491100, 6.1889190362709012),
    (-72.934197137750061, -66.141728559418908),
]


def _fixed_point_params(x0=0.25, y0=-0.25):
    return AttractorParameters(
        ax=(0, 1, 0, 0, 0, 0), ay=(0, 0, 0, 0, 1, 0), x0=x0, y0=y0,
    )


class TestIntegrate:

    def test_abcdef_prefix(self):
        traj = integrate(params_from_seed("abcdef"), 1000)
        assert traj.points(5) == ABCDEF_PREFIX

    def test_abcdef_raw_prefix(self):
        traj = integrate(params_from_seed("abcdef", decimals=None), 1000)
        assert traj.points(5) == ABCDEF_RAW_PREFIX

    def test_length(self):
        traj = integrate(params_from_seed("3vg11h8l6"), 1234)
        assert len(traj) == 1234
        assert traj.x.dtype == np.float64

    def test_single_point(self):
        params = params_from_seed("single")
        traj = integrate(params, 1)
        assert traj.points() == [(params.x0, params.y0)]
        assert traj.bounds.as_tuple() == (params.x0, params.x0, params.y0, params.y0)

    def test_prefix_consistency(self):
        """A short run is a prefix of a longer run."""
        params = params_from_seed("3vg11h8l6")
        short = integrate(params, 2000)
        full = integrate(params, 10000)
        assert np.array_equal(short.x, full.x[:2000])
        assert np.array_equal(short.y, full.y[:2000])

    def test_bounds_match_arrays(self):
        traj = integrate(params_from_seed("3vg11h8l6"), 5000)
        assert traj.bounds.x_min == traj.x.min()
        assert traj.bounds.x_max == traj.x.max()
        assert traj.bounds.y_min == traj.y.min()
        assert traj.bounds.y_max == traj.y.max()

    def test_bounds_include_initial_point(self):
        traj = integrate(_fixed_point_params(0.25, -0.25), 10)
        assert traj.bounds.as_tuple() == (0.25, 0.25, -0.25, -0.25)

    def test_overflow_is_data(self):
        params = AttractorParameters(
            ax=(2, 0, 2, 0, 0, 0), ay=(0, 0, 0, 0, 2, 0), x0=0.4, y0=0.3,
        )
        traj = integrate(params, 500)
        assert not np.all(np.isfinite(traj.x))
        assert traj.bounds.exceeds(1e10)

    def test_nan_bounds_are_sticky(self):
        params = AttractorParameters(
            ax=(-1, 0, 0, 0, 0, 0), ay=(0, 0, 0, 0, 1, 0), x0=0.5, y0=0.5,
        )
        traj = integrate(params, 10, ModifierPair("sqrt", "identity"))
        # x1 = -1, x2 = -1 + 0*sqrt(-1) = NaN.
        assert math.isnan(traj.x[2])
        assert math.isnan(traj.bounds.x_min)
        assert math.isnan(traj.bounds.x_max)
        assert traj.bounds.has_nan()

    def test_modifiers_applied(self):
        params = AttractorParameters(
            ax=(0, 1, 0, 0, 0, 0), ay=(0, 0, 0, 0, 1, 0), x0=0.0, y0=0.0,
        )
        traj = integrate(params, 3, ModifierPair("cos", "identity"))
        points = traj.points()
        assert points[:2] == [(0.0, 0.0), (1.0, 0.0)]
        assert points[2] == pytest.approx((math.cos(1.0), 0.0))

    def test_deterministic(self):
        params = params_from_seed("qwufpc8pu")
        pair = ModifierPair("log", "cos")
        a = integrate(params, 5000, pair)
        b = integrate(params, 5000, pair)
        assert np.array_equal(a.x, b.x, equal_nan=True)
        assert np.array_equal(a.y, b.y, equal_nan=True)

    def test_arrays_read_only(self):
        traj = integrate(params_from_seed("abc"), 10)
        with pytest.raises(ValueError):
            traj.x[0] = 1.0

    @pytest.mark.parametrize("n", [0, -5, 2.5, True, "100"])
    def test_invalid_point_count(self, n):
        with pytest.raises(ValueError):
            integrate(params_from_seed("abc"), n)

    def test_numpy_integer_point_count(self):
        assert len(integrate(params_from_seed("abc"), np.int64(7))) == 7


class TestStep:

    def test_matches_integrate(self):
        params = params_from_seed("abcdef")
        assert step(params.x0, params.y0, params) == ABCDEF_PREFIX[1]

    def test_with_modifiers(self):
        params = params_from_seed("2e8mn21l2")
        pair = ModifierPair("asinh", "cbrt")
        traj = integrate(params, 2, pair)
        assert step(params.x0, params.y0, params, pair) == traj.points()[1]

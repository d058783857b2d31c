"""Tests for noise primitives."""

import math

import numpy as np
import pytest

from planetgen.terrain.noise import (
    SEED_MASK,
    Curve,
    NoiseSource,
    Terrace,
    Twist,
    clamp,
    derive_seed,
    exponent_curve,
    lerp,
    smoothstep,
    sphere_point,
)


class TestDeriveSeed:
    """Tests for child seed derivation."""

    def test_offsets_distinct(self) -> None:
        """Different offsets give different seeds."""
        assert derive_seed(42, 0) != derive_seed(42, 1)

    def test_wraps_at_32_bits(self) -> None:
        """Derived seeds wrap around 2**32."""
        assert derive_seed(SEED_MASK, 1) == 0
        assert derive_seed(SEED_MASK, 140) == 139


class TestSpherePoint:
    """Tests for the coordinate mapping."""

    def test_origin_on_x_axis(self) -> None:
        """(0, 0) maps to the +x axis."""
        np.testing.assert_allclose(sphere_point(0.0, 0.0), (1.0, 0.0, 0.0), atol=1e-12)

    def test_poles(self) -> None:
        """Latitude +-1 maps to the poles."""
        np.testing.assert_allclose(sphere_point(0.3, 1.0), (0.0, 0.0, 1.0), atol=1e-12)
        np.testing.assert_allclose(sphere_point(-0.7, -1.0), (0.0, 0.0, -1.0), atol=1e-12)

    def test_unit_length(self) -> None:
        """Mapped points lie on the unit sphere."""
        for x, y in [(0.1, 0.2), (-0.8, 0.9), (5.5, -3.3), (1e300, -1e300)]:
            assert math.hypot(*sphere_point(x, y)) == pytest.approx(1.0)

    def test_longitude_period(self) -> None:
        """Longitude repeats every 2.0."""
        np.testing.assert_allclose(sphere_point(0.25, 0.4), sphere_point(2.25, 0.4), atol=1e-12)


class TestNoiseSource:
    """Tests for the seeded noise source."""

    def test_deterministic_with_same_seed(self, probe_points) -> None:
        """Same seed produces identical output."""
        a = NoiseSource(123)
        b = NoiseSource(123)
        for p in probe_points:
            assert a.sample(p, 3.0) == b.sample(p, 3.0)

    def test_different_seed_different_output(self, probe_points) -> None:
        """Different seeds produce different output."""
        a = [NoiseSource(123).sample(p, 3.0) for p in probe_points]
        b = [NoiseSource(456).sample(p, 3.0) for p in probe_points]
        assert not np.allclose(a, b)

    def test_seed_masked(self) -> None:
        """Seeds are reduced to 32 bits."""
        assert NoiseSource(2**32 + 5).seed == 5

    @pytest.mark.parametrize("variant", ["sample", "ridged", "billow"])
    def test_variants_in_range(self, probe_points, variant) -> None:
        """Every fractal variant stays within [-1, 1]."""
        source = NoiseSource(7)
        for p in probe_points:
            value = getattr(source, variant)(p, 5.0, 2.1)
            assert -1.0 <= value <= 1.0

    def test_zero_octaves(self) -> None:
        """No octaves gives zero."""
        source = NoiseSource(7)
        point = sphere_point(0.2, 0.1)
        assert source.sample(point, 4.0, octaves=0) == 0.0
        assert source.ridged(point, 4.0, octaves=0) == 0.0
        assert source.billow(point, 4.0, octaves=0) == 0.0

    def test_single_octave_is_raw(self) -> None:
        """One octave of fBm at frequency 1 is the raw noise."""
        source = NoiseSource(9)
        point = (0.3, -0.4, 0.5)
        assert source.sample(point, 1.0, octaves=1) == pytest.approx(source.raw(point))


class TestTwist:
    """Tests for the domain warp."""

    def test_zero_power_identity(self) -> None:
        """Zero power leaves points unchanged."""
        twist = Twist.from_seed(5, frequency=3.0, power=0.0)
        point = sphere_point(0.4, 0.2)
        assert twist.displace(point) == point

    def test_displacement_bounded(self, probe_points) -> None:
        """Each axis moves by at most the twist power."""
        power = 0.05
        twist = Twist.from_seed(5, frequency=3.0, power=power)
        for p in probe_points:
            q = twist.displace(p)
            for a, b in zip(p, q):
                assert abs(a - b) <= power + 1e-12

    def test_displacement_nonzero(self, probe_points) -> None:
        """A positive power actually moves points."""
        twist = Twist.from_seed(5, frequency=3.0, power=0.05)
        assert any(twist.displace(p) != p for p in probe_points)

    def test_deterministic(self, probe_points) -> None:
        """Twists built from the same seed agree."""
        a = Twist.from_seed(77, frequency=2.0, power=0.1)
        b = Twist.from_seed(77, frequency=2.0, power=0.1)
        for p in probe_points:
            assert a.displace(p) == b.displace(p)


class TestScalarHelpers:
    """Tests for clamp, lerp, smoothstep and exponent_curve."""

    def test_clamp(self) -> None:
        """Values are clamped into range."""
        assert clamp(-2.0, -1.0, 1.0) == -1.0
        assert clamp(2.0, -1.0, 1.0) == 1.0
        assert clamp(0.3, -1.0, 1.0) == 0.3

    def test_clamp_nan_passes_through(self) -> None:
        """NaN is not silently clamped."""
        assert math.isnan(clamp(math.nan, 0.0, 1.0))

    def test_lerp_exact_ends(self) -> None:
        """lerp returns the endpoints exactly at t = 0 and t = 1."""
        assert lerp(0.3, 0.7, 0.0) == 0.3
        assert lerp(0.3, 0.7, 1.0) == 0.7
        assert lerp(-1.0, 1.0, 0.5) == 0.0

    def test_smoothstep(self) -> None:
        """smoothstep is 0 below, 1 above, 0.5 at the midpoint."""
        assert smoothstep(0.0, 1.0, -0.5) == 0.0
        assert smoothstep(0.0, 1.0, 1.5) == 1.0
        assert smoothstep(0.0, 1.0, 0.5) == pytest.approx(0.5)
        assert smoothstep(-1.0, 1.0, 0.0) == pytest.approx(0.5)

    def test_smoothstep_monotonic(self) -> None:
        """smoothstep never decreases."""
        xs = np.linspace(-0.5, 1.5, 101)
        values = [smoothstep(0.0, 1.0, float(x)) for x in xs]
        assert np.all(np.diff(values) >= 0.0)

    def test_smoothstep_equal_edges(self) -> None:
        """Coinciding edges give a hard step."""
        assert smoothstep(0.2, 0.2, 0.1) == 0.0
        assert smoothstep(0.2, 0.2, 0.2) == 1.0

    def test_exponent_curve_fixed_ends(self) -> None:
        """The curve keeps -1 and 1 fixed."""
        assert exponent_curve(-1.0, 1.25) == -1.0
        assert exponent_curve(1.0, 1.25) == 1.0

    def test_exponent_curve_lowers_middle(self) -> None:
        """Exponents above 1 pull mid values down."""
        assert exponent_curve(0.0, 2.0) == pytest.approx(-0.5)


class TestCurve:
    """Tests for the cubic control-point curve."""

    def test_needs_four_points(self) -> None:
        """Fewer than four control points is rejected."""
        with pytest.raises(ValueError):
            Curve([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)])

    def test_duplicate_inputs_rejected(self) -> None:
        """Duplicate control inputs are rejected."""
        with pytest.raises(ValueError):
            Curve([(0.0, 0.0), (1.0, 1.0), (1.0, 0.5), (2.0, 0.0)])

    def test_passes_through_points(self) -> None:
        """The curve hits its interior control points."""
        curve = Curve([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0), (3.0, 1.0)])
        assert curve(1.0) == pytest.approx(1.0)
        assert curve(2.0) == pytest.approx(0.0)

    def test_flat_outside(self) -> None:
        """Inputs beyond the ends map to the end outputs."""
        curve = Curve([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0), (3.0, 1.0)])
        assert curve(-5.0) == 0.0
        assert curve(10.0) == 1.0

    def test_points_sorted(self) -> None:
        """Control points may be given in any order."""
        a = Curve([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0), (3.0, 1.0)])
        b = Curve([(3.0, 1.0), (1.0, 1.0), (0.0, 0.0), (2.0, 0.0)])
        assert a(1.5) == b(1.5)


class TestTerrace:
    """Tests for terrace remapping."""

    def test_needs_two_points(self) -> None:
        """A single control point is rejected."""
        with pytest.raises(ValueError):
            Terrace([0.0])

    def test_control_points_fixed(self) -> None:
        """Control values map to themselves."""
        terrace = Terrace([-1.0, 0.0, 1.0])
        for value in (-1.0, 0.0, 1.0):
            assert terrace(value) == value

    def test_flat_step_then_riser(self) -> None:
        """Between points the output rises slowly then steeply."""
        terrace = Terrace([0.0, 1.0])
        assert terrace(0.5) == pytest.approx(0.25)

    def test_clamped_outside(self) -> None:
        """Inputs outside the control range map to the ends."""
        terrace = Terrace([0.0, 1.0])
        assert terrace(-3.0) == 0.0
        assert terrace(3.0) == 1.0

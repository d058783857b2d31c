"""Noise primitives for planetary terrain.

Provides a seeded 3-D noise source with fBm, ridged multifractal and
billow variants, a domain-warp ("twist") stage, and the scalar remapping
helpers (smoothstep, curves, terraces) the terrain layers are built from.
All functions are pure and evaluate a single point on or near the unit
sphere.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from opensimplex import OpenSimplex

Point = tuple[float, float, float]

SEED_MASK = 0xFFFFFFFF

# Fixed input offsets for the three warp axes so they sample
# uncorrelated regions of their noise fields
_TWIST_OFFSETS: tuple[Point, Point, Point] = (
    (12414.0 / 65536.0, 65124.0 / 65536.0, 31337.0 / 65536.0),
    (26519.0 / 65536.0, 18128.0 / 65536.0, 60493.0 / 65536.0),
    (53820.0 / 65536.0, 11213.0 / 65536.0, 44845.0 / 65536.0),
)


def derive_seed(seed: int, offset: int) -> int:
    """Derive a 32-bit child seed from a root seed.

    Args:
        seed: Root seed.
        offset: Per-field offset; each field in the pipeline uses its own.

    Returns:
        Child seed in [0, 2**32).
    """
    return (seed + offset) & SEED_MASK


def sphere_point(x: float, y: float) -> Point:
    """Map normalized planetary coordinates to a point on the unit sphere.

    Args:
        x: Normalized longitude, 1.0 per 180 degrees.
        y: Normalized latitude, 1.0 per 90 degrees.

    Returns:
        Cartesian point on the unit sphere.
    """
    # Both mappings are periodic; reduce first so huge inputs stay finite
    lon = math.fmod(x, 2.0) * math.pi
    lat = math.fmod(y, 4.0) * math.pi / 2.0
    r = math.cos(lat)
    return (r * math.cos(lon), r * math.sin(lon), math.sin(lat))


class NoiseSource:
    """Seeded coherent noise over 3-D space.

    Wraps an OpenSimplex generator and adds the fractal variants used by
    the terrain layers. Every variant is normalized by its total octave
    amplitude so results stay roughly within [-1, 1].
    """

    def __init__(self, seed: int):
        self.seed = seed & SEED_MASK
        self._simplex = OpenSimplex(seed=self.seed)

    def raw(self, point: Point) -> float:
        """Single-octave noise at a point."""
        x, y, z = point
        return self._simplex.noise3(x, y, z)

    def sample(
        self,
        point: Point,
        frequency: float,
        lacunarity: float = 2.0,
        octaves: int = 6,
        persistence: float = 0.5,
    ) -> float:
        """Fractal Brownian motion.

        Args:
            point: Sample point.
            frequency: Frequency of the first octave.
            lacunarity: Frequency multiplier between octaves.
            octaves: Number of octaves to sum.
            persistence: Amplitude multiplier between octaves.

        Returns:
            Noise value, roughly in [-1, 1].
        """
        x, y, z = point
        noise3 = self._simplex.noise3
        value = 0.0
        amplitude = 1.0
        max_amplitude = 0.0
        freq = frequency

        for _ in range(octaves):
            value += amplitude * noise3(x * freq, y * freq, z * freq)
            max_amplitude += amplitude
            amplitude *= persistence
            freq *= lacunarity

        return value / max_amplitude if max_amplitude > 0 else 0.0

    def ridged(
        self,
        point: Point,
        frequency: float,
        lacunarity: float = 2.0,
        octaves: int = 4,
        offset: float = 1.0,
        gain: float = 2.0,
    ) -> float:
        """Ridged multifractal noise.

        Each octave is ``(offset - |noise|)**2``, weighted by the previous
        octave's signal so detail concentrates on the ridges. Octave
        weights fall off as ``lacunarity**-i``.

        Returns:
            Noise value in [-1, 1], ridges near the top.
        """
        x, y, z = point
        noise3 = self._simplex.noise3
        value = 0.0
        weight = 1.0
        spectral = 1.0
        total = 0.0
        freq = frequency

        for _ in range(octaves):
            signal = offset - abs(noise3(x * freq, y * freq, z * freq))
            signal *= signal
            signal *= weight

            # Weight successive octaves by this one's signal
            weight = clamp(signal * gain, 0.0, 1.0)

            value += signal * spectral
            total += spectral
            spectral /= lacunarity
            freq *= lacunarity

        if total <= 0:
            return 0.0
        return clamp(value / total, 0.0, 1.0) * 2.0 - 1.0

    def billow(
        self,
        point: Point,
        frequency: float,
        lacunarity: float = 2.0,
        octaves: int = 6,
        persistence: float = 0.5,
    ) -> float:
        """Billowy noise built from ``2 * |noise| - 1`` per octave.

        Returns:
            Noise value in about [-1, 1], rounded lumps with sharp creases.
        """
        x, y, z = point
        noise3 = self._simplex.noise3
        value = 0.0
        amplitude = 1.0
        max_amplitude = 0.0
        freq = frequency

        for _ in range(octaves):
            signal = 2.0 * abs(noise3(x * freq, y * freq, z * freq)) - 1.0
            value += amplitude * signal
            max_amplitude += amplitude
            amplitude *= persistence
            freq *= lacunarity

        return value / max_amplitude if max_amplitude > 0 else 0.0


@dataclass(frozen=True)
class Twist:
    """Domain warp that displaces sample points by three noise fields.

    Each axis is offset by ``power`` times an fBm sample from its own
    noise source, so ``displace`` and the subsequent base lookup form an
    explicit two-stage evaluation.
    """

    sources: tuple[NoiseSource, NoiseSource, NoiseSource]
    frequency: float
    power: float
    roughness: int = 3

    @classmethod
    def from_seed(
        cls,
        seed: int,
        frequency: float,
        power: float,
        roughness: int = 3,
    ) -> "Twist":
        """Build a twist whose three axes use consecutive derived seeds."""
        sources = (
            NoiseSource(derive_seed(seed, 0)),
            NoiseSource(derive_seed(seed, 1)),
            NoiseSource(derive_seed(seed, 2)),
        )
        return cls(sources=sources, frequency=frequency, power=power, roughness=roughness)

    def displace(self, point: Point) -> Point:
        """Return the warped sample point."""
        if self.power == 0.0:
            return point

        x, y, z = point
        warped = []
        for source, (ox, oy, oz), coord in zip(self.sources, _TWIST_OFFSETS, point):
            offset = source.sample(
                (x + ox, y + oy, z + oz),
                self.frequency,
                octaves=self.roughness,
            )
            warped.append(coord + offset * self.power)
        return (warped[0], warped[1], warped[2])


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]; NaN passes through."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation, exact at both ends of t."""
    return a * (1.0 - t) + b * t


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """Smooth Hermite interpolation between 0 and 1.

    Degenerates to a step at ``edge0`` when both edges coincide.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input value.

    Returns:
        Smoothly interpolated value in [0, 1].
    """
    if edge1 == edge0:
        return 1.0 if x >= edge0 else 0.0
    t = clamp((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def exponent_curve(value: float, exponent: float) -> float:
    """Raise a [-1, 1] value to a power in [0, 1] space and map it back."""
    return math.pow(abs((value + 1.0) / 2.0), exponent) * 2.0 - 1.0


def _cubic(n0: float, n1: float, n2: float, n3: float, a: float) -> float:
    p = (n3 - n2) - (n0 - n1)
    q = (n0 - n1) - p
    r = n2 - n0
    return p * a * a * a + q * a * a + r * a + n1


class Curve:
    """Piecewise cubic remapping through sorted control points.

    Inputs below the first or above the last control point map to that
    point's output.
    """

    def __init__(self, points: Sequence[tuple[float, float]]):
        if len(points) < 4:
            raise ValueError("Curve needs at least four control points")
        ordered = sorted(points)
        self.inputs = tuple(p[0] for p in ordered)
        self.outputs = tuple(p[1] for p in ordered)
        for a, b in zip(self.inputs, self.inputs[1:]):
            if a == b:
                raise ValueError(f"Duplicate curve control point input: {a}")

    def __call__(self, value: float) -> float:
        inputs = self.inputs
        outputs = self.outputs
        last = len(inputs) - 1

        index_pos = 0
        while index_pos <= last and value >= inputs[index_pos]:
            index_pos += 1

        i0 = min(max(index_pos - 2, 0), last)
        i1 = min(max(index_pos - 1, 0), last)
        i2 = min(max(index_pos, 0), last)
        i3 = min(max(index_pos + 1, 0), last)

        if i1 == i2:
            return outputs[i1]

        alpha = (value - inputs[i1]) / (inputs[i2] - inputs[i1])
        return _cubic(outputs[i0], outputs[i1], outputs[i2], outputs[i3], alpha)


class Terrace:
    """Terrace-forming remap: flat steps at control values, steep risers between."""

    def __init__(self, points: Sequence[float]):
        if len(points) < 2:
            raise ValueError("Terrace needs at least two control points")
        self.points = tuple(sorted(points))

    def __call__(self, value: float) -> float:
        points = self.points
        last = len(points) - 1

        index_pos = 0
        while index_pos <= last and value >= points[index_pos]:
            index_pos += 1

        i0 = min(max(index_pos - 1, 0), last)
        i1 = min(max(index_pos, 0), last)
        if i0 == i1:
            return points[i1]

        v0 = points[i0]
        v1 = points[i1]
        alpha = (value - v0) / (v1 - v0)
        alpha *= alpha
        return lerp(v0, v1, alpha)

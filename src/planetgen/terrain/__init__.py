"""Noise-based planetary terrain layers.

Each layer is a pure function over points on the unit sphere. The
selector blends them into one elevation and the river carver cuts
channels into the result.
"""

from .badlands import BadlandLayer
from .continent import ContinentLayer
from .hills import HillLayer
from .mountains import MountainLayer
from .noise import NoiseSource, Twist, derive_seed, sphere_point
from .plains import PlainLayer
from .rivers import RiverCarver, RiverCut
from .selector import TerrainBlend, TerrainSelector

__all__ = [
    "BadlandLayer",
    "ContinentLayer",
    "HillLayer",
    "MountainLayer",
    "NoiseSource",
    "PlainLayer",
    "RiverCarver",
    "RiverCut",
    "TerrainBlend",
    "TerrainSelector",
    "Twist",
    "derive_seed",
    "sphere_point",
]

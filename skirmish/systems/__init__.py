"""Engine systems: RNG, spatial indexing, encounter generation."""

from skirmish.systems.rng import DeterministicRNG
from skirmish.systems.spatial_hash import SpatialHash

__all__ = ["DeterministicRNG", "SpatialHash"]

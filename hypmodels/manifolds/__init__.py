"""Model-specific manifold implementations on raw JAX arrays."""

from . import euclidean, halfspace, hyperboloid, isometry_mappings, poincare
from .halfspace import PoincareHalfSpace
from .hyperboloid import Hyperboloid
from .poincare import Poincare

__all__ = [
    "Hyperboloid",
    "Poincare",
    "PoincareHalfSpace",
    "euclidean",
    "halfspace",
    "hyperboloid",
    "isometry_mappings",
    "poincare",
]

"""Poincaré half-space model of ℍⁿ.

Points are x ∈ ℝⁿ with last coordinate xₙ > 0; tangent vectors at x are
arbitrary vectors of ℝⁿ. The metric is the Euclidean one scaled by 1/xₙ²,
so it blows up towards the boundary hyperplane xₙ = 0.

All functions operate on single points with shape (dim,). Use jax.vmap for
batching:

    >>> import jax
    >>> import jax.numpy as jnp
    >>> from hypmodels.manifolds.halfspace import PoincareHalfSpace
    >>>
    >>> manifold = PoincareHalfSpace(dtype=jnp.float64)
    >>> x = jnp.array([0.0, 1.0])
    >>> y = jnp.array([0.0, 2.0])
    >>> manifold.dist(x, y)  # log(2)
    >>>
    >>> x_batch = jnp.array([[0.0, 1.0], [1.0, 0.5]])
    >>> y_batch = jnp.array([[0.0, 2.0], [0.3, 3.0]])
    >>> distances = jax.vmap(manifold.dist)(x_batch, y_batch)

Curvature is fixed to -1.
"""

import logging

import jax
import jax.numpy as jnp
from jaxtyping import Array, ArrayLike, Float

from ..errors import DomainError, HyperbolicError
from ..utils.math_utils import acosh
from . import euclidean

logger = logging.getLogger(__name__)


def _dist(x: Float[Array, "dim"], y: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute geodesic distance between half-space points.

    Formula:
        d(x, y) = acosh(1 + ||x - y||² / (2 xₙ yₙ))

    Args:
        x: Half-space point, shape (dim,)
        y: Half-space point, shape (dim,)

    Returns:
        Geodesic distance d(x, y), scalar
    """
    diff = x - y
    return acosh(1.0 + jnp.dot(diff, diff) / (2.0 * x[-1] * y[-1]))


def _tangent_inner(u: Float[Array, "dim"], v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute inner product of tangent vectors u and v at point x.

    Formula:
        g_x(u, v) = ⟨u, v⟩ / xₙ²

    Args:
        u: Tangent vector at x, shape (dim,)
        v: Tangent vector at x, shape (dim,)
        x: Half-space point, shape (dim,)

    Returns:
        Riemannian inner product g_x(u, v), scalar
    """
    return jnp.dot(u, v) / x[-1] ** 2


def _tangent_norm(v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute norm of tangent vector v at point x."""
    return jnp.linalg.norm(v) / jnp.abs(x[-1])


def _is_in_manifold(x: Float[Array, "dim"]) -> Array:
    """Check if point x lies in the open upper half-space (traceable)."""
    return jnp.logical_and(jnp.all(jnp.isfinite(x)), x[-1] > 0)


def check_point(x: ArrayLike, dim: int | None = None) -> HyperbolicError | None:
    """Check whether ``x`` is a point of the Poincaré half-space model.

    The ambient Euclidean check runs first and its error is returned unchanged.

    Args:
        x: Coordinates to check, shape (dim,)
        dim: Expected number of coordinates, inferred from x if None

    Returns:
        None if ``x`` is valid, otherwise the error describing the violation.
    """
    error = euclidean.check_point(dim, x)
    if error is not None:
        return error
    x = jnp.asarray(x)
    if not bool(x[-1] > 0):
        logger.debug("Half-space check failed for %s: last entry %s", x, x[-1])
        return DomainError(
            float(jnp.linalg.norm(x)),
            f"The point {x} does not lie on the Poincaré half space since its last entry is nonpositive.",
        )
    return None


# ---------------------------------------------------------------------------
# Class-based manifold API
# ---------------------------------------------------------------------------


class PoincareHalfSpace:
    """Poincaré half-space model with automatic dtype casting.

    Args:
        dtype: Target JAX dtype for computations (default: jnp.float32)
    """

    def __init__(self, dtype: jnp.dtype = jnp.float32) -> None:
        self.dtype = dtype

    def _cast(self, x: Array) -> Array:
        """Cast array to target dtype if it's a floating-point array."""
        if isinstance(x, jax.Array) and jnp.issubdtype(x.dtype, jnp.inexact):
            return x.astype(self.dtype)
        return x

    def dist(self, x: Float[Array, "dim"], y: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute geodesic distance between half-space points."""
        return _dist(self._cast(x), self._cast(y))

    def tangent_inner(self, u: Float[Array, "dim"], v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute Riemannian inner product of u and v at x."""
        return _tangent_inner(self._cast(u), self._cast(v), self._cast(x))

    def tangent_norm(self, v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute Riemannian norm of v at x."""
        return _tangent_norm(self._cast(v), self._cast(x))

    def is_in_manifold(self, x: Float[Array, "dim"]) -> Array:
        """Check if x lies in the half-space."""
        return _is_in_manifold(self._cast(x))

    def check_point(self, x: Float[Array, "dim"], dim: int | None = None) -> HyperbolicError | None:
        """Return the error explaining why x is not a half-space point, or None."""
        return check_point(self._cast(x), dim)

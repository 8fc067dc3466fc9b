"""Poincaré ball model of ℍⁿ.

Points are x ∈ ℝⁿ with ||x|| < 1; tangent vectors at x are arbitrary vectors
of ℝⁿ. The metric is conformal to the Euclidean one with conformal factor
λ(x) = 2 / (1 - ||x||²). The ball is the hub model: every conversion between
two other models is routed through it.

All operations work on single points with shape (dim,). Use jax.vmap for
batching:

    >>> import jax.numpy as jnp
    >>> from hypmodels.manifolds.poincare import Poincare
    >>>
    >>> manifold = Poincare(dtype=jnp.float64)
    >>> x = jnp.array([0.1, 0.2])
    >>> y = jnp.array([0.3, 0.4])
    >>> distance = manifold.dist(x, y)

Numerical Precision
-------------------
λ(x) grows without bound towards the boundary ||x|| → 1, so float32 loses
accuracy for points far from the origin. Use Poincare(dtype=jnp.float64) for
near-boundary points.
"""

import logging

import jax
import jax.numpy as jnp
from jaxtyping import Array, ArrayLike, Float

from ..errors import DomainError, HyperbolicError
from ..utils.math_utils import acosh
from . import euclidean

logger = logging.getLogger(__name__)


def _conformal_factor(x: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute conformal factor λ(x) = 2 / (1 - ||x||²).

    Args:
        x: Poincaré ball point, shape (dim,)

    Returns:
        Conformal factor λ(x), scalar
    """
    return 2.0 / (1.0 - jnp.dot(x, x))


def _dist(x: Float[Array, "dim"], y: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute geodesic distance between Poincaré ball points.

    Formula:
        d(x, y) = acosh(1 + 2||x - y||² / ((1 - ||x||²)(1 - ||y||²)))

    Args:
        x: Poincaré ball point, shape (dim,)
        y: Poincaré ball point, shape (dim,)

    Returns:
        Geodesic distance d(x, y), scalar

    References:
        Nickel & Kiela. "Poincaré embeddings for learning hierarchical representations." NeurIPS 2017.
    """
    diff = x - y
    den = (1.0 - jnp.dot(x, x)) * (1.0 - jnp.dot(y, y))
    return acosh(1.0 + 2.0 * jnp.dot(diff, diff) / den)


def _tangent_inner(u: Float[Array, "dim"], v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute inner product of tangent vectors u and v at point x.

    Args:
        u: Tangent vector at x, shape (dim,)
        v: Tangent vector at x, shape (dim,)
        x: Poincaré ball point, shape (dim,)

    Returns:
        Riemannian inner product λ(x)² ⟨u, v⟩, scalar

    References:
        Ganea et al. "Hyperbolic neural networks." NeurIPS 2018.
    """
    lambda_x = _conformal_factor(x)
    return lambda_x**2 * jnp.dot(u, v)


def _tangent_norm(v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
    """Compute norm of tangent vector v at point x."""
    return jnp.abs(_conformal_factor(x)) * jnp.linalg.norm(v)


def _is_in_manifold(x: Float[Array, "dim"]) -> Array:
    """Check if point x lies in the open unit ball (traceable)."""
    return jnp.logical_and(jnp.all(jnp.isfinite(x)), jnp.dot(x, x) < 1.0)


def check_point(x: ArrayLike, dim: int | None = None) -> HyperbolicError | None:
    """Check whether ``x`` is a point of the Poincaré ball model.

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
    norm = float(jnp.linalg.norm(x))
    if not norm < 1.0:
        logger.debug("Poincaré ball check failed for %s: norm %s", x, norm)
        return DomainError(
            norm,
            f"The point {x} does not lie on the Poincaré ball since its norm is not less than 1.",
        )
    return None


# ---------------------------------------------------------------------------
# Class-based manifold API
# ---------------------------------------------------------------------------


class Poincare:
    """Poincaré ball model with automatic dtype casting.

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

    def conformal_factor(self, x: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute conformal factor λ(x) = 2 / (1 - ||x||²)."""
        return _conformal_factor(self._cast(x))

    def dist(self, x: Float[Array, "dim"], y: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute geodesic distance between Poincaré ball points."""
        return _dist(self._cast(x), self._cast(y))

    def tangent_inner(self, u: Float[Array, "dim"], v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute Riemannian inner product of u and v at x."""
        return _tangent_inner(self._cast(u), self._cast(v), self._cast(x))

    def tangent_norm(self, v: Float[Array, "dim"], x: Float[Array, "dim"]) -> Float[Array, ""]:
        """Compute Riemannian norm of v at x."""
        return _tangent_norm(self._cast(v), self._cast(x))

    def is_in_manifold(self, x: Float[Array, "dim"]) -> Array:
        """Check if x lies in the Poincaré ball."""
        return _is_in_manifold(self._cast(x))

    def check_point(self, x: Float[Array, "dim"], dim: int | None = None) -> HyperbolicError | None:
        """Return the error explaining why x is not a Poincaré ball point, or None."""
        return check_point(self._cast(x), dim)

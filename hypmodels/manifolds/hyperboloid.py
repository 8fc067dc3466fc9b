"""Hyperboloid model of ℍⁿ.

Points live in ambient (dim+1)-dimensional Minkowski space.

Convention: -x₀² + ||x_rest||² = -1 with x₀ > 0 (upper sheet, curvature -1).
Tangent vectors v at x satisfy ⟨v, x⟩_L = 0 and the metric is the Minkowski
inner product ⟨u, v⟩_L = -u₀v₀ + ⟨u_rest, v_rest⟩ restricted to the tangent
space.

All functions operate on single points with shape (dim+1,). Use jax.vmap for
batching:

    >>> import jax
    >>> import jax.numpy as jnp
    >>> from hypmodels.manifolds.hyperboloid import Hyperboloid
    >>>
    >>> manifold = Hyperboloid(dtype=jnp.float64)
    >>> x = manifold.create_origin(2)
    >>> y = jnp.array([jnp.sqrt(1.25), 0.5, 0.0])
    >>> distance = manifold.dist(x, y)
"""

import logging

import jax
import jax.numpy as jnp
from jaxtyping import Array, ArrayLike, Float

from ..errors import DomainError, HyperbolicError
from ..utils.math_utils import acosh
from . import euclidean

logger = logging.getLogger(__name__)

# Default absolute tolerance for the hyperboloid constraints
ATOL = 1e-5


def _create_origin(dim: int, dtype=jnp.float32) -> Float[Array, "dim_plus_1"]:
    """Create hyperboloid origin [1, 0, ..., 0]."""
    return jnp.zeros(dim + 1, dtype=dtype).at[0].set(1.0)


def _minkowski_inner(x: Float[Array, "dim_plus_1"], y: Float[Array, "dim_plus_1"]) -> Float[Array, ""]:
    """Compute Minkowski inner product ⟨x, y⟩_L = -x₀y₀ + ⟨x_rest, y_rest⟩.

    Args:
        x: Vector in Minkowski space, shape (dim+1,)
        y: Vector in Minkowski space, shape (dim+1,)

    Returns:
        Minkowski inner product, scalar
    """
    return -x[0] * y[0] + jnp.dot(x[1:], y[1:])


def _dist(x: Float[Array, "dim_plus_1"], y: Float[Array, "dim_plus_1"]) -> Float[Array, ""]:
    """Compute geodesic distance d(x, y) = acosh(-⟨x, y⟩_L) between hyperboloid points.

    References:
        Nickel & Kiela. "Learning continuous hierarchies in the Lorentz model of hyperbolic geometry." ICML 2018.
    """
    res = acosh(-_minkowski_inner(x, y))
    # Zero out if points are identical
    same = jnp.all(jnp.equal(x, y))
    return jnp.where(same, 0.0, res)


def _tangent_inner(
    u: Float[Array, "dim_plus_1"], v: Float[Array, "dim_plus_1"], x: Float[Array, "dim_plus_1"]
) -> Float[Array, ""]:
    """Compute inner product of tangent vectors u and v at point x.

    Uses the Minkowski inner product restricted to tangent space; x only fixes
    which tangent space u and v belong to.
    """
    return _minkowski_inner(u, v)


def _tangent_norm(v: Float[Array, "dim_plus_1"], x: Float[Array, "dim_plus_1"]) -> Float[Array, ""]:
    """Compute norm of tangent vector v at point x."""
    inner = _tangent_inner(v, v, x)
    return jnp.sqrt(jnp.clip(inner, min=0.0))


def _is_in_manifold(x: Float[Array, "dim_plus_1"], atol: float = ATOL) -> Array:
    """Check if point x lies on the upper sheet of the hyperboloid (traceable).

    Returns:
        True if -x₀² + ||x_rest||² = -1 within atol and x₀ > 0
    """
    lorentz_norm = _minkowski_inner(x, x)
    valid_constraint = jnp.isclose(lorentz_norm, -1.0, atol=atol, rtol=0.0)
    return jnp.logical_and(valid_constraint, x[0] > 0)


def _is_in_tangent_space(v: Float[Array, "dim_plus_1"], x: Float[Array, "dim_plus_1"], atol: float = ATOL) -> Array:
    """Check if vector v lies in tangent space at point x, i.e. ⟨v, x⟩_L ≈ 0 (traceable)."""
    return jnp.abs(_minkowski_inner(v, x)) < atol


def check_point(x: ArrayLike, dim: int | None = None, atol: float = ATOL) -> HyperbolicError | None:
    """Check whether ``x`` is a point of the hyperboloid model.

    Args:
        x: Coordinates to check, shape (dim,) in ambient coordinates
        dim: Expected number of ambient coordinates, inferred from x if None
        atol: Absolute tolerance for the Minkowski constraint

    Returns:
        None if ``x`` is valid, otherwise the error describing the violation.
    """
    error = euclidean.check_point(dim, x)
    if error is not None:
        return error
    x = jnp.asarray(x)
    lorentz_norm = float(_minkowski_inner(x, x))
    if not abs(lorentz_norm + 1.0) <= atol:
        logger.debug("Hyperboloid check failed for %s: Minkowski norm %s", x, lorentz_norm)
        return DomainError(
            lorentz_norm,
            f"The point {x} does not lie on the hyperboloid since its Minkowski inner product "
            f"with itself is {lorentz_norm} and not -1.",
        )
    if not bool(x[0] > 0):
        logger.debug("Hyperboloid check failed for %s: first entry %s", x, x[0])
        return DomainError(
            float(x[0]),
            f"The point {x} does not lie on the hyperboloid since its first entry is nonpositive.",
        )
    return None


def check_vector(
    x: Float[Array, "dim_plus_1"], v: Float[Array, "dim_plus_1"], atol: float = ATOL
) -> HyperbolicError | None:
    """Check whether ``v`` is Minkowski-orthogonal to the hyperboloid point ``x``."""
    inner = float(_minkowski_inner(v, x))
    if not abs(inner) <= atol:
        logger.debug("Hyperboloid tangent check failed for %s at %s: ⟨v, x⟩_L = %s", v, x, inner)
        return DomainError(
            inner,
            f"The vector {v} is not a tangent vector at {x} on the hyperboloid since it is not "
            f"orthogonal to the point in the Minkowski inner product.",
        )
    return None


# ---------------------------------------------------------------------------
# Class-based manifold API
# ---------------------------------------------------------------------------


class Hyperboloid:
    """Hyperboloid model with automatic dtype casting.

    Args:
        dtype: Target JAX dtype for computations (default: jnp.float32)
        atol: Absolute tolerance for the hyperboloid constraints
    """

    def __init__(self, dtype: jnp.dtype = jnp.float32, atol: float = ATOL) -> None:
        self.dtype = dtype
        self.atol = atol

    def _cast(self, x: Array) -> Array:
        """Cast array to target dtype if it's a floating-point array."""
        if isinstance(x, jax.Array) and jnp.issubdtype(x.dtype, jnp.inexact):
            return x.astype(self.dtype)
        return x

    def create_origin(self, dim: int) -> Float[Array, "dim_plus_1"]:
        """Create hyperboloid origin [1, 0, ..., 0]."""
        return _create_origin(dim, self.dtype)

    def minkowski_inner(self, x: Float[Array, "dim_plus_1"], y: Float[Array, "dim_plus_1"]) -> Float[Array, ""]:
        """Compute Minkowski inner product ⟨x, y⟩_L = -x₀y₀ + ⟨x_rest, y_rest⟩."""
        return _minkowski_inner(self._cast(x), self._cast(y))

    def dist(self, x: Float[Array, "dim_plus_1"], y: Float[Array, "dim_plus_1"]) -> Float[Array, ""]:
        """Compute geodesic distance between hyperboloid points."""
        return _dist(self._cast(x), self._cast(y))

    def tangent_inner(
        self, u: Float[Array, "dim_plus_1"], v: Float[Array, "dim_plus_1"], x: Float[Array, "dim_plus_1"]
    ) -> Float[Array, ""]:
        """Compute Riemannian inner product of u and v at x."""
        return _tangent_inner(self._cast(u), self._cast(v), self._cast(x))

    def tangent_norm(self, v: Float[Array, "dim_plus_1"], x: Float[Array, "dim_plus_1"]) -> Float[Array, ""]:
        """Compute Riemannian norm of v at x."""
        return _tangent_norm(self._cast(v), self._cast(x))

    def is_in_manifold(self, x: Float[Array, "dim_plus_1"]) -> Array:
        """Check if x lies on the hyperboloid."""
        return _is_in_manifold(self._cast(x), self.atol)

    def is_in_tangent_space(self, v: Float[Array, "dim_plus_1"], x: Float[Array, "dim_plus_1"]) -> Array:
        """Check if v lies in the tangent space at x."""
        return _is_in_tangent_space(self._cast(v), self._cast(x), self.atol)

    def check_point(self, x: Float[Array, "dim_plus_1"], dim: int | None = None) -> HyperbolicError | None:
        """Return the error explaining why x is not a hyperboloid point, or None."""
        return check_point(self._cast(x), dim, self.atol)

"""Ambient Euclidean space ℝⁿ checks.

Every model of ℍⁿ stores its coordinates in an ambient Euclidean space
(ℝⁿ for the Poincaré models, ℝⁿ⁺¹ for the hyperboloid). The model-specific
checks first ask this module whether the coordinates form a real vector of
the right length and only then test their own geometric constraint.

Checks are eager: they materialize Python booleans and cannot be traced by
``jax.jit``.
"""

import logging

import jax.numpy as jnp
from jaxtyping import Array, ArrayLike

from ..errors import DimensionMismatchError, DomainError, HyperbolicError

logger = logging.getLogger(__name__)


def check_point(dim: int | None, x: ArrayLike) -> HyperbolicError | None:
    """Check whether ``x`` is a point of ℝ^dim.

    Args:
        dim: Expected number of coordinates, inferred from x if None
        x: Coordinates to check

    Returns:
        None if ``x`` is a finite real vector of shape (dim,), otherwise a
        :class:`DimensionMismatchError` (wrong shape, non-numeric or non-real
        entries) or a :class:`DomainError` (non-finite entries).
    """
    try:
        x = jnp.asarray(x)
    except (TypeError, ValueError) as e:
        logger.debug("Euclidean check failed: %r is not a numeric array (%s)", x, e)
        return DimensionMismatchError(
            (dim,),
            None,
            message=f"The point {x!r} does not lie in ℝ^{dim or 'n'} since it is not a numeric array.",
        )
    if dim is None:
        dim = infer_dim(x)
    if dim < 1 or x.shape != (dim,):
        logger.debug("Euclidean check failed: expected shape (%d,), got %s", dim, x.shape)
        return DimensionMismatchError((dim,), x.shape)
    if jnp.issubdtype(x.dtype, jnp.complexfloating) or x.dtype == jnp.bool_:
        logger.debug("Euclidean check failed: non-real dtype %s", x.dtype)
        return DimensionMismatchError(
            (dim,),
            x.shape,
            message=f"The point {x} does not lie in ℝ^{dim} since its entries are of type {x.dtype}.",
        )
    if not bool(jnp.all(jnp.isfinite(x))):
        logger.debug("Euclidean check failed: non-finite entries in %s", x)
        return DomainError(
            x,
            f"The point {x} does not lie in ℝ^{dim} since it has non-finite entries.",
        )
    return None


def infer_dim(x: Array) -> int:
    """Length of the leading axis, used when the caller gives no dimension."""
    return x.shape[0] if x.ndim else 0

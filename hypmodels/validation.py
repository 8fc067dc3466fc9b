"""Validity checks for points and tangent vectors in every model.

Checks return ``None`` for valid input and an error instance otherwise; they
never raise for invalid coordinates. Each model check first runs the ambient
Euclidean check (shape, real entries, finiteness) and returns its error
unchanged before testing the model's own constraint:

    - Poincaré half space: last coordinate > 0
    - Poincaré ball: Euclidean norm < 1
    - Hyperboloid: ⟨x, x⟩_L = -1 within ``atol`` and x₀ > 0

    >>> from hypmodels.points import ModelTag
    >>> from hypmodels.validation import check_point
    >>> check_point(ModelTag.POINCARE_HALF_SPACE, [0.0, 1.0]) is None
    True
    >>> check_point(ModelTag.POINCARE_HALF_SPACE, [0.0, 0.0]).message
    'The point [0. 0.] does not lie on the Poincaré half space since its last entry is nonpositive.'

The checks materialize Python booleans, so they run eagerly and cannot be
traced by ``jax.jit``; use the ``_is_in_manifold`` predicates of the
:mod:`hypmodels.manifolds` modules inside traced code.
"""

import logging
from collections.abc import Callable

import jax.numpy as jnp
from jaxtyping import ArrayLike

from .errors import HyperbolicError, ModelMismatchError
from .manifolds import euclidean, halfspace, hyperboloid, poincare
from .points import ModelTag, Point, TangentVector

logger = logging.getLogger(__name__)

PointCheck = Callable[[ArrayLike, int | None, float], HyperbolicError | None]

_POINT_CHECKS: dict[ModelTag, PointCheck] = {
    ModelTag.POINCARE_BALL: lambda x, dim, atol: poincare.check_point(x, dim),
    ModelTag.POINCARE_HALF_SPACE: lambda x, dim, atol: halfspace.check_point(x, dim),
    ModelTag.HYPERBOLOID: lambda x, dim, atol: hyperboloid.check_point(x, dim, atol),
}


def _unpack(model: ModelTag | Point | TangentVector, coordinates: ArrayLike | None, what: str):
    """Resolve ``(model, coordinates)`` from either a tag plus raw values or a tagged value."""
    if isinstance(model, (Point, TangentVector)):
        if coordinates is not None:
            raise TypeError(f"Pass either a tagged {what} or a model tag with coordinates, not both")
        return model.model, model.value
    if coordinates is None:
        raise TypeError(f"Missing coordinates of the {what} to check")
    return ModelTag(model), coordinates


def check_point(
    model: ModelTag | Point,
    coordinates: ArrayLike | None = None,
    *,
    dim: int | None = None,
    atol: float = hyperboloid.ATOL,
) -> HyperbolicError | None:
    """Check whether coordinates form a valid point of a model.

    Args:
        model: Model tag, or a tagged :class:`Point` (then omit ``coordinates``)
        coordinates: Raw coordinates of the point
        dim: Expected number of coordinates, inferred from the input if None
        atol: Tolerance for the hyperboloid constraint

    Returns:
        None if the point is valid, otherwise the error describing the first
        violated constraint.
    """
    model, coordinates = _unpack(model, coordinates, "point")
    return _POINT_CHECKS[model](coordinates, dim, atol)


def check_vector(
    model: ModelTag | Point,
    base_point: ArrayLike | TangentVector,
    vector: ArrayLike | None = None,
    *,
    atol: float = hyperboloid.ATOL,
) -> HyperbolicError | None:
    """Check whether a vector is a valid tangent vector at a base point.

    Call either as ``check_vector(model, p, X)`` with raw coordinates or as
    ``check_vector(p, X)`` with a tagged point and tagged vector.

    The base point is checked first. The vector must then have the base
    point's dimension and, on the hyperboloid, be Minkowski-orthogonal to it.

    Returns:
        None if valid, otherwise the error describing the violation.
    """
    if isinstance(model, Point):
        point, tangent = model, base_point
        if not isinstance(tangent, TangentVector):
            raise TypeError(f"Expected a TangentVector, got {type(tangent).__name__}")
        if point.model is not tangent.model:
            return ModelMismatchError(
                f"Tangent vector in the {tangent.model} model cannot be attached to a point in the {point.model} model",
                {"point": point.model.name, "vector": tangent.model.name},
            )
        model, base_point, vector = point.model, point.value, tangent.value
    else:
        model = ModelTag(model)
        if vector is None:
            raise TypeError("Missing coordinates of the tangent vector to check")

    error = check_point(model, base_point, atol=atol)
    if error is not None:
        return error
    base_point = jnp.asarray(base_point)
    error = euclidean.check_point(base_point.shape[0], vector)
    if error is not None:
        logger.debug("Tangent vector %s does not match base point %s", vector, base_point)
        return error
    if model is ModelTag.HYPERBOLOID:
        return hyperboloid.check_vector(base_point, jnp.asarray(vector), atol)
    return None


def is_point(model: ModelTag | Point, coordinates: ArrayLike | None = None, **kwargs) -> bool:
    """Return whether :func:`check_point` finds no violation."""
    return check_point(model, coordinates, **kwargs) is None

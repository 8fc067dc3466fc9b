"""Riemannian inner products and geodesic distances on tagged values.

Each model evaluates its own metric in its native coordinates; this module
dispatches on the model tag. Values converted between models with
:mod:`hypmodels.conversions` give the same distances and inner products in
every model.

    >>> from hypmodels.metrics import distance
    >>> from hypmodels.points import halfspace_point
    >>> distance(halfspace_point([0.0, 1.0]), halfspace_point([0.0, 2.0]))  # log(2)
    Array(0.6931472, dtype=float32)
"""

from collections.abc import Callable

from jaxtyping import Array, Float

from .errors import ModelMismatchError
from .manifolds import halfspace, hyperboloid, poincare
from .points import ModelTag, Point, TangentVector

DISTANCES: dict[ModelTag, Callable[..., Float[Array, ""]]] = {
    ModelTag.POINCARE_BALL: poincare._dist,
    ModelTag.POINCARE_HALF_SPACE: halfspace._dist,
    ModelTag.HYPERBOLOID: hyperboloid._dist,
}

INNER_PRODUCTS: dict[ModelTag, Callable[..., Float[Array, ""]]] = {
    ModelTag.POINCARE_BALL: poincare._tangent_inner,
    ModelTag.POINCARE_HALF_SPACE: halfspace._tangent_inner,
    ModelTag.HYPERBOLOID: hyperboloid._tangent_inner,
}

NORMS: dict[ModelTag, Callable[..., Float[Array, ""]]] = {
    ModelTag.POINCARE_BALL: poincare._tangent_norm,
    ModelTag.POINCARE_HALF_SPACE: halfspace._tangent_norm,
    ModelTag.HYPERBOLOID: hyperboloid._tangent_norm,
}


def _same_model(*values) -> ModelTag:
    model = values[0].model
    for value in values[1:]:
        if value.model is not model:
            raise ModelMismatchError(
                f"Cannot combine values from the {model} and {value.model} models; convert them first",
                {"models": [v.model.name for v in values]},
            )
    return model


def distance(p: Point, q: Point) -> Float[Array, ""]:
    """Geodesic distance between two points of the same model.

    In the half-space model:
        d(p, q) = acosh(1 + ||p - q||² / (2 pₙ qₙ))

    Raises:
        ModelMismatchError: If p and q are tagged with different models.
    """
    model = _same_model(p, q)
    return DISTANCES[model](p.value, q.value)


def inner(p: Point, X: TangentVector, Y: TangentVector) -> Float[Array, ""]:
    """Riemannian inner product of tangent vectors X and Y at p.

    In the half-space model:
        g_p(X, Y) = ⟨X, Y⟩ / pₙ²

    Raises:
        ModelMismatchError: If p, X and Y are not all tagged with the same model.
    """
    model = _same_model(p, X, Y)
    return INNER_PRODUCTS[model](X.value, Y.value, p.value)


def norm(p: Point, X: TangentVector) -> Float[Array, ""]:
    """Riemannian norm of the tangent vector X at p."""
    model = _same_model(p, X)
    return NORMS[model](X.value, p.value)

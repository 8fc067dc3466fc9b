"""Conversions of points and tangent vectors between models of ℍⁿ.

The Poincaré ball is the hub: direct maps exist only between the ball and
each other model (see :mod:`hypmodels.manifolds.isometry_mappings`). Every
other pair is converted by composing maps along the route listed in
``ROUTES``, so the half-space and hyperboloid never get a formula of their
own that could drift from the composed one.

    >>> from hypmodels.conversions import convert, convert_tangent
    >>> from hypmodels.points import ModelTag, ball_point, ball_vector
    >>>
    >>> p = ball_point([0.0, 0.0])
    >>> convert(ModelTag.POINCARE_HALF_SPACE, p).value
    Array([0., 1.], dtype=float32)
    >>> X = ball_vector([1.0, 0.0])
    >>> convert_tangent(ModelTag.HYPERBOLOID, p, X).value
    Array([0., 2., 0.], dtype=float32)

Raw coordinates (anything that is not a tagged :class:`Point`) are read as
Poincaré ball points. Tangent vectors are converted with the push-forward of
the point map, which needs the base point in the vector's own model.

Conversions do not validate their input: ball boundary points and other
singular inputs yield non-finite coordinates.

All functions are pure and can be traced by ``jax.jit`` and ``jax.vmap`` as
long as the target model is static.
"""

import itertools
import logging
from collections.abc import Callable

import jax.numpy as jnp
from jaxtyping import Array, ArrayLike, Float

from .errors import ModelMismatchError, UnsupportedConversionError
from .manifolds import isometry_mappings
from .points import ModelTag, Point, TangentVector, ball_point, make_vector

logger = logging.getLogger(__name__)

BALL = ModelTag.POINCARE_BALL
HALF_SPACE = ModelTag.POINCARE_HALF_SPACE
HYPERBOLOID = ModelTag.HYPERBOLOID

PointMap = Callable[[Float[Array, "n"]], Float[Array, "m"]]
TangentMap = Callable[[Float[Array, "n"], Float[Array, "n"]], Float[Array, "m"]]

# Direct maps, one per edge of the hub
POINT_MAPS: dict[tuple[ModelTag, ModelTag], PointMap] = {
    (BALL, HALF_SPACE): isometry_mappings.poincare_to_halfspace,
    (HALF_SPACE, BALL): isometry_mappings.halfspace_to_poincare,
    (BALL, HYPERBOLOID): isometry_mappings.poincare_to_hyperboloid,
    (HYPERBOLOID, BALL): isometry_mappings.hyperboloid_to_poincare,
}

TANGENT_MAPS: dict[tuple[ModelTag, ModelTag], TangentMap] = {
    (BALL, HALF_SPACE): isometry_mappings.poincare_to_halfspace_tangent,
    (HALF_SPACE, BALL): isometry_mappings.halfspace_to_poincare_tangent,
    (BALL, HYPERBOLOID): isometry_mappings.poincare_to_hyperboloid_tangent,
    (HYPERBOLOID, BALL): isometry_mappings.hyperboloid_to_poincare_tangent,
}

# Sequence of models visited for each (source, target) pair
ROUTES: dict[tuple[ModelTag, ModelTag], tuple[ModelTag, ...]] = {
    (BALL, BALL): (BALL,),
    (BALL, HALF_SPACE): (BALL, HALF_SPACE),
    (BALL, HYPERBOLOID): (BALL, HYPERBOLOID),
    (HALF_SPACE, HALF_SPACE): (HALF_SPACE,),
    (HALF_SPACE, BALL): (HALF_SPACE, BALL),
    (HALF_SPACE, HYPERBOLOID): (HALF_SPACE, BALL, HYPERBOLOID),
    (HYPERBOLOID, HYPERBOLOID): (HYPERBOLOID,),
    (HYPERBOLOID, BALL): (HYPERBOLOID, BALL),
    (HYPERBOLOID, HALF_SPACE): (HYPERBOLOID, BALL, HALF_SPACE),
}


def _validate_routes() -> None:
    """Fail at import if a model pair has no route or a route uses a missing map."""
    for source, target in itertools.product(ModelTag, repeat=2):
        route = ROUTES.get((source, target))
        if route is None or route[0] is not source or route[-1] is not target:
            raise RuntimeError(f"No valid conversion route from {source.name} to {target.name}")
        for hop in zip(route[:-1], route[1:]):
            if hop not in POINT_MAPS or hop not in TANGENT_MAPS:
                raise RuntimeError(f"Conversion route {route} uses missing map {hop}")


_validate_routes()


def _target(model) -> ModelTag:
    try:
        return ModelTag(model)
    except ValueError:
        raise UnsupportedConversionError(f"Unknown target model: {model!r}") from None


def _as_point(point: Point | ArrayLike) -> Point:
    if isinstance(point, Point):
        return point
    if isinstance(point, TangentVector):
        raise UnsupportedConversionError("Expected a point, got a TangentVector; use convert_tangent")
    return ball_point(point)


def convert_array(source: ModelTag, target: ModelTag, x: Float[Array, "n"]) -> Float[Array, "m"]:
    """Convert raw point coordinates from ``source`` to ``target`` along their route."""
    route = ROUTES[(source, target)]
    if len(route) == 1:
        return jnp.array(x, copy=True)
    for hop in zip(route[:-1], route[1:]):
        x = POINT_MAPS[hop](x)
    return x


def convert_tangent_array(
    source: ModelTag, target: ModelTag, x: Float[Array, "n"], v: Float[Array, "n"]
) -> Float[Array, "m"]:
    """Push raw tangent coordinates ``v`` at ``x`` from ``source`` to ``target``."""
    route = ROUTES[(source, target)]
    if len(route) == 1:
        return jnp.array(v, copy=True)
    for hop in zip(route[:-1], route[1:]):
        # The push-forward needs the base point in the model the vector is currently in
        v = TANGENT_MAPS[hop](x, v)
        x = POINT_MAPS[hop](x)
    return v


def convert(target_model: ModelTag, point: Point | ArrayLike) -> Point:
    """Represent a point in another model.

    Args:
        target_model: Model to convert to
        point: Tagged point, or raw coordinates read as a Poincaré ball point

    Returns:
        New point tagged with ``target_model``

    Raises:
        UnsupportedConversionError: If the target is not a known model or the
            input is a tangent vector.
    """
    target = _target(target_model)
    point = _as_point(point)
    logger.debug("Converting point via %s", ROUTES[(point.model, target)])
    return Point(convert_array(point.model, target, point.value), target)


def convert_tangent(
    target_model: ModelTag,
    base_point: Point | ArrayLike,
    vector: TangentVector | ArrayLike,
) -> TangentVector:
    """Represent a tangent vector in another model.

    The vector is transported by the push-forward of the point conversion,
    evaluated at ``base_point``. Both must be given in the same source model.

    Args:
        target_model: Model to convert to
        base_point: Point the vector is attached to; raw coordinates are read
            as a Poincaré ball point
        vector: Tangent vector at ``base_point``; raw coordinates are read in
            the base point's model

    Returns:
        New tangent vector tagged with ``target_model``, attached to
        ``convert(target_model, base_point)``

    Raises:
        ModelMismatchError: If point and vector are tagged with different models.
        UnsupportedConversionError: If the target is not a known model.
    """
    target = _target(target_model)
    base_point = _as_point(base_point)
    if not isinstance(vector, TangentVector):
        vector = make_vector(base_point.model, vector)
    if vector.model is not base_point.model:
        raise ModelMismatchError(
            f"Tangent vector in the {vector.model} model cannot be attached to a point in the {base_point.model} model",
            {"point": base_point.model.name, "vector": vector.model.name},
        )
    logger.debug("Converting tangent vector via %s", ROUTES[(base_point.model, target)])
    return TangentVector(convert_tangent_array(base_point.model, target, base_point.value, vector.value), target)


def convert_pair(
    target_model: ModelTag,
    base_point: Point | ArrayLike,
    vector: TangentVector | ArrayLike,
) -> tuple[Point, TangentVector]:
    """Convert a point and a tangent vector attached to it in one call.

    Returns:
        ``(convert(target_model, base_point), convert_tangent(target_model, base_point, vector))``
    """
    return convert(target_model, base_point), convert_tangent(target_model, base_point, vector)

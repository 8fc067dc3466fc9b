"""Model-tagged point and tangent vector representations.

A :class:`Point` or :class:`TangentVector` is a 1-D JAX array plus the
:class:`ModelTag` naming the model of ℍⁿ its coordinates live in. Both are
immutable ``flax.struct`` dataclasses: the coordinates are a pytree leaf and
the tag is static, so tagged values pass through ``jax.jit`` and ``jax.vmap``.

    >>> from hypmodels.points import ModelTag, ball_point
    >>> p = ball_point([0.1, 0.2])
    >>> p.model is ModelTag.POINCARE_BALL
    True

Tangent vectors do not store their base point; it is passed alongside the
vector to every operation that needs it.
"""

import enum

import jax.numpy as jnp
from flax import struct
from jaxtyping import Array, ArrayLike, Float


class ModelTag(enum.Enum):
    """Coordinate models of the hyperbolic space ℍⁿ."""

    POINCARE_BALL = "poincare_ball"
    POINCARE_HALF_SPACE = "poincare_half_space"
    HYPERBOLOID = "hyperboloid"

    def ambient_dim(self, dim: int) -> int:
        """Number of coordinates representing a point of ℍ^dim in this model."""
        if self is ModelTag.HYPERBOLOID:
            return dim + 1
        return dim

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ModelTag.POINCARE_BALL: "Poincaré ball",
    ModelTag.POINCARE_HALF_SPACE: "Poincaré half space",
    ModelTag.HYPERBOLOID: "hyperboloid",
}


@struct.dataclass
class Point:
    """A point of ℍⁿ given in the coordinates of ``model``."""

    value: Float[Array, "n"]
    model: ModelTag = struct.field(pytree_node=False)

    @property
    def dim(self) -> int:
        """Number of stored coordinates."""
        return self.value.shape[-1]

    def __repr__(self) -> str:
        return f"Point({self.model.name}, {self.value})"


@struct.dataclass
class TangentVector:
    """A tangent vector in the coordinates of ``model``, at an external base point."""

    value: Float[Array, "n"]
    model: ModelTag = struct.field(pytree_node=False)

    @property
    def dim(self) -> int:
        """Number of stored coordinates."""
        return self.value.shape[-1]

    def __repr__(self) -> str:
        return f"TangentVector({self.model.name}, {self.value})"


def _as_array(value: ArrayLike) -> Float[Array, "n"]:
    # jnp.array copies, so the tagged value never aliases caller-owned buffers
    arr = jnp.array(value)
    if not jnp.issubdtype(arr.dtype, jnp.inexact):
        arr = arr.astype(jnp.result_type(float))
    return arr


def ball_point(value: ArrayLike) -> Point:
    """Tag coordinates as a Poincaré ball point."""
    return Point(_as_array(value), ModelTag.POINCARE_BALL)


def halfspace_point(value: ArrayLike) -> Point:
    """Tag coordinates as a Poincaré half-space point."""
    return Point(_as_array(value), ModelTag.POINCARE_HALF_SPACE)


def hyperboloid_point(value: ArrayLike) -> Point:
    """Tag coordinates as a hyperboloid point."""
    return Point(_as_array(value), ModelTag.HYPERBOLOID)


def ball_vector(value: ArrayLike) -> TangentVector:
    """Tag coordinates as a Poincaré ball tangent vector."""
    return TangentVector(_as_array(value), ModelTag.POINCARE_BALL)


def halfspace_vector(value: ArrayLike) -> TangentVector:
    """Tag coordinates as a Poincaré half-space tangent vector."""
    return TangentVector(_as_array(value), ModelTag.POINCARE_HALF_SPACE)


def hyperboloid_vector(value: ArrayLike) -> TangentVector:
    """Tag coordinates as a hyperboloid tangent vector."""
    return TangentVector(_as_array(value), ModelTag.HYPERBOLOID)


def make_point(model: ModelTag, value: ArrayLike) -> Point:
    """Tag coordinates as a point of ``model``."""
    return Point(_as_array(value), ModelTag(model))


def make_vector(model: ModelTag, value: ArrayLike) -> TangentVector:
    """Tag coordinates as a tangent vector of ``model``."""
    return TangentVector(_as_array(value), ModelTag(model))

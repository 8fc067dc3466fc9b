"""The hyperbolic space ℍⁿ as a single object across all models.

:class:`Hyperbolic` bundles validity checks, conversions and metrics for a
fixed dimension n. It casts array values to the configured dtype and, with
``check_inputs`` enabled, validates every tagged input and raises the error
the check returns.

    >>> import jax.numpy as jnp
    >>> from hypmodels import Hyperbolic, ModelTag, RuntimeConfig, ball_point
    >>>
    >>> M = Hyperbolic(2, RuntimeConfig(dtype=jnp.float64, check_inputs=True))
    >>> q = M.convert(ModelTag.POINCARE_HALF_SPACE, ball_point([0.0, 0.0]))
    >>> M.distance(q, q)
    Array(0., dtype=float64)
"""

import logging

import jax
import jax.numpy as jnp
from jaxtyping import Array, Float

from . import conversions, metrics, validation
from .config import DEFAULT_CONFIG, RuntimeConfig
from .errors import HyperbolicError
from .points import ModelTag, Point, TangentVector

logger = logging.getLogger(__name__)


class Hyperbolic:
    """Hyperbolic space ℍⁿ of curvature -1 in any of its models.

    Args:
        dim: Manifold dimension n (ball and half-space points have n
            coordinates, hyperboloid points n+1)
        config: Runtime configuration (dtype, tolerance, input checking)
    """

    def __init__(self, dim: int, config: RuntimeConfig = DEFAULT_CONFIG) -> None:
        if dim < 1:
            raise ValueError(f"Manifold dimension must be at least 1, got {dim}")
        self.dim = dim
        self.config = config

    def __repr__(self) -> str:
        return f"Hyperbolic({self.dim})"

    @property
    def dtype(self) -> jnp.dtype:
        return self.config.dtype

    def _cast(self, x: Array) -> Array:
        """Cast array to target dtype if it's a floating-point array."""
        if isinstance(x, jax.Array) and jnp.issubdtype(x.dtype, jnp.inexact):
            return x.astype(self.dtype)
        return x

    def _cast_point(self, p: Point) -> Point:
        return p.replace(value=self._cast(p.value))

    def _cast_vector(self, X: TangentVector) -> TangentVector:
        return X.replace(value=self._cast(X.value))

    def _raise_if_invalid(self, error: HyperbolicError | None) -> None:
        if error is not None:
            logger.debug("Rejecting input on %r: %s", self, error)
            raise error

    def _checked_point(self, p: Point) -> Point:
        p = self._cast_point(p)
        if self.config.check_inputs:
            self._raise_if_invalid(self.check_point(p))
        return p

    def _checked_pair(self, p: Point, X: TangentVector) -> tuple[Point, TangentVector]:
        p, X = self._cast_point(p), self._cast_vector(X)
        if self.config.check_inputs:
            self._raise_if_invalid(self.check_vector(p, X))
        return p, X

    # -- Validation ------------------------------------------------------
    def check_point(self, p: Point) -> HyperbolicError | None:
        """Return the error explaining why p is not a point of this manifold, or None."""
        return validation.check_point(p, dim=p.model.ambient_dim(self.dim), atol=self.config.atol)

    def check_vector(self, p: Point, X: TangentVector) -> HyperbolicError | None:
        """Return the error explaining why X is not a tangent vector at p, or None."""
        error = self.check_point(p)
        if error is not None:
            return error
        return validation.check_vector(p, X, atol=self.config.atol)

    def is_point(self, p: Point) -> bool:
        """Return whether p is a valid point of this manifold."""
        return self.check_point(p) is None

    # -- Conversions -----------------------------------------------------
    def convert(self, target_model: ModelTag, p: Point) -> Point:
        """Represent p in ``target_model``."""
        return conversions.convert(target_model, self._checked_point(p))

    def convert_tangent(self, target_model: ModelTag, p: Point, X: TangentVector) -> TangentVector:
        """Represent the tangent vector X at p in ``target_model``."""
        p, X = self._checked_pair(p, X)
        return conversions.convert_tangent(target_model, p, X)

    def convert_pair(self, target_model: ModelTag, p: Point, X: TangentVector) -> tuple[Point, TangentVector]:
        """Represent p and the tangent vector X at p in ``target_model``."""
        p, X = self._checked_pair(p, X)
        return conversions.convert_pair(target_model, p, X)

    # -- Metric ----------------------------------------------------------
    def distance(self, p: Point, q: Point) -> Float[Array, ""]:
        """Geodesic distance between p and q."""
        return metrics.distance(self._checked_point(p), self._checked_point(q))

    def inner(self, p: Point, X: TangentVector, Y: TangentVector) -> Float[Array, ""]:
        """Riemannian inner product of X and Y at p."""
        p, X = self._checked_pair(p, X)
        _, Y = self._checked_pair(p, Y)
        return metrics.inner(p, X, Y)

    def norm(self, p: Point, X: TangentVector) -> Float[Array, ""]:
        """Riemannian norm of X at p."""
        p, X = self._checked_pair(p, X)
        return metrics.norm(p, X)

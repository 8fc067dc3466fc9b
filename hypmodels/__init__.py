"""hypmodels: interoperable models of hyperbolic space in JAX.

Points and tangent vectors of ℍⁿ in the Poincaré ball, Poincaré half-space
and hyperboloid models, exact conversions between them, and each model's
Riemannian metric.

Main features:
- Model-tagged points and tangent vectors (``Point``, ``TangentVector``)
- Point conversions and tangent push-forwards, routed through the Poincaré ball
- Geodesic distance and inner product in every model
- Validity checks returning descriptive errors

Convention:
    - Curvature is fixed to -1
    - Hyperboloid constraint: -x_0^2 + x_1^2 + ... + x_n^2 = -1, x_0 > 0
    - Half-space constraint: x_n > 0
    - Ball constraint: ||x|| < 1
"""

from . import config, conversions, errors, manifolds, metrics, points, validation
from .config import RuntimeConfig, create_config
from .conversions import convert, convert_pair, convert_tangent
from .errors import (
    DimensionMismatchError,
    DomainError,
    HyperbolicError,
    ModelMismatchError,
    UnsupportedConversionError,
)
from .hyperbolic import Hyperbolic
from .manifolds.euclidean import check_point as check_euclidean
from .metrics import distance, inner, norm
from .points import (
    ModelTag,
    Point,
    TangentVector,
    ball_point,
    ball_vector,
    halfspace_point,
    halfspace_vector,
    hyperboloid_point,
    hyperboloid_vector,
    make_point,
    make_vector,
)
from .validation import check_point, check_vector, is_point

__all__ = [
    # Representations
    "ModelTag",
    "Point",
    "TangentVector",
    "ball_point",
    "ball_vector",
    "halfspace_point",
    "halfspace_vector",
    "hyperboloid_point",
    "hyperboloid_vector",
    "make_point",
    "make_vector",
    # Validation
    "check_euclidean",
    "check_point",
    "check_vector",
    "is_point",
    # Conversions
    "convert",
    "convert_pair",
    "convert_tangent",
    # Metric
    "distance",
    "inner",
    "norm",
    # Classes
    "Hyperbolic",
    "RuntimeConfig",
    "create_config",
    # Errors
    "DimensionMismatchError",
    "DomainError",
    "HyperbolicError",
    "ModelMismatchError",
    "UnsupportedConversionError",
    # Modules
    "config",
    "conversions",
    "errors",
    "manifolds",
    "metrics",
    "points",
    "validation",
]

__version__ = "0.1.0"

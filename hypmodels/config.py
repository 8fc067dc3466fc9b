"""Runtime configuration for hypmodels."""

import jax.numpy as jnp
from flax import struct

_SUPPORTED_DTYPES = (jnp.dtype(jnp.float32), jnp.dtype(jnp.float64))


@struct.dataclass
class RuntimeConfig:
    """Immutable runtime configuration for model conversions and metrics.

    Passed explicitly to :class:`hypmodels.hyperbolic.Hyperbolic`; there is no
    global configuration state.
    """

    # Target dtype for array values handed to a Hyperbolic instance
    dtype: jnp.dtype = struct.field(pytree_node=False, default=jnp.float32)

    # Absolute tolerance for the hyperboloid constraints ⟨x,x⟩_L = -1 and ⟨x,v⟩_L = 0
    atol: float = struct.field(pytree_node=False, default=1e-5)

    # Validate tagged inputs before every operation and raise on failure
    check_inputs: bool = struct.field(pytree_node=False, default=False)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if jnp.dtype(self.dtype) not in _SUPPORTED_DTYPES:
            raise ValueError(f"Unsupported dtype: {self.dtype}. Use float32 or float64.")
        if self.atol <= 0:
            raise ValueError(f"atol must be positive, got {self.atol}")

    @property
    def eps(self) -> float:
        """Machine epsilon for the current dtype."""
        return float(jnp.finfo(self.dtype).eps)

    def with_dtype(self, dtype: str | jnp.dtype) -> "RuntimeConfig":
        """Create a new config with a different dtype."""
        if isinstance(dtype, str):
            dtype = getattr(jnp, dtype)
        return self.replace(dtype=dtype)

    def with_tolerances(self, atol: float | None = None) -> "RuntimeConfig":
        """Create a new config with a different hyperboloid tolerance."""
        if atol is None:
            return self
        return self.replace(atol=atol)


DEFAULT_CONFIG = RuntimeConfig()
FLOAT64_CONFIG = RuntimeConfig(dtype=jnp.float64, atol=1e-8)
CHECKED_CONFIG = RuntimeConfig(check_inputs=True)


def create_config(
    dtype: str | jnp.dtype = jnp.float32,
    **kwargs,
) -> RuntimeConfig:
    """Create a runtime config with optional overrides.

    Args:
        dtype: Data type (float32 or float64)
        **kwargs: Additional config fields to override (``atol``, ``check_inputs``)

    Returns:
        RuntimeConfig instance
    """
    if isinstance(dtype, str):
        dtype = getattr(jnp, dtype)
    config = FLOAT64_CONFIG if jnp.dtype(dtype) == jnp.dtype(jnp.float64) else DEFAULT_CONFIG
    if kwargs:
        config = config.replace(**kwargs)
    return config

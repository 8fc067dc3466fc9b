"""Math utils functions for hyperbolic operations with numerically stable limits."""

import jax.numpy as jnp
from jaxtyping import Array, Float


def acosh(x: Float[Array, "..."]) -> Float[Array, "..."]:
    """Inverse hyperbolic cosine with domain clamping. Domain=[1, inf).

    Rounding can push arguments that are mathematically >= 1 slightly below 1
    (e.g. coincident points); clamping returns 0 there instead of NaN.

    Args:
        x: Input array of any shape

    Returns:
        acosh(x) with domain protection (clamps x >= 1.0)
    """
    x = jnp.clip(x, 1.0, None)
    return jnp.acosh(x)


"""Global fixtures shared by all hypmodels tests."""

import jax
import jax.numpy as jnp
import pytest

# Enable float64 support in JAX for numerical precision
jax.config.update("jax_enable_x64", True)


@pytest.fixture(params=[1, 2, 3, 5])
def dim(request: pytest.FixtureRequest) -> int:
    """Manifold dimension n of ℍⁿ."""
    return request.param


@pytest.fixture
def tolerance() -> tuple[float, float]:
    """Tolerance for float64 comparisons."""
    return (1e-9, 1e-9)  # (atol, rtol)


@pytest.fixture
def ball_points(dim: int) -> jnp.ndarray:
    """Random Poincaré ball points kept away from the boundary, shape (20, dim)."""
    rng = jax.random.PRNGKey(42)
    samples = jax.random.normal(rng, (20, dim), dtype=jnp.float64)
    norms = jnp.linalg.norm(samples, axis=1, keepdims=True)
    radii = jax.random.uniform(jax.random.PRNGKey(7), (20, 1), dtype=jnp.float64, maxval=0.9)
    points = samples / norms * radii
    assert jnp.all(jnp.linalg.norm(points, axis=1) < 1.0), "Generated Poincaré points are invalid"
    return points


@pytest.fixture
def ball_vectors(dim: int) -> jnp.ndarray:
    """Random tangent vectors for the Poincaré ball, shape (20, dim)."""
    rng = jax.random.PRNGKey(123)
    return jax.random.normal(rng, (20, dim), dtype=jnp.float64)

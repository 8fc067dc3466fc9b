"""Isometry mappings between models of hyperbolic space.

This module implements the distance-preserving maps between the Poincaré ball
and the two other models, together with their push-forwards (differentials)
that carry tangent vectors along. All functions operate on raw single points
and vectors and use JAX's vmap for batch operations. Conversions between the
half-space and the hyperboloid are compositions of these maps through the
ball; see :mod:`hypmodels.conversions`.

Supported Models:
    - Hyperboloid model: points in R^(n+1) satisfying ⟨x,x⟩_L = -1, x₀ > 0
    - Poincaré ball model: points in R^n with ||y|| < 1
    - Poincaré half-space model: points in R^n with last coordinate > 0

Writing y = (ỹ, yₙ) for the split of a ball point into its first n-1
coordinates ("trunk") and its last coordinate, the ball to half-space map is
the inversion

    π(y) = (2ỹ, 1 - ||ỹ||² - yₙ²) / (||ỹ||² + (yₙ - 1)²),

which sends the ball centre to (0, ..., 0, 1) and the boundary point
(0, ..., 0, 1) to infinity.

Singularities
-------------
No map guards its denominator. Boundary points of the ball, points at
infinity of the half-space, or the lower sheet x₀ = -1 of the hyperboloid
produce non-finite coordinates. Validate inputs with
:func:`hypmodels.validation.check_point` when that matters.

JIT Compilation & Batching
---------------------------
    >>> import jax
    >>> import jax.numpy as jnp
    >>> from hypmodels.manifolds import isometry_mappings
    >>>
    >>> y = jnp.array([0.1, 0.2])
    >>> z = isometry_mappings.poincare_to_halfspace(y)
    >>>
    >>> y_batch = jnp.array([[0.1, 0.2], [0.3, -0.4]])
    >>> z_batch = jax.vmap(isometry_mappings.poincare_to_halfspace)(y_batch)

References:
    Wikipedia: Poincaré half-plane model, Hyperboloid model - Relation to other models
"""

import jax.numpy as jnp
from jaxtyping import Array, Float


def hyperboloid_to_poincare(x: Float[Array, "dim_plus_1"]) -> Float[Array, "dim"]:
    """Convert hyperboloid point to Poincaré ball via stereographic projection.

    Projects the hyperboloid point onto the hyperplane t = 0 by intersecting
    with a line through [-1, 0, ..., 0].

    Formula:
        y_i = x_i / (1 + t)
        where x = [t, x_1, ..., x_n] on hyperboloid

    Args:
        x: Point on hyperboloid, shape (dim+1,)

    Returns:
        Point in Poincaré ball, shape (dim,)
    """
    return x[1:] / (1.0 + x[0])


def poincare_to_hyperboloid(y: Float[Array, "dim"]) -> Float[Array, "dim_plus_1"]:
    """Convert Poincaré ball point to hyperboloid via inverse stereographic projection.

    Formula:
        (t, x_i) = (1 + ||y||², 2y_i) / (1 - ||y||²)

    Args:
        y: Point in Poincaré ball, shape (dim,)

    Returns:
        Point on hyperboloid, shape (dim+1,)
    """
    y_sqnorm = jnp.dot(y, y)
    den = 1.0 - y_sqnorm
    t = (1.0 + y_sqnorm) / den
    # Concatenate temporal and spatial components: [t, x_1, ..., x_n]
    return jnp.concatenate([t[None], 2.0 * y / den])


def poincare_to_halfspace(y: Float[Array, "dim"]) -> Float[Array, "dim"]:
    """Convert Poincaré ball point to the Poincaré half-space.

    Formula:
        π(y) = (2ỹ, 1 - ||ỹ||² - yₙ²) / (||ỹ||² + (yₙ - 1)²)

    Args:
        y: Point in Poincaré ball, shape (dim,)

    Returns:
        Point in the half-space, shape (dim,)

    Examples:
        >>> import jax.numpy as jnp
        >>> from hypmodels.manifolds import isometry_mappings
        >>>
        >>> isometry_mappings.poincare_to_halfspace(jnp.array([0.0, 0.0]))
        Array([0., 1.], dtype=float32)
    """
    trunk, last = y[:-1], y[-1]
    trunk_sqnorm = jnp.dot(trunk, trunk)
    den = trunk_sqnorm + (last - 1.0) ** 2
    return jnp.concatenate([2.0 * trunk, (1.0 - trunk_sqnorm - last**2)[None]]) / den


def halfspace_to_poincare(z: Float[Array, "dim"]) -> Float[Array, "dim"]:
    """Convert Poincaré half-space point to the Poincaré ball.

    Inverse of :func:`poincare_to_halfspace`.

    Formula:
        π⁻¹(z) = (2z̃, ||z||² - 1) / (||z̃||² + (zₙ + 1)²)

    Args:
        z: Point in the half-space, shape (dim,)

    Returns:
        Point in Poincaré ball, shape (dim,)
    """
    trunk, last = z[:-1], z[-1]
    den = jnp.dot(trunk, trunk) + (last + 1.0) ** 2
    return jnp.concatenate([2.0 * trunk, (jnp.dot(z, z) - 1.0)[None]]) / den


def poincare_to_halfspace_tangent(y: Float[Array, "dim"], v: Float[Array, "dim"]) -> Float[Array, "dim"]:
    """Push a Poincaré ball tangent vector forward to the half-space.

    Computes the differential π_*(y)[v] of :func:`poincare_to_halfspace` at y.
    With den = ||ỹ||² + (yₙ - 1)² and s = ⟨y, v⟩ the formula reads

        π_*(y)[v] = (2ṽ, -2s) / den - 2(s - vₙ) (2ỹ, 1 - ||y||²) / den²

    Args:
        y: Base point in Poincaré ball, shape (dim,)
        v: Tangent vector at y, shape (dim,)

    Returns:
        Tangent vector at poincare_to_halfspace(y), shape (dim,)
    """
    trunk, last = y[:-1], y[-1]
    den = jnp.dot(trunk, trunk) + (last - 1.0) ** 2
    scp = jnp.dot(y, v)
    # d(den)[v] = 2(scp - vₙ)
    c1 = 2.0 * v[:-1] / den - 4.0 * trunk * (scp - v[-1]) / den**2
    c2 = -2.0 * scp / den + 2.0 * (jnp.dot(y, y) - 1.0) * (scp - v[-1]) / den**2
    return jnp.concatenate([c1, c2[None]])


def halfspace_to_poincare_tangent(z: Float[Array, "dim"], w: Float[Array, "dim"]) -> Float[Array, "dim"]:
    """Push a half-space tangent vector forward to the Poincaré ball.

    Computes the differential of :func:`halfspace_to_poincare` at z. With
    den = ||z̃||² + (zₙ + 1)² and s = ⟨z, w⟩ the formula reads

        (π⁻¹)_*(z)[w] = (2w̃, 2s) / den - 2(s + wₙ) (2z̃, ||z||² - 1) / den²

    Args:
        z: Base point in the half-space, shape (dim,)
        w: Tangent vector at z, shape (dim,)

    Returns:
        Tangent vector at halfspace_to_poincare(z), shape (dim,)
    """
    trunk, last = z[:-1], z[-1]
    den = jnp.dot(trunk, trunk) + (last + 1.0) ** 2
    scp = jnp.dot(z, w)
    c1 = 2.0 * w[:-1] / den - 4.0 * trunk * (scp + w[-1]) / den**2
    c2 = 2.0 * scp / den - 2.0 * (jnp.dot(z, z) - 1.0) * (scp + w[-1]) / den**2
    return jnp.concatenate([c1, c2[None]])


def hyperboloid_to_poincare_tangent(x: Float[Array, "dim_plus_1"], v: Float[Array, "dim_plus_1"]) -> Float[Array, "dim"]:
    """Push a hyperboloid tangent vector forward to the Poincaré ball.

    Differential of :func:`hyperboloid_to_poincare` at x = [t, x_rest]:

        v_rest / (1 + t) - x_rest v₀ / (1 + t)²

    Args:
        x: Base point on hyperboloid, shape (dim+1,)
        v: Tangent vector at x, shape (dim+1,)

    Returns:
        Tangent vector at hyperboloid_to_poincare(x), shape (dim,)
    """
    den = 1.0 + x[0]
    return v[1:] / den - x[1:] * v[0] / den**2


def poincare_to_hyperboloid_tangent(y: Float[Array, "dim"], v: Float[Array, "dim"]) -> Float[Array, "dim_plus_1"]:
    """Push a Poincaré ball tangent vector forward to the hyperboloid.

    Differential of :func:`poincare_to_hyperboloid` at y. With
    den = 1 - ||y||² and s = ⟨y, v⟩:

        (4s / den², 2v / den + 4s y / den²)

    The result is Minkowski-orthogonal to poincare_to_hyperboloid(y).

    Args:
        y: Base point in Poincaré ball, shape (dim,)
        v: Tangent vector at y, shape (dim,)

    Returns:
        Tangent vector at poincare_to_hyperboloid(y), shape (dim+1,)
    """
    den = 1.0 - jnp.dot(y, y)
    scp = jnp.dot(y, v)
    t = 4.0 * scp / den**2
    spatial = 2.0 * v / den + 4.0 * scp * y / den**2
    return jnp.concatenate([t[None], spatial])

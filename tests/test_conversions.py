"""Tests for model conversions of tagged points and tangent vectors."""

import itertools

import jax
import jax.numpy as jnp
import pytest

from hypmodels import (
    ModelMismatchError,
    ModelTag,
    Point,
    TangentVector,
    UnsupportedConversionError,
    ball_point,
    ball_vector,
    check_point,
    check_vector,
    convert,
    convert_pair,
    convert_tangent,
    distance,
    halfspace_point,
    halfspace_vector,
    hyperboloid_vector,
    inner,
)
from hypmodels.conversions import POINT_MAPS, ROUTES, TANGENT_MAPS
from hypmodels.manifolds import isometry_mappings

# Enable float64 support in JAX for numerical precision
jax.config.update("jax_enable_x64", True)

MODELS = list(ModelTag)


@pytest.fixture
def ball_pair():
    p = ball_point(jnp.array([0.2, -0.3, 0.4]))
    X = ball_vector(jnp.array([1.0, 0.5, -0.25]))
    return p, X


def test_routes_cover_every_pair():
    for source, target in itertools.product(ModelTag, repeat=2):
        route = ROUTES[(source, target)]
        assert route[0] is source and route[-1] is target
        for hop in zip(route[:-1], route[1:]):
            assert hop in POINT_MAPS and hop in TANGENT_MAPS


def test_non_ball_pairs_route_through_ball():
    assert ROUTES[(ModelTag.HYPERBOLOID, ModelTag.POINCARE_HALF_SPACE)] == (
        ModelTag.HYPERBOLOID,
        ModelTag.POINCARE_BALL,
        ModelTag.POINCARE_HALF_SPACE,
    )
    assert ROUTES[(ModelTag.POINCARE_HALF_SPACE, ModelTag.HYPERBOLOID)][1] is ModelTag.POINCARE_BALL


def test_concrete_example():
    """The centre of the disk converts to (0, 1) in the half plane."""
    q = convert(ModelTag.POINCARE_HALF_SPACE, ball_point([0.0, 0.0]))
    assert q.model is ModelTag.POINCARE_HALF_SPACE
    assert jnp.allclose(q.value, jnp.array([0.0, 1.0]))
    assert distance(q, q) == 0.0
    assert check_point(q) is None


def test_ball_to_halfspace_uses_point_map(ball_pair):
    p, _ = ball_pair
    q = convert(ModelTag.POINCARE_HALF_SPACE, p)
    assert jnp.array_equal(q.value, isometry_mappings.poincare_to_halfspace(p.value))


def test_hyperboloid_to_halfspace_composes_through_ball(ball_pair):
    p, _ = ball_pair
    x = convert(ModelTag.HYPERBOLOID, p)
    direct = convert(ModelTag.POINCARE_HALF_SPACE, x)
    composed = convert(ModelTag.POINCARE_HALF_SPACE, convert(ModelTag.POINCARE_BALL, x))
    assert direct.model is ModelTag.POINCARE_HALF_SPACE
    assert jnp.array_equal(direct.value, composed.value)
    assert jnp.allclose(direct.value, convert(ModelTag.POINCARE_HALF_SPACE, p).value, atol=1e-12)


def test_raw_coordinates_are_ball_points(ball_pair):
    p, X = ball_pair
    q = convert(ModelTag.POINCARE_HALF_SPACE, p.value)
    assert q.model is ModelTag.POINCARE_HALF_SPACE
    assert jnp.array_equal(q.value, convert(ModelTag.POINCARE_HALF_SPACE, p).value)

    Y = convert_tangent(ModelTag.POINCARE_HALF_SPACE, p.value, X.value)
    assert jnp.array_equal(Y.value, convert_tangent(ModelTag.POINCARE_HALF_SPACE, p, X).value)


@pytest.mark.parametrize("source,target", list(itertools.product(MODELS, MODELS)))
def test_round_trip(source, target, ball_pair):
    """Converting to any model and back recovers the point and vector."""
    p, X = ball_pair
    p, X = convert_pair(source, p, X)
    q, Y = convert_pair(target, p, X)
    p_back, X_back = convert_pair(source, q, Y)

    assert q.model is target and Y.model is target
    assert jnp.allclose(p_back.value, p.value, atol=1e-10)
    assert jnp.allclose(X_back.value, X.value, atol=1e-10)


@pytest.mark.parametrize("source,target", list(itertools.product(MODELS, MODELS)))
def test_conversions_preserve_geometry(source, target, ball_pair):
    """Distances and inner products agree in every model."""
    p, X = ball_pair
    q = ball_point([-0.5, 0.1, 0.0])
    Y = ball_vector([0.0, 2.0, 1.0])

    p_s, X_s = convert_pair(source, p, X)
    _, Y_s = convert_pair(source, p, Y)
    q_s = convert(source, q)

    p_t, X_t = convert_pair(target, p_s, X_s)
    Y_t = convert_tangent(target, p_s, Y_s)
    q_t = convert(target, q_s)

    assert jnp.allclose(distance(p_t, q_t), distance(p, q), atol=1e-10)
    assert jnp.allclose(inner(p_t, X_t, Y_t), inner(p, X, Y), atol=1e-8)
    assert check_point(p_t) is None
    assert check_vector(p_t, X_t) is None


def test_same_model_returns_new_value(ball_pair):
    p, X = ball_pair
    q = convert(ModelTag.POINCARE_BALL, p)
    assert q is not p
    assert jnp.array_equal(q.value, p.value)
    Y = convert_tangent(ModelTag.POINCARE_BALL, p, X)
    assert Y is not X
    assert jnp.array_equal(Y.value, X.value)


def test_convert_pair_matches_separate_calls(ball_pair):
    p, X = ball_pair
    q, Y = convert_pair(ModelTag.POINCARE_HALF_SPACE, p, X)
    assert jnp.array_equal(q.value, convert(ModelTag.POINCARE_HALF_SPACE, p).value)
    assert jnp.array_equal(Y.value, convert_tangent(ModelTag.POINCARE_HALF_SPACE, p, X).value)
    assert isinstance(q, Point) and isinstance(Y, TangentVector)


def test_differential_consistency(ball_pair):
    """convert(p + hX) ≈ convert(p) + h·convert_tangent(p, X) up to O(h²)."""
    p, X = ball_pair
    h = 1e-5
    moved = convert(ModelTag.POINCARE_HALF_SPACE, ball_point(p.value + h * X.value)).value
    linear = convert(ModelTag.POINCARE_HALF_SPACE, p).value + h * convert_tangent(ModelTag.POINCARE_HALF_SPACE, p, X).value
    assert jnp.allclose(moved, linear, atol=1e-8)


def test_tangent_requires_matching_models(ball_pair):
    p, _ = ball_pair
    with pytest.raises(ModelMismatchError):
        convert_tangent(ModelTag.POINCARE_HALF_SPACE, p, halfspace_vector([1.0, 0.0, 0.0]))
    with pytest.raises(ModelMismatchError):
        convert_pair(ModelTag.HYPERBOLOID, halfspace_point([0.0, 0.0, 1.0]), ball_vector([1.0, 0.0, 0.0]))


def test_raw_vector_takes_point_model():
    z = halfspace_point([0.0, 1.0])
    Y = convert_tangent(ModelTag.POINCARE_BALL, z, jnp.array([1.0, 0.0]))
    expected = convert_tangent(ModelTag.POINCARE_BALL, z, halfspace_vector([1.0, 0.0]))
    assert jnp.array_equal(Y.value, expected.value)


def test_raw_integer_coordinates_are_floating():
    q = convert(ModelTag.POINCARE_BALL, [0, 0])
    assert jnp.issubdtype(q.value.dtype, jnp.floating)
    assert q.value.dtype == ball_point([0, 0]).value.dtype

    Y = convert_tangent(ModelTag.POINCARE_BALL, halfspace_point([0.0, 1.0]), [1, 0])
    assert jnp.issubdtype(Y.value.dtype, jnp.floating)


def test_unsupported_inputs(ball_pair):
    p, X = ball_pair
    with pytest.raises(UnsupportedConversionError):
        convert("klein", p)
    with pytest.raises(UnsupportedConversionError):
        convert(ModelTag.POINCARE_HALF_SPACE, X)
    # Also a NotImplementedError for callers that do not know the hierarchy
    with pytest.raises(NotImplementedError):
        convert_tangent("klein", p, X)


def test_target_given_by_value(ball_pair):
    p, _ = ball_pair
    q = convert("poincare_half_space", p)
    assert q.model is ModelTag.POINCARE_HALF_SPACE


def test_boundary_point_is_not_finite():
    q = convert(ModelTag.POINCARE_HALF_SPACE, ball_point([0.0, 1.0]))
    assert not jnp.all(jnp.isfinite(q.value))


def test_hyperboloid_tangent_at_origin():
    p = ball_point([0.0, 0.0])
    Y = convert_tangent(ModelTag.HYPERBOLOID, p, ball_vector([1.0, 0.0]))
    assert jnp.allclose(Y.value, jnp.array([0.0, 2.0, 0.0]))
    assert check_vector(convert(ModelTag.HYPERBOLOID, p), Y) is None
    X = convert_tangent(ModelTag.POINCARE_BALL, convert(ModelTag.HYPERBOLOID, p), hyperboloid_vector([0.0, 2.0, 0.0]))
    assert jnp.allclose(X.value, jnp.array([1.0, 0.0]))


def test_jit_and_vmap_over_tagged_values(ball_points: jnp.ndarray, ball_vectors: jnp.ndarray):
    points = ball_point(ball_points)
    vectors = ball_vector(ball_vectors)

    to_halfspace = jax.jit(jax.vmap(lambda p, X: convert_pair(ModelTag.POINCARE_HALF_SPACE, p, X)))
    q, Y = to_halfspace(points, vectors)

    assert q.model is ModelTag.POINCARE_HALF_SPACE and Y.model is ModelTag.POINCARE_HALF_SPACE
    assert q.value.shape == ball_points.shape
    expected = jax.vmap(isometry_mappings.poincare_to_halfspace_tangent)(ball_points, ball_vectors)
    assert jnp.allclose(Y.value, expected, atol=1e-10)

"""Benchmarks for model conversions and metrics with JIT compilation.

These benchmarks measure:
1. Non-JIT baseline performance
2. JIT runtime performance (after warmup)
3. The cost of routing through the Poincaré ball hub

Run with:
    uv run pytest benchmarks/bench_conversions.py --benchmark-only -v
"""

import jax
import jax.numpy as jnp

from hypmodels import ModelTag, ball_point, ball_vector, convert, convert_pair, distance


def _to_halfspace(p, X):
    return convert_pair(ModelTag.POINCARE_HALF_SPACE, p, X)


def _hyperboloid_to_halfspace(x):
    return convert(ModelTag.POINCARE_HALF_SPACE, x)


def test_ball_to_halfspace_no_jit(benchmark, benchmark_points, benchmark_vectors):
    """Benchmark ball -> half-space point and tangent conversion without JIT (baseline)."""
    p, X = ball_point(benchmark_points), ball_vector(benchmark_vectors)
    fn = jax.vmap(_to_halfspace)

    def run():
        q, Y = fn(p, X)
        return Y.value.block_until_ready()

    benchmark(run)


def test_ball_to_halfspace_with_jit(benchmark, benchmark_points, benchmark_vectors):
    """Benchmark ball -> half-space point and tangent conversion with JIT (after warmup)."""
    p, X = ball_point(benchmark_points), ball_vector(benchmark_vectors)
    fn = jax.jit(jax.vmap(_to_halfspace))

    # Warmup JIT compilation
    _ = fn(p, X)[1].value.block_until_ready()

    def run():
        q, Y = fn(p, X)
        return Y.value.block_until_ready()

    benchmark(run)


def test_hyperboloid_to_halfspace_with_jit(benchmark, benchmark_points):
    """Benchmark the composed hyperboloid -> ball -> half-space route."""
    x = jax.vmap(lambda p: convert(ModelTag.HYPERBOLOID, p))(ball_point(benchmark_points))
    fn = jax.jit(jax.vmap(_hyperboloid_to_halfspace))

    _ = fn(x).value.block_until_ready()

    def run():
        return fn(x).value.block_until_ready()

    benchmark(run)


def test_halfspace_distance_with_jit(benchmark, benchmark_points):
    """Benchmark half-space distance with JIT (after warmup)."""
    q = jax.vmap(lambda p: convert(ModelTag.POINCARE_HALF_SPACE, p))(ball_point(benchmark_points))
    a, b = (q.replace(value=v) for v in jnp.array_split(q.value, 2))
    fn = jax.jit(jax.vmap(distance))

    _ = fn(a, b).block_until_ready()

    def run():
        return fn(a, b).block_until_ready()

    benchmark(run)

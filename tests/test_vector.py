import numpy as np
import pytest

from sphere_rt.vector import add, clamp, cross, dot, length, length_squared, normalize, scale, sub, vec3


def test_vec3_is_float32():
    v = vec3(1, 2, 3)
    assert v.dtype == np.float32
    assert v.shape == (3,)


def test_arithmetic_returns_new_vectors():
    u = vec3(1.0, 2.0, 3.0)
    v = vec3(4.0, 5.0, 6.0)

    np.testing.assert_allclose(add(u, v), [5.0, 7.0, 9.0])
    np.testing.assert_allclose(sub(v, u), [3.0, 3.0, 3.0])
    np.testing.assert_allclose(scale(u, 2.0), [2.0, 4.0, 6.0])
    np.testing.assert_allclose(u, [1.0, 2.0, 3.0])


def test_dot_and_cross():
    x = vec3(1.0, 0.0, 0.0)
    y = vec3(0.0, 1.0, 0.0)

    assert dot(x, y) == 0.0
    assert dot(vec3(1.0, 2.0, 3.0), vec3(4.0, 5.0, 6.0)) == 32.0
    np.testing.assert_allclose(cross(x, y), [0.0, 0.0, 1.0])


def test_length():
    v = vec3(3.0, 4.0, 0.0)
    assert length_squared(v) == 25.0
    assert length(v) == pytest.approx(5.0)


def test_normalize():
    n = normalize(vec3(0.0, 0.0, -2.0))
    np.testing.assert_allclose(n, [0.0, 0.0, -1.0])
    assert length(normalize(vec3(1.0, 2.0, 3.0))) == pytest.approx(1.0)


def test_normalize_zero_vector_is_not_finite():
    assert not np.all(np.isfinite(normalize(vec3(0.0, 0.0, 0.0))))


def test_clamp():
    np.testing.assert_allclose(clamp(vec3(-0.5, 0.5, 1.5)), [0.0, 0.5, 1.0])

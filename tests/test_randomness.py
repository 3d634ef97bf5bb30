import numpy as np
import pytest

from pixelforge import randomness as rnd


def test_seed_reproducible():
    rnd.seed(42)
    first = [rnd.random_float() for _ in range(5)]
    rnd.seed(42)
    second = [rnd.random_float() for _ in range(5)]
    assert first == second


def test_random_below_range():
    values = {rnd.random_below(4) for _ in range(200)}
    assert values <= {0, 1, 2, 3}
    assert len(values) > 1


def test_random_below_rejects_non_positive():
    with pytest.raises(ValueError):
        rnd.random_below(0)


def test_random_int_range():
    for _ in range(200):
        assert -3 <= rnd.random_int(-3, 5) < 5


def test_random_float_forms():
    for _ in range(200):
        assert 0 <= rnd.random_float() <= 1
        assert 0 <= rnd.random_float(5) <= 5
        assert 2 <= rnd.random_float(2, 3) <= 3


def test_random_vector_bounds():
    for _ in range(100):
        v = rnd.random_vector((-1, 0, 10), (1, 2, 20))
        assert -1 <= v[0] <= 1 and 0 <= v[1] <= 2 and 10 <= v[2] <= 20
        w = rnd.random_vector((3, 4, 5))
        assert np.all(w >= 0) and np.all(w <= [3, 4, 5])


def test_unit_circle():
    for _ in range(50):
        assert np.isclose(np.linalg.norm(rnd.random_on_unit_circle()), 1)


def test_in_unit_sphere():
    for _ in range(100):
        assert np.linalg.norm(rnd.random_in_unit_sphere()) <= 1 + 1e-12


def test_on_unit_sphere():
    for _ in range(100):
        assert np.isclose(np.linalg.norm(rnd.random_on_unit_sphere()), 1)
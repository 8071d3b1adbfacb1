import numpy as np
import pytest

from clear_char_rnn import linalg
from clear_char_rnn.errors import DimensionMismatchError


def test_multiply_matches_matrix_vector_product():
    m = np.array([[1.0, 2.0], [3.0, 4.0]])
    v = np.array([1.0, -1.0])
    np.testing.assert_allclose(linalg.multiply(m, v), [-1.0, -1.0])


def test_multiply_rejects_mismatched_shapes():
    with pytest.raises(DimensionMismatchError):
        linalg.multiply(np.eye(4), np.ones(3))
    with pytest.raises(ValueError):
        linalg.multiply(np.ones(4), np.ones(4))


def test_multiply_returns_fresh_arrays():
    m = np.eye(2)
    first = linalg.multiply(m, np.array([1.0, 2.0]))
    second = linalg.multiply(m, np.array([3.0, 4.0]))
    np.testing.assert_allclose(first, [1.0, 2.0])
    np.testing.assert_allclose(second, [3.0, 4.0])


@pytest.mark.parametrize("index", range(4))
def test_softmax_of_one_hot_is_a_distribution(index):
    v = np.zeros(4)
    v[index] = 1.0
    p = linalg.softmax(v)
    assert p.sum() == pytest.approx(1.0)
    assert np.all(p > 0) and np.all(p < 1)
    assert np.argmax(p) == index


def test_softmax_is_stable_for_large_inputs():
    p = linalg.softmax(np.array([1000.0, 1000.0, -1000.0]))
    assert np.all(np.isfinite(p))
    np.testing.assert_allclose(p, [0.5, 0.5, 0.0], atol=1e-12)


def test_softmax_does_not_modify_input():
    v = np.array([1.0, 2.0, 3.0])
    linalg.softmax(v)
    np.testing.assert_array_equal(v, [1.0, 2.0, 3.0])


def test_normalise():
    np.testing.assert_allclose(linalg.normalise(np.array([1.0, 1.0, 2.0])), [0.25, 0.25, 0.5])
    with pytest.raises(ValueError):
        linalg.normalise(np.zeros(3))


def test_outer():
    np.testing.assert_allclose(linalg.outer([1.0, 2.0], [3.0, 4.0]), [[3.0, 4.0], [6.0, 8.0]])


def test_argmax_picks_largest_entry():
    assert linalg.argmax(np.array([0.1, 0.9, 0.05, 0.05])) == 1


def test_argmax_has_defined_result_without_positive_entries():
    assert linalg.argmax(np.zeros(4)) == 0
    assert linalg.argmax(np.array([-3.0, -1.0, -2.0, -5.0])) == 1


def test_argmax_breaks_ties_on_first_index():
    assert linalg.argmax(np.array([1.0, 2.0, 2.0, 0.0])) == 1


def test_argmax_of_empty_vector_raises():
    with pytest.raises(ValueError):
        linalg.argmax(np.array([]))

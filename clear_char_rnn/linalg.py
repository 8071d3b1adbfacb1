import numpy as np
import logging

from .errors import DimensionMismatchError

# --- Vector / Matrix Helpers ---
# Every helper returns a freshly allocated array; inputs are never modified.

def multiply(matrix: np.ndarray, vector: np.ndarray) -> np.ndarray:
    """
    Matrix-vector product: out[i] = Σ_j matrix[i][j] * vector[j].

    Args:
        matrix (np.ndarray): 2D array of shape (rows, cols).
        vector (np.ndarray): 1D array of length cols.

    Returns:
        np.ndarray: 1D array of length rows.

    Raises:
        DimensionMismatchError: If the shapes are not compatible.
    """
    matrix = np.asarray(matrix, dtype=float)
    vector = np.asarray(vector, dtype=float)
    if matrix.ndim != 2 or vector.ndim != 1:
        raise DimensionMismatchError(
            f"multiply expects a 2D matrix and a 1D vector, got {matrix.ndim}D and {vector.ndim}D"
        )
    if matrix.shape[1] != vector.shape[0]:
        raise DimensionMismatchError(
            f"Cannot multiply matrix of shape {matrix.shape} with vector of length {vector.shape[0]}"
        )
    return np.dot(matrix, vector)


def outer(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """ Outer product: out[i][j] = a[i] * b[j]. """
    return np.outer(np.asarray(a, dtype=float), np.asarray(b, dtype=float))


def softmax(vector: np.ndarray) -> np.ndarray:
    """
    Softmax: out[i] = exp(v[i]) / Σ_j exp(v[j]).

    The maximum is subtracted before exponentiating so large raw outputs do not
    overflow. The result is mathematically identical to the plain formula.
    """
    vector = np.asarray(vector, dtype=float)
    if vector.ndim != 1 or vector.size == 0:
        raise DimensionMismatchError(f"softmax expects a non-empty 1D vector, got shape {vector.shape}")
    exp_v = np.exp(vector - np.max(vector))
    return exp_v / np.sum(exp_v)


def normalise(vector: np.ndarray) -> np.ndarray:
    """ Divide a vector by the sum of its entries. """
    vector = np.asarray(vector, dtype=float)
    total = np.sum(vector)
    if total == 0:
        raise ValueError("Cannot normalise a vector whose entries sum to zero.")
    return vector / total


def argmax(vector: np.ndarray) -> int:
    """
    Index of the largest entry.

    The running maximum starts at negative infinity and is only replaced on a
    strictly greater value, so ties resolve to the first index and a vector of
    non-positive entries still has a defined answer.

    Raises:
        ValueError: If the vector is empty.
    """
    vector = np.asarray(vector, dtype=float).ravel()
    if vector.size == 0:
        raise ValueError("argmax of an empty vector is undefined.")
    max_index, max_value = 0, -np.inf
    for i, value in enumerate(vector):
        if value > max_value:
            max_index, max_value = i, value
    logging.debug(f"argmax - index {max_index}, value {max_value}")
    return max_index

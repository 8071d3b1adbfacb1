import numpy as np
from typing import Union
import logging

from . import linalg

class Activation:
    """Base class for the element-wise functions used by the recurrent cell."""

    def forward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the activation function value.

        Args:
            x: Input data (scalar or numpy array).

        Returns:
            Activated output.
        """
        raise NotImplementedError

    def backward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the derivative of the activation function, evaluated at 'x'.

        Args:
            x: Point where the derivative is evaluated (scalar or numpy array).

        Returns:
            Derivative of the activation function evaluated at x.
        """
        raise NotImplementedError


class Tanh(Activation):
    """Hyperbolic tangent activation function.

    Mathematical form:
        forward: f(x) = tanh(x) = (e^x - e^-x)/(e^x + e^-x)
        backward: f'(x) = 1 - tanh^2(x)
    """

    def forward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute tanh activation"""
        logging.debug(f"Tanh forward - input shape: {np.shape(x)}")
        return np.tanh(x)

    def backward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute tanh derivative: 1 - tanh^2(x)"""
        logging.debug(f"Tanh backward - input shape: {np.shape(x)}")
        return 1.0 - np.tanh(x) ** 2


class Softmax(Activation):
    """Softmax activation function.

    Turns a raw output vector into a probability distribution over the
    vocabulary. Used to link stacked cells: the next cell steps on the
    softmax of the previous cell's raw output.

    Backward pass:
        The recurrent cell folds the softmax derivative into its output error
        (p - target), so `backward` is a placeholder returning ones.
    """

    def forward(self, x: np.ndarray) -> np.ndarray:
        """Compute softmax with the max subtraction trick."""
        if np.any(np.isnan(x)) or np.any(np.isinf(x)):
            logging.warning(f"Softmax received NaN or inf inputs: {x}")
        return linalg.softmax(x)

    def backward(self, x: np.ndarray) -> np.ndarray:
        """Placeholder backward pass, see class docstring."""
        return np.ones_like(x)


# Dictionary mapping activation function names to their classes
ACTIVATION_FUNCTIONS = {
    'tanh': Tanh,
    'softmax': Softmax
}

def get_activation(name: str) -> Activation:
    """Factory function to get an activation function instance by name.

    Args:
        name: Name of the activation function (case-insensitive).

    Returns:
        An instance of the requested Activation class.

    Raises:
        ValueError: If the activation function name is not recognized.
    """
    name_lower = name.lower()
    if name_lower not in ACTIVATION_FUNCTIONS:
        raise ValueError(
            f"Unknown activation function '{name}'. "
            f"Available functions: {list(ACTIVATION_FUNCTIONS.keys())}"
        )
    return ACTIVATION_FUNCTIONS[name_lower]()

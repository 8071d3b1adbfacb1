# model.py
import numpy as np
from typing import Dict, Optional, Tuple
import logging

from . import linalg
from .activations import get_activation
from .errors import DimensionMismatchError

DEFAULT_LEARNING_RATE = 0.5

# Probabilities are clipped into [LOSS_EPSILON, 1 - LOSS_EPSILON] before taking logs
LOSS_EPSILON = 1e-15


def binary_cross_entropy(targets: np.ndarray, probabilities: np.ndarray) -> Tuple[float, bool]:
    """
    Per-symbol Binary Cross-Entropy, summed over the vocabulary.

    Loss = - Σ_i [ t_i * log(p_i) + (1 - t_i) * log(1 - p_i) ]

    Note this is not the categorical cross-entropy -log(p[target]) that the
    output error (p - target) in `RNN.backward` is derived from. The two are
    kept side by side on purpose: this one is reported, the other one trains.

    Args:
        targets: One-hot target vector (vocab_size,).
        probabilities: Softmax probabilities (vocab_size,).

    Returns:
        Tuple containing:
            - loss (float): The summed binary cross-entropy.
            - degenerate (bool): True if some probability had to be clipped away
              from 0 or 1 to keep the logarithms finite.
    """
    targets = np.asarray(targets, dtype=float)
    probabilities = np.asarray(probabilities, dtype=float)
    if targets.shape != probabilities.shape:
        raise DimensionMismatchError(
            f"BCE Loss: target shape {targets.shape} must match probability shape {probabilities.shape}"
        )

    degenerate = bool(np.any(probabilities < LOSS_EPSILON) or np.any(probabilities > 1.0 - LOSS_EPSILON))
    p_clipped = np.clip(probabilities, LOSS_EPSILON, 1.0 - LOSS_EPSILON)

    term1 = targets * np.log(p_clipped)
    term2 = (1 - targets) * np.log(1 - p_clipped)
    return float(-np.sum(term1 + term2)), degenerate


class RNN:
    """
    A single vanilla recurrent cell for character-level prediction.

    The cell owns its three weight matrices and its hidden state. `step` advances
    the recurrence by one character, `backward` nudges the weights towards a
    target character. The gradient only differentiates through the current
    step's tanh (the previous hidden state is treated as a constant), which is a
    much cruder approximation than full Backpropagation Through Time.

    Because the output error is paired elementwise with hidden-state quantities
    in `backward`, the hidden size must equal the vocabulary size.
    """
    def __init__(
        self,
        vocab_size: int,
        hidden_size: Optional[int] = None,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        initial_weights: Optional[Dict[str, np.ndarray]] = None,
    ):
        """
        Initializes the cell.

        Args:
            vocab_size (int): Number of symbols; size of the input and output vectors.
            hidden_size (int): Number of hidden units. Defaults to vocab_size and must equal it.
            learning_rate (float): Fixed step size of the weight update.
            seed (int): Seed for the weight initialisation (ignored if rng is given).
            rng (np.random.Generator): Random generator to draw the initial weights from.
            initial_weights (dict): Optional pre-defined 'Wxh', 'Whh' and 'Why' matrices.
                                    Any matrix given here overrides the random initialisation.
        """
        if hidden_size is None:
            hidden_size = vocab_size
        if vocab_size <= 0:
            raise ValueError(f"vocab_size must be positive, got {vocab_size}")
        if hidden_size != vocab_size:
            raise ValueError(
                f"hidden_size ({hidden_size}) must equal vocab_size ({vocab_size}); "
                "the output error is paired elementwise with the hidden state."
            )
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {learning_rate}")

        self.vocab_size = vocab_size
        self.hidden_size = hidden_size
        self.learning_rate = learning_rate
        self.activation_fn = get_activation('tanh')

        # --- Model Parameters ---
        # Weights for input-to-hidden connections (shape: hidden_size x vocab_size)
        self.Wxh = np.zeros((hidden_size, vocab_size))
        # Weights for hidden-to-hidden connections (shape: hidden_size x hidden_size)
        self.Whh = np.zeros((hidden_size, hidden_size))
        # Weights for hidden-to-output connections (shape: vocab_size x hidden_size)
        self.Why = np.zeros((vocab_size, hidden_size))

        # --- Hidden State ---
        self.h = np.zeros(hidden_size)
        self.h_prev = np.zeros(hidden_size)

        self.initialise(rng if rng is not None else np.random.default_rng(seed))

        if initial_weights:
            self.set_weights(**initial_weights)

        logging.info(f"Created RNN cell with vocab_size={vocab_size}, hidden_size={hidden_size}, "
                     f"learning_rate={learning_rate}")

    def initialise(self, rng: np.random.Generator):
        """
        Draws every weight independently from the 201 evenly spaced values
        {-1.00, -0.99, ..., 0.99, 1.00} and zeros the hidden state.

        Args:
            rng (np.random.Generator): Source of the random integers k in [0, 200],
                                       mapped to k / 100 - 1.
        """
        self.Wxh = rng.integers(0, 201, size=self.Wxh.shape) / 100 - 1
        self.Whh = rng.integers(0, 201, size=self.Whh.shape) / 100 - 1
        self.Why = rng.integers(0, 201, size=self.Why.shape) / 100 - 1
        self.zero_hidden()

    def set_weights(self, Wxh: Optional[np.ndarray] = None, Whh: Optional[np.ndarray] = None,
                    Why: Optional[np.ndarray] = None):
        """ Replaces any of the weight matrices with copies of the given arrays, checking shapes. """
        for name, value in (('Wxh', Wxh), ('Whh', Whh), ('Why', Why)):
            if value is None:
                continue
            value = np.array(value, dtype=float)
            expected = getattr(self, name).shape
            if value.shape != expected:
                raise DimensionMismatchError(f"{name} must have shape {expected}, got {value.shape}")
            setattr(self, name, value)

    def zero_hidden(self):
        """ Resets the hidden state to zeros. h_prev is overwritten by the next step. """
        self.h = np.zeros(self.hidden_size)

    def step(self, x: np.ndarray) -> np.ndarray:
        """
        Advances the recurrence by one input vector.

        h_prev <- h
        h      <- tanh(Whh·h + Wxh·x)
        y      <- Why·h

        Args:
            x (np.ndarray): Input vector of length vocab_size (one-hot or a probability vector).

        Returns:
            y (np.ndarray): Raw (unnormalized) output vector of length vocab_size.
        """
        x = np.asarray(x, dtype=float)
        if x.shape != (self.vocab_size,):
            raise DimensionMismatchError(f"Input shape {x.shape} does not match vocab_size {self.vocab_size}")

        self.h_prev = self.h.copy()
        a = linalg.multiply(self.Whh, self.h) + linalg.multiply(self.Wxh, x)
        self.h = self.activation_fn.forward(a)
        y = linalg.multiply(self.Why, self.h)

        logging.debug(f"RNN step - hidden: {self.h}, output: {y}")
        return y

    def loss(self, target: np.ndarray, output: np.ndarray) -> float:
        """
        Binary cross-entropy between a one-hot target and the softmax of a raw output.

        A warning is logged when probabilities had to be clipped (the value is
        still returned).
        """
        loss, degenerate = binary_cross_entropy(target, linalg.softmax(output))
        if degenerate:
            logging.warning(f"Degenerate probabilities in loss computation (output={output}); "
                            f"clipped to [{LOSS_EPSILON}, {1 - LOSS_EPSILON}]")
        return loss

    def backward(self, inputs: np.ndarray, output: np.ndarray, target: np.ndarray
                 ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Computes the weight gradients for the most recent step and applies them.

        Uses the state left behind by the last call to `step` (h and h_prev).

        Args:
            inputs (np.ndarray): The input vector given to that step.
            output (np.ndarray): The raw output vector that step returned.
            target (np.ndarray): One-hot vector of the expected next symbol.

        Returns:
            dWxh, dWhh, dWhy: The gradients that were applied.
        """
        inputs = np.asarray(inputs, dtype=float)
        target = np.asarray(target, dtype=float)
        for name, vec in (('inputs', inputs), ('output', output), ('target', target)):
            if np.shape(vec) != (self.vocab_size,):
                raise DimensionMismatchError(f"{name} shape {np.shape(vec)} does not match vocab_size {self.vocab_size}")

        p = linalg.softmax(output)

        # 1. Output error: p - 1 at the target symbol, p elsewhere
        dy = np.where(target == 1, p - 1.0, p)

        # 2. Hidden-to-output gradient
        y_Why = self.activation_fn.forward(self.h)
        dWhy = linalg.outer(dy, y_Why)

        # 3. Shared term for the two hidden-layer gradients
        y_h = self.activation_fn.backward(self.h)
        m = linalg.multiply(self.Why, y_h)

        # 4. Hidden-to-hidden gradient, uses the hidden state from *before* the step
        dWhh = linalg.outer(dy, m * self.h_prev)

        # 5. Input-to-hidden gradient
        dWxh = linalg.outer(dy, m * inputs)

        # 6. Fixed learning rate update, in place
        for param, dparam in zip([self.Wxh, self.Whh, self.Why], [dWxh, dWhh, dWhy]):
            param -= self.learning_rate * dparam

        logging.debug(f"RNN backward - output error: {dy}")
        return dWxh, dWhh, dWhy

    def summary(self) -> str:
        """
        Generates a text summary of the cell's parameters.

        Returns:
            A string containing the cell summary.
        """
        summary_str = "\n" + "="*40 + "\n"
        summary_str += "RNN Cell Summary\n"
        summary_str += "="*40 + "\n"
        total_params = 0
        for name in ('Wxh', 'Whh', 'Why'):
            weights = getattr(self, name)
            total_params += weights.size
            summary_str += f"{name}: shape {weights.shape}, parameters {weights.size}\n"
        summary_str += f"Hidden State: ({self.hidden_size},)\n"
        summary_str += f"Learning Rate: {self.learning_rate}\n"
        summary_str += "-"*40 + "\n"
        summary_str += f"Total Parameters: {total_params}\n"
        summary_str += "="*40 + "\n"
        return summary_str

from __future__ import annotations

import time
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .activations import get_activation
from .codec import Codec, REFERENCE_VOCABULARY
from .errors import InvalidDepthError, UnrecognizedSymbolError
from .model import DEFAULT_LEARNING_RATE, RNN, binary_cross_entropy

REFERENCE_TRAINING_SET = "hello"


@dataclass
class TrainerConfig:
    depth: int = 1                                 # number of epochs over the training sequence
    training_sequence: str = REFERENCE_TRAINING_SET
    vocabulary: str = REFERENCE_VOCABULARY
    num_layers: int = 2                            # stacked cells, 1 or 2
    learning_rate: float = DEFAULT_LEARNING_RATE
    seed: int | None = None                        # weight init RNG (None = non-deterministic)
    log_every: int = 1                             # report progress every N epochs


def validate_depth(depth: Any) -> int:
    """
    Checks that a training depth is a positive integer and returns it.

    Raises:
        InvalidDepthError: If depth is not an integer or is not positive.
    """
    if isinstance(depth, bool) or not isinstance(depth, (int, np.integer)):
        raise InvalidDepthError(f"Depth must be an integer, got {depth!r}")
    if depth <= 0:
        raise InvalidDepthError(f"Depth must be positive, got {depth}")
    return int(depth)


class Trainer:
    """
    Trains a stack of RNN cells on a fixed character sequence and predicts
    the next character from a seed.

    Stacking: cell k+1 steps on the softmax of cell k's raw output. Every cell
    runs its own backward pass against the *same* target, and cell k+1 is
    given cell k's raw output (not its softmax) as the input of that backward
    pass. No gradient flows from one cell into another.
    """
    def __init__(self, cfg: TrainerConfig = TrainerConfig(), layers: Optional[Sequence[RNN]] = None):
        """
        Args:
            cfg (TrainerConfig): Hyperparameters and reference data.
            layers (Sequence[RNN]): Optional pre-built cells. If None, cfg.num_layers
                                    cells are created from a generator seeded with cfg.seed.
        """
        self.cfg = cfg
        self.codec = Codec(cfg.vocabulary)

        if cfg.log_every < 1:
            raise ValueError(f"log_every must be at least 1, got {cfg.log_every}")
        if len(cfg.training_sequence) < 2:
            raise ValueError("Training sequence must contain at least two characters.")
        for ch in cfg.training_sequence:
            if ch not in self.codec:
                raise UnrecognizedSymbolError(ch, self.codec.vocabulary)

        if layers is None:
            if cfg.num_layers not in (1, 2):
                raise ValueError(f"num_layers must be 1 or 2, got {cfg.num_layers}")
            rng = np.random.default_rng(cfg.seed)
            layers = [RNN(self.codec.vocab_size, learning_rate=cfg.learning_rate, rng=rng)
                      for _ in range(cfg.num_layers)]
        elif len(layers) == 0:
            raise ValueError("At least one layer is required.")
        for layer in layers:
            if layer.vocab_size != self.codec.vocab_size:
                raise ValueError(f"Layer vocab_size {layer.vocab_size} does not match "
                                 f"vocabulary size {self.codec.vocab_size}")

        self.layers: List[RNN] = list(layers)
        self.link_fn = get_activation('softmax')

        # Training history tracking
        self.history: List[Dict[str, Any]] = []

    # -------- public API --------
    def forward(self, x: np.ndarray) -> List[np.ndarray]:
        """
        Steps every layer once and returns the raw output vector of each layer.
        """
        outputs = []
        current = x
        for layer in self.layers:
            y = layer.step(current)
            outputs.append(y)
            current = self.link_fn.forward(y)
        return outputs

    def train_transition(self, input_char: str, target_char: str) -> Tuple[float, bool]:
        """
        Runs one step + backward pair for the transition input_char -> target_char.

        Returns:
            loss (float): Loss of the last layer's output, measured before the update.
            degenerate (bool): True if that loss needed probability clipping.
        """
        x = self.codec.encode_strict(input_char)
        target = self.codec.encode_strict(target_char)

        outputs = self.forward(x)

        loss, degenerate = binary_cross_entropy(target, self.link_fn.forward(outputs[-1]))

        # Layer 1 learns from the one-hot input, every later layer from the raw
        # output of the layer below it.
        backward_inputs = [x] + outputs[:-1]
        for layer, layer_input, y in zip(self.layers, backward_inputs, outputs):
            layer.backward(layer_input, y, target)

        return loss, degenerate

    def train(self, depth: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Trains for `depth` epochs (cfg.depth if None) over the training sequence.

        Each epoch visits the len-1 adjacent character pairs in order and ends by
        resetting every layer's hidden state to zeros.

        Returns:
            The training history, one dict per epoch.
        """
        depth = validate_depth(self.cfg.depth if depth is None else depth)
        sequence = self.cfg.training_sequence
        n_transitions = len(sequence) - 1
        logging.info(f"Training {len(self.layers)} layer(s) for {depth} epoch(s) on {sequence!r}")

        for epoch in range(1, depth + 1):
            epoch_start_time = time.time()
            epoch_loss = 0.0
            degenerate_count = 0

            for i in range(n_transitions):
                loss, degenerate = self.train_transition(sequence[i], sequence[i + 1])
                epoch_loss += loss
                degenerate_count += int(degenerate)

            # reset the hidden vector to its original state
            self.reset_hidden()

            epoch_loss /= n_transitions
            epoch_time = time.time() - epoch_start_time
            self.history.append({
                "epoch": epoch,
                "loss": epoch_loss,
                "degenerate": degenerate_count,
                "time_per_epoch": epoch_time,
            })

            if epoch % self.cfg.log_every == 0 or epoch == depth:
                logging.info(f"Epoch {epoch}/{depth} - loss: {epoch_loss:.5f} - time: {epoch_time:.4f}s")
            if degenerate_count:
                logging.warning(f"Epoch {epoch}: {degenerate_count} transition(s) produced degenerate probabilities")

        logging.info("Training complete.")
        return self.history

    def reset_hidden(self):
        """ Zeros the hidden state of every layer. """
        for layer in self.layers:
            layer.zero_hidden()

    def predict(self, seed: str) -> str:
        """
        Predicts the most likely character following `seed`.

        Only the first character of seed is used. Hidden states are *not* reset,
        so successive calls continue from where the previous one left off.

        Raises:
            UnrecognizedSymbolError: If seed is empty or its first character is
                                     not in the vocabulary (hidden state untouched).
        """
        if not seed:
            raise UnrecognizedSymbolError(seed, self.codec.vocabulary)
        x = self.codec.encode_strict(seed[0])
        outputs = self.forward(x)
        return self.codec.decode_output(outputs[-1])

    def generate(self, seed: str, n: int) -> str:
        """
        Greedily generates n characters, feeding every prediction back in as the next seed.
        """
        chars = []
        current = seed
        for _ in range(n):
            current = self.predict(current)
            chars.append(current)
        return ''.join(chars)


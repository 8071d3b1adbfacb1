# example_text_generation.py
"""
Interactive "hello" example: train a character-level RNN, then ask it for the
next character of a seed.

Run:
    python -m clear_char_rnn.example_text_generation --layers 2 --seed 0
"""
import argparse
import logging
from typing import Any, Callable, Dict, List, Optional

import matplotlib.pyplot as plt

from .errors import CharRNNError, InvalidDepthError
from .trainer import REFERENCE_TRAINING_SET, Trainer, TrainerConfig, validate_depth
from .codec import REFERENCE_VOCABULARY
from .model import DEFAULT_LEARNING_RATE

QUIT_TOKEN = "quit"


def parse_depth(text: str) -> int:
    """
    Parses the training depth typed by the user.

    Raises:
        InvalidDepthError: If text is not an integer or is not positive.
    """
    try:
        depth = int(text.strip())
    except (TypeError, ValueError) as e:
        raise InvalidDepthError(f"Depth must be a positive integer, got {text!r}") from e
    return validate_depth(depth)


def prompt_depth(input_fn: Callable[[], str] = input, print_fn: Callable[..., None] = print) -> int:
    """ Asks for the depth of training until a valid one is entered. """
    while True:
        print_fn("Enter the depth of training:")
        try:
            return parse_depth(input_fn())
        except InvalidDepthError as e:
            print_fn(f"Error: {e}")


def run_interactive(trainer: Trainer, input_fn: Callable[[], str] = input,
                    print_fn: Callable[..., None] = print) -> List[str]:
    """
    Reads seeds until the quit token (or end of input) and prints the predicted
    next character for each one. The hidden state carries over between seeds.

    Returns:
        The predicted characters, in order.
    """
    symbols = ', '.join(f"'{ch}'" for ch in trainer.codec.symbols)
    print_fn(f"Enter {symbols} or type '{QUIT_TOKEN}' to quit:")
    predictions = []
    while True:
        try:
            seed = input_fn()
        except EOFError:
            break
        if seed == QUIT_TOKEN:
            break
        try:
            prediction = trainer.predict(seed)
        except CharRNNError as e:
            print_fn(f"Error: {e}")
            continue
        predictions.append(prediction)
        print_fn("Output:")
        print_fn(prediction)
    return predictions


def plot_history(history: List[Dict[str, Any]]):
    """ Plots the per-epoch training loss. """
    epochs = [row['epoch'] for row in history]
    losses = [row['loss'] for row in history]
    plt.figure("Training History", figsize=(8, 5))
    plt.plot(epochs, losses, label='Training Loss')
    plt.xlabel('Epoch')
    plt.ylabel('Loss (BCE)')
    plt.title('Character RNN Training History')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.ylim(bottom=0)
    plt.tight_layout()


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Train a character-level RNN on 'hello' and predict next characters.")
    p.add_argument("--depth", type=str, default=None, help="Number of training epochs (prompted if omitted)")
    p.add_argument("--layers", type=int, default=2, choices=[1, 2], help="Number of stacked RNN cells")
    p.add_argument("--seed", type=int, default=None, help="Weight initialisation seed (None=random)")
    p.add_argument("--learning-rate", type=float, default=DEFAULT_LEARNING_RATE)
    p.add_argument("--training-set", type=str, default=REFERENCE_TRAINING_SET)
    p.add_argument("--log-every", type=int, default=100)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--plot", action="store_true", help="Plot the training loss after training")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None, input_fn: Callable[[], str] = input,
         print_fn: Callable[..., None] = print) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if args.depth is None:
        try:
            depth = prompt_depth(input_fn, print_fn)
        except EOFError:
            return 1
    else:
        try:
            depth = parse_depth(args.depth)
        except InvalidDepthError as e:
            print_fn(f"Error: {e}")
            return 2

    cfg = TrainerConfig(
        depth=depth,
        training_sequence=args.training_set,
        vocabulary=REFERENCE_VOCABULARY,
        num_layers=args.layers,
        learning_rate=args.learning_rate,
        seed=args.seed,
        log_every=args.log_every,
    )
    try:
        trainer = Trainer(cfg)
    except (CharRNNError, ValueError) as e:
        print_fn(f"Error: {e}")
        return 2

    history = trainer.train()
    print_fn("Training complete.")

    if args.plot:
        plot_history(history)
        plt.show()

    run_interactive(trainer, input_fn, print_fn)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

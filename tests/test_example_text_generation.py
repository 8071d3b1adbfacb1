import pytest

from clear_char_rnn.errors import InvalidDepthError
from clear_char_rnn.example_text_generation import (
    QUIT_TOKEN, main, parse_depth, prompt_depth, run_interactive,
)
from clear_char_rnn.trainer import Trainer, TrainerConfig


def scripted_input(lines):
    """Returns an input() replacement that raises EOFError once the lines run out."""
    it = iter(lines)

    def _input():
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


class Printed:
    def __init__(self):
        self.lines = []

    def __call__(self, *args):
        self.lines.append(' '.join(str(a) for a in args))


def test_parse_depth():
    assert parse_depth("5") == 5
    assert parse_depth(" 12\n") == 12


@pytest.mark.parametrize("text", ["abc", "", "0", "-2", "1.5"])
def test_parse_depth_rejects_invalid_input(text):
    with pytest.raises(InvalidDepthError):
        parse_depth(text)


def test_prompt_depth_asks_again_after_invalid_input():
    printed = Printed()
    depth = prompt_depth(scripted_input(["abc", "0", "2"]), printed)
    assert depth == 2
    assert printed.lines.count("Enter the depth of training:") == 3
    assert sum(line.startswith("Error:") for line in printed.lines) == 2


def test_run_interactive_until_quit():
    trainer = Trainer(TrainerConfig(depth=2, seed=0))
    trainer.train()
    printed = Printed()
    predictions = run_interactive(trainer, scripted_input(["h", "x", "ello", QUIT_TOKEN, "h"]), printed)

    assert len(predictions) == 2
    assert set(predictions) <= set("helo")
    assert printed.lines[0] == "Enter 'h', 'e', 'l', 'o' or type 'quit' to quit:"
    assert printed.lines.count("Output:") == 2
    assert any(line.startswith("Error:") for line in printed.lines)


def test_quit_token_is_case_sensitive():
    trainer = Trainer(TrainerConfig(seed=0))
    printed = Printed()
    predictions = run_interactive(trainer, scripted_input(["QUIT", "h"]), printed)
    # "QUIT" is treated as a seed starting with an unknown symbol
    assert len(predictions) == 1
    assert any(line.startswith("Error:") for line in printed.lines)


def test_main_with_depth_option():
    printed = Printed()
    code = main(["--depth", "3", "--seed", "0"], scripted_input(["h", "e", QUIT_TOKEN]), printed)
    assert code == 0
    assert "Training complete." in printed.lines
    assert printed.lines.count("Output:") == 2


def test_main_prompts_for_depth():
    printed = Printed()
    code = main(["--seed", "1", "--layers", "1"], scripted_input(["nope", "2", "l", QUIT_TOKEN]), printed)
    assert code == 0
    assert printed.lines[0] == "Enter the depth of training:"
    assert printed.lines.count("Output:") == 1


def test_main_rejects_bad_depth_option():
    printed = Printed()
    assert main(["--depth", "-1"], scripted_input([]), printed) == 2
    assert printed.lines[0].startswith("Error:")


def test_main_rejects_unknown_training_set():
    printed = Printed()
    assert main(["--depth", "1", "--training-set", "world"], scripted_input([]), printed) == 2

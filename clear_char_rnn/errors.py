class CharRNNError(Exception):
    """Base class for every error raised by the character-level RNN."""


class UnrecognizedSymbolError(CharRNNError, KeyError):
    """Raised when a character is not part of the model's vocabulary."""

    def __init__(self, symbol: str, vocabulary: str):
        self.symbol = symbol
        self.vocabulary = vocabulary
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"Unrecognized symbol {self.symbol!r}. Expected one of {list(self.vocabulary)}"


class InvalidDepthError(CharRNNError, ValueError):
    """Raised when the training depth (epoch count) is not a positive integer."""


class DimensionMismatchError(CharRNNError, ValueError):
    """Raised when a matrix or vector does not have the expected shape."""

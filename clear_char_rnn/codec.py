import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterable, List
import logging

from . import linalg
from .errors import DimensionMismatchError, UnrecognizedSymbolError

REFERENCE_VOCABULARY = "helo"


@dataclass(frozen=True)
class Encoding:
    """Result of looking a symbol up in the vocabulary."""
    symbol: str
    vector: np.ndarray
    in_vocabulary: bool


class Codec:
    """
    Bidirectional mapping between a fixed, ordered vocabulary and one-hot vectors.

    The symbol at position i of the vocabulary owns index i, so for the
    reference vocabulary "helo": 'h' -> [1, 0, 0, 0], 'e' -> [0, 1, 0, 0], ...
    """
    def __init__(self, vocabulary: Iterable[str] = REFERENCE_VOCABULARY):
        symbols = list(vocabulary)
        if not symbols:
            raise ValueError("Vocabulary must contain at least one symbol.")
        for ch in symbols:
            if not isinstance(ch, str) or len(ch) != 1:
                raise ValueError(f"Vocabulary entries must be single characters, got {ch!r}")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Vocabulary contains duplicate symbols: {symbols}")

        self.symbols: List[str] = symbols
        self.vocabulary = ''.join(symbols)
        self.vocab_size = len(symbols)
        # Create character-to-index and index-to-character mappings
        self.char_to_ix: Dict[str, int] = {ch: i for i, ch in enumerate(symbols)}
        self.ix_to_char: Dict[int, str] = {i: ch for i, ch in enumerate(symbols)}

    def __contains__(self, symbol: str) -> bool:
        return symbol in self.char_to_ix

    def lookup(self, symbol: str) -> Encoding:
        """
        Encodes a symbol and reports whether it belonged to the vocabulary.

        An unknown symbol maps to the all-zero vector with in_vocabulary=False.
        """
        vector = np.zeros(self.vocab_size)
        ix = self.char_to_ix.get(symbol)
        if ix is None:
            return Encoding(symbol=symbol, vector=vector, in_vocabulary=False)
        vector[ix] = 1.0
        return Encoding(symbol=symbol, vector=vector, in_vocabulary=True)

    def encode(self, symbol: str) -> np.ndarray:
        """
        One-hot encodes a symbol.

        Unknown symbols encode to the all-zero vector and a warning is logged.
        Use `encode_strict` to get an exception instead.
        """
        encoding = self.lookup(symbol)
        if not encoding.in_vocabulary:
            logging.warning(f"Symbol {symbol!r} is not in vocabulary {self.symbols}; encoding as zero vector")
        return encoding.vector

    def encode_strict(self, symbol: str) -> np.ndarray:
        """ One-hot encodes a symbol, raising UnrecognizedSymbolError if it is unknown. """
        encoding = self.lookup(symbol)
        if not encoding.in_vocabulary:
            raise UnrecognizedSymbolError(symbol, self.vocabulary)
        return encoding.vector

    def decode(self, index: int) -> str:
        """ Maps an index back to its symbol. """
        if index not in self.ix_to_char:
            raise IndexError(f"Index {index} is outside vocabulary of size {self.vocab_size}")
        return self.ix_to_char[index]

    def decode_output(self, output: np.ndarray) -> str:
        """ Decodes a raw output (or probability) vector to its most likely symbol. """
        output = np.asarray(output, dtype=float)
        if output.shape != (self.vocab_size,):
            raise DimensionMismatchError(f"Output shape {output.shape} does not match vocabulary size {self.vocab_size}")
        return self.decode(linalg.argmax(output))

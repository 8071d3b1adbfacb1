import logging

import numpy as np
import pytest

from clear_char_rnn.codec import Codec, REFERENCE_VOCABULARY
from clear_char_rnn.errors import DimensionMismatchError, UnrecognizedSymbolError


@pytest.fixture
def codec():
    return Codec()


def test_reference_vocabulary_order(codec):
    assert codec.symbols == ['h', 'e', 'l', 'o']
    assert codec.vocab_size == 4
    np.testing.assert_array_equal(codec.encode('l'), [0, 0, 1, 0])


@pytest.mark.parametrize("symbol", list(REFERENCE_VOCABULARY))
def test_decode_inverts_encode(codec, symbol):
    vector = codec.encode(symbol)
    assert vector.sum() == 1
    assert codec.decode_output(vector) == symbol


def test_unknown_symbol_encodes_to_zero_vector(codec, caplog):
    with caplog.at_level(logging.WARNING):
        vector = codec.encode('x')
    np.testing.assert_array_equal(vector, np.zeros(4))
    assert "not in vocabulary" in caplog.text


def test_lookup_flags_unknown_symbols(codec):
    known = codec.lookup('o')
    unknown = codec.lookup('z')
    assert known.in_vocabulary and known.symbol == 'o'
    assert not unknown.in_vocabulary
    np.testing.assert_array_equal(unknown.vector, np.zeros(4))


def test_encode_strict_raises_for_unknown_symbol(codec):
    with pytest.raises(UnrecognizedSymbolError) as excinfo:
        codec.encode_strict('q')
    assert excinfo.value.symbol == 'q'
    # UnrecognizedSymbolError is also a KeyError
    with pytest.raises(KeyError):
        codec.encode_strict('H')


def test_decode_rejects_out_of_range_index(codec):
    with pytest.raises(IndexError):
        codec.decode(4)


def test_decode_output_checks_length(codec):
    with pytest.raises(DimensionMismatchError):
        codec.decode_output(np.zeros(3))


def test_decode_output_of_zero_vector_is_first_symbol(codec):
    assert codec.decode_output(np.zeros(4)) == 'h'


@pytest.mark.parametrize("vocabulary", ["", "hello", ["h", "ee"]])
def test_invalid_vocabularies_are_rejected(vocabulary):
    with pytest.raises(ValueError):
        Codec(vocabulary)


def test_custom_vocabulary():
    codec = Codec("ab")
    assert 'a' in codec and 'c' not in codec
    assert codec.decode(1) == 'b'

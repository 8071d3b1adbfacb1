from .errors import CharRNNError, UnrecognizedSymbolError, InvalidDepthError, DimensionMismatchError
from .codec import Codec, Encoding, REFERENCE_VOCABULARY
from .model import RNN, binary_cross_entropy
from .trainer import Trainer, TrainerConfig, REFERENCE_TRAINING_SET

__all__ = [
    "CharRNNError", "UnrecognizedSymbolError", "InvalidDepthError", "DimensionMismatchError",
    "Codec", "Encoding", "REFERENCE_VOCABULARY",
    "RNN", "binary_cross_entropy",
    "Trainer", "TrainerConfig", "REFERENCE_TRAINING_SET",
]
__version__ = "0.1.0"

from .cascade import MAX_DEPTH, compress_round, decode, encode
from .compression import Compressor
from .config_loader import load_config
from .errors import (
    DecodeCorruptionError,
    HuffcascadeError,
    MalformedHeaderError,
    UnrepresentableRoundError,
)

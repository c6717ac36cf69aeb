"""
BASESTREAM - Streaming RFC 4648 base64/base32 encoder and decoder

This package encodes and decodes unbounded byte streams one fixed-size block
at a time, wrapping encoded output at a configurable column and decoding
input whose groups may be split across reads.
"""

from .alphabets import ALPHABETS, Alphabet, get_alphabet
from .api_files import decodefile, encodefile
from .api_streams import decode_stream, encode_stream, new_wrap_state, write_wrapped
from .api_strings import (
    b32decode,
    b32encode,
    b64decode,
    b64encode,
    decode_bytes,
    encode_bytes,
)
from .errors import BaseStreamError, DecodeError, ReadError, WriteError
from .main import basestream, cli, main
from .version import __version__

__all__ = [
    "ALPHABETS",
    "Alphabet",
    "BaseStreamError",
    "DecodeError",
    "ReadError",
    "WriteError",
    "__version__",
    "b32decode",
    "b32encode",
    "b64decode",
    "b64encode",
    "basestream",
    "cli",
    "decode_bytes",
    "decode_stream",
    "decodefile",
    "encode_bytes",
    "encode_stream",
    "encodefile",
    "get_alphabet",
    "main",
    "new_wrap_state",
    "write_wrapped",
]

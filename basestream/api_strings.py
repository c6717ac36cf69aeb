"""In-memory byte/text convenience wrappers."""

from .main import basestream


def encode_bytes(data, wrap_column: int = 0, alphabet: str = "base64"):
    return basestream.encode_bytes(data, wrap_column, alphabet)


def decode_bytes(text, ignore_garbage: bool = False, alphabet: str = "base64"):
    return basestream.decode_bytes(text, ignore_garbage, alphabet)


def b64encode(data, wrap_column: int = 0):
    return basestream.encode_bytes(data, wrap_column, "base64")


def b64decode(text, ignore_garbage: bool = False):
    return basestream.decode_bytes(text, ignore_garbage, "base64")


def b32encode(data, wrap_column: int = 0):
    return basestream.encode_bytes(data, wrap_column, "base32")


def b32decode(text, ignore_garbage: bool = False):
    return basestream.decode_bytes(text, ignore_garbage, "base32")


__all__ = [
    "b32decode",
    "b32encode",
    "b64decode",
    "b64encode",
    "decode_bytes",
    "encode_bytes",
]

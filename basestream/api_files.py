"""File-oriented convenience wrappers."""

from .main import basestream


def encodefile(
    src: str,
    dst: str | None = None,
    wrap_column: int | None = None,
    alphabet: str = "base64",
):
    return basestream.encodefile(src, dst, wrap_column, alphabet)


def decodefile(
    src: str,
    dst: str | None = None,
    ignore_garbage: bool = False,
    alphabet: str = "base64",
):
    return basestream.decodefile(src, dst, ignore_garbage, alphabet)


__all__ = ["decodefile", "encodefile"]

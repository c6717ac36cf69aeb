"""Stream pipeline entry points."""

from .main import basestream


def encode_stream(
    source,
    sink,
    wrap_column: int | None = None,
    *,
    alphabet: str = "base64",
    block_size: int | None = None,
):
    """
    Encode a binary stream block by block.

    Args:
        source: Readable binary stream
        sink: Writable binary stream
        wrap_column: Characters per output line, 0 disables wrapping
            (default 76 or BASESTREAM_WRAP)
        alphabet: base64, base64url, base32 or base32hex
        block_size: Raw bytes per read, a multiple of the alphabet group

    Returns:
        Number of raw bytes consumed

    Raises:
        ReadError / WriteError on I/O failure
    """
    return basestream.encode_stream(
        source,
        sink,
        wrap_column,
        alphabet=alphabet,
        block_size=block_size,
    )


def decode_stream(
    source,
    sink,
    *,
    ignore_garbage: bool = False,
    alphabet: str = "base64",
    block_size: int | None = None,
):
    """
    Decode an encoded binary stream block by block.

    Args:
        source: Readable binary stream of encoded text
        sink: Writable binary stream for the decoded bytes
        ignore_garbage: Drop every byte outside the alphabet and pad
        alphabet: base64, base64url, base32 or base32hex
        block_size: Decoded bytes per read, a multiple of the alphabet group

    Returns:
        Number of decoded bytes written

    Raises:
        DecodeError on malformed input, ReadError / WriteError on I/O failure

    Note:
        - Newlines are always accepted, so wrapped output decodes as-is
        - Bytes decoded before an error are already written to sink
    """
    return basestream.decode_stream(
        source,
        sink,
        ignore_garbage=ignore_garbage,
        alphabet=alphabet,
        block_size=block_size,
    )


def write_wrapped(text: bytes, wrap_column: int, wrap_state, sink):
    return basestream.write_wrapped(text, wrap_column, wrap_state, sink)


def new_wrap_state():
    return basestream._WrapState()


__all__ = ["decode_stream", "encode_stream", "new_wrap_state", "write_wrapped"]

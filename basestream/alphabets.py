"""
RFC 4648 alphabets used by the streaming pipelines.

An `Alphabet` bundles the group geometry of one encoding (how many raw bytes
map to how many characters), the characters a decoder accepts, the legal pad
lengths of a final group and the `base64` module primitives that do the
actual bit packing. The pipelines never look inside the packed bits; they
only rely on the group geometry and on `valid_prefix`/`decode_groups`.
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Pattern, Tuple, Union

PAD = b"="

_SEGMENT = re.compile(rb"[^=]+=*")


@dataclass(frozen=True)
class Alphabet:
    name: str
    group_bytes: int
    group_chars: int
    chars: bytes
    pad_lengths: Tuple[int, ...]
    encoder: Callable[[bytes], bytes] = field(repr=False)
    decoder: Callable[[bytes], bytes] = field(repr=False)
    suffix: str
    enc_blocksize: int
    dec_blocksize: int
    pad: bytes = PAD
    _groups: Pattern[bytes] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.enc_blocksize % self.group_bytes or self.dec_blocksize % self.group_bytes:
            raise ValueError(f"{self.name}: block sizes must be whole groups")
        body = b"[" + re.escape(self.chars) + b"]"
        size = self.group_chars
        alternatives = [body + b"{%d}" % size]
        for pads in self.pad_lengths:
            alternatives.append(body + b"{%d}" % (size - pads) + re.escape(self.pad) + b"{%d}" % pads)
        pattern = b"(?:" + b"|".join(alternatives) + b")*"
        object.__setattr__(self, "_groups", re.compile(pattern))

    def encode(self, data: bytes) -> bytes:
        return self.encoder(data)

    def encoded_length(self, size: int) -> int:
        """Characters produced for `size` raw bytes, padding included."""
        return -(-size // self.group_bytes) * self.group_chars

    def valid_prefix(self, data: bytes, end: int | None = None) -> int:
        """Length of the longest run of well-formed groups at the start of `data`."""
        if end is None:
            end = len(data)
        return self._groups.match(data, 0, end).end()

    def decode_groups(self, data: bytes) -> bytes:
        """
        Decode whole groups already accepted by `valid_prefix`.

        A padded group may be followed by more groups, so the run is split
        after every pad run and each piece is decoded on its own.
        """
        if not data:
            return b""
        if self.pad not in data:
            return self.decoder(data)
        return b"".join(self.decoder(piece) for piece in _SEGMENT.findall(data))


_B64_CHARS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_B64URL_CHARS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
_B32_CHARS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_B32HEX_CHARS = b"0123456789ABCDEFGHIJKLMNOPQRSTUV"

# Encode blocks are sized so that only the final block of a stream can pad.
_B64_ENC_BLOCKSIZE = 1024 * 3 * 10
_B64_DEC_BLOCKSIZE = 1024 * 3
_B32_ENC_BLOCKSIZE = 1024 * 5 * 6
_B32_DEC_BLOCKSIZE = 1024 * 5

ALPHABETS: Dict[str, Alphabet] = {
    "base64": Alphabet(
        name="base64",
        group_bytes=3,
        group_chars=4,
        chars=_B64_CHARS,
        pad_lengths=(2, 1),
        encoder=base64.b64encode,
        decoder=base64.b64decode,
        suffix=".b64",
        enc_blocksize=_B64_ENC_BLOCKSIZE,
        dec_blocksize=_B64_DEC_BLOCKSIZE,
    ),
    "base64url": Alphabet(
        name="base64url",
        group_bytes=3,
        group_chars=4,
        chars=_B64URL_CHARS,
        pad_lengths=(2, 1),
        encoder=base64.urlsafe_b64encode,
        decoder=base64.urlsafe_b64decode,
        suffix=".b64u",
        enc_blocksize=_B64_ENC_BLOCKSIZE,
        dec_blocksize=_B64_DEC_BLOCKSIZE,
    ),
    "base32": Alphabet(
        name="base32",
        group_bytes=5,
        group_chars=8,
        chars=_B32_CHARS,
        pad_lengths=(6, 4, 3, 1),
        encoder=base64.b32encode,
        decoder=base64.b32decode,
        suffix=".b32",
        enc_blocksize=_B32_ENC_BLOCKSIZE,
        dec_blocksize=_B32_DEC_BLOCKSIZE,
    ),
    "base32hex": Alphabet(
        name="base32hex",
        group_bytes=5,
        group_chars=8,
        chars=_B32HEX_CHARS,
        pad_lengths=(6, 4, 3, 1),
        encoder=base64.b32hexencode,
        decoder=base64.b32hexdecode,
        suffix=".b32h",
        enc_blocksize=_B32_ENC_BLOCKSIZE,
        dec_blocksize=_B32_DEC_BLOCKSIZE,
    ),
}


def get_alphabet(alphabet: Union[str, Alphabet]) -> Alphabet:
    if isinstance(alphabet, Alphabet):
        return alphabet
    try:
        return ALPHABETS[str(alphabet).strip().lower()]
    except KeyError:
        raise ValueError(f"Unsupported alphabet '{alphabet}'") from None


__all__ = ["ALPHABETS", "Alphabet", "PAD", "get_alphabet"]

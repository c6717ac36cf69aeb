# BASESTREAM STREAMING CODEC ->

import os as _os_module

from .alphabets import ALPHABETS, Alphabet, get_alphabet
from .errors import BaseStreamError, DecodeError, ReadError, WriteError


class basestream:
    import binascii
    import io
    import os
    import pathlib
    import sys
    import typing
    import numpy as np

    @staticmethod
    def _env_int(name: str, minimum: int = 1) -> "basestream.typing.Optional[int]":
        value = _os_module.getenv(name)
        if not value:
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        if parsed < minimum:
            return None
        return parsed

    WRAP_COLUMN = 76
    _WRAP_ENV = _env_int("BASESTREAM_WRAP", minimum=0)
    if _WRAP_ENV is not None:
        WRAP_COLUMN = _WRAP_ENV
    DEFAULT_ALPHABET = os.getenv("BASESTREAM_ALPHABET", "base64").strip().lower() or "base64"
    if DEFAULT_ALPHABET not in ALPHABETS:
        DEFAULT_ALPHABET = "base64"
    NEWLINE = b"\n"

    class _WrapState:
        """Output column of the line currently being written."""

        __slots__ = ("column",)

        def __init__(self) -> None:
            self.column = 0

    class _DecodeContext:
        """
        Resumable decode state threaded through every read of one decode run.

        Characters that do not yet complete a group are held back as residual
        and prefixed to the next step, so a group split across two reads still
        decodes. Calling `step(b"")` flushes: a residual that is still there
        can never be completed and marks the input as invalid.
        """

        def __init__(self, alphabet: Alphabet):
            self.alphabet = alphabet
            self._residual = b""

        @property
        def pending(self) -> int:
            return len(self._residual)

        def step(self, text: bytes) -> "basestream.typing.Tuple[bytes, bool]":
            if not text:
                if not self._residual:
                    return b"", True
                self._residual = b""
                return b"", False
            if basestream.NEWLINE in text:
                text = bytes(text).replace(basestream.NEWLINE, b"")
            data = self._residual + bytes(text)
            group = self.alphabet.group_chars
            whole = len(data) - len(data) % group
            valid = self.alphabet.valid_prefix(data, whole)
            try:
                out = self.alphabet.decode_groups(data[:valid])
            except basestream.binascii.Error:
                self._residual = b""
                return b"", False
            if valid < whole:
                self._residual = b""
                return out, False
            self._residual = data[whole:]
            return out, True

    @staticmethod
    def _resolve_wrap(wrap_column: "basestream.typing.Optional[int]") -> int:
        if wrap_column is None:
            return basestream.WRAP_COLUMN
        wrap = int(wrap_column)
        if wrap < 0:
            raise ValueError(f"Invalid wrap column: {wrap_column}")
        return wrap

    @staticmethod
    def _resolve_block_size(block_size: "basestream.typing.Optional[int]", default: int, group: int) -> int:
        if block_size is None:
            return default
        size = int(block_size)
        if size <= 0 or size % group:
            raise ValueError(f"Block size must be a positive multiple of {group}, got {block_size}")
        return size

    @staticmethod
    def _keep_table(alphabet: Alphabet) -> "basestream.np.ndarray":
        table = basestream.np.zeros(256, dtype=bool)
        table[basestream.np.frombuffer(alphabet.chars + alphabet.pad, dtype=basestream.np.uint8)] = True
        return table

    @staticmethod
    def _filter_garbage(chunk: bytes, keep: "basestream.np.ndarray") -> bytes:
        arr = basestream.np.frombuffer(chunk, dtype=basestream.np.uint8)
        return arr[keep[arr]].tobytes()

    @staticmethod
    def _read_block(
        source,
        size: int,
        keep: "basestream.typing.Optional[basestream.np.ndarray]" = None
    ) -> "basestream.typing.Tuple[bytes, bool]":
        """Read until `size` bytes are buffered or the source ends; returns (block, eof)."""
        block = bytearray()
        while len(block) < size:
            try:
                chunk = source.read(size - len(block))
            except OSError as exc:
                raise ReadError() from exc
            if chunk is None:
                # non-blocking source with nothing available yet
                continue
            if not chunk:
                return bytes(block), True
            if keep is not None:
                chunk = basestream._filter_garbage(chunk, keep)
            block += chunk
        return bytes(block), False

    @staticmethod
    def _write_all(sink, data: bytes) -> None:
        try:
            written = sink.write(data)
        except OSError as exc:
            raise WriteError() from exc
        if written is not None and written < len(data):
            raise WriteError()

    @staticmethod
    def write_wrapped(text: bytes, wrap_column: int, wrap_state: "basestream._WrapState", sink) -> None:
        if wrap_column == 0:
            basestream._write_all(sink, text)
            return
        out = bytearray()
        pos = 0
        end = len(text)
        while pos < end:
            remaining = wrap_column - wrap_state.column
            if remaining == 0:
                out += basestream.NEWLINE
                wrap_state.column = 0
                continue
            take = min(remaining, end - pos)
            out += text[pos:pos + take]
            wrap_state.column += take
            pos += take
        basestream._write_all(sink, out)

    @staticmethod
    def encode_stream(
        source,
        sink,
        wrap_column: "basestream.typing.Optional[int]" = None,
        *,
        alphabet: "basestream.typing.Union[str, Alphabet]" = "base64",
        block_size: "basestream.typing.Optional[int]" = None
    ) -> int:
        codec = get_alphabet(alphabet)
        wrap = basestream._resolve_wrap(wrap_column)
        size = basestream._resolve_block_size(block_size, codec.enc_blocksize, codec.group_bytes)
        state = basestream._WrapState()
        consumed = 0
        while True:
            block, _eof = basestream._read_block(source, size)
            if block:
                basestream.write_wrapped(codec.encode(block), wrap, state, sink)
                consumed += len(block)
            if len(block) < size:
                break
        if wrap and state.column > 0:
            basestream._write_all(sink, basestream.NEWLINE)
        return consumed

    @staticmethod
    def _decode_step(ctx: "basestream._DecodeContext", text: bytes, sink) -> int:
        out, ok = ctx.step(text)
        if out:
            basestream._write_all(sink, out)
        if not ok:
            raise DecodeError()
        return len(out)

    @staticmethod
    def decode_stream(
        source,
        sink,
        *,
        ignore_garbage: bool = False,
        alphabet: "basestream.typing.Union[str, Alphabet]" = "base64",
        block_size: "basestream.typing.Optional[int]" = None
    ) -> int:
        codec = get_alphabet(alphabet)
        size = basestream._resolve_block_size(block_size, codec.dec_blocksize, codec.group_bytes)
        text_size = codec.encoded_length(size)
        keep = basestream._keep_table(codec) if ignore_garbage else None
        ctx = basestream._DecodeContext(codec)
        written = 0
        eof = False
        while not eof:
            block, eof = basestream._read_block(source, text_size, keep)
            if block:
                written += basestream._decode_step(ctx, block, sink)
        if ctx.pending:
            written += basestream._decode_step(ctx, b"", sink)
        return written

    @staticmethod
    def encode_bytes(
        data: "basestream.typing.Union[bytes, bytearray, memoryview]",
        wrap_column: int = 0,
        alphabet: "basestream.typing.Union[str, Alphabet]" = "base64"
    ) -> bytes:
        sink = basestream.io.BytesIO()
        basestream.encode_stream(basestream.io.BytesIO(bytes(data)), sink, wrap_column, alphabet=alphabet)
        return sink.getvalue()

    @staticmethod
    def decode_bytes(
        text: "basestream.typing.Union[str, bytes, bytearray, memoryview]",
        ignore_garbage: bool = False,
        alphabet: "basestream.typing.Union[str, Alphabet]" = "base64"
    ) -> bytes:
        if isinstance(text, str):
            try:
                text = text.encode("ascii")
            except UnicodeEncodeError:
                if not ignore_garbage:
                    raise DecodeError() from None
                text = text.encode("utf-8")
        sink = basestream.io.BytesIO()
        basestream.decode_stream(
            basestream.io.BytesIO(bytes(text)),
            sink,
            ignore_garbage=ignore_garbage,
            alphabet=alphabet
        )
        return sink.getvalue()

    @staticmethod
    def _normalize_path(path_like: "basestream.typing.Union[str, basestream.pathlib.Path]") -> "basestream.pathlib.Path":
        if isinstance(path_like, basestream.pathlib.Path):
            path = path_like
        else:
            path = basestream.pathlib.Path(str(path_like))
        return path.expanduser().resolve(strict=False)

    @staticmethod
    def _ensure_existing_file(path: "basestream.pathlib.Path") -> None:
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")

    @staticmethod
    def encodefile(
        src: "basestream.typing.Union[str, basestream.pathlib.Path]",
        dst: "basestream.typing.Union[str, basestream.pathlib.Path, None]" = None,
        wrap_column: "basestream.typing.Optional[int]" = None,
        alphabet: "basestream.typing.Union[str, Alphabet]" = "base64"
    ) -> str:
        codec = get_alphabet(alphabet)
        src_path = basestream._normalize_path(src)
        basestream._ensure_existing_file(src_path)
        if dst is None:
            out_path = src_path.with_name(src_path.name + codec.suffix)
        else:
            out_path = basestream._normalize_path(dst)
        if out_path == src_path:
            raise ValueError(f"Refusing to overwrite input file: {src_path}")
        with open(src_path, "rb") as source, open(out_path, "wb") as sink:
            basestream.encode_stream(source, sink, wrap_column, alphabet=codec)
        return str(out_path)

    @staticmethod
    def decodefile(
        src: "basestream.typing.Union[str, basestream.pathlib.Path]",
        dst: "basestream.typing.Union[str, basestream.pathlib.Path, None]" = None,
        ignore_garbage: bool = False,
        alphabet: "basestream.typing.Union[str, Alphabet]" = "base64"
    ) -> str:
        codec = get_alphabet(alphabet)
        src_path = basestream._normalize_path(src)
        basestream._ensure_existing_file(src_path)
        if dst is not None:
            out_path = basestream._normalize_path(dst)
        elif src_path.suffix == codec.suffix:
            out_path = src_path.with_suffix("")
        else:
            out_path = src_path.with_name(src_path.name + ".out")
        if out_path == src_path:
            raise ValueError(f"Refusing to overwrite input file: {src_path}")
        with open(src_path, "rb") as source, open(out_path, "wb") as sink:
            basestream.decode_stream(source, sink, ignore_garbage=ignore_garbage, alphabet=codec)
        return str(out_path)


def _describe(exc: BaseException) -> str:
    message = str(exc)
    cause = exc.__cause__
    if cause is not None:
        reason = getattr(cause, "strerror", None) or str(cause)
        if reason:
            message = f"{message}: {reason}"
    return message


def cli(argv=None) -> int:
    import argparse

    from .version import __version__

    def _wrap_value(text: str) -> int:
        try:
            value = int(text, 10)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid wrap size: '{text}'") from None
        if value < 0:
            raise argparse.ArgumentTypeError(f"invalid wrap size: '{text}'")
        return value

    parser = argparse.ArgumentParser(
        prog="basestream",
        description="Base-N encode or decode FILE, or standard input, to standard output."
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Input file (omit or use '-' for standard input)"
    )
    parser.add_argument(
        "-d", "--decode",
        action="store_true",
        help="Decode data"
    )
    parser.add_argument(
        "-i", "--ignore-garbage",
        dest="ignore_garbage",
        action="store_true",
        help="When decoding, ignore non-alphabet characters"
    )
    parser.add_argument(
        "-w", "--wrap",
        dest="wrap_column",
        type=_wrap_value,
        default=basestream.WRAP_COLUMN,
        metavar="COLS",
        help=f"Wrap encoded lines after COLS characters (default {basestream.WRAP_COLUMN}). Use 0 to disable line wrapping"
    )
    parser.add_argument(
        "--alphabet",
        choices=sorted(ALPHABETS),
        default=basestream.DEFAULT_ALPHABET,
        help=f"RFC 4648 alphabet (default {basestream.DEFAULT_ALPHABET})"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    if args.file == "-":
        source = basestream.sys.stdin.buffer
        close_source = False
    else:
        try:
            source = open(args.file, "rb")
        except OSError as exc:
            print(f"basestream: {args.file}: {exc.strerror or exc}", file=basestream.sys.stderr)
            return 1
        close_source = True

    sink = basestream.sys.stdout.buffer
    try:
        if args.decode:
            basestream.decode_stream(
                source,
                sink,
                ignore_garbage=args.ignore_garbage,
                alphabet=args.alphabet
            )
        else:
            basestream.encode_stream(source, sink, args.wrap_column, alphabet=args.alphabet)
        sink.flush()
    except BaseStreamError as exc:
        print(f"basestream: {_describe(exc)}", file=basestream.sys.stderr)
        return 1
    except OSError as exc:
        print(f"basestream: write error: {exc.strerror or exc}", file=basestream.sys.stderr)
        return 1
    finally:
        if close_source:
            source.close()
    return 0


def main(argv=None) -> int:
    return cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())

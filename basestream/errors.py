"""Exceptions raised by the streaming encode/decode pipelines."""


class BaseStreamError(RuntimeError):
    """Base class for fatal pipeline failures."""


class ReadError(BaseStreamError):
    """Raised when the input stream cannot be read."""

    def __init__(self, message: str = "read error") -> None:
        super().__init__(message)


class WriteError(BaseStreamError):
    """Raised on a failed or short write to the output stream."""

    def __init__(self, message: str = "write error") -> None:
        super().__init__(message)


class DecodeError(BaseStreamError, ValueError):
    """Raised when the encoded input is malformed."""

    def __init__(self, message: str = "invalid input") -> None:
        super().__init__(message)


__all__ = ["BaseStreamError", "DecodeError", "ReadError", "WriteError"]

"""Binary decoder for PocketTopo ``.top`` files.

Pure and synchronous: takes the whole file as bytes and returns a
:class:`~pockettopo.domain.models.Document` or raises a
:class:`~pockettopo.codec.errors.ParseError`. File I/O is the caller's job.
"""

from pockettopo.codec.errors import (
    InvalidColor,
    InvalidElement,
    InvalidHeader,
    InvalidTimestamp,
    ParseError,
    TruncatedInput,
    UndefinedStation,
    UnknownError,
    UnsupportedVersion,
    Utf8Error,
)
from pockettopo.codec.parser import HEADER, VERSION, parse

__all__ = [
    "HEADER",
    "VERSION",
    "InvalidColor",
    "InvalidElement",
    "InvalidHeader",
    "InvalidTimestamp",
    "ParseError",
    "TruncatedInput",
    "UndefinedStation",
    "UnknownError",
    "UnsupportedVersion",
    "Utf8Error",
    "parse",
]

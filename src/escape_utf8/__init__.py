from escape_utf8.decoder import Utf8Decoder, classify_lead_byte, iter_codepoints
from escape_utf8.error import (
    EscapeError,
    InputReadError,
    MalformedEncodingError,
    OutputWriteError,
    StreamOpenError,
)
from escape_utf8.escape import EscapeStats, escape_bytes, escape_stream, run
from escape_utf8.escaper import escape_codepoint, format_escape, is_passthrough

__all__ = [
    "EscapeError",
    "EscapeStats",
    "InputReadError",
    "MalformedEncodingError",
    "OutputWriteError",
    "StreamOpenError",
    "Utf8Decoder",
    "classify_lead_byte",
    "escape_bytes",
    "escape_codepoint",
    "escape_stream",
    "format_escape",
    "is_passthrough",
    "iter_codepoints",
    "run",
]

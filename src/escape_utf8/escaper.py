from escape_utf8.types import Codepoint

PASSTHROUGH_CONTROLS = {0x09, 0x0A, 0x0D}
PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E


def is_passthrough(codepoint: Codepoint) -> bool:
    return (
        PRINTABLE_MIN <= codepoint <= PRINTABLE_MAX
        or codepoint in PASSTHROUGH_CONTROLS
    )


def format_escape(codepoint: Codepoint) -> str:
    """Render `codepoint` as \\u'XXXX': uppercase hex, at least four digits."""
    return f"\\u'{codepoint:04X}'"


def escape_codepoint(codepoint: Codepoint) -> bytes:
    if is_passthrough(codepoint):
        return bytes((codepoint,))
    return format_escape(codepoint).encode("ascii")

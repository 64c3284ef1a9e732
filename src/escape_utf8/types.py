from enum import Enum, IntEnum
from typing import NamedTuple, Protocol, TypeAlias, runtime_checkable

Codepoint: TypeAlias = int


class State(Enum):
    READING = "reading"
    DECODING = "decoding"
    EMIT = "emit"
    FAIL = "fail"
    DONE = "done"


TERMINAL_STATES: set[State] = {State.FAIL, State.DONE}


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    OPEN_FAILURE = 1
    MALFORMED_ENCODING = 2
    INPUT_READ_FAILURE = 3
    OUTPUT_WRITE_FAILURE = 4
    USAGE_ERROR = 5


class DecodeUnit(NamedTuple):
    lead: int
    length: int
    mask: int

    @property
    def min_codepoint(self) -> Codepoint:
        return CODEPOINT_RANGES[self.length][0]

    @property
    def max_codepoint(self) -> Codepoint:
        return CODEPOINT_RANGES[self.length][1]


# Valid codepoint range per encoded length; anything below the minimum is overlong.
CODEPOINT_RANGES: dict[int, tuple[Codepoint, Codepoint]] = {
    1: (0x00, 0x7F),
    2: (0x80, 0x7FF),
    3: (0x800, 0xFFFF),
    4: (0x10000, 0x10FFFF),
}


@runtime_checkable
class IByteSource(Protocol):
    def read_byte(self) -> int | None:
        """Return the next byte, or None at end of input."""
        ...


@runtime_checkable
class IByteSink(Protocol):
    def write(self, token: bytes) -> None:
        """Write one output token."""
        ...

    def check(self) -> None:
        """Raise if any previous write failed."""
        ...

    @property
    def failed(self) -> bool:
        """Whether the sticky error flag is set."""
        ...

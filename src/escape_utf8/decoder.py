from typing import Iterator, Protocol

from escape_utf8.error import MalformedEncodingError
from escape_utf8.types import Codepoint, DecodeUnit, IByteSource

SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF


class IDecoder(Protocol):
    def push(self, byte: int) -> Codepoint | None: ...

    def finish(self) -> None: ...

    def reset(self) -> None: ...

    @property
    def in_sequence(self) -> bool: ...


def classify_lead_byte(byte: int, offset: int = 0) -> DecodeUnit:
    """
    Work out the length and payload mask of the unit that `byte` starts.
    Continuation bytes (0x80-0xBF) and 0xF8-0xFF cannot start a unit.
    """
    if byte & 0b1000_0000 == 0:
        return DecodeUnit(byte, 1, 0b0111_1111)
    if byte & 0b1110_0000 == 0b1100_0000:
        return DecodeUnit(byte, 2, 0b0001_1111)
    if byte & 0b1111_0000 == 0b1110_0000:
        return DecodeUnit(byte, 3, 0b0000_1111)
    if byte & 0b1111_1000 == 0b1111_0000:
        return DecodeUnit(byte, 4, 0b0000_0111)
    raise MalformedEncodingError(offset, f"invalid leading byte {byte:#04x}")


def is_continuation_byte(byte: int) -> bool:
    return byte & 0b1100_0000 == 0b1000_0000


class Utf8Decoder:
    r"""
    Incremental UTF-8 decoder. Bytes are pushed one at a time; a codepoint is
    returned only once every byte of its unit has been consumed and the value
    has passed the range check for its length, which rejects overlong forms
    such as b"\xc0\x80".

    Surrogates (U+D800..U+DFFF) are let through unless `reject_surrogates`.
    """

    def __init__(self, reject_surrogates: bool = False):
        self.reject_surrogates = reject_surrogates
        self._unit: DecodeUnit | None = None
        self._accumulator = 0
        self._remaining = 0
        self._unit_offset = 0
        self._bytes_consumed = 0

    def push(self, byte: int) -> Codepoint | None:
        offset = self._bytes_consumed
        self._bytes_consumed += 1

        if self._unit is None:
            unit = classify_lead_byte(byte, offset)
            if unit.length == 1:
                return byte
            self._unit = unit
            self._unit_offset = offset
            self._accumulator = byte & unit.mask
            self._remaining = unit.length - 1
            return None

        if not is_continuation_byte(byte):
            self._unit = None
            self._accumulator = 0
            self._remaining = 0
            raise MalformedEncodingError(
                self._unit_offset, f"invalid continuation byte {byte:#04x}"
            )
        self._accumulator = (self._accumulator << 6) | (byte & 0b0011_1111)
        self._remaining -= 1
        if self._remaining:
            return None

        codepoint = self._accumulator
        unit = self._unit
        self._unit = None
        self._accumulator = 0
        if not unit.min_codepoint <= codepoint <= unit.max_codepoint:
            raise MalformedEncodingError(
                self._unit_offset,
                f"codepoint {codepoint:#x} out of range for {unit.length}-byte sequence",
            )
        if self.reject_surrogates and SURROGATE_MIN <= codepoint <= SURROGATE_MAX:
            raise MalformedEncodingError(
                self._unit_offset, f"surrogate codepoint {codepoint:#x}"
            )
        return codepoint

    def finish(self) -> None:
        if self._unit is not None:
            raise MalformedEncodingError(
                self._unit_offset,
                f"truncated {self._unit.length}-byte sequence",
            )

    def reset(self) -> None:
        self._unit = None
        self._accumulator = 0
        self._remaining = 0
        self._unit_offset = 0
        self._bytes_consumed = 0

    @property
    def in_sequence(self) -> bool:
        return self._unit is not None

    @property
    def bytes_consumed(self) -> int:
        return self._bytes_consumed


def iter_codepoints(
    source: IByteSource, reject_surrogates: bool = False
) -> Iterator[Codepoint]:
    decoder = Utf8Decoder(reject_surrogates=reject_surrogates)
    while (byte := source.read_byte()) is not None:
        codepoint = decoder.push(byte)
        if codepoint is not None:
            yield codepoint
    decoder.finish()

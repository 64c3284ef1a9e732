from __future__ import annotations

import logging
import sys
from contextlib import ExitStack, contextmanager
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Callable, Iterator, Optional, Type, TypeAlias

from escape_utf8.error import InputReadError, OutputWriteError, StreamOpenError

logger = logging.getLogger(__name__)

ExitCallback: TypeAlias = Callable[
    [Optional[Type[BaseException]], Optional[BaseException], Optional[TracebackType]],
    bool,
]


class ByteSource:
    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def read_byte(self) -> int | None:
        try:
            chunk = self._stream.read(1)
        except OSError as e:
            raise InputReadError(str(e)) from e
        if not chunk:
            return None
        return chunk[0]


class ByteSink:
    """
    Writes output tokens to a binary stream. A failed or short write sets a
    sticky error flag instead of raising; callers poll it through `check`.
    Once the flag is set further writes are dropped.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._error: str | None = None

    @property
    def failed(self) -> bool:
        return self._error is not None

    def write(self, token: bytes) -> None:
        if self.failed:
            return
        try:
            written = self._stream.write(token)
        except OSError as e:
            self._error = str(e) or type(e).__name__
            return
        if written is not None and written != len(token):
            self._error = f"short write ({written} of {len(token)} bytes)"

    def check(self) -> None:
        if self._error is not None:
            raise OutputWriteError(self._error)

    def flush(self) -> None:
        if not self.failed:
            try:
                self._stream.flush()
            except OSError as e:
                self._error = str(e) or type(e).__name__
        self.check()

    def close(self) -> None:
        try:
            self._stream.close()
        except OSError as e:
            if self._error is None:
                self._error = str(e) or type(e).__name__
        self.check()


class StreamPair:
    def __init__(self, source: ByteSource, sink: ByteSink):
        self.source = source
        self.sink = sink


def _release_input(stream: BinaryIO, path: Path) -> ExitCallback:
    def release(exc_type, exc, tb) -> bool:
        try:
            stream.close()
        except OSError as e:
            logger.warning("Failed to close input file %s: %s", path, e)
        return False

    return release


def _release_output(sink: ByteSink, close: bool) -> ExitCallback:
    def release(exc_type, exc, tb) -> bool:
        try:
            if close:
                sink.close()
            else:
                sink.flush()
        except OutputWriteError:
            # The run already failed; its error is the one reported.
            if exc is None:
                raise
            logger.debug("Ignoring output release failure after %r", exc)
        return False

    return release


def _standard_input() -> BinaryIO:
    # None when the process was started with the descriptor closed.
    if sys.stdin is None:
        raise InputReadError("standard input is closed")
    return sys.stdin.buffer


def _standard_output() -> BinaryIO:
    if sys.stdout is None:
        raise OutputWriteError("standard output is closed")
    return sys.stdout.buffer


@contextmanager
def open_streams(
    input_path: Path | None,
    output_path: Path | None,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> Iterator[StreamPair]:
    """
    Acquire the input and then the output stream, yielding them as a
    `StreamPair`. Without a path the standard streams are used; those are
    flushed on exit but never closed. The output is released before the input.
    """
    with ExitStack() as stack:
        if input_path is None:
            in_stream = stdin if stdin is not None else _standard_input()
        else:
            try:
                in_stream = open(input_path, "rb")
            except OSError as e:
                raise StreamOpenError("input", input_path) from e
            stack.push(_release_input(in_stream, input_path))
            logger.debug("Opened input file %s", input_path)

        if output_path is None:
            out_stream = stdout if stdout is not None else _standard_output()
            sink = ByteSink(out_stream)
            stack.push(_release_output(sink, close=False))
        else:
            try:
                out_stream = open(output_path, "wb")
            except OSError as e:
                raise StreamOpenError("output", output_path) from e
            sink = ByteSink(out_stream)
            stack.push(_release_output(sink, close=True))
            logger.debug("Opened output file %s", output_path)

        yield StreamPair(ByteSource(in_stream), sink)

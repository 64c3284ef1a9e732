from __future__ import annotations

import io
import logging
import sys
from typing import TextIO

from pydantic import BaseModel

from escape_utf8.config import RunConfig
from escape_utf8.decoder import IDecoder, Utf8Decoder
from escape_utf8.error import EscapeError, MalformedEncodingError
from escape_utf8.escaper import escape_codepoint, is_passthrough
from escape_utf8.machine import escape_machine
from escape_utf8.streams import ByteSink, ByteSource, open_streams
from escape_utf8.types import ExitCode, IByteSink, IByteSource, State

logger = logging.getLogger(__name__)


class EscapeStats(BaseModel):
    bytes_read: int = 0
    codepoints: int = 0
    escaped: int = 0


def escape_stream(
    source: IByteSource,
    sink: IByteSink,
    *,
    reject_surrogates: bool = False,
) -> EscapeStats:
    """
    Read `source` to the end, writing one token to `sink` per decoded
    codepoint. Raises the first error met: `MalformedEncodingError`,
    `InputReadError` or `OutputWriteError`. Tokens written before the failing
    unit stay written; nothing is written for the failing unit itself.
    """
    stats = EscapeStats()
    decoder: IDecoder = Utf8Decoder(reject_surrogates=reject_surrogates)
    machine = escape_machine()

    try:
        while True:
            byte = source.read_byte()
            if byte is None:
                decoder.finish()
                if machine.state == State.READING:
                    machine.set_state(State.DONE)
                break
            stats.bytes_read += 1

            codepoint = decoder.push(byte)
            if codepoint is None:
                if machine.state == State.READING:
                    machine.set_state(State.DECODING)
                continue

            machine.set_state(State.EMIT)
            if not is_passthrough(codepoint):
                stats.escaped += 1
            sink.write(escape_codepoint(codepoint))
            sink.check()
            stats.codepoints += 1
            machine.set_state(State.READING)
    except EscapeError:
        machine.set_state(State.FAIL)
        raise

    logger.debug(
        "Escaped %d codepoints (%d as escape sequences) from %d bytes",
        stats.codepoints,
        stats.escaped,
        stats.bytes_read,
    )
    return stats


def escape_bytes(data: bytes, *, reject_surrogates: bool = False) -> bytes:
    output = io.BytesIO()
    sink = ByteSink(output)
    escape_stream(
        ByteSource(io.BytesIO(data)), sink, reject_surrogates=reject_surrogates
    )
    return output.getvalue()


def run(config: RunConfig, stderr: TextIO | None = None) -> ExitCode:
    """
    Open the configured streams, escape the input and map the outcome to an
    exit code. The message of the first error is written to `stderr`.
    """
    stderr = stderr if stderr is not None else sys.stderr
    try:
        with open_streams(config.input_path, config.output_path) as streams:
            escape_stream(
                streams.source,
                streams.sink,
                reject_surrogates=config.reject_surrogates,
            )
    except EscapeError as e:
        if isinstance(e, MalformedEncodingError):
            logger.debug("Malformed input at byte %d: %s", e.offset, e.message)
        else:
            logger.debug("Run failed: %s", e)
        stderr.write(e.user_message + "\n")
        stderr.flush()
        return e.exit_code
    return ExitCode.SUCCESS

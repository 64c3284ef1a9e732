from pathlib import Path

from escape_utf8.types import ExitCode


class EscapeError(Exception):
    exit_code: ExitCode = ExitCode.FAILURE

    @property
    def user_message(self) -> str:
        return str(self)


class MalformedEncodingError(EscapeError):
    exit_code = ExitCode.MALFORMED_ENCODING

    def __init__(self, offset: int, message: str | None = None) -> None:
        super().__init__(
            "The given text is not valid UTF-8 text. Exiting now."
            + (f" ({message} at byte {offset})" if message else "")
        )
        self.offset = offset
        self.message = message

    @property
    def user_message(self) -> str:
        return "The given text is not valid UTF-8 text. Exiting now."


class InputReadError(EscapeError):
    exit_code = ExitCode.INPUT_READ_FAILURE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            "Failed to read input" + (f": {message}" if message else "")
        )
        self.message = message

    @property
    def user_message(self) -> str:
        return "Failed to read input. Exiting now."


class OutputWriteError(EscapeError):
    exit_code = ExitCode.OUTPUT_WRITE_FAILURE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            "Failed to write output" + (f": {message}" if message else "")
        )
        self.message = message

    @property
    def user_message(self) -> str:
        return "Failed to write output. Exiting now."


class StreamOpenError(EscapeError):
    exit_code = ExitCode.OPEN_FAILURE

    def __init__(self, role: str, path: Path) -> None:
        super().__init__(f'Failed to open {role} file "{path}". Exiting now.')
        self.role = role
        self.path = path


class InvalidTransitionError(Exception):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot transition from state '{current}' to state '{target}'."
        )
        self.current = current
        self.target = target

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class ProgramInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    summary: str
    description: str

    @property
    def version_line(self) -> str:
        return f"{self.name} version {self.version}"


PROGRAM = ProgramInfo(
    name="escape-utf8",
    version="0.0.2",
    summary="Transform UTF-8 text to a representation in ASCII.",
    description=(
        "Printable ASCII characters, tab, line feed and carriage return are "
        "copied unchanged. Every other character, including the remaining "
        "ASCII control characters, is written as an escape sequence of the "
        "form \\u'XXXX' holding its codepoint in uppercase hexadecimal, padded "
        "to at least four digits. For example U+00F1 becomes \\u'00F1' and "
        "U+1F602 becomes \\u'1F602'. Input that is not valid UTF-8 stops the "
        "program with exit status 2."
    ),
)


class RunConfig(BaseModel):
    input_path: Path | None = None
    output_path: Path | None = None
    reject_surrogates: bool = False
    verbose: bool = False

    @field_validator("input_path", "output_path", mode="before")
    @classmethod
    def _reject_empty_path(cls, value: object) -> object:
        if isinstance(value, str) and not value:
            raise ValueError("path must not be empty")
        return value

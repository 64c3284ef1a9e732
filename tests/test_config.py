from pathlib import Path

import pytest
from pydantic import ValidationError

from escape_utf8.config import PROGRAM, ProgramInfo, RunConfig


def test_program_info_version_line():
    assert PROGRAM.version_line == "escape-utf8 version 0.0.2"


def test_program_info_is_frozen():
    with pytest.raises(ValidationError):
        PROGRAM.version = "9.9.9"


def test_program_info_requires_all_fields():
    with pytest.raises(ValidationError):
        ProgramInfo(name="escape-utf8", version="1.0")


def test_run_config_defaults_to_standard_streams():
    config = RunConfig()
    assert config.input_path is None
    assert config.output_path is None
    assert config.reject_surrogates is False
    assert config.verbose is False


def test_run_config_coerces_paths():
    config = RunConfig(input_path="in.txt", output_path="out/result.txt")
    assert config.input_path == Path("in.txt")
    assert config.output_path == Path("out/result.txt")


@pytest.mark.parametrize("field", ["input_path", "output_path"])
def test_run_config_rejects_empty_path(field: str):
    with pytest.raises(ValidationError, match="path must not be empty"):
        RunConfig(**{field: ""})

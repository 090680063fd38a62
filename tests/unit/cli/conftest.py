"""Shared fixtures for CLI tests."""

import re
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

if TYPE_CHECKING:
    from typer.testing import Result

# ANSI escape code pattern for stripping styling from output
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


class CleanResult:
    """Result wrapper that strips ANSI codes from stdout and the mixed output.

    Rich keeps bold and dim styling even with NO_COLOR=1, which breaks
    plain string assertions on tables and error messages.
    """

    def __init__(self, result: "Result") -> None:
        self._result = result

    @property
    def exit_code(self) -> int:
        return self._result.exit_code

    @property
    def stdout(self) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", self._result.stdout)

    @property
    def output(self) -> str:
        """The terminal output (mixed stdout+stderr) with ANSI codes stripped."""
        return ANSI_ESCAPE_PATTERN.sub("", self._result.output)

    @property
    def exception(self):
        return self._result.exception


class CleanCliRunner(CliRunner):
    """CLI runner that returns results with ANSI codes stripped."""

    def invoke(self, *args, **kwargs) -> CleanResult:
        result = super().invoke(*args, **kwargs)
        return CleanResult(result)


@pytest.fixture
def runner():
    """CLI runner with NO_COLOR=1 and ANSI codes stripped from the output."""
    return CleanCliRunner(env={"NO_COLOR": "1", "COLUMNS": "200"})

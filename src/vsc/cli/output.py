"""Consistent CLI output for JSON and human-readable modes."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from vsc.cli.exit_codes import ExitCode


@dataclass
class CLIResult:
    """Outcome of a CLI command, rendered as text or JSON.

    Successful results put ``data`` at the top level next to the message;
    failures nest the exit code name and message under ``error``.
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: ExitCode | int = ExitCode.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            output: dict[str, Any] = {"status": "completed", "message": self.message}
        else:
            code = self.exit_code
            name = code.name if isinstance(code, ExitCode) else "UNKNOWN_ERROR"
            output = {
                "status": "failed",
                "error": {
                    "code": name,
                    "message": self.message,
                },
            }
        output.update(self.data)
        return output

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Print an error to stderr and exit with ``code``.

    Args:
        message: Error message to display.
        code: Exit code to use.
        json_output: Print a single JSON object instead of ``Error: ...``.
    """
    if json_output:
        result = CLIResult(success=False, message=message, exit_code=code)
        click.echo(json.dumps(result.to_dict()), err=True)
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))


def success_output(result: CLIResult, json_output: bool = False) -> None:
    if json_output:
        click.echo(result.to_json())
    else:
        click.echo(result.message)

"""CLI entry point."""

import typer

app = typer.Typer(
    name="code-smells",
    help="code-smells - File length, function length and nesting depth checks",
    add_completion=False,
    rich_markup_mode="rich",
)

# Import the command to register it
from .check import check as _check  # noqa: F401, E402


def main() -> None:
    app()


__all__ = ["app", "main"]

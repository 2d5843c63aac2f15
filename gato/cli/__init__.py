"""CLI entry point for gato."""

import typer

from gato.cli.main import main_command

app = typer.Typer(
    name="gato",
    help="gato: commit messages from a local qwen CLI",
    add_completion=False,
)

# -h as well as --help
app.command(context_settings={"help_option_names": ["-h", "--help"]})(main_command)


__all__ = [
    "app",
    "main_command",
]

"""Shared utility functions for the CLI."""

from typing import NoReturn

import typer

from gato.config import GatoConfig, RunMode


def fail(message: str) -> NoReturn:
    """Print a labeled fatal error and exit with status 1."""
    typer.echo(f"gato: {message}", err=True)
    raise typer.Exit(1)


def resolve_mode(local: bool, push: bool, test: bool) -> RunMode:
    """Map the mode flags to a RunMode.

    Push implies the local flow, so it wins over --local.

    Raises:
        typer.Exit: If --test is combined with --local or --push.
    """
    if test and (local or push):
        typer.echo("gato: -test cannot be combined with -local or -push", err=True)
        raise typer.Exit(2)
    if test:
        return RunMode.TEST
    if push:
        return RunMode.PUSH
    if local:
        return RunMode.LOCAL
    return RunMode.PREVIEW


def confirm(prompt: str, config: GatoConfig) -> bool:
    """Ask a yes/no question that defaults to yes.

    Args:
        prompt: The question, without the [Y/n] suffix.
        config: Run configuration; prompts are skipped when confirm is off.

    Returns:
        False only for an explicit "n" or "no".
    """
    if not config.confirm:
        return True

    answer = typer.prompt(f"{prompt} [Y/n]", default="y", show_default=False)
    return answer.strip().lower() not in ("n", "no")


def echo_retry(attempt: int, retries: int) -> None:
    """Report a retry on stderr."""
    typer.echo(f"Retry {attempt}/{retries}...", err=True)


def display_message(message: str) -> None:
    """Print the suggested commit message between separators."""
    typer.echo("")
    typer.echo("=" * 60)
    typer.echo("Suggested commit:")
    typer.echo("=" * 60)
    typer.echo(message.rstrip("\n"))
    typer.echo("=" * 60)
    typer.echo("")

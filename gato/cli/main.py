"""Main CLI command for generating commit messages."""

import typer
from loguru import logger

from gato import __version__
from gato.cli.simulate import run_simulation
from gato.cli.utils import (
    confirm,
    display_message,
    echo_retry,
    fail,
    resolve_mode,
)
from gato.config import ConfigError, GatoConfig, RunMode, load_config
from gato.git import (
    GitError,
    NoChangesError,
    build_change_context,
    commit_with_message,
    get_repo_root,
    has_staged_changes,
    push_current_branch,
    require_git,
    select_diff_source,
    stage_all,
)
from gato.llm import LLMError, QwenInvoker, generate_commit_message
from gato.log import setup_logging


def main_command(
    local: bool = typer.Option(
        False,
        "--local",
        "-local",
        help="Stage all changes, generate a message and commit",
    ),
    push: bool = typer.Option(
        False,
        "--push",
        "-push",
        help="Stage all changes, generate a message, commit and push",
    ),
    test: bool = typer.Option(
        False,
        "--test",
        "-test",
        help="Simulate and print title+bullets (no git data)",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompts",
    ),
    analyze: bool = typer.Option(
        False,
        "--analyze",
        help="Print analysis context only",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log git commands and model runs to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
) -> None:
    """Generate a commit message for the current changes with a local qwen CLI.

    Without flags, previews a message for staged (or else unstaged) changes.

    Environment: GITGPT_MAX_PATCH_LINES (default 2500) caps the patch lines
    sent to qwen, GITGPT_RETRIES (default 2) sets retries when qwen output is
    invalid or empty, and GITGPT_MODEL adds an optional model hint to the prompt.
    """
    setup_logging(debug)

    if version:
        typer.echo(f"gato v{__version__}")
        raise typer.Exit(0)

    mode = resolve_mode(local, push, test)

    try:
        config = load_config(mode=mode, confirm=not yes, analyze_only=analyze)
    except ConfigError as e:
        if mode is not RunMode.TEST:
            fail(str(e))
        # Simulate mode runs on built-in defaults instead
        logger.warning(f"ignoring invalid configuration: {e}")
        config = GatoConfig(mode=mode, confirm=not yes, analyze_only=analyze)

    invoker = QwenInvoker(config.model_command)

    if mode is RunMode.TEST:
        run_simulation(config, invoker)
        return

    try:
        invoker.require()
        require_git()
        repo_root = get_repo_root()

        if mode in (RunMode.LOCAL, RunMode.PUSH):
            typer.echo("Staging all changes...", err=True)
            stage_all(repo_root)
            if not has_staged_changes(repo_root):
                raise NoChangesError("nothing staged after git add -A")
            staged, source_label = True, "staged changes"
        else:
            staged, source_label = select_diff_source(repo_root)

        typer.echo(f"Analyzing {source_label}...", err=True)
        context = build_change_context(
            staged,
            max_patch_lines=config.max_patch_lines,
            exclude_patterns=config.exclude_patterns,
            repo_root=repo_root,
        )

        if config.analyze_only:
            typer.echo(context.render())
            raise typer.Exit(0)

        message = generate_commit_message(context, config, invoker, on_retry=echo_retry)
        display_message(message)

        if mode is RunMode.PREVIEW:
            return

        if not confirm("Commit with this message?", config):
            typer.echo("Cancelled.", err=True)
            raise typer.Exit(1)

        output = commit_with_message(message, repo_root)
        if output:
            typer.echo(output)
        typer.echo("✓ Committed.")

        if mode is RunMode.PUSH:
            if not confirm("Push to remote?", config):
                typer.echo("Push cancelled.", err=True)
                raise typer.Exit(0)
            output = push_current_branch(repo_root)
            if output:
                typer.echo(output)
            typer.echo("✓ Pushed.")

    except (GitError, LLMError) as e:
        fail(str(e))

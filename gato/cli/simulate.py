"""Simulate mode: run the pipeline on a synthetic context."""

import time
from typing import Callable

import typer
from loguru import logger

from gato.config import GatoConfig
from gato.git.context import build_simulated_context
from gato.llm import LLMError, QwenInvoker, generate_commit_message
from gato.cli.utils import echo_retry


SIMULATED_FALLBACK_MESSAGE = """simulate commit message generation

- use synthetic context without reading repository changes
- verify subject plus bullet format for git commit constraints
- keep output concise and technical for developer workflows
"""


def run_simulation(
    config: GatoConfig,
    invoker: QwenInvoker,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Generate and print a message for the synthetic context.

    Never fails: model errors fall back to SIMULATED_FALLBACK_MESSAGE.

    Args:
        config: Run configuration.
        invoker: Model invoker to exercise.
        sleep: Delay function between retries.
    """
    context = build_simulated_context()

    if config.analyze_only:
        typer.echo(context.render())
        return

    try:
        invoker.require()
        message = generate_commit_message(context, config, invoker, sleep=sleep, on_retry=echo_retry)
    except LLMError as e:
        logger.debug(f"simulation uses the built-in message: {e}")
        message = SIMULATED_FALLBACK_MESSAGE

    typer.echo(message.rstrip("\n"))

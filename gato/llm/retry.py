"""Retry policy for commit message generation.

The loop is split in two so the policy can be tested without a process:
- decide_next: pure decision from one attempt's outcome to the next action
- generate_commit_message: drives any BaseInvoker using that decision
"""

import time
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from gato.config import GatoConfig
from gato.formatters import ensure_commit_message
from gato.git.context import ChangeContext
from gato.llm.exceptions import GenerationFailedError
from gato.llm.invoker import BaseInvoker, InvocationResult
from gato.llm.prompts import build_prompt


class RetryAction(Enum):
    """Next step after an attempt."""

    SUCCEED = "succeed"
    RETRY = "retry"
    FAIL = "fail"


def decide_next(
    attempt: int,
    retries: int,
    result: InvocationResult,
    message: Optional[str],
) -> RetryAction:
    """Decide what to do after an attempt.

    Args:
        attempt: Zero-based number of the attempt that just finished.
        retries: Number of extra attempts allowed after the first.
        result: The captured model run.
        message: The normalized message, or None if normalization was skipped.

    Returns:
        SUCCEED when a non-empty message exists, otherwise RETRY while
        attempts remain and FAIL after the last one.
    """
    if not result.failed_without_output and message and message.strip():
        return RetryAction.SUCCEED
    if attempt < retries:
        return RetryAction.RETRY
    return RetryAction.FAIL


def generate_commit_message(
    context: ChangeContext,
    config: GatoConfig,
    invoker: BaseInvoker,
    sleep: Callable[[float], None] = time.sleep,
    on_retry: Optional[Callable[[int, int], None]] = None,
) -> str:
    """Ask the model for a commit message until one is usable.

    Args:
        context: The change context to describe.
        config: Run configuration (retries, delay, limits, model hint).
        invoker: Runs the model.
        sleep: Delay function, replaced in tests.
        on_retry: Called with (retry number, total retries) before each retry.

    Returns:
        The rendered, normalized commit message.

    Raises:
        GenerationFailedError: If every attempt failed.
        ModelNotFoundError: If the model command cannot be executed.
    """
    prompt = build_prompt(context.render(), config.limits, config.model_hint)
    attempt = 0

    while True:
        if attempt > 0:
            if on_retry is not None:
                on_retry(attempt, config.retries)
            sleep(config.retry_delay)

        result = invoker.invoke(prompt)

        message = None
        if not result.failed_without_output:
            # stderr is never treated as message content
            message = ensure_commit_message(result.stdout, context.fallback_summary, config.limits)
        else:
            logger.debug(f"attempt {attempt + 1}: exit {result.returncode} with no output")

        action = decide_next(attempt, config.retries, result, message)
        if action is RetryAction.SUCCEED:
            return message
        if action is RetryAction.FAIL:
            raise GenerationFailedError("qwen failed to generate commit message")
        attempt += 1

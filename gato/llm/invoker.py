"""External model CLI invocation."""

import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass

from loguru import logger

from gato.config import DEFAULT_MODEL_COMMAND
from gato.llm.exceptions import LLMError, ModelNotFoundError


@dataclass(frozen=True)
class InvocationResult:
    """Captured outcome of one model run."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def has_output(self) -> bool:
        """True if stdout holds anything besides whitespace."""
        return bool(self.stdout.strip())

    @property
    def failed_without_output(self) -> bool:
        """True if the process failed and printed nothing usable."""
        return self.returncode != 0 and not self.has_output


class BaseInvoker(ABC):
    """Abstract base class for anything that can answer a prompt."""

    @abstractmethod
    def invoke(self, prompt: str) -> InvocationResult:
        """Run the model once and capture its output.

        Args:
            prompt: The full prompt text.

        Returns:
            The captured InvocationResult.
        """
        pass


class QwenInvoker(BaseInvoker):
    """Runs the local model CLI with the prompt as its only argument."""

    def __init__(self, command: str = DEFAULT_MODEL_COMMAND):
        self.command = command

    def require(self) -> None:
        """Ensure the model command is installed.

        Raises:
            ModelNotFoundError: If the command is not found in PATH.
        """
        if shutil.which(self.command) is None:
            raise ModelNotFoundError(f"{self.command} CLI not found in PATH")

    def invoke(self, prompt: str) -> InvocationResult:
        """Run the model once.

        A non-zero exit is not an error here: partial stdout is still worth
        normalizing, so the caller decides. Bytes that are not valid UTF-8
        are replaced with U+FFFD.

        Args:
            prompt: The full prompt text.

        Returns:
            The captured InvocationResult.

        Raises:
            ModelNotFoundError: If the command cannot be found.
            LLMError: If the command cannot be executed for another reason.
        """
        logger.debug(f"running {self.command} with a {len(prompt)} character prompt")
        try:
            result = subprocess.run(
                [self.command, prompt],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError:
            raise ModelNotFoundError(f"{self.command} CLI not found in PATH")
        except OSError as e:
            raise LLMError(f"failed to run {self.command}: {e}")

        logger.debug(
            f"{self.command} exited with {result.returncode}: "
            f"{len(result.stdout or '')} chars stdout, {len(result.stderr or '')} chars stderr"
        )
        return InvocationResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )

"""Model invocation for gato.

The model is an external CLI (qwen by default) that receives the prompt as a
single argument and writes its answer to stdout.
"""

from gato.llm.exceptions import (
    GenerationFailedError,
    LLMError,
    ModelNotFoundError,
)
from gato.llm.invoker import BaseInvoker, InvocationResult, QwenInvoker
from gato.llm.prompts import PROMPT_TEMPLATE, build_prompt
from gato.llm.retry import RetryAction, decide_next, generate_commit_message


# Export commonly used items
__all__ = [
    "BaseInvoker",
    "GenerationFailedError",
    "InvocationResult",
    "LLMError",
    "ModelNotFoundError",
    "PROMPT_TEMPLATE",
    "QwenInvoker",
    "RetryAction",
    "build_prompt",
    "decide_next",
    "generate_commit_message",
]

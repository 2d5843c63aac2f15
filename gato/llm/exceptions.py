"""Model-related exception classes.

Contains all exception classes for model invocation:
- LLMError: Base exception for model-related errors
- ModelNotFoundError: Raised when the model CLI is not installed
- GenerationFailedError: Raised when every attempt failed
"""


class LLMError(Exception):
    """Base exception for model-related errors."""

    pass


class ModelNotFoundError(LLMError):
    """Raised when the model command is not found in PATH."""

    pass


class GenerationFailedError(LLMError):
    """Raised when no attempt produced a usable commit message."""

    pass

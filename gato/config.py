"""Configuration for gato.

Settings are resolved once at startup into an immutable GatoConfig which is
passed explicitly to every component. Sources, lowest precedence first:

1. Built-in defaults
2. ~/.gato/config.yaml (optional)
3. Environment variables (GITGPT_*), after loading a local .env file
4. CLI flags
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from gato.git.diff import DEFAULT_DIFF_EXCLUDE_PATTERNS, DEFAULT_MAX_PATCH_LINES


class ConfigError(Exception):
    """Raised when configuration values cannot be loaded or are invalid."""

    pass


class RunMode(Enum):
    """What a gato run does after generating the message."""

    PREVIEW = "preview"
    LOCAL = "local"
    PUSH = "push"
    TEST = "test"


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_RETRIES = 2
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_MODEL_COMMAND = "qwen"

SUBJECT_MAX = 72
LINE_MAX = 72
MAX_BULLETS = 10

ENV_MAX_PATCH_LINES = "GITGPT_MAX_PATCH_LINES"
ENV_RETRIES = "GITGPT_RETRIES"
ENV_MODEL = "GITGPT_MODEL"

_CONFIG_DIR = Path.home() / ".gato"


@dataclass(frozen=True)
class MessageLimits:
    """Shape limits for the normalized commit message."""

    subject_max: int = SUBJECT_MAX
    line_max: int = LINE_MAX
    max_bullets: int = MAX_BULLETS


@dataclass(frozen=True)
class GatoConfig:
    """Immutable settings for a single gato run."""

    mode: RunMode = RunMode.PREVIEW
    confirm: bool = True
    analyze_only: bool = False
    max_patch_lines: int = DEFAULT_MAX_PATCH_LINES
    retries: int = DEFAULT_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    model_hint: str = ""
    model_command: str = DEFAULT_MODEL_COMMAND
    limits: MessageLimits = field(default_factory=MessageLimits)
    exclude_patterns: tuple[str, ...] = tuple(DEFAULT_DIFF_EXCLUDE_PATTERNS)


def get_config_file_path() -> Path:
    """Get path to the optional config.yaml file.

    Returns:
        Path to ~/.gato/config.yaml
    """
    return _CONFIG_DIR / "config.yaml"


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the YAML configuration file.

    Args:
        path: File to read. Defaults to ~/.gato/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping.
    """
    config_file = path or get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to load config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_file} must contain a mapping")
    return data


def _as_int(value: Any, name: str, minimum: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer >= {minimum}, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer >= {minimum}, got {value!r}")
    if number < minimum:
        raise ConfigError(f"{name} must be an integer >= {minimum}, got {value!r}")
    return number


def _as_float(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a non-negative number, got {value!r}")
    if number < 0:
        raise ConfigError(f"{name} must be a non-negative number, got {value!r}")
    return number


def config_from_dict(data: Dict[str, Any], base: Optional[GatoConfig] = None) -> GatoConfig:
    """Apply values from a configuration mapping on top of base.

    Args:
        data: Mapping as read from config.yaml.
        base: Starting configuration. Defaults to GatoConfig().

    Returns:
        A new GatoConfig.

    Raises:
        ConfigError: If a value has the wrong type or range.
    """
    config = base or GatoConfig()
    changes: Dict[str, Any] = {}

    if "max_patch_lines" in data:
        changes["max_patch_lines"] = _as_int(data["max_patch_lines"], "max_patch_lines", 1)
    if "retries" in data:
        changes["retries"] = _as_int(data["retries"], "retries", 0)
    if "retry_delay" in data:
        changes["retry_delay"] = _as_float(data["retry_delay"], "retry_delay")
    if "model_hint" in data:
        changes["model_hint"] = str(data["model_hint"] or "").strip()
    if "model_command" in data:
        command = str(data["model_command"] or "").strip()
        if not command:
            raise ConfigError("model_command must not be empty")
        changes["model_command"] = command

    limits = config.limits
    limit_changes = {}
    for key in ("subject_max", "line_max", "max_bullets"):
        if key in data:
            # Wrapping needs room for the "- " prefix plus one character
            limit_changes[key] = _as_int(data[key], key, 3 if key == "line_max" else 1)
    if limit_changes:
        changes["limits"] = replace(limits, **limit_changes)

    if "ignore" in data:
        extra = data["ignore"] or []
        if not isinstance(extra, list):
            raise ConfigError("ignore must be a list of patterns")
        merged = list(config.exclude_patterns)
        for pattern in extra:
            pattern = str(pattern).strip()
            if pattern and pattern not in merged:
                merged.append(pattern)
        changes["exclude_patterns"] = tuple(merged)

    return replace(config, **changes)


def config_from_env(environ: Optional[Dict[str, str]] = None, base: Optional[GatoConfig] = None) -> GatoConfig:
    """Apply GITGPT_* environment variables on top of base.

    Args:
        environ: Environment mapping. Defaults to os.environ.
        base: Starting configuration. Defaults to GatoConfig().

    Returns:
        A new GatoConfig.

    Raises:
        ConfigError: If a numeric variable is not a valid integer.
    """
    env = os.environ if environ is None else environ
    config = base or GatoConfig()
    changes: Dict[str, Any] = {}

    max_patch_lines = env.get(ENV_MAX_PATCH_LINES, "")
    if max_patch_lines.strip():
        changes["max_patch_lines"] = _as_int(max_patch_lines, ENV_MAX_PATCH_LINES, 1)

    retries = env.get(ENV_RETRIES, "")
    if retries.strip():
        changes["retries"] = _as_int(retries, ENV_RETRIES, 0)

    if ENV_MODEL in env:
        changes["model_hint"] = env[ENV_MODEL].strip()

    return replace(config, **changes)


def load_config(
    mode: RunMode = RunMode.PREVIEW,
    confirm: bool = True,
    analyze_only: bool = False,
    config_file: Optional[Path] = None,
    environ: Optional[Dict[str, str]] = None,
) -> GatoConfig:
    """Build the configuration for one run.

    Args:
        mode: Run mode selected on the command line.
        confirm: Whether to ask before committing and pushing.
        analyze_only: Print the change context and stop.
        config_file: Override for the YAML config path.
        environ: Override for the process environment (tests).

    Returns:
        The resolved GatoConfig.

    Raises:
        ConfigError: If any source holds an invalid value.
    """
    if environ is None:
        # Does not override variables already set in the environment
        load_dotenv()

    config = config_from_dict(load_config_file(config_file))
    config = config_from_env(environ, base=config)
    config = replace(config, mode=mode, confirm=confirm, analyze_only=analyze_only)

    logger.debug(
        f"config: mode={config.mode.value} max_patch_lines={config.max_patch_lines} "
        f"retries={config.retries} model_hint={config.model_hint or '-'}"
    )
    return config

"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- _git_exit_code: Run a git command and return only its exit status
- require_git: Ensure the git binary is available
- get_repo_root: Get the root directory of the current git repository
"""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from loguru import logger

from gato.git.exceptions import GitError


def _run_git_command(args: list[str], cwd: Optional[Path] = None) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in (defaults to the process cwd).

    Returns:
        The stdout of the git command, stripped. Undecodable bytes (e.g. a
        Latin-1 file in a patch) are replaced with U+FFFD.

    Raises:
        GitError: If the command fails.
    """
    logger.debug(f"git {' '.join(args)}")
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"git command failed: git {' '.join(args)}\n{stderr}".rstrip())
    except FileNotFoundError:
        raise GitError("git is required")


def _git_exit_code(args: list[str], cwd: Optional[Path] = None) -> int:
    """Run a git command for its exit status only.

    Used for the `--quiet` style queries where the exit code carries the
    answer and output is irrelevant.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in.

    Returns:
        The process return code.

    Raises:
        GitError: If git cannot be executed.
    """
    logger.debug(f"git {' '.join(args)} (exit code only)")
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            cwd=cwd,
        )
    except FileNotFoundError:
        raise GitError("git is required")
    return result.returncode


def require_git() -> None:
    """Ensure git is available on PATH.

    Raises:
        GitError: If git is not installed.
    """
    if shutil.which("git") is None:
        raise GitError("git is required")


def get_repo_root() -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"])
    except GitError:
        raise GitError("not inside a git repository")
    if not root:
        raise GitError("not inside a git repository")
    return Path(root)

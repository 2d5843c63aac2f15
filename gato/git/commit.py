"""Commit creation.

Contains:
- commit_with_message: Commit the index using a message passed via temp file
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from gato.git.runner import _run_git_command


def commit_with_message(message: str, repo_root: Optional[Path] = None) -> str:
    """Run `git commit -F` with the given message.

    The message file is removed whether or not the commit succeeds.

    Args:
        message: The full commit message.
        repo_root: The root directory of the git repository.

    Returns:
        The stdout of `git commit`.

    Raises:
        GitError: If the commit fails.
    """
    fd, path = tempfile.mkstemp(prefix="gato.", suffix=".txt")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(message.rstrip("\n") + "\n")
        return _run_git_command(["commit", "-F", path], cwd=repo_root)
    finally:
        Path(path).unlink(missing_ok=True)

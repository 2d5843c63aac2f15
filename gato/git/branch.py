"""Git branch utilities.

Contains:
- get_branch: Get the current branch name
"""

from pathlib import Path
from typing import Optional

from gato.git.runner import _run_git_command
from gato.git.exceptions import GitError


def get_branch(repo_root: Optional[Path] = None) -> str:
    """Get the current branch name.

    Returns:
        The abbreviated ref of HEAD ('HEAD' when detached), or 'unknown'
        when it cannot be resolved (e.g. no commits yet).
    """
    try:
        branch = _run_git_command(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_root)
    except GitError:
        return "unknown"
    return branch or "unknown"

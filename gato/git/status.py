"""Git working tree state utilities.

Contains:
- has_staged_changes: Check whether the index differs from HEAD
- has_unstaged_changes: Check whether the working tree differs from the index
- stage_all: Stage every change in the working tree
- select_diff_source: Pick staged or unstaged changes for preview mode
"""

from pathlib import Path
from typing import Optional

from gato.git.runner import _git_exit_code, _run_git_command
from gato.git.exceptions import GitError, NoChangesError


def _diff_is_dirty(args: list[str], repo_root: Optional[Path]) -> bool:
    code = _git_exit_code(args, cwd=repo_root)
    if code == 0:
        return False
    if code == 1:
        return True
    raise GitError(f"git command failed: git {' '.join(args)} (exit {code})")


def has_staged_changes(repo_root: Optional[Path] = None) -> bool:
    """Return True if there are staged changes."""
    return _diff_is_dirty(["diff", "--cached", "--quiet"], repo_root)


def has_unstaged_changes(repo_root: Optional[Path] = None) -> bool:
    """Return True if tracked files have unstaged modifications."""
    return _diff_is_dirty(["diff", "--quiet"], repo_root)


def stage_all(repo_root: Optional[Path] = None) -> None:
    """Stage all changes, including untracked and deleted files."""
    _run_git_command(["add", "-A"], cwd=repo_root)


def select_diff_source(repo_root: Optional[Path] = None) -> tuple[bool, str]:
    """Decide which changes to describe when nothing is staged by us.

    Staged changes win over unstaged ones.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        A tuple of (staged, label) where staged selects `git diff --cached`
        and label is a human-readable description of the source.

    Raises:
        NoChangesError: If there are neither staged nor unstaged changes.
    """
    if has_staged_changes(repo_root):
        return True, "staged changes"
    if has_unstaged_changes(repo_root):
        return False, "unstaged changes"
    raise NoChangesError("no changes found")

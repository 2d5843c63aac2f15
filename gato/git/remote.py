"""Push target resolution and push.

Contains:
- has_upstream: Check whether the current branch tracks a remote branch
- pick_remote: Choose a remote when there is no upstream
- resolve_push_args: Build the git push arguments
- push_current_branch: Push HEAD
"""

from pathlib import Path
from typing import Optional

from gato.git.runner import _git_exit_code, _run_git_command
from gato.git.exceptions import GitError


def has_upstream(repo_root: Optional[Path] = None) -> bool:
    """Return True if the current branch has a configured upstream."""
    args = ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"]
    return _git_exit_code(args, cwd=repo_root) == 0


def pick_remote(repo_root: Optional[Path] = None) -> Optional[str]:
    """Pick the remote to push to.

    Prefers "origin", then the first configured remote. Remote order comes
    from `git remote` and is not guaranteed to be the same across clones.

    Returns:
        The remote name, or None if no remote is configured.
    """
    if _git_exit_code(["remote", "get-url", "origin"], cwd=repo_root) == 0:
        return "origin"

    remotes = [r for r in _run_git_command(["remote"], cwd=repo_root).split("\n") if r.strip()]
    return remotes[0].strip() if remotes else None


def resolve_push_args(repo_root: Optional[Path] = None) -> list[str]:
    """Build the arguments for `git push`.

    Returns:
        ["push"] when an upstream exists, otherwise
        ["push", "-u", <remote>, "HEAD"].

    Raises:
        GitError: If no remote is configured.
    """
    if has_upstream(repo_root):
        return ["push"]

    remote = pick_remote(repo_root)
    if not remote:
        raise GitError("no git remote configured")
    return ["push", "-u", remote, "HEAD"]


def push_current_branch(repo_root: Optional[Path] = None) -> str:
    """Push the current branch.

    Returns:
        The stdout of `git push`.

    Raises:
        GitError: If no remote is configured or the push fails.
    """
    return _run_git_command(resolve_push_args(repo_root), cwd=repo_root)

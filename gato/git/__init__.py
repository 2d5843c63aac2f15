"""Git integration for gato.

This package provides the change collector and the commit/push helpers:
- exceptions: GitError, NoChangesError
- runner: _run_git_command, _git_exit_code, require_git, get_repo_root
- branch: get_branch
- status: has_staged_changes, has_unstaged_changes, stage_all, select_diff_source
- diff: DEFAULT_DIFF_EXCLUDE_PATTERNS, build_pathspec, rank_top_files, truncate_patch
- context: ChangeContext, build_change_context, build_simulated_context
- commit: commit_with_message
- remote: has_upstream, pick_remote, resolve_push_args, push_current_branch
"""

# Exceptions
from gato.git.exceptions import (
    GitError,
    NoChangesError,
)

# Runner utilities
from gato.git.runner import (
    _run_git_command,
    _git_exit_code,
    require_git,
    get_repo_root,
)

# Branch utilities
from gato.git.branch import get_branch

# Working tree state
from gato.git.status import (
    has_staged_changes,
    has_unstaged_changes,
    stage_all,
    select_diff_source,
)

# Diff utilities
from gato.git.diff import (
    DEFAULT_DIFF_EXCLUDE_PATTERNS,
    DEFAULT_MAX_PATCH_LINES,
    build_pathspec,
    count_lines,
    rank_top_files,
    truncate_patch,
)

# Context builder
from gato.git.context import (
    ChangeContext,
    build_change_context,
    build_simulated_context,
)

# Commit and push
from gato.git.commit import commit_with_message
from gato.git.remote import (
    has_upstream,
    pick_remote,
    resolve_push_args,
    push_current_branch,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoChangesError",
    # Runner
    "_run_git_command",
    "_git_exit_code",
    "require_git",
    "get_repo_root",
    # Branch
    "get_branch",
    # Status
    "has_staged_changes",
    "has_unstaged_changes",
    "stage_all",
    "select_diff_source",
    # Diff
    "DEFAULT_DIFF_EXCLUDE_PATTERNS",
    "DEFAULT_MAX_PATCH_LINES",
    "build_pathspec",
    "count_lines",
    "rank_top_files",
    "truncate_patch",
    # Context
    "ChangeContext",
    "build_change_context",
    "build_simulated_context",
    # Commit and push
    "commit_with_message",
    "has_upstream",
    "pick_remote",
    "resolve_push_args",
    "push_current_branch",
]

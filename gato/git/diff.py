"""Git diff utilities.

Contains:
- DEFAULT_DIFF_EXCLUDE_PATTERNS: Default patterns for files kept out of the diff
- build_pathspec: Build the `-- . :(exclude)...` pathspec
- get_name_status / get_stat / get_numstat / get_patch: Diff queries
- rank_top_files: Order changed files by number of changed lines
- truncate_patch: Bound the patch to a maximum number of lines
"""

from pathlib import Path
from typing import Iterable, Optional

from gato.git.runner import _run_git_command


# Lock files and binary/image/map assets inflate the diff without adding
# anything a commit message should describe
DEFAULT_DIFF_EXCLUDE_PATTERNS = [
    "*.lock",
    "*-lock.json",
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.gif",
    "*.webp",
    "*.svg",
    "*.pdf",
    "*.map",
    "*.min.js",
]

TOP_FILES_LIMIT = 20
DEFAULT_MAX_PATCH_LINES = 2500


def build_pathspec(exclude_patterns: Iterable[str]) -> list[str]:
    """Build the pathspec arguments for the diff queries.

    Args:
        exclude_patterns: Glob patterns to exclude.

    Returns:
        Arguments starting with `--`, including the whole tree and one
        `:(exclude)` entry per pattern.
    """
    return ["--", "."] + [f":(exclude){pattern}" for pattern in exclude_patterns]


def _diff_args(staged: bool, extra: list[str], exclude_patterns: Iterable[str]) -> list[str]:
    args = ["diff"]
    if staged:
        args.append("--cached")
    return args + extra + build_pathspec(exclude_patterns)


def get_name_status(staged: bool, exclude_patterns: Iterable[str], repo_root: Optional[Path] = None) -> str:
    """Get the `--name-status` listing of changed files."""
    return _run_git_command(_diff_args(staged, ["--name-status"], exclude_patterns), cwd=repo_root)


def get_stat(staged: bool, exclude_patterns: Iterable[str], repo_root: Optional[Path] = None) -> str:
    """Get the `--stat` summary of changed files."""
    return _run_git_command(_diff_args(staged, ["--stat"], exclude_patterns), cwd=repo_root)


def get_numstat(staged: bool, exclude_patterns: Iterable[str], repo_root: Optional[Path] = None) -> str:
    """Get the `--numstat` per-file added/deleted line counts."""
    return _run_git_command(_diff_args(staged, ["--numstat"], exclude_patterns), cwd=repo_root)


def get_patch(staged: bool, exclude_patterns: Iterable[str], repo_root: Optional[Path] = None) -> str:
    """Get the uncolored patch text."""
    return _run_git_command(_diff_args(staged, ["--no-color"], exclude_patterns), cwd=repo_root)


def _count(value: str) -> int:
    # Binary files report "-" for both columns
    try:
        return int(value)
    except ValueError:
        return 0


def rank_top_files(numstat: str, limit: int = TOP_FILES_LIMIT) -> list[str]:
    """Rank changed files by added plus deleted lines.

    Args:
        numstat: Output of `git diff --numstat`.
        limit: Maximum number of paths to return.

    Returns:
        File paths, most changed first. Ties keep numstat order.
    """
    entries = []
    for line in numstat.split("\n"):
        parts = line.split("\t", 2)
        if len(parts) < 3 or not parts[2].strip():
            continue
        added, deleted, path = parts
        entries.append((_count(added) + _count(deleted), path))

    entries.sort(key=lambda entry: entry[0], reverse=True)
    return [path for _, path in entries[:limit]]


def count_lines(text: str) -> int:
    """Count lines the way `wc -l` counts a newline-terminated text."""
    return len(text.split("\n"))


def truncate_patch(patch: str, max_lines: int) -> str:
    """Truncate a patch to at most max_lines lines.

    Args:
        patch: The full patch text.
        max_lines: Maximum number of patch lines to keep.

    Returns:
        The patch unchanged when it fits, otherwise its first max_lines lines
        followed by a marker noting the original size.
    """
    total = count_lines(patch)
    if total <= max_lines:
        return patch

    head = "\n".join(patch.split("\n")[:max_lines])
    return f"{head}\n[TRUNCATED: showing first {max_lines} lines out of {total}]"

"""Change context builder.

Contains:
- ChangeContext: Immutable bundle of the text sections sent to the model
- build_change_context: Collect a ChangeContext from git
- build_simulated_context: Hardcoded context for simulate mode
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from gato.git.branch import get_branch
from gato.git.diff import (
    DEFAULT_DIFF_EXCLUDE_PATTERNS,
    DEFAULT_MAX_PATCH_LINES,
    count_lines,
    get_name_status,
    get_numstat,
    get_patch,
    get_stat,
    rank_top_files,
    truncate_patch,
)


@dataclass(frozen=True)
class ChangeContext:
    """Everything the model gets to see about the changes."""

    branch: str
    file_count: int
    patch_lines: int
    top_files: tuple[str, ...]
    name_status: str
    stat: str
    patch: str

    def render(self) -> str:
        """Render the context as the CHANGE DATA block of the prompt."""
        top_files = "\n".join(self.top_files)
        return f"""BRANCH:
{self.branch}

FILES_CHANGED: {self.file_count}
PATCH_LINES: {self.patch_lines}

TOP_CHANGED_FILES:
{top_files}

NAME_STATUS:
{self.name_status}

STAT:
{self.stat}

PATCH:
{self.patch}"""

    @property
    def fallback_summary(self) -> str:
        """First line of the stat section, used when the model gives no bullets."""
        for line in self.stat.split("\n"):
            if line.strip():
                return line.strip()
        return ""


def build_change_context(
    staged: bool,
    max_patch_lines: int = DEFAULT_MAX_PATCH_LINES,
    exclude_patterns: Optional[Iterable[str]] = None,
    repo_root: Optional[Path] = None,
) -> ChangeContext:
    """Build the change context for the LLM.

    Args:
        staged: Describe the index (`--cached`) instead of the working tree.
        max_patch_lines: Maximum patch lines to forward.
        exclude_patterns: Glob patterns kept out of every diff query.
        repo_root: The root directory of the git repository.

    Returns:
        The collected ChangeContext.

    Raises:
        GitError: If a diff query fails.
    """
    patterns = list(DEFAULT_DIFF_EXCLUDE_PATTERNS if exclude_patterns is None else exclude_patterns)

    branch = get_branch(repo_root)
    name_status = get_name_status(staged, patterns, repo_root)
    stat = get_stat(staged, patterns, repo_root)
    numstat = get_numstat(staged, patterns, repo_root)
    patch = get_patch(staged, patterns, repo_root)

    patch_lines = count_lines(patch)
    file_count = sum(1 for line in name_status.split("\n") if line.strip())
    top_files = rank_top_files(numstat)

    if patch_lines > max_patch_lines:
        logger.debug(f"patch has {patch_lines} lines, truncating to {max_patch_lines}")
        patch = truncate_patch(patch, max_patch_lines)

    return ChangeContext(
        branch=branch,
        file_count=file_count,
        patch_lines=patch_lines,
        top_files=tuple(top_files),
        name_status=name_status,
        stat=stat,
        patch=patch,
    )


_SIMULATED_FILES = (
    "backend/core/topic_classifier.go",
    "frontend/src/App.tsx",
    "frontend/src/components/workspace/Workspace.tsx",
    "backend/resources/app/automation.md",
)

_SIMULATED_STAT = """ backend/core/topic_classifier.go                 |  9 +++---
 frontend/src/App.tsx                             | 38 ++++++++++------
 frontend/src/components/workspace/Workspace.tsx  | 52 ++++++++++++++--------
 backend/resources/app/automation.md              |  6 ++--
 4 files changed, 69 insertions(+), 36 deletions(-)"""


def build_simulated_context() -> ChangeContext:
    """Build a synthetic context that needs no repository."""
    return ChangeContext(
        branch="test/simulated",
        file_count=len(_SIMULATED_FILES),
        patch_lines=120,
        top_files=_SIMULATED_FILES,
        name_status="\n".join(f"M\t{path}" for path in _SIMULATED_FILES),
        stat=_SIMULATED_STAT,
        patch="[SIMULATED PATCH DATA FOR TEST MODE]",
    )

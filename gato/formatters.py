"""Commit message normalization and rendering.

The model answers in free text. Everything here turns that text into a
subject line plus a bullet body that is safe to hand to `git commit`,
no matter how malformed the input is.

Normalization is driven by ordered lists of NormalizationRule objects:
- OUTPUT_RULES: applied to every line of the raw output
- SUBJECT_RULES: applied to the subject candidate
- BULLET_RULES: applied to every body line
"""

import re
import textwrap
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from loguru import logger
from pydantic import BaseModel, field_validator

from gato.config import LINE_MAX, MessageLimits


DEFAULT_SUBJECT = "update codebase changes"
DEFAULT_BULLET = "summarize staged changes"


class RuleAction(Enum):
    """What a rule does to a line it matches."""

    DROP = "drop"
    STRIP = "strip"


@dataclass(frozen=True)
class NormalizationRule:
    """A pattern plus the action taken where it matches."""

    name: str
    pattern: re.Pattern
    action: RuleAction

    def apply(self, line: str) -> Optional[str]:
        """Apply the rule to one line.

        Returns:
            None if the line is dropped, otherwise the (possibly stripped) line.
        """
        if self.action is RuleAction.DROP:
            return None if self.pattern.search(line) else line
        return self.pattern.sub("", line)


OUTPUT_RULES = [
    NormalizationRule("code-fence", re.compile(r"^\s*```"), RuleAction.DROP),
    NormalizationRule("tilde-fence", re.compile(r"^\s*~~~"), RuleAction.DROP),
    NormalizationRule(
        "node-undici-warning",
        re.compile(r"^\s*\(node:\d+\).*UNDICI-EHPA"),
        RuleAction.DROP,
    ),
    NormalizationRule(
        "proxy-agent-warning",
        re.compile(r"^\s*Warning:\s*EnvHttpProxyAgent"),
        RuleAction.DROP,
    ),
    NormalizationRule("carriage-return", re.compile(r"\r"), RuleAction.STRIP),
]

# A marker needs whitespace or the end of the line after it, so "-flag" stays
_BULLET_MARKER = re.compile(r"^(?:[-*•](?:\s+|$))+")

SUBJECT_RULES = [
    NormalizationRule("bullet-marker", _BULLET_MARKER, RuleAction.STRIP),
    NormalizationRule(
        "commit-message-prefix",
        re.compile(r"^.*?commit message:\s*", re.IGNORECASE),
        RuleAction.STRIP,
    ),
]

BULLET_RULES = [
    NormalizationRule("bullet-marker", _BULLET_MARKER, RuleAction.STRIP),
]


def apply_rules(line: str, rules: Iterable[NormalizationRule]) -> Optional[str]:
    """Run a line through rules in order.

    Args:
        line: The input line.
        rules: Rules to apply.

    Returns:
        The resulting line, or None as soon as a rule drops it.
    """
    for rule in rules:
        result = rule.apply(line)
        if result is None:
            return None
        line = result
    return line


def sanitize_output(raw: str, rules: Iterable[NormalizationRule] = OUTPUT_RULES) -> list[str]:
    """Remove fences, runtime noise and carriage returns from model output.

    Args:
        raw: Raw model stdout.
        rules: Line rules to apply. Defaults to OUTPUT_RULES.

    Returns:
        The surviving lines, in order.
    """
    rules = list(rules)
    lines = []
    for line in raw.split("\n"):
        cleaned = apply_rules(line, rules)
        if cleaned is not None:
            lines.append(cleaned)
    return lines


def truncate_subject(subject: str, max_length: int = 72) -> str:
    """Shorten a subject to max_length without splitting words.

    Cuts at the last whitespace at or before the limit. A single word longer
    than the limit is cut hard.

    Args:
        subject: A trimmed, single-line subject.
        max_length: Maximum allowed length.

    Returns:
        The subject, at most max_length characters long.
    """
    if len(subject) <= max_length:
        return subject

    head = subject[:max_length]
    if subject[max_length].isspace():
        return head.rstrip()

    boundary = max((m.start() for m in re.finditer(r"\s", head)), default=-1)
    if boundary > 0:
        return head[:boundary].rstrip()
    return head


def clean_subject(line: str, max_length: int = 72) -> str:
    """Turn the first output line into a subject.

    Args:
        line: The subject candidate.
        max_length: Maximum allowed length.

    Returns:
        The cleaned subject, or DEFAULT_SUBJECT when nothing is left.
    """
    subject = apply_rules(line.strip(), SUBJECT_RULES) or ""
    subject = truncate_subject(subject.strip(), max_length)
    return subject or DEFAULT_SUBJECT


def wrap_bullet(text: str, width: int = LINE_MAX) -> list[str]:
    """Wrap one bullet to width columns.

    The first line starts with "- ", continuations are indented two spaces
    to line up under the text. Words longer than a line are split.

    Args:
        text: Bullet text without marker.
        width: Maximum line width, prefix included.

    Returns:
        The wrapped lines.
    """
    return textwrap.wrap(
        text,
        width=width,
        initial_indent="- ",
        subsequent_indent="  ",
        break_long_words=True,
        break_on_hyphens=False,
    )


def _wrapped_before(previous: str, stripped: str, width: int) -> bool:
    # wrap_bullet only breaks a line when the next word does not fit
    return len(previous) + 1 + len(stripped.split()[0]) > width


def extract_bullets(lines: Iterable[str], width: int = LINE_MAX) -> list[str]:
    """Collect bullet texts from the body lines.

    Blank lines are skipped. An indented line that follows a marked bullet
    continues that bullet when it has no marker, or when its first word
    could not have fit on the previous line of width columns. The second
    case is a wrapped bullet whose text contains " - ", so already wrapped
    messages stay stable while short nested bullets stay separate.

    Args:
        lines: Sanitized lines after the subject.
        width: Line width the body was wrapped to.

    Returns:
        Bullet texts with markers removed and whitespace collapsed.
    """
    bullets: list[str] = []
    continues = False
    previous = ""

    for line in lines:
        if not line.strip():
            continue

        stripped = line.strip()
        marked = bool(_BULLET_MARKER.match(stripped))

        if continues and line[:1].isspace():
            if not marked or _wrapped_before(previous, stripped, width):
                bullets[-1] = f"{bullets[-1]} {' '.join(stripped.split())}"
                previous = line.rstrip()
                continue

        text = " ".join((apply_rules(stripped, BULLET_RULES) or "").split())
        if not text:
            continues = False
            continue

        bullets.append(text)
        continues = marked
        previous = line.rstrip()

    return bullets


class CommitMessage(BaseModel):
    """A normalized commit message.

    Attributes:
        subject: The subject line.
        bullets: Bullet texts, without markers and unwrapped.
    """

    subject: str
    bullets: list[str]

    @field_validator("subject")
    @classmethod
    def subject_must_be_single_line(cls, v: str) -> str:
        """Ensure subject is a non-empty single line."""
        v = v.strip()
        if not v or "\n" in v:
            raise ValueError("Subject must be a single non-empty line")
        return v

    @field_validator("bullets")
    @classmethod
    def bullets_must_not_be_empty(cls, v: list[str]) -> list[str]:
        """Ensure there is at least one non-empty bullet."""
        cleaned = [bullet.strip() for bullet in v if bullet and bullet.strip()]
        if not cleaned:
            raise ValueError("bullets must contain at least one non-empty item")
        return cleaned

    def bullet_lines(self, width: int = LINE_MAX) -> list[str]:
        """Return the wrapped body lines."""
        lines = []
        for bullet in self.bullets:
            lines.extend(wrap_bullet(bullet, width))
        return lines

    def render(self, width: int = LINE_MAX) -> str:
        """Render the message as subject, blank line and bullet lines.

        Example output:
            Add retry loop for model invocation

            - retry when qwen exits non-zero without output
            - wait one second between attempts
        """
        body = "".join(f"{line}\n" for line in self.bullet_lines(width))
        return f"{self.subject}\n\n{body}"


def normalize_output(
    raw: str,
    fallback: str = "",
    limits: MessageLimits = MessageLimits(),
) -> CommitMessage:
    """Parse raw model output into a CommitMessage.

    Args:
        raw: Raw model stdout.
        fallback: Summary used as the only bullet when the output has none.
        limits: Subject length, line width and bullet count limits.

    Returns:
        A CommitMessage that always has a subject and at least one bullet.
    """
    lines = sanitize_output(raw or "")

    subject_index = next((i for i, line in enumerate(lines) if line.strip()), None)
    if subject_index is None:
        subject = DEFAULT_SUBJECT
        body: list[str] = []
    else:
        subject = clean_subject(lines[subject_index], limits.subject_max)
        body = lines[subject_index + 1:]

    bullets = extract_bullets(body, limits.line_max)
    if len(bullets) > limits.max_bullets:
        logger.debug(f"dropping {len(bullets) - limits.max_bullets} bullet(s) over the limit of {limits.max_bullets}")
        bullets = bullets[:limits.max_bullets]

    if not bullets:
        summary = next((line.strip() for line in (fallback or "").split("\n") if line.strip()), "")
        bullets = [" ".join(summary.split()) or DEFAULT_BULLET]

    return CommitMessage(subject=subject, bullets=bullets)


def ensure_commit_message(
    raw: str,
    fallback: str = "",
    limits: MessageLimits = MessageLimits(),
) -> str:
    """Normalize raw model output and render it.

    Args:
        raw: Raw model stdout.
        fallback: Summary used when the output has no bullets.
        limits: Message shape limits.

    Returns:
        The rendered commit message, never empty.
    """
    return normalize_output(raw, fallback, limits).render(limits.line_max)

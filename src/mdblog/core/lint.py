"""Structural content checks: front matter shape, publication flag, fence balance"""

import re
from typing import Iterable, Literal

from pydantic import BaseModel

from mdblog.core.parse import is_delimiter, parse_front_matter, validate_front_matter
from mdblog.errors import FrontMatterError
from mdblog.logging import get_logger


KEY_VALUE_RE = re.compile(r'^([A-Za-z_][\w.-]*)[ \t]*:(?:[ \t]+(.*))?[ \t]*$')
FENCE_RE = re.compile(r'^ {0,3}(`{3,}|~{3,})(.*)$')
PUBLISHED_LITERALS = {'true', 'false'}

logger = get_logger("lint")


class LintIssue(BaseModel):
    """A single finding, located by document path and 1-based line number."""
    path: str
    line: int
    code: str
    message: str
    severity: Literal['error', 'warning'] = 'error'

    def __str__(self) -> str:
        return f"{self.path}:{self.line}: {self.code} {self.message}"


def _strip_comment(value: str) -> str:
    """Drop a trailing ' # comment' from an unquoted YAML scalar."""
    if value[:1] in ('"', "'"):
        return value.strip()
    return re.split(r'\s#', value, maxsplit=1)[0].strip()


def _check_front_matter(path: str, lines: list[str], end: int) -> list[LintIssue]:
    """Check lines[1:end], the content between the two delimiters."""
    issues: list[LintIssue] = []
    seen: dict[str, int] = {}

    for i in range(1, end):
        line = lines[i]
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        m = KEY_VALUE_RE.match(line)
        if not m:
            issues.append(LintIssue(
                path=path, line=i + 1, code='FM002',
                message=f"Front matter line is not 'key: value': {line.strip()!r}",
            ))
            continue

        key, value = m.group(1), _strip_comment(m.group(2) or '')
        if key in seen:
            issues.append(LintIssue(
                path=path, line=i + 1, code='FM005',
                message=f"Duplicate front matter key '{key}' (first on line {seen[key]})",
            ))
        else:
            seen[key] = i + 1

        if key == 'published' and value not in PUBLISHED_LITERALS:
            issues.append(LintIssue(
                path=path, line=i + 1, code='FM004',
                message=f"'published' must be true or false, got {value!r}",
            ))

    if not issues:
        try:
            validate_front_matter(parse_front_matter('\n'.join(lines[1:end])))
        except FrontMatterError as e:
            issues.append(LintIssue(path=path, line=1, code='FM003', message=str(e)))
    return issues


def _check_fences(path: str, lines: list[str], start: int) -> list[LintIssue]:
    """Every opening code fence from lines[start:] needs a matching closing fence."""
    opened: tuple[str, int, int] | None = None    # (fence char, fence length, line index)

    for i in range(start, len(lines)):
        m = FENCE_RE.match(lines[i])
        if not m:
            continue
        fence, rest = m.group(1), m.group(2)
        if opened is None:
            if fence[0] == '`' and '`' in rest:
                continue  # inline code span, not a fence
            opened = (fence[0], len(fence), i)
        elif fence[0] == opened[0] and len(fence) >= opened[1] and not rest.strip():
            opened = None

    if opened is None:
        return []
    return [LintIssue(
        path=path, line=opened[2] + 1, code='MD001',
        message=f"Code fence {opened[0] * opened[1]} is never closed",
    )]


def lint_text(path: str, text: str) -> list[LintIssue]:
    """Return every structural issue in one document's raw text."""
    lines = text.lstrip('\ufeff').splitlines()
    issues: list[LintIssue] = []
    body_start = 0

    if lines and is_delimiter(lines[0]):
        end = next((i for i in range(1, len(lines)) if is_delimiter(lines[i])), None)
        if end is None:
            issues.append(LintIssue(
                path=path, line=1, code='FM001',
                message="Front matter opened with '---' is never closed",
            ))
            body_start = 1
        else:
            issues.extend(_check_front_matter(path, lines, end))
            body_start = end + 1

    issues.extend(_check_fences(path, lines, body_start))
    return sorted(issues, key=lambda issue: (issue.line, issue.code))


def lint_store(store, paths: Iterable[str] = None) -> list[LintIssue]:
    """Lint the given document paths, or every document in store."""
    issues: list[LintIssue] = []
    for path in (paths if paths is not None else store.enumerate()):
        found = lint_text(path, store.read(path))
        logger.debug("Linted %s: %d issue(s)", path, len(found))
        issues.extend(found)
    logger.info("Linted documents: %d issue(s) in total", len(issues))
    return issues

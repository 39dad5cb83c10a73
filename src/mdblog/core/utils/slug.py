"""Slug and date derivation for document identifiers"""

import re
from datetime import date


DATE_PREFIX_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})-(.+)$')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def split_date_prefix(stem: str) -> tuple[date | None, str]:
    """Split a 'YYYY-MM-DD-title' file stem into (date, 'title').

    Stems without a valid date prefix come back unchanged with date None.
    """
    m = DATE_PREFIX_RE.match(stem)
    if not m:
        return None, stem
    try:
        day = date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None, stem
    return day, m.group(4)

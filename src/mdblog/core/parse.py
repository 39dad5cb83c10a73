"""Front matter extraction, markdown-it tokenization, and Document assembly"""

import datetime
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from markdown_it import MarkdownIt
from pydantic import ValidationError

from mdblog.core.blocks import tokens_to_blocks
from mdblog.core.models import Document, FrontMatter
from mdblog.core.utils.hashing import sha256
from mdblog.core.utils.slug import slugify, split_date_prefix
from mdblog.errors import FrontMatterError


DELIMITER = '---'
SCALAR_TYPES = (str, int, float, bool, datetime.date)


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def is_delimiter(line: str) -> bool:
    """True for a line consisting solely of '---' (line ending aside)."""
    return line.rstrip('\r\n') == DELIMITER


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Return (front_matter_text, body).

    front_matter_text is None when the document does not open with a
    delimiter line or the block is never closed; the whole text is then body.
    """
    lines = text.lstrip('\ufeff').splitlines(keepends=True)
    if not lines or not is_delimiter(lines[0]):
        return None, text
    for i in range(1, len(lines)):
        if is_delimiter(lines[i]):
            return ''.join(lines[1:i]), ''.join(lines[i + 1:])
    return None, text


def parse_front_matter(fm_text: str) -> dict[str, Any]:
    """Parse a front matter block into a flat dict of scalar values."""
    try:
        data = yaml.safe_load(fm_text) if fm_text.strip() else {}
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises a bare ValueError for impossible timestamps (2024-13-45)
        raise FrontMatterError(f"Invalid YAML front matter: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"Invalid YAML front matter: expected a mapping, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(key, str):
            raise FrontMatterError(f"Invalid front matter key {key!r}: keys must be strings")
        if value is not None and not isinstance(value, SCALAR_TYPES):
            raise FrontMatterError(
                f"Invalid front matter value for '{key}': expected a scalar, got {type(value).__name__}"
            )
    return data


def validate_front_matter(fm: dict[str, Any], path: str = None) -> FrontMatter:
    """Check a parsed header against the typed keys (title, published, layout)."""
    try:
        return FrontMatter(**fm)
    except ValidationError as e:
        where = f" in {path}" if path else ""
        raise FrontMatterError(f"Invalid front matter{where}: {e}") from e


def _document_date(fm: dict[str, Any], stem_date: datetime.date | None) -> datetime.date | None:
    """Front matter 'date' wins over a YYYY-MM-DD filename prefix."""
    value = fm.get('date')
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    return stem_date


def parse_text(path: str, raw: str, parser_config: str = 'gfm-like') -> Document:
    """Parse raw document text identified by path (relative, POSIX) into a Document."""
    fm_text, body = split_front_matter(raw)
    fm = parse_front_matter(fm_text) if fm_text is not None else {}
    front_matter = validate_front_matter(fm, path)

    stem_date, stem = split_date_prefix(PurePosixPath(path).stem)
    tokens = make_parser(parser_config).parse(body)
    return Document(
        path=path,
        slug=str(fm.get('slug') or slugify(stem)),
        raw=raw,
        markdown=body,
        front_matter=front_matter,
        body=tokens_to_blocks(tokens, body.splitlines(keepends=True)),
        date=_document_date(fm, stem_date),
        content_hash=sha256(raw),
    )


def parse_file(path: Path, root: Path = None, parser_config: str = 'gfm-like') -> Document:
    """Parse a single markdown file; its identifier is the path relative to root."""
    raw = path.read_text(encoding='utf-8')
    ident = path.relative_to(root) if root is not None else Path(path.name)
    return parse_text(ident.as_posix(), raw, parser_config)

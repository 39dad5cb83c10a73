"""Content data models: front matter, body blocks, and documents"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockKind(str, Enum):
    """Restrict body blocks to a predefined set of elements"""
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    quote = "quote"
    table = "table"
    html = "html"
    rule = "rule"
    code = "code"


class Block(BaseModel):
    """A single top-level block of a document body, sliced from source."""
    kind: BlockKind
    content: str
    lang: Optional[str] = None      # fence language hint (e.g. csharp, lua); code blocks only
    level: Optional[int] = None     # heading level (1-6); None for non-headings


class FrontMatter(BaseModel):
    """Flat key/value header. Observed keys are typed; any other key is kept as-is."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    title: Optional[str] = None
    published: bool = True
    layout: Optional[str] = None

    def as_dict(self) -> dict:
        """Keys actually present in the source header (defaults omitted)."""
        return self.model_dump(exclude_unset=True)


class Document(BaseModel):
    """One content file: identifier, parsed header, and ordered body blocks."""
    path: str                       # POSIX path relative to the content root
    slug: str
    raw: str                        # full file content (includes front matter)
    markdown: str                   # body only (front matter stripped)
    front_matter: FrontMatter = Field(default_factory=FrontMatter)
    body: list[Block] = []
    date: Optional[datetime.date] = None
    content_hash: str

    @property
    def title(self) -> str:
        return self.front_matter.title or self.slug

    @property
    def published(self) -> bool:
        return self.front_matter.published

    @property
    def code_languages(self) -> list[str]:
        """Distinct fence language hints in body order."""
        return list(dict.fromkeys(b.lang for b in self.body if b.kind == BlockKind.code and b.lang))

"""Content store: enumerate documents under a root directory and read them"""

from pathlib import Path
from typing import Iterator

from mdblog.core.models import Document
from mdblog.core.parse import parse_file
from mdblog.errors import ContentPathError
from mdblog.logging import get_logger


MD_EXTENSIONS = {'.md', '.markdown', '.mdx'}

logger = get_logger("store")


class ContentStore:
    """Read-only view over the documents kept under root.

    Hidden files and directories (leading '.') are never enumerated, nor is
    anything with a path component listed in exclude (build output, layouts).
    """

    def __init__(self, root: Path, exclude: list[str] = None, parser_config: str = 'gfm-like'):
        self.root = Path(root)
        self.exclude = set(exclude or [])
        self.parser_config = parser_config

    def _is_content(self, rel: Path) -> bool:
        if rel.suffix.lower() not in MD_EXTENSIONS:
            return False
        return not any(part.startswith('.') or part in self.exclude for part in rel.parts)

    def enumerate(self) -> list[str]:
        """Return sorted POSIX paths (relative to root) of every document."""
        if not self.root.is_dir():
            raise FileNotFoundError(f"Content directory not found: {self.root}")
        paths = sorted(
            p.relative_to(self.root).as_posix()
            for p in self.root.rglob('*')
            if p.is_file() and self._is_content(p.relative_to(self.root))
        )
        logger.debug("Found %d document(s) under %s", len(paths), self.root)
        return paths

    def resolve(self, path: str) -> Path:
        """Map a document identifier to its file, refusing paths outside root."""
        root = self.root.resolve()
        full = (root / path).resolve()
        if full != root and root not in full.parents:
            raise ContentPathError(f"Path escapes content root: {path}")
        return full

    def read(self, path: str) -> str:
        """Return the raw text of one document. Missing files raise FileNotFoundError."""
        logger.debug("Reading %s", path)
        return self.resolve(path).read_text(encoding='utf-8')

    def load(self, path: str) -> Document:
        """Parse one document into a Document."""
        doc = parse_file(self.resolve(path), self.root.resolve(), self.parser_config)
        logger.debug("Loaded %s: %d block(s), published=%s", path, len(doc.body), doc.published)
        return doc

    def documents(self) -> Iterator[Document]:
        """Yield every document in enumeration order."""
        for path in self.enumerate():
            yield self.load(path)

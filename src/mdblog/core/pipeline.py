"""Pipeline step functions: listing, build, and lint orchestration"""

import datetime
import json
from dataclasses import dataclass, field
from pathlib import Path

from mdblog.config import Settings
from mdblog.core.lint import LintIssue, lint_store
from mdblog.core.models import Document
from mdblog.core.render import Renderer, page_url
from mdblog.core.store import ContentStore
from mdblog.logging import get_logger


PAGE_LAYOUT = 'page'
INDEX_PAGE = 'index.html'

logger = get_logger("pipeline")


@dataclass
class BuildResult:
    """Outcome of a site build."""
    written: list[tuple[str, Path]] = field(default_factory=list)   # (document path, html file)
    drafts:  list[str] = field(default_factory=list)                # unpublished, not rendered
    index:   Path | None = None


def make_store(settings: Settings) -> ContentStore:
    """Store over content_dir that never picks up layouts or build output."""
    exclude = [*settings.exclude, Path(settings.layouts_dir).name, Path(settings.output_dir).name]
    return ContentStore(Path(settings.content_dir), exclude, settings.parser_config)


def make_renderer(settings: Settings) -> Renderer:
    return Renderer(
        layouts_dir=Path(settings.content_dir) / settings.layouts_dir,
        parser_config=settings.parser_config,
        default_layout=settings.default_layout,
        site_title=settings.site_title,
    )


def listing(docs: list[Document], include_drafts: bool = False) -> tuple[list[Document], list[Document]]:
    """Split docs into (pages, posts) for the public listing.

    Documents with published: false are left out unless include_drafts.
    Pages keep path order; posts are newest first, undated posts last.
    """
    visible = [d for d in docs if d.published or include_drafts]
    pages = sorted((d for d in visible if d.front_matter.layout == PAGE_LAYOUT), key=lambda d: d.path)
    posts = [d for d in visible if d.front_matter.layout != PAGE_LAYOUT]
    posts.sort(key=lambda d: d.path)
    posts.sort(key=lambda d: d.date or datetime.date.min, reverse=True)
    return pages, posts


def listing_entry(doc: Document) -> dict:
    """Sidecar/index entry for one listed document."""
    return {
        "slug": doc.slug,
        "path": doc.path,
        "url": page_url(doc.path),
        "title": doc.title,
        "date": doc.date,
        "layout": doc.front_matter.layout,
        "draft": not doc.published,
        "content_hash": doc.content_hash,
    }


def _load_all(store: ContentStore) -> list[Document]:
    docs = []
    for path in store.enumerate():
        try:
            docs.append(store.load(path))
        except ValueError as e:
            raise RuntimeError(f"Failed to parse {path}: {e}") from e
    return docs


def _check_output_paths(docs: list[Document]) -> None:
    """Two documents that differ only by extension (a.md, a.markdown) would share one page."""
    claimed: dict[str, str] = {}
    for doc in docs:
        url = page_url(doc.path)
        if url in claimed:
            raise RuntimeError(f"{claimed[url]} and {doc.path} both render to {url}")
        claimed[url] = doc.path


def run_build(settings: Settings) -> BuildResult:
    """Render every document to output_dir and write index.html + index.json.

    Drafts are skipped (and kept out of the index) unless include_drafts.
    """
    store = make_store(settings)
    renderer = make_renderer(settings)
    output_dir = Path(settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    docs = _load_all(store)
    result = BuildResult()
    to_render = []
    for doc in docs:
        if not doc.published and not settings.include_drafts:
            logger.info("Skipping draft %s", doc.path)
            result.drafts.append(doc.path)
        else:
            to_render.append(doc)
    _check_output_paths(to_render)

    for doc in to_render:
        try:
            html = renderer.render_page(doc)
        except Exception as e:
            raise RuntimeError(f"Failed to render {doc.path}: {e}") from e
        out_file = output_dir / page_url(doc.path)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(html, encoding='utf-8')
        logger.debug("Wrote %s", out_file)
        result.written.append((doc.path, out_file))

    pages, posts = listing(docs, settings.include_drafts)
    page_entries = [listing_entry(d) for d in pages]
    post_entries = [listing_entry(d) for d in posts]
    if any(page_url(p) == INDEX_PAGE for p, _ in result.written):
        logger.warning("A document renders to %s; not writing the listing page", INDEX_PAGE)
    else:
        result.index = output_dir / INDEX_PAGE
        result.index.write_text(renderer.render_index(page_entries, post_entries), encoding='utf-8')
        logger.debug("Wrote listing %s (%d page(s), %d post(s))", result.index, len(page_entries), len(post_entries))
    (output_dir / 'index.json').write_text(
        json.dumps({"pages": page_entries, "posts": post_entries}, indent=2, default=str),
        encoding='utf-8',
    )
    logger.info("Built %d page(s), skipped %d draft(s)", len(result.written), len(result.drafts))
    return result


def run_lint(settings: Settings, paths: list[str] = None) -> list[LintIssue]:
    """Lint selected documents (all when paths is empty or None)."""
    store = make_store(settings)
    return lint_store(store, paths or None)

"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.pipeline import listing, make_renderer, make_store, run_build, run_lint
from mdblog.errors import MdblogError


ContentDir = Annotated[Optional[str], typer.Option("--content-dir", "-C", help="Content root directory")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def list_cmd(
    content: ContentDir = None,
    all_docs: Annotated[bool, typer.Option("--all", help="Include drafts (published: false)")] = False,
    ):
    """List documents as the public listing shows them: pages first, then posts."""
    settings = _settings(overrides={"content_dir": content})
    try:
        docs = list(make_store(settings).documents())
    except (OSError, MdblogError) as e:
        _fail("Could not read content", e)
    pages, posts = listing(docs, include_drafts=all_docs)
    if not pages and not posts:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    for doc in pages + posts:
        status = "published" if doc.published else "draft"
        day = doc.date.isoformat() if doc.date else "-"
        typer.echo(f"{doc.path}\t{day}\t{doc.front_matter.layout or '-'}\t{status}\t{doc.title}")


def show_cmd(
    path: Annotated[str, typer.Argument(help="Document path relative to the content root")],
    content: ContentDir = None,
    ):
    """Print a document's raw content, drafts included."""
    settings = _settings(overrides={"content_dir": content})
    try:
        text = make_store(settings).read(path)
    except (OSError, MdblogError) as e:
        _fail(f"Cannot read {path}", e)
    typer.echo(text, nl=False)


def lint_cmd(
    paths: Annotated[Optional[list[str]], typer.Argument(help="Documents to check (default: all)")] = None,
    content: ContentDir = None,
    ):
    """Check front matter shape, publication flags, and code fence balance."""
    settings = _settings(overrides={"content_dir": content})
    try:
        issues = run_lint(settings, paths)
    except (OSError, MdblogError) as e:
        _fail("Lint failed", e)
    for issue in issues:
        typer.echo(str(issue))
    errors = sum(1 for i in issues if i.severity == "error")
    typer.echo(f"Lint complete - {errors} error(s), {len(issues) - errors} warning(s)")
    if errors:
        raise typer.Exit(1)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Document path relative to the content root")],
    content: ContentDir = None,
    layouts: Annotated[Optional[str], typer.Option("--layouts-dir", help="Template overrides directory")] = None,
    ):
    """Render one document to HTML on stdout, drafts included."""
    settings = _settings(overrides={"content_dir": content, "layouts_dir": layouts})
    try:
        doc = make_store(settings).load(path)
        html = make_renderer(settings).render_page(doc)
    except (OSError, ValueError, MdblogError) as e:
        _fail(f"Cannot render {path}", e)
    typer.echo(html, nl=False)


def build_cmd(
    content: ContentDir = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    layouts: Annotated[Optional[str], typer.Option("--layouts-dir", help="Template overrides directory")] = None,
    drafts: Annotated[bool, typer.Option("--drafts", help="Render and list unpublished documents")] = False,
    ):
    """Render every published document plus the index page."""
    settings = _settings(overrides={
        "content_dir": content, "output_dir": out,
        "layouts_dir": layouts, "include_drafts": drafts or None,
    })
    try:
        result = run_build(settings)
    except (OSError, RuntimeError) as e:
        _fail("Build failed", e)
    for src, html_path in result.written:
        typer.echo(f"  {src} -> {html_path}")
    for src in result.drafts:
        typer.echo(f"  {src} (draft, skipped)")
    typer.echo(f"Built {len(result.written)} page(s) to {Path(settings.output_dir)}/")

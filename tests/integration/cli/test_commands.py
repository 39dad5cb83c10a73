"""Integration tests for the mdblog CLI commands"""

import pytest
from typer.testing import CliRunner

from mdblog.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_list_shows_published_only(blog_dir):
    """list prints the public listing: drafts are left out."""
    result = runner.invoke(app, ["list", "-C", str(blog_dir)])
    assert result.exit_code == 0, result.output
    assert "about.md" in result.output
    assert "posts/2018-05-01-hello.md" in result.output
    assert "pipelines" not in result.output


def test_list_all_includes_drafts(blog_dir):
    """list --all adds drafts, flagged as such."""
    result = runner.invoke(app, ["list", "--all", "-C", str(blog_dir)])
    assert result.exit_code == 0, result.output
    line = next(l for l in result.output.splitlines() if "pipelines" in l)
    assert "\tdraft\t" in line


def test_list_empty(tmp_path):
    """list exits 1 when there is nothing to show."""
    (tmp_path / "empty").mkdir()
    result = runner.invoke(app, ["list", "-C", str(tmp_path / "empty")])
    assert result.exit_code == 1
    assert "No documents found." in result.output


def test_show_prints_raw_draft(blog_dir):
    """show gives direct access to a draft's raw content."""
    result = runner.invoke(app, ["show", "posts/2018-07-09-pipelines.md", "-C", str(blog_dir)])
    assert result.exit_code == 0, result.output
    assert result.output == (blog_dir / "posts" / "2018-07-09-pipelines.md").read_text(encoding="utf-8")


def test_show_missing(blog_dir):
    """show reports a missing document and exits 1."""
    result = runner.invoke(app, ["show", "nope.md", "-C", str(blog_dir)])
    assert result.exit_code == 1
    assert "Error: Cannot read nope.md" in result.output


def test_lint_clean(blog_dir):
    """lint on the sample blog finds nothing."""
    result = runner.invoke(app, ["lint", "-C", str(blog_dir)])
    assert result.exit_code == 0, result.output
    assert "0 error(s)" in result.output


def test_lint_reports_errors(blog_dir):
    """lint prints each issue and exits 1."""
    (blog_dir / "broken.md").write_text("# Broken\n\n```lua\nx()\n", encoding="utf-8")
    result = runner.invoke(app, ["lint", "-C", str(blog_dir)])
    assert result.exit_code == 1
    assert "broken.md:3: MD001" in result.output
    assert "1 error(s)" in result.output


def test_lint_impossible_date(blog_dir):
    """A front matter date YAML cannot build is reported as FM003, with no traceback."""
    (blog_dir / "bad-date.md").write_text("---\ntitle: X\ndate: 2024-13-45\n---\nBody\n", encoding="utf-8")
    result = runner.invoke(app, ["lint", "-C", str(blog_dir)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "bad-date.md:1: FM003" in result.output


def test_build_impossible_date(blog_dir, tmp_path):
    """build fails cleanly on a front matter date YAML cannot build."""
    (blog_dir / "bad-date.md").write_text("---\ndate: 2024-13-45\n---\n", encoding="utf-8")
    result = runner.invoke(app, ["build", "-C", str(blog_dir), "--out-dir", str(tmp_path / "site")])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "bad-date.md" in result.output


def test_render_about(blog_dir):
    """render writes a single page's HTML to stdout."""
    result = runner.invoke(app, ["render", "about.md", "-C", str(blog_dir)])
    assert result.exit_code == 0, result.output
    assert "<h1>About</h1>" in result.output


def test_render_unknown_layout(blog_dir):
    """render fails cleanly for an unknown layout."""
    (blog_dir / "odd.md").write_text("---\nlayout: gallery\n---\n", encoding="utf-8")
    result = runner.invoke(app, ["render", "odd.md", "-C", str(blog_dir)])
    assert result.exit_code == 1
    assert "Unknown layout 'gallery'" in result.output


def test_build(blog_dir, tmp_path):
    """build renders published pages and reports skipped drafts."""
    out = tmp_path / "site"
    result = runner.invoke(app, ["build", "-C", str(blog_dir), "--out-dir", str(out)])
    assert result.exit_code == 0, result.output
    assert "posts/2018-07-09-pipelines.md (draft, skipped)" in result.output
    assert (out / "about.html").exists()
    assert (out / "index.html").exists()
    assert not (out / "posts" / "2018-07-09-pipelines.html").exists()


def test_build_drafts_flag(blog_dir, tmp_path):
    """build --drafts renders unpublished documents too."""
    out = tmp_path / "site"
    result = runner.invoke(app, ["build", "-C", str(blog_dir), "--out-dir", str(out), "--drafts"])
    assert result.exit_code == 0, result.output
    assert (out / "posts" / "2018-07-09-pipelines.html").exists()


def test_build_uses_config_yaml(blog_dir, tmp_path):
    """config.yaml in the working directory supplies defaults for build."""
    (tmp_path / "config.yaml").write_text(
        f"content_dir: '{blog_dir.as_posix()}'\noutput_dir: public\nsite_title: From Config\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 0, result.output
    assert "From Config" in (tmp_path / "public" / "index.html").read_text(encoding="utf-8")


def test_invalid_config_yaml(tmp_path):
    """A broken config.yaml is reported without a traceback."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n", encoding="utf-8")
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 1
    assert "Error: Invalid config.yaml" in result.output


def test_verbose_log_file(blog_dir, tmp_path):
    """--verbose with --log-file records debug messages."""
    log = tmp_path / "mdblog.log"
    result = runner.invoke(app, [
        "--verbose", "--log-file", str(log),
        "build", "-C", str(blog_dir), "--out-dir", str(tmp_path / "site"),
    ])
    assert result.exit_code == 0, result.output
    assert "Skipping draft posts/2018-07-09-pipelines.md" in log.read_text(encoding="utf-8")


def test_log_file_records_debug_without_verbose(blog_dir, tmp_path):
    """The log file keeps the debug trail even when the console stays at WARNING."""
    log = tmp_path / "mdblog.log"
    result = runner.invoke(app, [
        "--log-file", str(log),
        "build", "-C", str(blog_dir), "--out-dir", str(tmp_path / "site"),
    ])
    assert result.exit_code == 0, result.output
    text = log.read_text(encoding="utf-8")
    assert "mdblog.store: Loaded about.md" in text
    assert "mdblog.render: Rendering about.md with layout 'page'" in text
    assert "[mdblog] DEBUG" not in result.output


def test_lint_logs_per_document(blog_dir, tmp_path):
    """lint records how many issues each document produced."""
    log = tmp_path / "mdblog.log"
    result = runner.invoke(app, ["--log-file", str(log), "lint", "-C", str(blog_dir)])
    assert result.exit_code == 0, result.output
    assert "mdblog.lint: Linted about.md: 0 issue(s)" in log.read_text(encoding="utf-8")

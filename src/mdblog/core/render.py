"""Page rendering: markdown-it body HTML wrapped in a Jinja2 layout"""

from pathlib import Path, PurePosixPath

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from mdblog.core.models import Document
from mdblog.core.parse import make_parser
from mdblog.errors import LayoutNotFoundError
from mdblog.logging import get_logger


logger = get_logger("render")

DEFAULT_LAYOUTS: dict[str, str] = {
    "default.html": """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{% block title %}{{ site_title }}{% endblock %}</title>
</head>
<body>
<header><a href="{{ root }}index.html">{{ site_title }}</a></header>
<main>
{% block content %}{% endblock %}
</main>
</body>
</html>
""",
    "page.html": """\
{% extends "default.html" %}
{% block title %}{{ title }} | {{ site_title }}{% endblock %}
{% block content %}
<article class="page">
<h1>{{ title }}</h1>
{{ content | safe }}
</article>
{% endblock %}
""",
    "post.html": """\
{% extends "default.html" %}
{% block title %}{{ title }} | {{ site_title }}{% endblock %}
{% block content %}
<article class="post{% if draft %} draft{% endif %}">
<h1>{{ title }}</h1>
{% if date %}<time datetime="{{ date.isoformat() }}">{{ date.isoformat() }}</time>{% endif %}
{% if draft %}<p class="draft-notice">Draft: not published</p>{% endif %}
{{ content | safe }}
</article>
{% endblock %}
""",
    "index.html": """\
{% extends "default.html" %}
{% block content %}
{% if pages %}
<nav>
<ul class="pages">
{% for item in pages %}<li><a href="{{ item.url }}">{{ item.title }}</a></li>
{% endfor %}</ul>
</nav>
{% endif %}
<ul class="posts">
{% for item in posts %}<li>{% if item.date %}<time>{{ item.date.isoformat() }}</time> {% endif %}<a href="{{ item.url }}">{{ item.title }}</a>{% if item.draft %} <em>(draft)</em>{% endif %}</li>
{% endfor %}</ul>
{% endblock %}
""",
}


def page_url(path: str) -> str:
    """Output location of a document, relative to the site root ('posts/x.md' -> 'posts/x.html')."""
    return PurePosixPath(path).with_suffix(".html").as_posix()


def _root_prefix(url: str) -> str:
    """Relative prefix from a page back to the site root."""
    return '../' * url.count('/')


class Renderer:
    """Turn Documents into HTML pages.

    Templates are looked up as '<layout>.html', first in layouts_dir (when it
    exists), then among the built-in layouts.
    """

    def __init__(
        self,
        layouts_dir: Path = None,
        parser_config: str = 'gfm-like',
        default_layout: str = 'post',
        site_title: str = 'Blog',
        ):
        loaders = []
        if layouts_dir is not None and Path(layouts_dir).is_dir():
            loaders.append(FileSystemLoader(str(layouts_dir)))
        loaders.append(DictLoader(DEFAULT_LAYOUTS))
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.parser = make_parser(parser_config)
        self.default_layout = default_layout
        self.site_title = site_title

    def _template(self, layout: str):
        try:
            template = self.env.get_template(f"{layout}.html")
        except TemplateNotFound as e:
            raise LayoutNotFoundError(layout) from e
        logger.debug("Layout '%s' loaded from %s", layout, template.filename)
        return template

    def render_body(self, markdown: str) -> str:
        """Render a markdown body to an HTML fragment."""
        return self.parser.render(markdown)

    def layout_for(self, doc: Document) -> str:
        return doc.front_matter.layout or self.default_layout

    def render_page(self, doc: Document) -> str:
        """Render a full page for doc using the template its layout selects."""
        layout = self.layout_for(doc)
        template = self._template(layout)
        logger.debug("Rendering %s with layout '%s'", doc.path, layout)
        return template.render(
            site_title=self.site_title,
            root=_root_prefix(page_url(doc.path)),
            title=doc.title,
            date=doc.date,
            draft=not doc.published,
            layout=layout,
            page=doc.front_matter.as_dict(),
            content=self.render_body(doc.markdown),
        )

    def render_index(self, pages: list[dict], posts: list[dict]) -> str:
        """Render the site listing from entries built by pipeline.listing_entry."""
        return self._template("index").render(
            site_title=self.site_title,
            root='',
            pages=pages,
            posts=posts,
        )

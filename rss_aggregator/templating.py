"""Jinja2 environment for rss_aggregator templates."""

from __future__ import annotations

from importlib import resources

from jinja2 import Environment, FileSystemLoader

_ENV: Environment | None = None


def hyperlink(content: str, href: str | None) -> str:
    """Wrap ``content`` in an anchor to ``href``; no anchor when href is None."""
    if href is None:
        return content
    return f'<a href="{href}">{content}</a>'


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        # Feed text is written verbatim, markup included.
        _ENV = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _ENV.filters["link_to"] = hyperlink
    return _ENV

"""High-level orchestration for the rss_aggregator application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, TextIO

from .config import parse_feed_list, resolve_location
from .renderers import render_feed, render_index
from .xmltree import read_tree

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    feeds_source: str
    index_file: str
    timeout: float = 10.0


@dataclass
class RunResult:
    """Returned data after executing the app."""

    index_file: str
    pages: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def process_feed(url: str, sink: TextIO, timeout: float = 10.0) -> None:
    """Read the RSS feed at ``url`` and write its HTML page to ``sink``."""
    document = read_tree(url, timeout=timeout)
    sink.write(render_feed(document))


def _open_sink(path: Path) -> TextIO:
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    return path.open("w", encoding="utf-8")


def execute(config: RunConfig) -> RunResult:
    """Render the index page and one page per feed that names a file."""
    feed_list = parse_feed_list(config.feeds_source, timeout=config.timeout)
    index_path = Path(config.index_file)
    result = RunResult(index_file=str(index_path))

    with _open_sink(index_path) as index_sink:
        index_sink.write(render_index(feed_list, index_path.name))

        for feed in feed_list.feeds:
            if feed.file is None:
                logger.warning(
                    "Feed '%s' has no file attribute; listing it without a page",
                    feed.name,
                )
                result.skipped.append(feed.name)
                continue
            if feed.url is None:
                raise RuntimeError(f"Feed '{feed.name}' has a file but no url.")

            location = resolve_location(feed_list.source, feed.url)
            destination = index_path.parent / feed.file
            logger.info("Rendering feed '%s' from %s", feed.name, location)
            with _open_sink(destination) as feed_sink:
                process_feed(location, feed_sink, timeout=config.timeout)
            result.pages.append(str(destination))

    logger.info(
        "Wrote %s with %d feed pages (%d without a file)",
        index_path,
        len(result.pages),
        len(result.skipped),
    )
    return result

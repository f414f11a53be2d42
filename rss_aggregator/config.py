"""Configuration loading for the feed list and the application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from urllib.parse import urljoin, urlparse
from xml.etree import ElementTree as ET

from .models import FeedList, FeedConfig
from .xmltree import XMLNode, read_tree

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http", "https", "file")


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    feeds_source: Optional[str] = None
    index_file: Optional[str] = None
    timeout: float = 10.0
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _optional_attribute(node: XMLNode, name: str) -> Optional[str]:
    return node.attribute_value(name) if node.has_attribute(name) else None


def parse_feed_list(location: str, timeout: float = 10.0) -> FeedList:
    """Parse the feed-list document and return its feed entries in order."""
    logger.info("Loading feed list from %s", location)
    root = read_tree(location, timeout=timeout)

    feeds: List[FeedConfig] = []
    for node in root.children:
        if not node.is_tag:
            continue
        feeds.append(
            FeedConfig(
                name=node.attribute_value("name"),
                url=_optional_attribute(node, "url"),
                file=_optional_attribute(node, "file"),
            )
        )
        logger.debug("Registered feed '%s' (%s)", feeds[-1].name, feeds[-1].url)

    logger.info("Loaded %d feeds from the feed list", len(feeds))
    return FeedList(
        source=location, title=_optional_attribute(root, "title"), feeds=feeds
    )


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def resolve_location(base: str, target: str) -> str:
    """Resolve a feed location relative to the document that names it."""
    if urlparse(target).scheme in URL_SCHEMES:
        return target
    if urlparse(base).scheme in URL_SCHEMES:
        return urljoin(base, target)
    return _resolve_path(Path(base), target)


def parse_app_config(path: str) -> AppConfig:
    """Parse the optional application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    root = ET.parse(config_path).getroot()

    config = AppConfig()

    feeds = root.findtext("feeds")
    if feeds and feeds.strip():
        feeds = feeds.strip()
        config.feeds_source = (
            feeds
            if urlparse(feeds).scheme in URL_SCHEMES
            else _resolve_path(config_path, feeds)
        )

    output = root.findtext("output")
    if output and output.strip():
        config.index_file = _resolve_path(config_path, output.strip())

    timeout = root.findtext("timeout")
    if timeout and timeout.strip():
        try:
            config.timeout = float(timeout)
        except ValueError:
            raise ValueError(f"Invalid <timeout> value: {timeout!r}") from None
        if config.timeout <= 0:
            raise ValueError("<timeout> must be positive.")

    log_node = root.find("logging")
    if log_node is not None:
        config.logging.level = log_node.findtext("level", "INFO").strip()
        log_file = log_node.findtext("file")
        if log_file and log_file.strip():
            config.logging.file = _resolve_path(config_path, log_file.strip())

    return config

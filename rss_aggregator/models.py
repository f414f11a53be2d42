"""Shared data models for rss_aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FeedConfig:
    """One feed entry of the feed-list document."""

    name: str
    url: Optional[str] = None
    file: Optional[str] = None


@dataclass
class FeedList:
    """The parsed feed-list document."""

    source: str
    title: Optional[str] = None
    feeds: List[FeedConfig] = field(default_factory=list)


@dataclass
class ChannelHeader:
    """Feed-level values rendered above the item table."""

    page_title: str
    heading: str
    description: str
    link: Optional[str] = None

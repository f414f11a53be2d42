"""Rendering helpers turning RSS trees into HTML pages."""

from __future__ import annotations

import logging
from typing import List, Optional

from .models import ChannelHeader, FeedList
from .templating import get_environment, hyperlink
from .xmltree import XMLNode, locate_child

logger = logging.getLogger(__name__)

NO_DATE = "No Publication Date Available"
NO_SOURCE = "No Source Available"
NO_TITLE = "No Title Available"
EMPTY_TITLE = "Empty Title"
EMPTY_DESCRIPTION = "Empty Description"


def _first_label(node: XMLNode, index: Optional[int]) -> Optional[str]:
    """Return the label of the first child of ``node.child(index)``, if any."""
    if index is None:
        return None
    field = node.child(index)
    if field.number_of_children == 0:
        return None
    return field.child(0).label


def render_item(item: XMLNode) -> str:
    """Render one ``<item>`` as the three cells of a table row.

    The date column falls back to a bare notice with no ``<td>`` around it.
    The source cell links to the ``url`` attribute of ``<source>`` when
    present. The title cell links to the first child of ``<link>``, which
    must exist; an item with neither ``<title>`` text nor a ``<description>``
    gets a notice, while an item with a ``<description>`` but no ``<title>``
    gets an empty cell.
    """
    if not item.is_tag or item.label != "item":
        raise ValueError(f"Expected an <item> tag, got {item!r}")

    cells: List[str] = []

    date = _first_label(item, locate_child(item, "pubDate"))
    cells.append(f"<td>{date}</td>" if date is not None else NO_DATE)

    index = locate_child(item, "source")
    source_url = None
    if index is not None and item.child(index).has_attribute("url"):
        source_url = item.child(index).attribute_value("url")
    source = _first_label(item, index)
    if source is None:
        source = NO_SOURCE
    cells.append(f"<td>{hyperlink(source, source_url)}</td>")

    index = locate_child(item, "link")
    link = item.child(index).child(0).label if index is not None else None
    index = locate_child(item, "title")
    title = _first_label(item, index)
    if title is None:
        if index is None and locate_child(item, "description") is not None:
            title = ""
        else:
            title = NO_TITLE
    cells.append(f"<td>{hyperlink(title, link)}</td>")

    return "\n".join(cells) + "\n"


def build_channel_header(channel: XMLNode) -> ChannelHeader:
    """Collect the page title, heading, link and description of a channel."""
    title_index = locate_child(channel, "title")
    # <title> is mandatory for the page head; its text may be empty.
    channel.child(title_index)
    title = _first_label(channel, title_index)

    link = _first_label(channel, locate_child(channel, "link"))
    description = _first_label(channel, locate_child(channel, "description"))

    return ChannelHeader(
        page_title=title or "",
        heading=title or EMPTY_TITLE,
        description=description or EMPTY_DESCRIPTION,
        link=link or None,
    )


def build_item_rows(channel: XMLNode) -> List[str]:
    """Return one row body per channel child from the first ``<item>`` on.

    Children after the first item that are not items still get a row, left
    empty.
    """
    start = locate_child(channel, "item")
    if start is None:
        return []

    rows = []
    for child in channel.children[start:]:
        if child.is_tag and child.label == "item":
            rows.append(render_item(child))
        else:
            logger.debug("Emitting empty row for non-item child %r", child)
            rows.append("")
    return rows


def render_feed(document: XMLNode) -> str:
    """Render a parsed RSS document as a complete HTML page."""
    channel = document.child(0)
    header = build_channel_header(channel)
    rows = build_item_rows(channel)
    logger.debug("Rendering '%s' with %d rows", header.page_title, len(rows))

    template = get_environment().get_template("feed.html.j2")
    return template.render(header=header, rows=rows)


def render_index(feed_list: FeedList, page_title: str) -> str:
    """Render the index page listing every configured feed."""
    template = get_environment().get_template("index.html.j2")
    return template.render(
        page_title=feed_list.title or page_title,
        title=feed_list.title,
        feeds=feed_list.feeds,
    )

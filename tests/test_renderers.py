import pytest

from rss_aggregator import renderers
from rss_aggregator.models import FeedList, FeedConfig
from rss_aggregator.xmltree import XMLNode, parse_tree


def tag(name, *children, **attributes):
    return XMLNode.tag(name, children, attributes)


def field(name, value, **attributes):
    return tag(name, XMLNode.text(value), **attributes)


def cells(row):
    return row.splitlines()


def test_render_item_with_all_fields():
    item = tag(
        "item",
        field("pubDate", "Mon, 01 Jan 2024"),
        field("source", "X", url="http://x"),
        field("link", "http://a"),
        field("title", "Story"),
    )

    row = renderers.render_item(item)

    assert row == (
        "<td>Mon, 01 Jan 2024</td>\n"
        '<td><a href="http://x">X</a></td>\n'
        '<td><a href="http://a">Story</a></td>\n'
    )


def test_render_item_without_pub_date_emits_bare_notice():
    row = renderers.render_item(tag("item", field("title", "T")))

    assert cells(row)[0] == "No Publication Date Available"
    assert "<td>No Publication Date Available" not in row


def test_render_item_with_empty_pub_date_emits_bare_notice():
    row = renderers.render_item(tag("item", tag("pubDate"), field("title", "T")))

    assert cells(row)[0] == renderers.NO_DATE


@pytest.mark.parametrize(
    "source, expected",
    [
        (field("source", "Wire"), "<td>Wire</td>"),
        (
            tag("source", url="http://x"),
            '<td><a href="http://x">No Source Available</a></td>',
        ),
        (tag("source"), "<td>No Source Available</td>"),
    ],
)
def test_render_item_source_column(source, expected):
    row = renderers.render_item(tag("item", source, field("title", "T")))

    assert cells(row)[1] == expected


def test_render_item_without_source_tag():
    row = renderers.render_item(tag("item", field("title", "T")))

    assert cells(row)[1] == "<td>No Source Available</td>"


def test_render_item_description_without_title_leaves_cell_empty():
    item = tag("item", field("link", "http://a"), field("description", "Desc"))

    row = renderers.render_item(item)

    assert cells(row)[2] == '<td><a href="http://a"></a></td>'
    assert "Desc" not in row
    assert renderers.NO_TITLE not in row


def test_render_item_without_title_or_description():
    row = renderers.render_item(tag("item"))

    assert cells(row)[2] == "<td>No Title Available</td>"


def test_render_item_empty_title_ignores_description():
    item = tag("item", tag("title"), field("description", "Desc"))

    row = renderers.render_item(item)

    assert cells(row)[2] == "<td>No Title Available</td>"


def test_render_item_empty_link_raises():
    with pytest.raises(IndexError):
        renderers.render_item(tag("item", tag("link"), field("title", "T")))


def test_render_item_rejects_non_item_nodes():
    with pytest.raises(ValueError):
        renderers.render_item(tag("entry"))


def test_build_channel_header_uses_link_title_and_description():
    channel = tag(
        "channel",
        field("title", "News"),
        field("link", "http://news"),
        field("description", "Headlines"),
    )

    header = renderers.build_channel_header(channel)

    assert header.page_title == "News"
    assert header.heading == "News"
    assert header.link == "http://news"
    assert header.description == "Headlines"


def test_build_channel_header_falls_back_for_empty_values():
    channel = tag(
        "channel",
        field("title", ""),
        tag("link"),
        tag("description", XMLNode.text("")),
    )

    header = renderers.build_channel_header(channel)

    assert header.page_title == ""
    assert header.heading == "Empty Title"
    assert header.link is None
    assert header.description == "Empty Description"


def test_build_channel_header_requires_title():
    with pytest.raises(IndexError):
        renderers.build_channel_header(tag("channel", field("link", "http://news")))


def test_build_item_rows_wraps_every_child_after_first_item():
    channel = tag(
        "channel",
        field("title", "T"),
        field("category", "skipped before items"),
        tag("item", field("title", "A")),
        field("category", "misc"),
        tag("item", field("title", "B")),
    )

    rows = renderers.build_item_rows(channel)

    assert len(rows) == 3
    assert "<td>A</td>" in rows[0]
    assert rows[1] == ""
    assert "<td>B</td>" in rows[2]


def test_build_item_rows_without_items():
    assert renderers.build_item_rows(tag("channel", field("title", "T"))) == []


def test_render_feed_emits_page_and_empty_rows():
    channel = tag(
        "channel",
        field("title", "T"),
        field("link", "http://t"),
        tag("description", XMLNode.text("")),
        tag("item", field("title", "A")),
        field("category", "misc"),
        tag("item", field("title", "B")),
    )

    html = renderers.render_feed(tag("rss", channel))

    assert "<title>T</title>" in html
    assert '<h1><a href="http://t">T</a></h1>' in html
    assert "<p>\nEmpty Description\n</p>" in html
    assert "<th>Date</th><th>Source</th><th>News</th>" in html
    assert html.count("<tr>") == 4
    assert "<tr>\n</tr>" in html
    assert html.rstrip().endswith("</table>\n</body> </html>")


def test_render_feed_heading_without_link():
    channel = tag("channel", field("title", "T"), field("description", "D"))

    html = renderers.render_feed(tag("rss", channel))

    assert "<h1>T</h1>" in html
    assert "<p>\nD\n</p>" in html


def test_render_index_without_title_lists_feeds():
    feed_list = FeedList(
        source="feeds.xml",
        feeds=[FeedConfig(name="Feed1", url="f.xml", file="out.html")],
    )

    html = renderers.render_index(feed_list, "index.html")

    assert "<title>index.html</title>" in html
    assert "<h1>" not in html
    assert '<li><a href="out.html">Feed1</a></li>' in html
    assert html.count("<li>") == 1


def test_render_index_with_title_and_feed_without_file():
    feed_list = FeedList(
        source="feeds.xml",
        title="Morning",
        feeds=[
            FeedConfig(name="A", url="a.xml", file="a.html"),
            FeedConfig(name="NoPage", url="b.xml"),
        ],
    )

    html = renderers.render_index(feed_list, "index.html")

    assert "<title>Morning</title>" in html
    assert "<h1>Morning</h1>" in html
    assert '<li><a href="">NoPage</a></li>' in html


def test_render_feed_parsed_empty_title_falls_back_in_heading():
    document = parse_tree(
        "<rss><channel><title></title><link>http://t</link>"
        "<description>D</description><item><title>A</title></item>"
        "</channel></rss>"
    )

    html = renderers.render_feed(document)

    assert "<title></title>" in html
    assert '<h1><a href="http://t">Empty Title</a></h1>' in html
    assert "<td>A</td>" in html


def test_render_feed_parsed_missing_title_raises():
    document = parse_tree("<rss><channel><description>D</description></channel></rss>")

    with pytest.raises(IndexError):
        renderers.render_feed(document)

import logging
import textwrap

import pytest

SAMPLE_RSS = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0">
      <channel>
        <title>Example News</title>
        <link>https://news.example.com/</link>
        <description>Daily headlines</description>
        <item>
          <pubDate>Mon, 01 Jan 2024 08:00:00 GMT</pubDate>
          <source url="https://wire.example.com/rss">Example Wire</source>
          <link>https://news.example.com/a</link>
          <title>First story</title>
        </item>
        <category>World</category>
        <item>
          <link>https://news.example.com/b</link>
          <description>Second story body</description>
        </item>
      </channel>
    </rss>
    """
)


@pytest.fixture
def write_file(tmp_path):
    """Write text into tmp_path and return the resulting path."""

    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_rss():
    return SAMPLE_RSS


@pytest.fixture
def sample_feed(write_file, sample_rss):
    return write_file("f.xml", sample_rss)


@pytest.fixture
def isolated_root_logger():
    """Detach root handlers for the test and restore them afterwards."""
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    try:
        yield root_logger
    finally:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        for handler in original_handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(original_level)

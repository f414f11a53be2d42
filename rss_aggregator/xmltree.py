"""Read-only XML trees built from local files or remote feed URLs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import unquote, urlparse
from xml.etree import ElementTree as ET

import requests

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http", "https")
USER_AGENT = "rss-aggregator/1.0"


class XMLNode:
    """A node of a parsed XML document.

    A tag node carries a tag name, an ordered tuple of children and an
    attribute mapping. A text node carries only its literal text. The
    ``label`` of a tag node is its tag name; the ``label`` of a text node is
    its text.
    """

    __slots__ = ("_label", "_is_tag", "_children", "_attributes", "_first_index")

    def __init__(
        self,
        label: str,
        is_tag: bool,
        children: Tuple["XMLNode", ...] = (),
        attributes: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._label = label
        self._is_tag = is_tag
        self._children = children
        self._attributes: Dict[str, str] = dict(attributes or {})
        self._first_index: Dict[str, int] = {}
        for position, node in enumerate(children):
            if node.is_tag:
                self._first_index.setdefault(node.label, position)

    @classmethod
    def tag(
        cls,
        name: str,
        children: Iterable["XMLNode"] = (),
        attributes: Optional[Mapping[str, str]] = None,
    ) -> "XMLNode":
        return cls(name, True, tuple(children), attributes)

    @classmethod
    def text(cls, value: str) -> "XMLNode":
        return cls(value, False)

    @property
    def is_tag(self) -> bool:
        return self._is_tag

    @property
    def label(self) -> str:
        return self._label

    @property
    def number_of_children(self) -> int:
        self._require_tag("children")
        return len(self._children)

    @property
    def children(self) -> Tuple["XMLNode", ...]:
        self._require_tag("children")
        return self._children

    def child(self, index: Optional[int]) -> "XMLNode":
        """Return the child at ``index``; the not-found sentinel is rejected."""
        self._require_tag("children")
        if index is None or not 0 <= index < len(self._children):
            raise IndexError(
                f"<{self._label}> has no child at index {index} "
                f"({len(self._children)} children)"
            )
        return self._children[index]

    def has_attribute(self, name: str) -> bool:
        self._require_tag("attributes")
        return name in self._attributes

    def attribute_value(self, name: str) -> str:
        self._require_tag("attributes")
        try:
            return self._attributes[name]
        except KeyError:
            raise KeyError(f"<{self._label}> has no attribute '{name}'") from None

    def first_index_of(self, tag: str) -> Optional[int]:
        self._require_tag("children")
        return self._first_index.get(tag)

    def _require_tag(self, what: str) -> None:
        if not self._is_tag:
            raise ValueError(f"Text node {self._label!r} has no {what}")

    def __repr__(self) -> str:
        if self._is_tag:
            return f"XMLNode.tag({self._label!r}, {len(self._children)} children)"
        return f"XMLNode.text({self._label!r})"


def locate_child(node: XMLNode, tag: str) -> Optional[int]:
    """Return the index of the first direct child of ``node`` tagged ``tag``.

    Matching is exact and case-sensitive; text children never match.
    Returns ``None`` when no child carries the tag.
    """
    if not node.is_tag:
        raise ValueError(f"Cannot locate <{tag}> under text node {node.label!r}")
    return node.first_index_of(tag)


def _append_text(children: List[XMLNode], value: Optional[str]) -> None:
    if value and value.strip():
        children.append(XMLNode.text(value))


def _from_element(element: ET.Element) -> XMLNode:
    children: List[XMLNode] = []
    _append_text(children, element.text)
    for sub_element in element:
        children.append(_from_element(sub_element))
        _append_text(children, sub_element.tail)
    return XMLNode.tag(element.tag, children, element.attrib)


def parse_tree(data: bytes | str) -> XMLNode:
    """Parse an XML document into a tree rooted at its document element."""
    return _from_element(ET.fromstring(data))


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in REMOTE_SCHEMES


def load_source(location: str, timeout: float = 10.0) -> bytes:
    """Return the raw bytes behind a URL, ``file://`` URL or local path."""
    if is_remote(location):
        logger.debug("Fetching %s (timeout %.1fs)", location, timeout)
        try:
            response = requests.get(
                location, timeout=timeout, headers={"User-Agent": USER_AGENT}
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise RuntimeError(f"Failed to fetch {location}: {exc}") from exc
        return response.content

    parsed = urlparse(location)
    path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(location)
    logger.debug("Reading %s", path)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise RuntimeError(f"Failed to read {path}: {exc}") from exc


def read_tree(location: str, timeout: float = 10.0) -> XMLNode:
    """Load ``location`` and parse it; malformed XML aborts with RuntimeError."""
    data = load_source(location, timeout=timeout)
    try:
        return parse_tree(data)
    except ET.ParseError as exc:
        raise RuntimeError(f"{location} is not well-formed XML: {exc}") from exc

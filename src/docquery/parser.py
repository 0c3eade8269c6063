"""HTML parsing entry point.

Markup is parsed by html5lib into a minidom tree which is then copied into
docquery's own read-only node classes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from xml.dom import Node as DomNode

import html5lib

from .node import CommentNode, ElementNode, Node, TextNode
from .query import find_all, find_one
from .traverse import traverse

if TYPE_CHECKING:
    from .matcher import Matcher

logger = logging.getLogger(__name__)


class ParseOpts:
    __slots__ = ("container", "encoding", "keep_comments")

    keep_comments: bool
    encoding: str | None
    container: str

    def __init__(
        self,
        keep_comments: bool = False,
        encoding: str | None = None,
        container: str = "div",
    ) -> None:
        self.keep_comments = bool(keep_comments)
        self.encoding = encoding
        self.container = container


def _new_parser() -> html5lib.HTMLParser:
    return html5lib.HTMLParser(
        tree=html5lib.treebuilders.getTreeBuilder("dom"),
        namespaceHTMLElements=False,
    )


def _stream_kwargs(html: Any, opts: ParseOpts) -> dict[str, Any]:
    if isinstance(html, (bytes, bytearray, memoryview)):
        if opts.encoding:
            return {"transport_encoding": opts.encoding}
        return {}
    if isinstance(html, str):
        return {}
    raise TypeError(f"Cannot parse {type(html).__name__}; expected str or bytes")


def _convert_children(dom_node: Any, parent: Node, opts: ParseOpts) -> None:
    for child in dom_node.childNodes:
        node_type = child.nodeType
        if node_type == DomNode.ELEMENT_NODE:
            attrs = [(name, value) for name, value in child.attributes.items()]
            element = ElementNode(child.tagName.lower(), attrs)
            parent.append_child(element)
            _convert_children(child, element, opts)
        elif node_type == DomNode.TEXT_NODE:
            parent.append_child(TextNode(child.data))
        elif node_type == DomNode.COMMENT_NODE and opts.keep_comments:
            parent.append_child(CommentNode(child.data))


class Document:
    __slots__ = ("encoding", "opts", "root")

    encoding: str | None
    opts: ParseOpts
    root: Node

    def __init__(
        self,
        html: str | bytes | bytearray | memoryview | None,
        *,
        fragment: bool = False,
        opts: ParseOpts | None = None,
    ) -> None:
        self.opts = opts or ParseOpts()
        self.encoding = None

        if html is None:
            html = ""
        if isinstance(html, (bytearray, memoryview)):
            html = bytes(html)
        kwargs = _stream_kwargs(html, self.opts)

        parser = _new_parser()
        if fragment:
            dom = parser.parseFragment(html, container=self.opts.container, **kwargs)
            self.root = Node("#document-fragment")
        else:
            dom = parser.parse(html, **kwargs)
            self.root = Node("#document")

        if isinstance(html, bytes):
            self.encoding = parser.documentEncoding

        _convert_children(dom, self.root, self.opts)
        logger.debug(
            "parsed %s with %d top-level node(s), encoding=%s",
            self.root.name,
            len(self.root.children),
            self.encoding,
        )

    def find_one(self, pattern: str) -> ElementNode | None:
        """Return the first element matching `pattern`. Delegates to query.find_one()."""
        return find_one(self.root, pattern)

    def find_all(self, pattern: str) -> list[ElementNode]:
        """Return all elements matching `pattern`. Delegates to query.find_all()."""
        return find_all(self.root, pattern)

    def traverse(self, matchers: list[Matcher]) -> bool:
        """Run the matcher tree over the whole document. Delegates to traverse()."""
        return traverse(self.root, matchers)

    def to_text(self, separator: str = " ", strip: bool = True) -> str:
        return self.root.to_text(separator=separator, strip=strip)


def parse(html: str | bytes | None, *, keep_comments: bool = False, encoding: str | None = None) -> Node:
    """Parse a full HTML document and return its `#document` node."""
    return Document(html, opts=ParseOpts(keep_comments=keep_comments, encoding=encoding)).root


def parse_fragment(html: str | bytes | None, *, container: str = "div", keep_comments: bool = False) -> Node:
    """Parse an HTML fragment as if it were the contents of `container`."""
    opts = ParseOpts(keep_comments=keep_comments, container=container)
    return Document(html, fragment=True, opts=opts).root

from importlib.metadata import PackageNotFoundError, version

from .matcher import Matcher, NodeMatcher, SequenceMatcher, split_sequence
from .node import CommentNode, ElementNode, Node, TextNode
from .parser import Document, ParseOpts, parse, parse_fragment
from .query import find_all, find_direct_child, find_one, has_child
from .selector import SelectorError, compile_selector, matches, parse_selector
from .text import get_attr, get_href, inner_text, raw_inner_text, skip_labelled_anchor
from .traverse import traverse

try:
    __version__ = version("docquery")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "dev"

__all__ = [
    "CommentNode",
    "Document",
    "ElementNode",
    "Matcher",
    "Node",
    "NodeMatcher",
    "ParseOpts",
    "SelectorError",
    "SequenceMatcher",
    "TextNode",
    "compile_selector",
    "find_all",
    "find_direct_child",
    "find_one",
    "get_attr",
    "get_href",
    "has_child",
    "inner_text",
    "matches",
    "parse",
    "parse_fragment",
    "parse_selector",
    "raw_inner_text",
    "skip_labelled_anchor",
    "split_sequence",
    "traverse",
]

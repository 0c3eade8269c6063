"""Plain lookups that do not use the matcher protocol.

All searches look at descendants of the given node only, in document order.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .selector import Selector, compile_selector


def _iter_matches(node: Any, selector: Selector) -> Iterator[Any]:
    for child in node.children:
        if not getattr(child, "is_element", False):
            continue
        if selector(child):
            yield child
        yield from _iter_matches(child, selector)


def find_all(node: Any, pattern: str) -> list[Any]:
    """
    Return every descendant element matching `pattern`.

    Args:
        node: The node to search below
        pattern: A selector pattern

    Returns:
        Matching elements in depth-first document order
    """
    return list(_iter_matches(node, compile_selector(pattern)))


def find_one(node: Any, pattern: str) -> Any | None:
    """Return the first descendant element matching `pattern`, or None."""
    return next(_iter_matches(node, compile_selector(pattern)), None)


def find_direct_child(node: Any, pattern: str) -> Any | None:
    """Return the first immediate child element matching `pattern`, or None."""
    selector = compile_selector(pattern)
    for child in node.children:
        if selector(child):
            return child
    return None


def has_child(node: Any, pattern: str) -> bool:
    """Return True if any immediate child element matches `pattern`."""
    return find_direct_child(node, pattern) is not None

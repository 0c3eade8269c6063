from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .matcher import Matcher


def _merge_unique(merged: list[Matcher], seen: set[int], matchers: Iterable[Matcher]) -> None:
    # Identity, not equality: two sequence copies at the same step are distinct.
    for m in matchers:
        key = id(m)
        if key not in seen:
            seen.add(key)
            merged.append(m)


def traverse(node: Any, matchers: Iterable[Matcher]) -> bool:
    """
    Apply a set of matchers to the descendants of `node`.

    Each element child is tested against every active matcher in order. A
    matcher that matches runs its handler and is replaced by its
    `next_matchers()` for that child's subtree; one that does not match is
    carried down unchanged. A child whose merged matcher set is empty is not
    descended into. Every node is visited at most once per call.

    Exceptions raised by handlers propagate to the caller.

    Args:
        node: The node whose descendants are searched (not tested itself)
        matchers: The active matchers

    Returns:
        True if any matcher matched somewhere below `node`
    """
    active = list(matchers)
    if not active:
        return False

    matched = False
    for child in node.children:
        if not getattr(child, "is_element", False):
            continue

        merged: list[Matcher] = []
        seen: set[int] = set()
        for m in active:
            if m.match(child):
                matched = True
                m.handler(child)
                _merge_unique(merged, seen, m.next_matchers())
            else:
                _merge_unique(merged, seen, (m,))

        if merged and traverse(child, merged):
            matched = True

    return matched

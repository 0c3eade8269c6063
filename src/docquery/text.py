"""Text and attribute helpers used by matcher handlers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

SkipFilter = Callable[[Any], bool]


def skip_labelled_anchor(node: Any) -> bool:
    """Skip ``<a aria-label=...>`` children (permalink and icon anchors)."""
    if not getattr(node, "is_element", False) or node.name != "a":
        return False
    return any(key == "aria-label" for key, _ in node.attrs)


def inner_text(node: Any, recurse: bool = False, skip: SkipFilter | None = skip_labelled_anchor) -> str:
    """Return the trimmed, whitespace-collapsed text of `node`.

    Direct text children are stripped and concatenated. With `recurse`, the
    text of child elements is interpolated, wrapped in single spaces.
    Children for which `skip` returns True are ignored.
    """
    if getattr(node, "is_text", False):
        return " ".join(node.data.split())

    parts: list[str] = []
    for child in node.children:
        if skip is not None and skip(child):
            continue
        if child.is_text:
            parts.append(child.data.strip())
        elif recurse and child.is_element:
            parts.append(f" {inner_text(child, recurse, skip)} ")
    return " ".join("".join(parts).split())


def raw_inner_text(node: Any, recurse: bool = True, skip: SkipFilter | None = skip_labelled_anchor) -> str:
    """Return the text of `node` verbatim, keeping all whitespace.

    Useful for ``<pre>`` blocks. Skipped children are dropped as in
    `inner_text()`; without `recurse` only direct text children count.
    """
    if getattr(node, "is_text", False):
        return str(node.data)

    parts: list[str] = []
    for child in node.children:
        if skip is not None and skip(child):
            continue
        if child.is_text:
            parts.append(child.data)
        elif recurse and child.is_element:
            parts.append(raw_inner_text(child, recurse, skip))
    return "".join(parts)


def get_attr(node: Any, key: str, default: str | None = None) -> str | None:
    """Return the first `key` attribute of an element, or `default`."""
    if not getattr(node, "is_element", False):
        return default
    for k, v in node.attrs:
        if k == key:
            return v
    return default


def get_href(node: Any) -> str:
    """Return the element's ``href`` with surrounding whitespace removed."""
    return (get_attr(node, "href") or "").strip()

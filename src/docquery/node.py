from __future__ import annotations

from typing import Any

Attribute = tuple[str, str]


def _to_text_collect(node: Any, parts: list[str], strip: bool) -> None:
    name: str = node.name

    if name == "#text":
        data: str | None = node.data
        if not data:
            return
        if strip:
            data = data.strip()
            if not data:
                return
        parts.append(data)
        return

    for child in node.children:
        _to_text_collect(child, parts, strip=strip)


class Node:
    """Container node: the parsed document or a fragment."""

    __slots__ = ("children", "name", "parent")

    name: str
    parent: Node | ElementNode | None
    children: list[Any]

    def __init__(self, name: str = "#document") -> None:
        self.name = name
        self.parent = None
        self.children = []

    @property
    def is_element(self) -> bool:
        return False

    @property
    def is_text(self) -> bool:
        return False

    def append_child(self, node: Any) -> None:
        self.children.append(node)
        node.parent = self

    def has_child_nodes(self) -> bool:
        """Return True if this node has children."""
        return bool(self.children)

    def to_text(self, separator: str = " ", strip: bool = True) -> str:
        """Return the concatenated text of this node's descendants.

        - `separator` controls how text nodes are joined (default: a single space).
        - `strip=True` strips each text node and drops empty segments.
        """
        parts: list[str] = []
        _to_text_collect(self, parts, strip=strip)
        if not parts:
            return ""
        return separator.join(parts)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class ElementNode(Node):
    __slots__ = ("attrs",)

    attrs: list[Attribute]

    def __init__(self, name: str, attrs: list[Attribute] | None = None) -> None:
        super().__init__(name)
        self.attrs = list(attrs) if attrs else []

    @property
    def is_element(self) -> bool:
        return True

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value of the first `key` attribute, or `default`."""
        for k, v in self.attrs:
            if k == key:
                return v
        return default

    def __repr__(self) -> str:
        return f"<ElementNode {self.name} {self.attrs!r}>"


class TextNode:
    __slots__ = ("data", "name", "parent")

    data: str
    name: str
    parent: Node | ElementNode | None

    def __init__(self, data: str | None) -> None:
        self.data = data or ""
        self.parent = None
        self.name = "#text"

    @property
    def is_element(self) -> bool:
        return False

    @property
    def is_text(self) -> bool:
        return True

    @property
    def children(self) -> list[Any]:
        """Return empty list for TextNode (leaf node)."""
        return []

    def has_child_nodes(self) -> bool:
        """Return False for TextNode."""
        return False

    def to_text(self, separator: str = " ", strip: bool = True) -> str:  # noqa: ARG002
        # Parameters are accepted for API consistency; they don't affect leaf nodes.
        if strip:
            return self.data.strip()
        return self.data

    def __repr__(self) -> str:
        return f"<TextNode {self.data!r}>"


class CommentNode(TextNode):
    __slots__ = ()

    def __init__(self, data: str | None) -> None:
        super().__init__(data)
        self.name = "#comment"

    @property
    def is_text(self) -> bool:
        return False

    def to_text(self, separator: str = " ", strip: bool = True) -> str:  # noqa: ARG002
        return ""

    def __repr__(self) -> str:
        return f"<CommentNode {self.data!r}>"

"""Matchers drive `traverse()`.

A matcher tests a node, runs a handler when the test passes and tells the
traversal which matchers to apply to that node's children. Two kinds are
provided:

- `NodeMatcher` has a fixed selector and a fixed list of child matchers. It
  holds no state and can be shared between trees and traversals.
- `SequenceMatcher` walks a chain of steps such as ``"ul > li > ol > li"``.
  Every advance or restart returns a new instance. The same chain is
  usually live at several places in the tree at once.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from .selector import Selector, compile_selector

Handler = Callable[[Any], None]


@runtime_checkable
class Matcher(Protocol):
    def match(self, node: Any) -> bool: ...

    def handler(self, node: Any) -> None: ...

    def next_matchers(self) -> list[Matcher]: ...


def _as_selector(selector: str | Selector) -> Selector:
    if isinstance(selector, str):
        return compile_selector(selector)
    return selector


class NodeMatcher:
    """Fixed selector, optional handler and fixed child matchers."""

    __slots__ = ("_handler", "children", "selector")

    selector: Selector
    children: tuple[Matcher, ...]
    _handler: Handler | None

    def __init__(self, selector: str | Selector, handler: Handler | None = None, *children: Matcher) -> None:
        self.selector = _as_selector(selector)
        self._handler = handler
        self.children = children

    def match(self, node: Any) -> bool:
        return self.selector(node)

    def handler(self, node: Any) -> None:
        if self._handler is not None:
            self._handler(node)

    def next_matchers(self) -> list[Matcher]:
        return list(self.children)

    def __repr__(self) -> str:
        return f"NodeMatcher({self.selector!r}, children={len(self.children)})"


def split_sequence(pattern: str) -> list[str]:
    """Split ``"ul > li"`` or ``"ul li"`` into ``["ul", "li"]``.

    Whitespace and ``>`` inside ``[...]`` (including quoted values) stay in
    the step, and whitespace around a comma joins alternatives, so
    ``"div > h2, h3"`` gives ``["div", "h2,h3"]``.
    """
    steps: list[str] = []
    buf: list[str] = []
    quote = ""
    depth = 0
    pending = False

    for ch in pattern.strip():
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = ""
            continue

        if depth and ch in "\"'":
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]" and depth:
            depth -= 1
        elif not depth and (ch == ">" or ch.isspace()):
            pending = True
            continue

        if pending:
            if buf and buf[-1] != "," and ch != ",":
                steps.append("".join(buf))
                buf = []
            pending = False
        buf.append(ch)

    if buf:
        steps.append("".join(buf))
    return steps


class SequenceMatcher:
    """
    Matches a chain of selector steps down the tree.

    The handler runs only when the last step matches. After completion the
    extra `children` matchers apply to the matched node's subtree, and a
    `recursive` matcher starts the chain again inside it (for nested lists).
    A root matcher also restarts itself so sibling subtrees can match the
    chain independently.

    A recursive root matcher reaches a nested chain both through its
    recursive restart and through the root restart emitted at earlier
    steps, so the handler fires twice for nested items. Pass
    ``is_root=False`` to see each nested item once.

    Instances are never modified; `advance()` and `restart()` return new
    ones.
    """

    __slots__ = ("_handler", "children", "is_root", "patterns", "recursive", "selectors", "step")

    patterns: tuple[str, ...]
    selectors: tuple[Selector, ...]
    step: int
    recursive: bool
    is_root: bool
    children: tuple[Matcher, ...]
    _handler: Handler | None

    def __init__(
        self,
        pattern: str | Iterable[str],
        handler: Handler | None = None,
        *children: Matcher,
        recursive: bool = False,
        is_root: bool = True,
    ) -> None:
        if isinstance(pattern, str):
            patterns = split_sequence(pattern)
        else:
            patterns = [p.strip() for p in pattern if p.strip()]
        self.patterns = tuple(patterns)
        self.selectors = tuple(compile_selector(p) for p in self.patterns)
        self.step = 0
        self.recursive = recursive
        self.is_root = is_root
        self.children = children
        self._handler = handler

    def _copy(self, step: int, is_root: bool) -> SequenceMatcher:
        clone = SequenceMatcher.__new__(SequenceMatcher)
        clone.patterns = self.patterns
        clone.selectors = self.selectors
        clone.step = step
        clone.recursive = self.recursive
        clone.is_root = is_root
        clone.children = self.children
        clone._handler = self._handler
        return clone

    def advance(self) -> SequenceMatcher:
        """Return a copy waiting for the next step."""
        return self._copy(self.step + 1, False)

    def restart(self, is_root: bool) -> SequenceMatcher:
        """Return a copy waiting for the first step again."""
        return self._copy(0, is_root)

    @property
    def is_last_step(self) -> bool:
        return self.step + 1 == len(self.patterns)

    def match(self, node: Any) -> bool:
        if self.step >= len(self.selectors):
            return False
        return self.selectors[self.step](node)

    def handler(self, node: Any) -> None:
        if self.is_last_step and self._handler is not None:
            self._handler(node)

    def next_matchers(self) -> list[Matcher]:
        if self.step >= len(self.patterns):
            return []

        if not self.is_last_step:
            nexts: list[Matcher] = [self.advance()]
            if self.is_root:
                nexts.append(self.restart(True))
            return nexts

        nexts = list(self.children)
        if self.recursive:
            nexts.append(self.restart(False))
        elif self.is_root:
            nexts.append(self.restart(True))
        return nexts

    def __repr__(self) -> str:
        return (
            f"SequenceMatcher({' > '.join(self.patterns)!r}, step={self.step}, "
            f"recursive={self.recursive}, is_root={self.is_root})"
        )

# Selector compiler for docquery
# Supports single-step CSS-like patterns, comma separated:
#   tag, .class, tag.class, #id, tag#id, [attr], tag[attr=val],
#   [attr*=val], [attr^=val], [attr$=val]
# Class, id and attribute names are shell globs; attribute values are literal.

from __future__ import annotations

import logging
from collections.abc import Callable
from fnmatch import fnmatchcase
from functools import lru_cache
from typing import Any

logger = logging.getLogger(__name__)

Selector = Callable[[Any], bool]


class SelectorError(ValueError):
    """Raised when a selector is invalid and strict compilation was requested."""


# Checked in this order, so "*=" wins over "=" in "[href*=x]".
_VALUE_OPERATORS: tuple[str, ...] = ("*=", "^=", "$=", "=")

_GLOB_CHARS: frozenset[str] = frozenset("*?[")


class SimpleSelector:
    """A single compiled step: an optional tag plus one id/class/attribute test."""

    __slots__ = ("name", "operator", "tag", "type", "value")

    TYPE_TAG: str = "tag"
    TYPE_ID: str = "id"
    TYPE_CLASS: str = "class"
    TYPE_ATTR: str = "attr"

    type: str
    tag: str
    name: str | None
    operator: str | None
    value: str | None

    def __init__(
        self,
        selector_type: str,
        tag: str = "",
        name: str | None = None,
        operator: str | None = None,
        value: str | None = None,
    ) -> None:
        self.type = selector_type
        self.tag = "" if tag == "*" else tag
        self.name = name
        self.operator = operator
        self.value = value

    def __repr__(self) -> str:
        parts = [f"SimpleSelector({self.type!r}"]
        if self.tag:
            parts.append(f", tag={self.tag!r}")
        if self.name:
            parts.append(f", name={self.name!r}")
        if self.operator:
            parts.append(f", op={self.operator!r}")
        if self.value is not None:
            parts.append(f", value={self.value!r}")
        parts.append(")")
        return "".join(parts)

    def matches(self, node: Any) -> bool:
        # Only elements participate; text, comments and containers never match.
        if not getattr(node, "is_element", False):
            return False

        if self.tag and node.name != self.tag:
            return False

        sel_type = self.type
        if sel_type == SimpleSelector.TYPE_TAG:
            return True

        pattern = self.name or ""

        if sel_type == SimpleSelector.TYPE_ID:
            return any(key == "id" and _glob(value, pattern) for key, value in node.attrs)

        if sel_type == SimpleSelector.TYPE_CLASS:
            for key, value in node.attrs:
                if key != "class":
                    continue
                if any(_glob(cls, pattern) for cls in value.split()):
                    return True
            return False

        return any(_glob(key, pattern) and self._matches_value(value) for key, value in node.attrs)

    def _matches_value(self, attr_value: str) -> bool:
        op = self.operator
        if op is None:
            return True

        value = self.value or ""

        if op == "=":
            return attr_value == value

        if not value:
            return False

        if op == "*=":
            return value in attr_value

        if op == "^=":
            return attr_value.startswith(value)

        if op == "$=":
            return attr_value.endswith(value)

        return False


def _has_unclosed_range(pattern: str) -> bool:
    i = 0
    length = len(pattern)
    while i < length:
        if pattern[i] == "[":
            j = i + 1
            if j < length and pattern[j] in "!^":
                j += 1
            # A "]" right after the opening bracket is part of the set.
            if j < length and pattern[j] == "]":
                j += 1
            end = pattern.find("]", j)
            if end < 0:
                return True
            i = end
        i += 1
    return False


def _glob(text: str, pattern: str) -> bool:
    if _GLOB_CHARS.isdisjoint(pattern):
        return text == pattern
    # fnmatch reads an unclosed "[" literally; treat it as a bad glob instead.
    if _has_unclosed_range(pattern):
        return False
    return fnmatchcase(text, pattern)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_attribute(tag: str, body: str, pattern: str) -> SimpleSelector:
    for op in _VALUE_OPERATORS:
        if op in body:
            key, _, value = body.partition(op)
            key = key.strip()
            if not key:
                raise SelectorError(f"Expected attribute name in {pattern!r}")
            return SimpleSelector(
                SimpleSelector.TYPE_ATTR, tag=tag, name=key, operator=op, value=_unquote(value.strip())
            )

    key = body.strip()
    if not key:
        raise SelectorError(f"Expected attribute name in {pattern!r}")
    return SimpleSelector(SimpleSelector.TYPE_ATTR, tag=tag, name=key)


def parse_step(pattern: str) -> SimpleSelector:
    """Parse one comma-free selector step.

    Raises:
        SelectorError: If the step is empty or malformed
    """
    pattern = pattern.strip()
    if not pattern:
        raise SelectorError("Empty selector")

    if "[" in pattern:
        tag, _, rest = pattern.partition("[")
        if not rest.endswith("]"):
            raise SelectorError(f"Unterminated attribute selector: {pattern!r}")
        return _parse_attribute(tag.strip(), rest[:-1], pattern)

    if "#" in pattern:
        tag, _, ident = pattern.partition("#")
        if not ident:
            raise SelectorError(f"Expected identifier after # in {pattern!r}")
        return SimpleSelector(SimpleSelector.TYPE_ID, tag=tag, name=ident)

    if "." in pattern:
        tag, _, cls = pattern.partition(".")
        if not cls:
            raise SelectorError(f"Expected class name after . in {pattern!r}")
        return SimpleSelector(SimpleSelector.TYPE_CLASS, tag=tag, name=cls)

    if any(ch.isspace() or ch == ">" for ch in pattern):
        raise SelectorError(f"Combinators are not supported in a single step: {pattern!r}")

    return SimpleSelector(SimpleSelector.TYPE_TAG, tag=pattern)


def parse_selector(pattern: str) -> list[SimpleSelector]:
    """Parse a comma-separated selector into its alternatives.

    Raises:
        SelectorError: If any alternative is invalid
    """
    if not pattern or not pattern.strip():
        raise SelectorError("Empty selector")
    return [parse_step(alt) for alt in pattern.split(",")]


def _never(node: Any) -> bool:  # noqa: ARG001
    return False


@lru_cache(maxsize=512)
def _compile(pattern: str, strict: bool) -> Selector:
    if strict:
        steps = parse_selector(pattern)
    else:
        steps = []
        for alt in (pattern or "").split(","):
            try:
                steps.append(parse_step(alt))
            except SelectorError as e:
                logger.debug("ignoring selector alternative %r: %s", alt, e)

    if not steps:
        return _never

    if len(steps) == 1:
        return steps[0].matches

    def match_any(node: Any) -> bool:
        return any(step.matches(node) for step in steps)

    return match_any


def compile_selector(pattern: str, *, strict: bool = False) -> Selector:
    """
    Compile a selector pattern into a predicate over nodes.

    Malformed alternatives never match. With `strict=True` they raise
    instead.

    Args:
        pattern: A comma-separated list of single-step selectors
        strict: Raise SelectorError on malformed input

    Returns:
        A function taking a node and returning True if it matches

    Raises:
        SelectorError: If strict is set and the pattern is invalid
    """
    return _compile(pattern, strict)


def matches(node: Any, pattern: str) -> bool:
    """
    Check if a node matches a selector pattern.

    Args:
        node: The node to check
        pattern: A selector pattern

    Returns:
        True if the node matches, False otherwise
    """
    return _compile(pattern, False)(node)

"""Path segments: the building blocks of topic paths."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

SINGLE_WILDCARD_TEXT = "*"
MULTI_WILDCARD_TEXT = ">"


class PathType(Enum):
    """What kind of resource a path addresses."""

    SERVICE = "service"
    ACTION = "action"
    EVENT = "event"


class SegmentKind(IntEnum):
    """Kind of a path segment; the values are the two-bit type codes."""

    LITERAL = 0b00
    TEMPLATE = 0b01
    SINGLE_WILDCARD = 0b10
    MULTI_WILDCARD = 0b11


def is_template_text(text: str) -> bool:
    """Return True if ``text`` is a template parameter such as ``{user_id}``."""
    return text.startswith("{") and text.endswith("}")


@dataclass(frozen=True)
class PathSegment:
    """A single segment of a path.

    ``value`` holds the literal text for literal segments and the parameter
    name (without braces) for template segments; wildcards carry no value.
    """

    kind: SegmentKind
    value: str = ""

    def is_wildcard(self) -> bool:
        """True for both single (``*``) and multi (``>``) wildcards."""
        return self.kind in (SegmentKind.SINGLE_WILDCARD, SegmentKind.MULTI_WILDCARD)

    def is_multi_wildcard(self) -> bool:
        """True for the multi-segment wildcard ``>``."""
        return self.kind is SegmentKind.MULTI_WILDCARD

    def is_template(self) -> bool:
        """True for template parameter segments."""
        return self.kind is SegmentKind.TEMPLATE

    def __str__(self) -> str:
        if self.kind is SegmentKind.LITERAL:
            return self.value
        if self.kind is SegmentKind.TEMPLATE:
            return "{" + self.value + "}"
        if self.kind is SegmentKind.SINGLE_WILDCARD:
            return SINGLE_WILDCARD_TEXT
        return MULTI_WILDCARD_TEXT


def parse_segment(text: str) -> PathSegment:
    """Parse one raw segment string into a :class:`PathSegment`."""
    if text == SINGLE_WILDCARD_TEXT:
        return PathSegment(SegmentKind.SINGLE_WILDCARD)
    if text == MULTI_WILDCARD_TEXT:
        return PathSegment(SegmentKind.MULTI_WILDCARD)
    if is_template_text(text):
        return PathSegment(SegmentKind.TEMPLATE, text[1:-1])
    return PathSegment(SegmentKind.LITERAL, text)
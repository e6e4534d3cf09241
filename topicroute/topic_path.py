"""Topic paths: network-qualified, segment-based addresses with wildcards and templates."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from topicroute.segment import PathSegment, SegmentKind, is_template_text, parse_segment


class TopicPathError(ValueError):
    """Raised when a topic path or template cannot be built."""


def _split(text: str) -> list[str]:
    return [part for part in text.split("/") if part]


def _join(segments: Iterable[PathSegment]) -> str:
    return "/".join(str(segment) for segment in segments)


class TopicPath:
    """A path such as ``main:auth/login`` made of a network ID and segments.

    Segments may be literals, template parameters (``{name}``), single
    wildcards (``*``) or a trailing multi-segment wildcard (``>``).
    """

    __slots__ = ("_path", "_network_id", "_segments", "_action_path")

    _path: str
    _network_id: str
    _segments: tuple[PathSegment, ...]
    _action_path: str

    def __init__(self, path: str, default_network: str) -> None:
        if ":" in path:
            parts = path.split(":")
            if len(parts) != 2:
                raise TopicPathError(
                    "Invalid path format - should be 'network_id:service_path' "
                    f"or 'service_path': {path}"
                )
            network_id, rest = parts
            if not network_id:
                raise TopicPathError(f"Network ID cannot be empty: {path}")
        else:
            network_id, rest = default_network, path

        raw_segments = _split(rest)
        if not raw_segments:
            raise TopicPathError(f"Invalid path - must have at least one segment: {path}")

        segments = tuple(parse_segment(text) for text in raw_segments)
        if any(segment.is_multi_wildcard() for segment in segments[:-1]):
            raise TopicPathError(
                "Multi-segment wildcard (>) must be the last segment in a path"
            )

        action_path = "" if len(segments) <= 1 else _join(segments)
        self._assign(f"{network_id}:{rest}", network_id, segments, action_path)

    def _assign(
        self,
        path: str,
        network_id: str,
        segments: tuple[PathSegment, ...],
        action_path: str,
    ) -> None:
        self._path = path
        self._network_id = network_id
        self._segments = segments
        self._action_path = action_path

    @classmethod
    def _build(
        cls,
        path: str,
        network_id: str,
        segments: tuple[PathSegment, ...],
        action_path: str,
    ) -> TopicPath:
        obj = cls.__new__(cls)
        obj._assign(path, network_id, segments, action_path)
        return obj

    # -- alternative constructors -------------------------------------------

    @classmethod
    def new_service(cls, network_id: str, service_name: str) -> TopicPath:
        """Build a service-only path without parsing ``service_name``."""
        return cls._build(
            f"{network_id}:{service_name}",
            network_id,
            (PathSegment(SegmentKind.LITERAL, service_name),),
            "",
        )

    @classmethod
    def from_template(
        cls, template: str, params: Mapping[str, str], network_id: str
    ) -> TopicPath:
        """Fill the ``{name}`` placeholders of ``template`` from ``params``."""
        values: list[str] = []
        for part in _split(template):
            if is_template_text(part):
                name = part[1:-1]
                if name not in params:
                    raise TopicPathError(f"Missing parameter value for '{name}'")
                values.append(params[name])
            else:
                values.append(part)
        return cls("/".join(values), network_id)

    def new_action_topic(self, action_name: str) -> TopicPath:
        """Return the path of action ``action_name`` on this service path."""
        if len(self._segments) > 1:
            raise TopicPathError(
                "Invalid action path - cannot create an action path on top of "
                "another action path"
            )
        return TopicPath(
            f"{self._network_id}:{self.service_path}/{action_name}", self._network_id
        )

    def new_event_topic(self, event_name: str) -> TopicPath:
        """Return the path of event ``event_name`` on this service path."""
        return self.new_action_topic(event_name)

    # -- properties ---------------------------------------------------------

    @property
    def is_pattern(self) -> bool:
        """True if any segment is a wildcard."""
        return any(segment.is_wildcard() for segment in self._segments)

    @property
    def has_multi_wildcard(self) -> bool:
        """True if the path contains a ``>`` segment."""
        return any(segment.is_multi_wildcard() for segment in self._segments)

    @property
    def has_templates(self) -> bool:
        """True if any segment is a template parameter."""
        return any(segment.is_template() for segment in self._segments)

    @property
    def action_path(self) -> str:
        """Segments joined by ``/``; empty for a service-only path."""
        return self._action_path

    @property
    def network_id(self) -> str:
        return self._network_id

    @property
    def service_path(self) -> str:
        """The first segment of the path."""
        return str(self._segments[0])

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> tuple[str, ...]:
        """The segments after the network ID, as strings."""
        return tuple(str(segment) for segment in self._segments)

    # -- navigation ---------------------------------------------------------

    def starts_with(self, other: TopicPath) -> bool:
        """True if both share a network and this service path starts with the other's."""
        return (
            self._network_id == other._network_id
            and self.service_path.startswith(other.service_path)
        )

    def child(self, segment: str) -> TopicPath:
        """Return a new path with ``segment`` appended."""
        if "/" in segment:
            raise TopicPathError(f"Child segment cannot contain slashes: {segment}")
        base = self._action_path or self.service_path
        new_path = f"{base}/{segment}"
        return TopicPath._build(
            f"{self._network_id}:{new_path}",
            self._network_id,
            self._segments + (parse_segment(segment),),
            new_path,
        )

    def parent(self) -> TopicPath:
        """Return the path without its last segment."""
        if len(self._segments) <= 1:
            raise TopicPathError("Cannot get parent of root or service-only path")
        segments = self._segments[:-1]
        joined = _join(segments)
        return TopicPath._build(
            f"{self._network_id}:{joined}", self._network_id, segments, joined
        )

    # -- templates ----------------------------------------------------------

    def extract_params(self, template: str) -> dict[str, str]:
        """Match this path against ``template`` and return the captured parameters."""
        path_segments = self.segments
        template_segments = _split(template)
        if len(path_segments) != len(template_segments):
            raise TopicPathError(
                f"Path segment count ({len(path_segments)}) doesn't match "
                f"template segment count ({len(template_segments)})"
            )
        params: dict[str, str] = {}
        for actual, expected in zip(path_segments, template_segments):
            if is_template_text(expected):
                params[expected[1:-1]] = actual
            elif expected != actual:
                raise TopicPathError(
                    f"Path segment '{actual}' doesn't match template segment '{expected}'"
                )
        return params

    def matches_template(self, template: str) -> bool:
        """True if this path fits ``template``.

        When neither side holds template parameters this is a substring test
        on the full path.
        """
        if not self.has_templates and "{" not in template:
            return template in self._path
        template_segments = _split(template)
        if len(template_segments) != len(self._segments):
            return False
        return all(
            is_template_text(expected) or expected == actual
            for expected, actual in zip(template_segments, self.segments)
        )

    def has_segment_type(self, index: int, segment_type: SegmentKind | int) -> bool:
        """True if the segment at ``index`` exists and is of ``segment_type``."""
        if index < 0 or index >= len(self._segments):
            return False
        return self._segments[index].kind == segment_type

    # -- matching -----------------------------------------------------------

    def matches(self, topic: TopicPath) -> bool:
        """True if this path, taken as a pattern, matches ``topic``."""
        if self._network_id != topic._network_id:
            return False
        if self._path == topic._path:
            return True
        if len(self._segments) != len(topic._segments) and not self.has_multi_wildcard:
            return False
        self_templates = self.has_templates
        topic_templates = topic.has_templates
        if (
            not self.is_pattern
            and not topic.is_pattern
            and not self_templates
            and not topic_templates
        ):
            return False
        if self_templates and not topic_templates:
            return False
        if not self_templates and topic_templates:
            return topic.matches_template(self._action_path)
        return self._segments_match(topic._segments)

    def _segments_match(self, topic_segments: tuple[PathSegment, ...]) -> bool:
        pattern = self._segments
        if pattern[-1].is_multi_wildcard():
            if len(topic_segments) < len(pattern) - 1:
                return False
            return all(
                _segment_accepts(expected, actual)
                for expected, actual in zip(pattern[:-1], topic_segments)
            )
        if len(pattern) != len(topic_segments):
            return False
        return all(
            expected == actual or _segment_accepts(expected, actual)
            for expected, actual in zip(pattern, topic_segments)
        )

    # -- dunder -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TopicPath):
            return NotImplemented
        if self._path == other._path:
            return True
        return (
            self._network_id == other._network_id
            and self._segments == other._segments
        )

    def __hash__(self) -> int:
        return hash((self._network_id, self._segments))

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"TopicPath({self._path!r})"


def _segment_accepts(expected: PathSegment, actual: PathSegment) -> bool:
    """Whether a non-trailing pattern segment accepts a topic segment."""
    kind = expected.kind
    if kind is SegmentKind.LITERAL:
        return actual.kind is SegmentKind.LITERAL and actual.value == expected.value
    if kind is SegmentKind.TEMPLATE:
        return actual.kind is SegmentKind.LITERAL
    if kind is SegmentKind.SINGLE_WILDCARD:
        return True
    return False
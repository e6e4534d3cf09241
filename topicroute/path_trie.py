"""A trie of topic paths supporting literal, template and wildcard segments."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from topicroute.segment import MULTI_WILDCARD_TEXT, SINGLE_WILDCARD_TEXT, is_template_text
from topicroute.topic_path import TopicPath

T = TypeVar("T")


@dataclass
class PathTrieMatch(Generic[T]):
    """A value found in the trie together with the template parameters it captured."""

    content: T
    params: dict[str, str] = field(default_factory=dict)


class _Node(Generic[T]):
    """One level of a network-specific trie."""

    __slots__ = (
        "content",
        "children",
        "wildcard_child",
        "template_child",
        "template_param_name",
        "multi_wildcard",
    )

    def __init__(self) -> None:
        self.content: list[T] = []
        self.children: dict[str, _Node[T]] = {}
        self.wildcard_child: _Node[T] | None = None
        self.template_child: _Node[T] | None = None
        self.template_param_name: str | None = None
        self.multi_wildcard: list[T] = []

    def _child_nodes(self) -> Iterator[_Node[T]]:
        yield from self.children.values()
        if self.wildcard_child is not None:
            yield self.wildcard_child
        if self.template_child is not None:
            yield self.template_child

    def insert(self, segments: tuple[str, ...], index: int, values: list[T]) -> None:
        if index >= len(segments):
            self.content.extend(values)
            return
        segment = segments[index]
        if segment == MULTI_WILDCARD_TEXT:
            self.multi_wildcard.extend(values)
        elif segment == SINGLE_WILDCARD_TEXT:
            if self.wildcard_child is None:
                self.wildcard_child = _Node()
            self.wildcard_child.insert(segments, index + 1, values)
        elif is_template_text(segment):
            if self.template_child is None:
                self.template_child = _Node()
                self.template_param_name = segment[1:-1]
            self.template_child.insert(segments, index + 1, values)
        else:
            self.children.setdefault(segment, _Node()).insert(segments, index + 1, values)

    def clear_at(self, segments: tuple[str, ...], index: int) -> None:
        if index >= len(segments):
            self.content.clear()
            return
        segment = segments[index]
        if segment == SINGLE_WILDCARD_TEXT:
            child = self.wildcard_child
        elif is_template_text(segment):
            child = self.template_child
        else:
            child = self.children.get(segment)
        if child is not None:
            child.clear_at(segments, index + 1)

    def find(
        self,
        segments: tuple[str, ...],
        index: int,
        params: dict[str, str],
        results: list[PathTrieMatch[T]],
    ) -> None:
        if index >= len(segments):
            results.extend(PathTrieMatch(value, dict(params)) for value in self.content)
            return
        results.extend(PathTrieMatch(value, dict(params)) for value in self.multi_wildcard)

        segment = segments[index]
        literal_child = self.children.get(segment)
        if literal_child is not None:
            literal_child.find(segments, index + 1, params, results)
        if self.wildcard_child is not None:
            self.wildcard_child.find(segments, index + 1, params, results)
        if self.template_child is not None:
            name = self.template_param_name
            if name is None:
                self.template_child.find(segments, index + 1, params, results)
            else:
                had_value = name in params
                previous = params.get(name)
                params[name] = segment
                self.template_child.find(segments, index + 1, params, results)
                if had_value:
                    params[name] = previous  # type: ignore[assignment]
                else:
                    del params[name]

    def find_pattern(
        self, segments: tuple[str, ...], index: int, results: list[PathTrieMatch[T]]
    ) -> None:
        if index >= len(segments):
            results.extend(PathTrieMatch(value) for value in self.content)
            return
        segment = segments[index]
        if segment == SINGLE_WILDCARD_TEXT:
            for child in self._child_nodes():
                child.find_pattern(segments, index + 1, results)
        elif segment == MULTI_WILDCARD_TEXT:
            self.collect_all(results)
        else:
            child = self.children.get(segment)
            if child is not None:
                child.find_pattern(segments, index + 1, results)

    def collect_all(self, results: list[PathTrieMatch[T]]) -> None:
        results.extend(PathTrieMatch(value) for value in self.content)
        results.extend(PathTrieMatch(value) for value in self.multi_wildcard)
        for child in self._child_nodes():
            child.collect_all(results)

    def remove_where(
        self, segments: tuple[str, ...], index: int, predicate: Callable[[T], bool]
    ) -> bool:
        if index >= len(segments):
            before = len(self.content)
            self.content = [value for value in self.content if not predicate(value)]
            return len(self.content) < before
        segment = segments[index]
        if segment == MULTI_WILDCARD_TEXT:
            before = len(self.multi_wildcard)
            self.multi_wildcard = [v for v in self.multi_wildcard if not predicate(v)]
            return len(self.multi_wildcard) < before
        if segment == SINGLE_WILDCARD_TEXT:
            child = self.wildcard_child
        elif is_template_text(segment):
            child = self.template_child
        else:
            child = self.children.get(segment)
        return child is not None and child.remove_where(segments, index + 1, predicate)

    def count(self) -> int:
        return (
            len(self.content)
            + len(self.multi_wildcard)
            + sum(child.count() for child in self._child_nodes())
        )


class PathTrie(Generic[T]):
    """Stores values under topic paths, one sub-trie per network ID.

    Lookups by a concrete topic walk literal, ``*``, ``{param}`` and ``>``
    branches and report captured template parameters; lookups by a pattern
    topic collect everything the pattern covers.
    """

    def __init__(self) -> None:
        self._networks: dict[str, _Node[T]] = {}

    def _network(self, topic: TopicPath) -> _Node[T]:
        return self._networks.setdefault(topic.network_id, _Node())

    def set_values(self, topic: TopicPath, contents: Iterable[T]) -> None:
        """Add ``contents`` under ``topic``."""
        self._network(topic).insert(topic.segments, 0, list(contents))

    def set_value(self, topic: TopicPath, content: T) -> None:
        """Add a single value under ``topic``."""
        self.set_values(topic, [content])

    def add_batch_values(self, topics: Iterable[TopicPath], contents: Iterable[T]) -> None:
        """Add the same ``contents`` under every one of ``topics``."""
        values = list(contents)
        for topic in topics:
            self.set_values(topic, values)

    def remove_values(self, topic: TopicPath) -> None:
        """Drop every value stored exactly at ``topic``."""
        self._network(topic).clear_at(topic.segments, 0)

    def find_matches(self, topic: TopicPath) -> list[PathTrieMatch[T]]:
        """Return every value matching ``topic`` with its captured parameters."""
        if topic.is_pattern:
            return self.find_wildcard_matches(topic)
        results: list[PathTrieMatch[T]] = []
        network = self._networks.get(topic.network_id)
        if network is not None:
            network.find(topic.segments, 0, {}, results)
        return results

    def find_wildcard_matches(self, pattern: TopicPath) -> list[PathTrieMatch[T]]:
        """Return every value stored under a path that ``pattern`` covers."""
        results: list[PathTrieMatch[T]] = []
        network = self._networks.get(pattern.network_id)
        if network is not None:
            network.find_pattern(pattern.segments, 0, results)
        return results

    def find(self, topic: TopicPath) -> list[T]:
        """Return just the values matching ``topic``."""
        return [match.content for match in self.find_matches(topic)]

    def remove_handler(self, topic: TopicPath, predicate: Callable[[T], bool]) -> bool:
        """Remove values at ``topic`` for which ``predicate`` holds; True if any went."""
        network = self._networks.get(topic.network_id)
        if network is None:
            return False
        return network.remove_where(topic.segments, 0, predicate)

    def is_empty(self) -> bool:
        """True if no network sub-trie exists."""
        return not self._networks

    def handler_count(self) -> int:
        """Total number of stored values across all networks."""
        return sum(network.count() for network in self._networks.values())

    def __len__(self) -> int:
        return self.handler_count()
import pytest
from hypothesis import given
from hypothesis import strategies as st

from topicroute.path_trie import PathTrie, PathTrieMatch
from topicroute.topic_path import TopicPath


def tp(path: str) -> TopicPath:
    return TopicPath(path, "main")


@pytest.fixture
def trie() -> PathTrie[str]:
    return PathTrie()


def test_new_trie_is_empty(trie):
    assert trie.is_empty()
    assert trie.handler_count() == 0
    assert trie.find(tp("svc/a")) == []


def test_exact_match(trie):
    trie.set_value(tp("math/add"), "adder")
    assert trie.find(tp("math/add")) == ["adder"]
    assert trie.find(tp("math/sub")) == []
    assert not trie.is_empty()


def test_values_accumulate_at_same_path(trie):
    trie.set_value(tp("math/add"), "first")
    trie.set_values(tp("math/add"), ["second", "third"])
    assert trie.find(tp("math/add")) == ["first", "second", "third"]


def test_template_extracts_params(trie):
    trie.set_value(tp("services/{service_path}/state"), "state")
    matches = trie.find_matches(tp("services/math/state"))
    assert matches == [PathTrieMatch("state", {"service_path": "math"})]


def test_template_param_name_fixed_by_first_registration(trie):
    trie.set_value(tp("svc/{id}"), "by-id")
    trie.set_value(tp("svc/{name}/x"), "nested")
    matches = trie.find_matches(tp("svc/7/x"))
    assert [m.content for m in matches] == ["nested"]
    assert matches[0].params == {"id": "7"}


def test_single_wildcard_subscription(trie):
    trie.set_value(tp("services/*/state"), "sub")
    assert trie.find(tp("services/math/state")) == ["sub"]
    assert trie.find(tp("services/math/config")) == []
    assert trie.find(tp("services/a/b/state")) == []


def test_multi_wildcard_subscription(trie):
    trie.set_value(tp("events/>"), "all")
    assert trie.find(tp("events/a")) == ["all"]
    assert trie.find(tp("events/a/b/c")) == ["all"]
    assert trie.find(tp("events")) == []


def test_networks_are_isolated(trie):
    trie.set_value(TopicPath("net1:svc/act", "main"), "one")
    trie.set_value(TopicPath("net2:svc/act", "main"), "two")
    assert trie.find(TopicPath("net1:svc/act", "main")) == ["one"]
    assert trie.find(TopicPath("net2:svc/act", "main")) == ["two"]
    assert trie.find(TopicPath("net3:svc/act", "main")) == []


def test_wildcard_search_lists_actions(trie):
    trie.set_value(tp("serviceA/one"), "one")
    trie.set_value(tp("serviceA/two"), "two")
    trie.set_value(tp("serviceB/three"), "three")
    found = trie.find(tp("serviceA/*"))
    assert sorted(found) == ["one", "two"]
    assert all(m.params == {} for m in trie.find_wildcard_matches(tp("serviceA/*")))


def test_multi_wildcard_search_collects_everything_below(trie):
    trie.set_value(tp("svc/a"), "a")
    trie.set_value(tp("svc/a/b"), "ab")
    trie.set_value(tp("svc/>"), "multi")
    trie.set_value(tp("other/x"), "x")
    assert sorted(trie.find(tp("svc/>"))) == ["a", "ab", "multi"]


def test_add_batch_values(trie):
    topics = [tp("a/x"), tp("b/y")]
    trie.add_batch_values(topics, ["h1", "h2"])
    for topic in topics:
        assert trie.find(topic) == ["h1", "h2"]
    assert trie.handler_count() == 4


def test_remove_values(trie):
    trie.set_values(tp("svc/act"), ["h1", "h2"])
    trie.set_value(tp("svc/other"), "keep")
    trie.remove_values(tp("svc/act"))
    assert trie.find(tp("svc/act")) == []
    assert trie.find(tp("svc/other")) == ["keep"]
    assert trie.handler_count() == 1


def test_remove_values_template(trie):
    trie.set_value(tp("svc/{id}"), "templ")
    trie.remove_values(tp("svc/{id}"))
    assert trie.find(tp("svc/5")) == []


def test_remove_handler_with_predicate(trie):
    trie.set_values(tp("svc/act"), ["keep", "drop"])
    assert trie.remove_handler(tp("svc/act"), lambda v: v == "drop") is True
    assert trie.find(tp("svc/act")) == ["keep"]
    assert trie.remove_handler(tp("svc/act"), lambda v: v == "drop") is False


def test_remove_handler_multi_wildcard(trie):
    trie.set_value(tp("events/>"), "all")
    assert trie.remove_handler(tp("events/>"), lambda v: True) is True
    assert trie.find(tp("events/a")) == []


def test_remove_handler_unknown_network(trie):
    trie.set_value(tp("svc/act"), "h")
    assert trie.remove_handler(TopicPath("elsewhere:svc/act", "main"), lambda v: True) is False
    assert trie.find(tp("svc/act")) == ["h"]


_segment = st.text(alphabet="abcdefgh", min_size=1, max_size=5)


@given(st.lists(st.lists(_segment, min_size=1, max_size=4), min_size=1, max_size=10, unique_by=tuple))
def test_literal_paths_round_trip(paths):
    trie: PathTrie[str] = PathTrie()
    for parts in paths:
        trie.set_value(tp("/".join(parts)), "/".join(parts))
    assert trie.handler_count() == len(paths)
    for parts in paths:
        assert trie.find(tp("/".join(parts))) == ["/".join(parts)]
# topicroute

This package handles addressing and lookup for topic-based messaging. A topic
path names a network and a list of segments, as in `main:auth/login`. A
segment is one of four kinds:

- a literal
- a template parameter, such as `{user_id}`
- a single-segment wildcard, `*`
- a multi-segment wildcard, `>`, which may only be the last segment

The package has three modules:

- `topicroute.segment` holds `PathSegment`, `SegmentKind`, `PathType`, `parse_segment` and `is_template_text`.
- `topicroute.topic_path` holds `TopicPath` and `TopicPathError`.
- `topicroute.path_trie` holds `PathTrie` and `PathTrieMatch`.

## Installation

```
pip install topicroute
```

## Topic paths

```python
from topicroute.topic_path import TopicPath

path = TopicPath("main:auth/login", "default")
path.network_id        # "main"
path.service_path      # "auth"
path.action_path       # "auth/login"
path.segments          # ("auth", "login")
path.segment_count     # 2

short = TopicPath("auth/login", "default")
str(short)             # "default:auth/login"

TopicPath("main:auth", "default").action_path   # "" for a service-only path

service = TopicPath.new_service("main", "auth")
service.new_action_topic("login")   # main:auth/login
service.new_event_topic("logged_in")  # main:auth/logged_in
TopicPath("main:auth", "default").child("users")    # main:auth/users
TopicPath("main:auth/users", "default").parent()    # main:auth
```

`TopicPathError` is a subclass of `ValueError`. The package raises it in these cases:

- the network ID is empty
- the path contains more than one `:`
- the path has no segments
- a `>` is not the last segment
- `child()` gets a segment that contains `/`
- `parent()` is called on a service-only path
- `new_action_topic()` is called on a path that already has more than one segment

`TopicPath` objects can be compared with `==` and used as dictionary keys.
Two paths are equal when their network and segments are the same.

### Patterns and templates

```python
from topicroute.segment import SegmentKind

pattern = TopicPath("main:services/*/state", "default")
pattern.is_pattern                                                   # True
pattern.has_segment_type(1, SegmentKind.SINGLE_WILDCARD)             # True
pattern.matches(TopicPath("main:services/math/state", "default"))    # True
pattern.matches(TopicPath("main:services/math/config", "default"))   # False

path = TopicPath("main:services/math/state", "main")
path.extract_params("services/{service_path}/state")    # {"service_path": "math"}
path.matches_template("services/{service_path}/state")  # True

TopicPath.from_template(
    "services/{service_path}/{action}",
    {"service_path": "math", "action": "add"},
    "main",
)   # main:services/math/add
```

`extract_params` raises `TopicPathError` in two cases: the number of segments differs, or a literal segment does not match.
`from_template` raises it when a parameter value is missing.

In `matches_template`, if neither the path nor the template contains
template parameters, the result is a plain substring test against the full
path string.

## Path trie

`PathTrie` stores values by topic. It keeps a separate sub-trie for each
network ID.

```python
from topicroute.path_trie import PathTrie
from topicroute.topic_path import TopicPath

trie = PathTrie()
trie.set_value(TopicPath("main:users/{id}/profile", "main"), "profile-handler")
trie.set_value(TopicPath("main:events/>", "main"), "event-sink")

matches = trie.find_matches(TopicPath("main:users/42/profile", "main"))
matches[0].content   # "profile-handler"
matches[0].params    # {"id": "42"}

trie.find(TopicPath("main:events/a/b", "main"))   # ["event-sink"]
trie.handler_count()                              # 2
len(trie)                                         # 2

trie.remove_handler(TopicPath("main:events/>", "main"), lambda v: v == "event-sink")  # True
```

- **Concrete topic.** `find_matches` returns every stored value whose registered path matches the topic. Each result comes with the template parameters captured along the way.
- **Wildcard topic.** When the topic passed to `find_matches` contains a wildcard, it is used as a search pattern over the registered paths. In that case no parameters are captured. `find_wildcard_matches` performs this search directly.

Other methods:

- `set_values` and `add_batch_values` add several values at once.
- `remove_values` clears every value stored exactly at a topic.
- `is_empty` reports whether any network sub-trie exists yet.

## What this package does not do

This package only builds, compares and looks up topic paths. It does not do any of the following:

- deliver messages or events
- run services
- open network connections
- discover peers

Dispatch to the values stored in a `PathTrie` is left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```
"""Topic paths with wildcards and templates, and a trie for looking values up by topic."""

__version__ = "0.1.0"
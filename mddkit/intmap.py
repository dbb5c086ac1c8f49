"""Map from integer keys to arbitrary values, kept in insertion order."""

import operator

from mddkit.errors import ModelicaError


class IntKeyMap:
    """Dictionary keyed by integers; looking up a missing key is an error."""

    __slots__ = ("_items",)

    def __init__(self):
        self._items = {}

    def insert(self, key, value):
        """Store ``value`` under ``key``, replacing any earlier value."""
        self._items[operator.index(key)] = value

    def count(self, key):
        """Return 1 if ``key`` is present, otherwise 0."""
        return 1 if operator.index(key) in self._items else 0

    def lookup(self, key):
        """Return the value stored under ``key``."""
        key = operator.index(key)
        try:
            return self._items[key]
        except KeyError:
            raise ModelicaError(f"IntKeyMap lookup: Key '{key}' not found") from None

    def keys(self):
        """Return the keys in insertion order."""
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __contains__(self, key):
        return self.count(key) == 1

    def __repr__(self):
        return f"IntKeyMap({self._items!r})"
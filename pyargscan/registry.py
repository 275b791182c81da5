#!/usr/bin/env python
"""Sorted mapping of option spellings to integer keys."""

import bisect
import sys
from typing import Dict, Iterator, List, Optional, Tuple


def successor(text: str) -> str:
    """Return the lexicographic successor of `text` used as an exclusive upper bound.

    The last character below `sys.maxunicode` is incremented by one; characters
    already at the maximum are left as they are.
    """
    chars = list(text)
    for idx in range(len(chars) - 1, -1, -1):
        code = ord(chars[idx])
        if code < sys.maxunicode:
            chars[idx] = chr(code + 1)
            break
    return "".join(chars)


class OptionRegistry:
    """Maps option spellings (``-x``, ``--debug``, ``--mode=``) to positive keys.

    Spellings are additionally kept in sorted order, so all spellings starting
    with a given prefix can be found by two binary searches.
    """

    def __init__(self, options: Optional[Dict[str, int]] = None) -> None:
        self._keys: Dict[str, int] = {}
        self._names: List[str] = []
        if options:
            for spelling, key in options.items():
                self.register(spelling, key)

    def register(self, spelling: str, key: int) -> None:
        if not isinstance(spelling, str) or len(spelling) < 2 or not spelling.startswith("-"):
            raise ValueError(f"Invalid option spelling {spelling!r}.")
        if isinstance(key, bool) or not isinstance(key, int) or key <= 0:
            raise ValueError(f"Key for option {spelling!r} must be a positive integer, got {key!r}.")
        if spelling not in self._keys:
            bisect.insort(self._names, spelling)
        self._keys[spelling] = key

    def prefixed(self, prefix: str) -> Iterator[Tuple[str, int]]:
        """Yield ``(spelling, key)`` for every spelling starting with `prefix`, sorted."""
        lo = bisect.bisect_left(self._names, prefix)
        hi = bisect.bisect_left(self._names, successor(prefix))
        for name in self._names[lo:hi]:
            yield name, self._keys[name]

    def get(self, spelling: str, default: Optional[int] = None) -> Optional[int]:
        return self._keys.get(spelling, default)

    def items(self) -> Iterator[Tuple[str, int]]:
        for name in self._names:
            yield name, self._keys[name]

    def __getitem__(self, spelling: str) -> int:
        return self._keys[spelling]

    def __contains__(self, spelling) -> bool:
        return spelling in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self):
        return f"OptionRegistry({dict(self.items())!r})"

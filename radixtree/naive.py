from bisect import bisect_left, bisect_right, insort
from typing import Any, Callable, Dict, List, Tuple
from radixtree.utils import check_key


class NaiveIndex:
    """
    Ordered byte-string index backed by a dict and a sorted key list.

    Exposes the same API as RadixTree. Inserts and removes cost O(n) because of
    the sorted list, which makes it a simple baseline for benchmarking and a
    reference to check RadixTree results against.
    """

    def __init__(self) -> None:
        self.table: Dict[bytes, Any] = {}
        self.sorted_keys: List[bytes] = []

    def insert(self, key: bytes, value: Any) -> Tuple[Any, bool]:
        key = check_key(key)
        if key in self.table:
            old = self.table[key]
            self.table[key] = value
            return old, True
        self.table[key] = value
        insort(self.sorted_keys, key)
        return None, False

    def get(self, key: bytes) -> Tuple[Any, bool]:
        key = check_key(key)
        if key in self.table:
            return self.table[key], True
        return None, False

    def contains(self, key: bytes) -> bool:
        return check_key(key) in self.table

    def remove(self, key: bytes) -> Tuple[Any, bool]:
        key = check_key(key)
        if key not in self.table:
            return None, False
        del self.sorted_keys[bisect_left(self.sorted_keys, key)]
        return self.table.pop(key), True

    def keys(self, prefix: bytes = b"") -> List[bytes]:
        prefix = check_key(prefix)
        start = bisect_left(self.sorted_keys, prefix)
        matches = []
        # Keys sharing a prefix are contiguous in sorted order
        for key in self.sorted_keys[start:]:
            if not key.startswith(prefix):
                break
            matches.append(key)
        return matches

    def items(self, prefix: bytes = b"") -> List[Tuple[bytes, Any]]:
        return [(key, self.table[key]) for key in self.keys(prefix)]

    def find(self, prefix: bytes) -> List[Any]:
        return [self.table[key] for key in self.keys(prefix)]

    def longest_prefix(self, key: bytes) -> Tuple[Any, bool]:
        key = check_key(key)
        for end in range(len(key), -1, -1):
            if key[:end] in self.table:
                return self.table[key[:end]], True
        return None, False

    def min(self) -> Tuple[Any, bool]:
        if not self.sorted_keys:
            return None, False
        return self.table[self.sorted_keys[0]], True

    def max(self) -> Tuple[Any, bool]:
        if not self.sorted_keys:
            return None, False
        return self.table[self.sorted_keys[-1]], True

    def predecessor(self, key: bytes) -> Tuple[Any, bool]:
        key = check_key(key)
        if not self._is_node(key):
            return None, False
        i = bisect_left(self.sorted_keys, key)
        if i == 0:
            return None, False
        return self.table[self.sorted_keys[i - 1]], True

    def successor(self, key: bytes) -> Tuple[Any, bool]:
        key = check_key(key)
        if not self._is_node(key):
            return None, False
        i = bisect_right(self.sorted_keys, key)
        if i == len(self.sorted_keys):
            return None, False
        return self.table[self.sorted_keys[i]], True

    def _is_node(self, key: bytes) -> bool:
        # Keys a radix tree holds a node for: stored keys, the empty key and
        # branch points where stored keys diverge on the next byte
        if not key or key in self.table:
            return True
        return len({extension[len(key)] for extension in self.keys(key)}) > 1

    def values(self) -> List[Any]:
        return [self.table[key] for key in self.sorted_keys]

    def walk(self, prefix: bytes, visitor: Callable[[Any], bool]) -> None:
        if not callable(visitor):
            raise TypeError("Visitor must be callable.")
        for value in self.find(prefix):
            if not visitor(value):
                return

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, key: bytes) -> bool:
        return self.contains(key)

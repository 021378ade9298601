from bisect import bisect_left
from typing import Any, List, Optional, Tuple


# Marks a node that does not hold a value (None is a legal payload)
_EMPTY = object()


def check_key(key: Any) -> bytes:
    """
    Validate a key and return it as an immutable byte string.

    Args:
        key (bytes | bytearray | memoryview): The key to validate.

    Returns:
        bytes: The key as `bytes`.
    """
    if isinstance(key, bytes):
        return key
    if isinstance(key, (bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"Key must be a bytes-like object, not {type(key).__name__}.")


def longest_common_prefix(a: bytes, b: bytes) -> int:
    """
    Compute the length of the longest shared leading byte run of two byte strings.

    Args:
        a (bytes): First byte string.
        b (bytes): Second byte string.

    Returns:
        int: Number of leading bytes `a` and `b` have in common.
    """
    limit = min(len(a), len(b))
    i = 0
    while i < limit and a[i] == b[i]:
        i += 1
    return i


class Node:
    """
    A node in the radix tree.

    Holds the edge label from its parent (`prefix`), an optional value and
    its children ordered by the first byte of their prefix.
    """

    __slots__ = ("prefix", "children", "_value")

    def __init__(self, prefix: bytes = b"", value: Any = _EMPTY) -> None:
        # Edge label from the parent, empty only for the root
        self.prefix = prefix
        self.children = Children()
        self._value = value

    @property
    def has_value(self) -> bool:
        return self._value is not _EMPTY

    @property
    def value(self) -> Any:
        return None if self._value is _EMPTY else self._value

    def set_value(self, value: Any) -> None:
        self._value = value

    def clear_value(self) -> None:
        self._value = _EMPTY

    def max(self) -> Tuple[Any, bool]:
        """
        Value of the largest key in the subtree rooted at this node.

        The largest key always sits at the end of the rightmost path, so the
        descent never stops at an internal value.
        """
        node = self
        while node.children:
            node = node.children[-1]
        if node.has_value:
            return node.value, True
        return None, False

    def min(self) -> Tuple[Any, bool]:
        """Value of the smallest key in the subtree rooted at this node."""
        node = self
        while not node.has_value and node.children:
            node = node.children[0]
        if node.has_value:
            return node.value, True
        return None, False

    def merge(self) -> None:
        """Absorb the only child of this node: concatenate prefixes, adopt its value and children."""
        assert len(self.children) == 1, "merge requires exactly one child"
        child = self.children[0]
        self.prefix = self.prefix + child.prefix
        self._value = child._value
        self.children = child.children

    def __repr__(self) -> str:
        return f"Node(prefix={self.prefix!r}, has_value={self.has_value}, children={len(self.children)})"


class Children:
    """
    Child nodes kept in ascending order of the first byte of their prefix.

    The first byte of a child's prefix (its discriminator) is unique among
    siblings, so a child is found by binary search over the discriminators.
    """

    __slots__ = ("_keys", "_nodes")

    def __init__(self) -> None:
        # _keys[i] is always _nodes[i].prefix[0]
        self._keys: List[int] = []
        self._nodes: List[Node] = []

    def search(self, b: int) -> int:
        """Insertion point for discriminator `b`: first index whose discriminator is >= b."""
        return bisect_left(self._keys, b)

    def index(self, b: int) -> int:
        """Position of the child with discriminator `b`, or -1."""
        i = self.search(b)
        if i < len(self._keys) and self._keys[i] == b:
            return i
        return -1

    def get(self, b: int) -> Optional[Node]:
        i = self.index(b)
        if i >= 0:
            return self._nodes[i]
        return None

    def add(self, node: Node) -> None:
        """Insert `node` in order. No existing child may share its discriminator."""
        assert node.prefix, "child nodes must have a non-empty prefix"
        b = node.prefix[0]
        i = self.search(b)
        assert i == len(self._keys) or self._keys[i] != b, f"duplicate discriminator byte {b}"
        self._keys.insert(i, b)
        self._nodes.insert(i, node)

    def replace(self, i: int, node: Node) -> None:
        """Put `node` at position `i`; it must keep the discriminator of the child it replaces."""
        assert node.prefix and node.prefix[0] == self._keys[i]
        self._nodes[i] = node

    def pop(self, i: int) -> Node:
        del self._keys[i]
        return self._nodes.pop(i)

    def __getitem__(self, i: int) -> Node:
        return self._nodes[i]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __reversed__(self):
        return reversed(self._nodes)

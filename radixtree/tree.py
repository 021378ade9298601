"""
A mutable radix tree (compressed prefix tree) keyed by byte strings.

Insertion, removal and every search below cost O(k) where k is the length of
the key, independent of the number of stored keys. The tree is not thread
safe.
"""

from typing import Any, Callable, List, Optional, Tuple
from radixtree.utils import Node, check_key, longest_common_prefix


class RadixTree:
    """A radix tree mapping byte string keys to arbitrary values, kept in ascending key order."""

    def __init__(self) -> None:
        # The root stands for the empty key; its prefix is always empty
        self.root = Node()
        self.size = 0

    def insert(self, key: bytes, value: Any) -> Tuple[Any, bool]:
        """
        Insert `value` under `key`, replacing any existing value.

        Args:
            key (bytes): The key, may be empty.
            value (Any): The value to store (None is allowed).

        Returns:
            Tuple[Any, bool]: The previous value and True if the key already existed,
            (None, False) otherwise.
        """
        key = check_key(key)
        node = self.root

        while key:
            i = node.children.index(key[0])
            if i < 0:
                # No child shares the first byte, the remaining key becomes a new leaf
                node.children.add(Node(key, value))
                self.size += 1
                return None, False

            child = node.children[i]
            lcp = longest_common_prefix(key, child.prefix)
            if lcp < len(child.prefix):
                # Split the edge at the end of the common prefix
                split = Node(key[:lcp])
                node.children.replace(i, split)
                child.prefix = child.prefix[lcp:]
                split.children.add(child)
                key = key[lcp:]
                if key:
                    split.children.add(Node(key, value))
                else:
                    split.set_value(value)
                self.size += 1
                return None, False

            node = child
            key = key[lcp:]

        if node.has_value:
            old = node.value
            node.set_value(value)
            return old, True

        # Existing branch point without a value of its own
        node.set_value(value)
        self.size += 1
        return None, False

    def get(self, key: bytes) -> Tuple[Any, bool]:
        """
        Look up the value stored under `key`.

        Returns:
            Tuple[Any, bool]: (value, True) if found, (None, False) otherwise.
        """
        node = self._find_node(check_key(key))
        if node is not None and node.has_value:
            return node.value, True
        return None, False

    def contains(self, key: bytes) -> bool:
        return self.get(key)[1]

    def remove(self, key: bytes) -> Tuple[Any, bool]:
        """
        Remove `key` and its value from the tree.

        Nodes left without a value and with a single child are merged with that
        child so that every path stays maximally compressed.

        Returns:
            Tuple[Any, bool]: The removed value and True, or (None, False) if
            `key` was not stored (including keys that are only branch points).
        """
        key = check_key(key)
        parent: Optional[Node] = None
        i = -1
        node = self.root

        while key:
            i = node.children.index(key[0])
            if i < 0:
                return None, False
            parent = node
            node = node.children[i]
            if not key.startswith(node.prefix):
                return None, False
            key = key[len(node.prefix):]

        if not node.has_value:
            return None, False

        value = node.value
        node.clear_value()

        if parent is not None and not node.children:
            parent.children.pop(i)
        elif node is not self.root and len(node.children) == 1:
            node.merge()

        # Dropping the node can leave the parent as a valueless pass-through
        if parent is not None and parent is not self.root and len(parent.children) == 1 and not parent.has_value:
            parent.merge()

        self.size -= 1
        return value, True

    def find(self, prefix: bytes) -> List[Any]:
        """
        Collect every value whose key starts with `prefix`.

        Returns:
            List[Any]: Values in ascending key order, empty if nothing matches.
        """
        results: List[Any] = []

        def collect(value: Any) -> bool:
            results.append(value)
            return True

        self.walk(prefix, collect)
        return results

    def longest_prefix(self, key: bytes) -> Tuple[Any, bool]:
        """
        Value of the longest stored key that is a prefix of `key`.

        Returns:
            Tuple[Any, bool]: (value, True) if some stored key is a prefix of `key`,
            (None, False) otherwise.
        """
        key = check_key(key)
        node = self.root
        last = node if node.has_value else None

        while key:
            node = node.children.get(key[0])
            if node is None or not key.startswith(node.prefix):
                break
            if node.has_value:
                last = node
            key = key[len(node.prefix):]

        if last is not None:
            return last.value, True
        return None, False

    def min(self) -> Tuple[Any, bool]:
        """Value of the smallest key, or (None, False) on an empty tree."""
        return self.root.min()

    def max(self) -> Tuple[Any, bool]:
        """Value of the largest key, or (None, False) on an empty tree."""
        return self.root.max()

    def predecessor(self, key: bytes) -> Tuple[Any, bool]:
        """
        Value of the key immediately before `key` in ascending order.

        `key` must end on a node of the tree: a stored key or a branch point.
        Returns (None, False) when it does not, or when nothing comes before it.
        """
        key = check_key(key)
        node = self.root
        # Closest point to the left of the path seen so far
        rewind: Optional[Node] = None
        ancestor = False

        while key:
            i = node.children.index(key[0])
            if i < 0 or not key.startswith(node.children[i].prefix):
                return None, False
            if i > 0:
                rewind = node.children[i - 1]
                ancestor = False
            elif node.has_value:
                rewind = node
                ancestor = True
            node = node.children[i]
            key = key[len(node.prefix):]

        if rewind is None:
            return None, False
        if ancestor:
            return rewind.value, True
        return rewind.max()

    def successor(self, key: bytes) -> Tuple[Any, bool]:
        """
        Value of the key immediately after `key` in ascending order.

        `key` must end on a node of the tree: a stored key or a branch point.
        Returns (None, False) when it does not, or when nothing comes after it.
        """
        key = check_key(key)
        node = self.root
        candidate: Optional[Node] = None

        while key:
            i = node.children.index(key[0])
            if i < 0 or not key.startswith(node.children[i].prefix):
                return None, False
            if i + 1 < len(node.children):
                candidate = node.children[i + 1]
            node = node.children[i]
            key = key[len(node.prefix):]

        # Any extension of the key comes before the right siblings
        if node.children:
            candidate = node.children[0]
        if candidate is None:
            return None, False
        return candidate.min()

    def values(self) -> List[Any]:
        """All values in ascending key order."""
        return self.find(b"")

    def walk(self, prefix: bytes, visitor: Callable[[Any], bool]) -> None:
        """
        Visit, in ascending key order, every value whose key starts with `prefix`.

        Args:
            prefix (bytes): Restricts the walk to keys starting with it; empty walks the whole tree.
            visitor (Callable[[Any], bool]): Called with each value. The walk stops
                as soon as it returns a falsy value.
        """
        if not callable(visitor):
            raise TypeError("Visitor must be callable.")
        for _, node in self._walk_nodes(check_key(prefix)):
            if not visitor(node.value):
                return

    def keys(self, prefix: bytes = b"") -> List[bytes]:
        """Stored keys starting with `prefix`, in ascending order."""
        return [key for key, _ in self._walk_nodes(check_key(prefix))]

    def items(self, prefix: bytes = b"") -> List[Tuple[bytes, Any]]:
        """(key, value) pairs whose key starts with `prefix`, in ascending key order."""
        return [(key, node.value) for key, node in self._walk_nodes(check_key(prefix))]

    def _find_node(self, key: bytes) -> Optional[Node]:
        # Node whose full key is exactly `key`, with or without a value
        node = self.root
        while key:
            node = node.children.get(key[0])
            if node is None or not key.startswith(node.prefix):
                return None
            key = key[len(node.prefix):]
        return node

    def _walk_nodes(self, prefix: bytes):
        # Yield (full key, node) for every value-holding node under `prefix`, in key order
        node = self.root
        path = b""
        while prefix:
            node = node.children.get(prefix[0])
            if node is None:
                return
            if not prefix.startswith(node.prefix):
                # The prefix may still end partway through this edge
                if not node.prefix.startswith(prefix):
                    return
                prefix = b""
            else:
                prefix = prefix[len(node.prefix):]
            path += node.prefix

        # Depth-first with an explicit stack: a node's own key sorts before its extensions
        stack = [(node, path)]
        while stack:
            current, acc = stack.pop()
            if current.has_value:
                yield acc, current
            for child in reversed(current.children):
                stack.append((child, acc + child.prefix))

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: bytes) -> bool:
        return self.contains(key)

    def __repr__(self) -> str:
        return f"RadixTree(size={self.size})"

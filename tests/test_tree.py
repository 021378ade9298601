import pytest

from conftest import build
from radixtree.tree import RadixTree


def has_prefix(prefix, words):
    return [word for word in words if word.startswith(prefix)]


# Contains / Get

def test_contains(tree, words):
    for word in words:
        assert tree.contains(word.encode())
        assert word.encode() in tree
    assert not tree.contains(b"\x00")
    assert not tree.contains(b"")
    assert not tree.contains(b"Bill")


def test_get(tree, words, invariants):
    for word in words:
        assert tree.get(word.encode()) == (word, True)
    assert tree.get(b"\x00") == (None, False)

    # Update an existing key
    tree.insert(b"aardvark", "AARDVARK")
    assert tree.get(b"aardvark") == ("AARDVARK", True)

    # Removing a key must leave the keys below it intact
    tree.remove(b"to")
    assert tree.get(b"toa") == ("toa", True)

    # None is a value like any other
    tree.insert(b"movie", None)
    assert tree.get(b"movie") == (None, True)

    # Insert into an existing branch point without a value
    assert tree.get(b"aard") == (None, False)
    tree.insert(b"aard", "aard")
    assert tree.get(b"aard") == ("aard", True)
    invariants(tree)


def test_get_partial_edge_is_a_miss(tree):
    assert tree.get(b"aardv") == (None, False)
    assert tree.get(b"aardvarks") == (None, False)


def test_accepts_bytes_like_keys(tree):
    assert tree.get(bytearray(b"wink")) == ("wink", True)
    assert tree.get(memoryview(b"wink")) == ("wink", True)


@pytest.mark.parametrize("method", ["get", "contains", "remove", "find", "longest_prefix", "predecessor", "successor"])
def test_rejects_str_keys(tree, method):
    with pytest.raises(TypeError):
        getattr(tree, method)("wink")


# Insert

def test_insert_returns_previous_value():
    tree = RadixTree()
    assert tree.insert(b"John", 1) == (None, False)
    assert tree.insert(b"John", 2) == (1, True)
    assert tree.get(b"John") == (2, True)
    assert len(tree) == 1


def test_insert_existing_and_split(tree, invariants):
    assert tree.insert(b"wink", "wink") == ("wink", True)

    # "wilt" splits the "wilting" edge
    assert tree.insert(b"wilt", "wilt") == (None, False)
    assert tree.contains(b"wilt")
    assert tree.get(b"wilting") == ("wilting", True)
    invariants(tree)


def test_insert_split_where_key_ends_at_split_point(invariants):
    tree = RadixTree()
    tree.insert(b"toaster", 1)
    tree.insert(b"toad", 2)
    tree.insert(b"to", 3)
    assert [child.prefix for child in tree.root.children] == [b"to"]
    node = tree.root.children[0]
    assert node.value == 3
    assert [child.prefix for child in node.children] == [b"a"]
    assert [child.prefix for child in node.children[0].children] == [b"d", b"ster"]
    assert tree.values() == [3, 2, 1]
    invariants(tree)


def test_insert_empty_key(invariants):
    tree = RadixTree()
    assert tree.insert(b"", "root") == (None, False)
    assert tree.get(b"") == ("root", True)
    assert len(tree) == 1
    assert tree.insert(b"", "again") == ("root", True)
    assert len(tree) == 1
    assert tree.root.prefix == b""
    invariants(tree)


# Len

def test_len(words):
    tree = RadixTree()
    assert len(tree) == 0

    for i, word in enumerate(words):
        tree.insert(word.encode(), i)
        assert len(tree) == i + 1

    tree.remove(b"aardvark")
    assert len(tree) == len(words) - 1

    # Insert on an existing key
    tree.insert(b"toad", "")
    assert len(tree) == len(words) - 1

    # Removing a missing key
    tree.remove(b"aardvark")
    assert len(tree) == len(words) - 1


# Remove

def test_remove(words, invariants):
    tree = build(words)

    assert tree.remove(b"aardvs") == (None, False)

    for word in words:
        assert tree.remove(word.encode()) == (word, True)
        assert not tree.contains(word.encode())
        invariants(tree)

    assert len(tree) == 0
    assert tree.remove(b"\x00") == (None, False)
    assert len(tree.root.children) == 0


def test_remove_branch_points_are_not_found(tree):
    size = len(tree)
    # Existing node without a value
    assert tree.remove(b"aard") == (None, False)
    # Prefix of existing keys that is not a stored key
    assert tree.remove(b"ba") == (None, False)
    assert len(tree) == size


def test_remove_merges_node_with_single_child(invariants):
    tree = build(["to", "toa", "toad"])
    assert tree.remove(b"to") == ("to", True)
    assert tree.get(b"toa") == ("toa", True)
    assert tree.get(b"toad") == ("toad", True)
    assert [child.prefix for child in tree.root.children] == [b"toa"]
    invariants(tree)


def test_remove_merges_parent_with_remaining_child(invariants):
    tree = build(["will", "wit"])
    wi = tree.root.children[0]
    assert wi.prefix == b"wi"
    assert [child.prefix for child in wi.children] == [b"ll", b"t"]

    assert tree.remove(b"wit") == ("wit", True)
    assert [child.prefix for child in tree.root.children] == [b"will"]
    assert not tree.root.children[0].children
    assert tree.get(b"will") == ("will", True)
    invariants(tree)


def test_remove_in_words_tree_keeps_siblings(tree, words, invariants):
    assert tree.remove(b"wit") == ("wit", True)
    for word in words:
        if word != "wit":
            assert tree.get(word.encode()) == (word, True)
    invariants(tree)


def test_remove_root_never_merges(invariants):
    tree = RadixTree()
    tree.insert(b"", 0)
    tree.insert(b"abc", 1)
    assert tree.remove(b"") == (0, True)
    assert tree.root.prefix == b""
    assert [child.prefix for child in tree.root.children] == [b"abc"]
    assert tree.remove(b"abc") == (1, True)
    assert tree.root.prefix == b""
    invariants(tree)


# Find / Values / Walk

def test_find(tree, words):
    assert tree.find(b"t") == has_prefix("t", words)
    assert tree.find(b"to") == has_prefix("to", words)
    assert tree.find(b"\x00") == []


def test_find_prefix_ending_inside_an_edge(tree):
    assert tree.find(b"toadyi") == ["toadyism"]
    assert tree.find(b"macroana") == ["macroanalysis", "macroanalyst"]
    assert tree.find(b"toadyx") == []
    assert tree.find(b"wx") == []


def test_find_example():
    tree = RadixTree()
    tree.insert(b"John", 1)
    tree.insert(b"Jonathan", 2)
    assert tree.find(b"Jo") == [1, 2]
    assert tree.find(b"Ja") == []


def test_values():
    assert RadixTree().values() == []

    tree = RadixTree()
    tree.insert(b"Zaire", 0)
    tree.insert(b"Aaron", 1)
    tree.insert(b"Erica", 2)
    assert tree.values() == [1, 2, 0]


def test_values_in_key_order(tree, words):
    assert tree.values() == words


def test_walk_stops_when_visitor_returns_false(tree, words):
    limit = 3
    got = []

    def visit(value):
        got.append(value)
        return len(got) < limit

    tree.walk(b"to", visit)
    assert got == has_prefix("to", words)[:limit]


def test_walk_entire_tree(tree, words):
    values = []
    tree.walk(b"", lambda value: values.append(value) or True)
    assert values == words


def test_walk_rejects_non_callable(tree):
    with pytest.raises(TypeError):
        tree.walk(b"", None)


def test_keys_and_items(tree, words):
    assert tree.keys() == [word.encode() for word in words]
    assert tree.keys(b"win") == [b"win", b"wink", b"winkle", b"winkleman"]
    assert tree.items(b"mac") == [(word.encode(), word) for word in has_prefix("mac", words)]
    assert tree.keys(b"q") == []


# LongestPrefix

def test_longest_prefix(tree):
    assert RadixTree().longest_prefix(b"a") == (None, False)
    assert tree.longest_prefix(b"winkley") == ("winkle", True)
    assert tree.longest_prefix(b"wink") == ("wink", True)
    assert tree.longest_prefix(b"wi") == (None, False)
    assert tree.longest_prefix(b"toadstool") == ("toad", True)


def test_longest_prefix_example():
    tree = RadixTree()
    tree.insert(b"Eric", 1)
    assert tree.longest_prefix(b"Ericson") == (1, True)


def test_longest_prefix_includes_empty_key():
    tree = RadixTree()
    tree.insert(b"", "root")
    tree.insert(b"abc", "abc")
    assert tree.longest_prefix(b"xyz") == ("root", True)
    assert tree.longest_prefix(b"ab") == ("root", True)
    assert tree.longest_prefix(b"abcd") == ("abc", True)


# Min / Max

def test_min(tree, words):
    assert RadixTree().min() == (None, False)
    assert tree.min() == (words[0], True)
    tree.insert(b"a", "a")
    assert tree.min() == ("a", True)


def test_max(tree, words):
    assert RadixTree().max() == (None, False)
    assert tree.max() == (words[-1], True)
    tree.insert(b"zzz", "zzz")
    assert tree.max() == ("zzz", True)


def test_min_max_example():
    tree = RadixTree()
    tree.insert(b"Aaron", 1)
    tree.insert(b"Zaire", 2)
    assert tree.min() == (1, True)
    assert tree.max() == (2, True)


def test_max_skips_internal_values():
    tree = build(["a", "ab", "abc"])
    assert tree.max() == ("abc", True)
    assert tree.min() == ("a", True)


# Predecessor / Successor

def test_predecessor(tree, words):
    assert RadixTree().predecessor(b"key") == (None, False)
    assert tree.predecessor(words[0].encode()) == (None, False)
    assert tree.predecessor(b"non-existent key") == (None, False)
    for previous, word in zip(words, words[1:]):
        assert tree.predecessor(word.encode()) == (previous, True)


def test_successor(tree, words):
    assert RadixTree().successor(b"key") == (None, False)
    assert tree.successor(words[-1].encode()) == (None, False)
    assert tree.successor(b"non-existent key") == (None, False)
    for word, following in zip(words, words[1:]):
        assert tree.successor(word.encode()) == (following, True)


def test_predecessor_successor_example():
    tree = RadixTree()
    tree.insert(b"Aaron", 1)
    tree.insert(b"Zaire", 2)
    assert tree.predecessor(b"Zaire") == (1, True)
    assert tree.successor(b"Aaron") == (2, True)


def test_neighbours_of_branch_point(tree):
    # "aard" and "mac" are branch points without values of their own
    assert tree.successor(b"aard") == ("aardvark", True)
    assert tree.predecessor(b"aard") == (None, False)
    assert tree.predecessor(b"mac") == ("create", True)
    assert tree.successor(b"mac") == ("macro", True)

    tree = build(["a", "bx", "by"])
    assert tree.predecessor(b"b") == ("a", True)
    assert tree.successor(b"b") == ("bx", True)


def test_neighbours_of_key_ending_inside_an_edge(tree):
    assert tree.predecessor(b"aardv") == (None, False)
    assert tree.successor(b"aardv") == (None, False)


def test_neighbours_with_empty_key():
    tree = build(["", "b", "a"])
    assert tree.predecessor(b"a") == ("", True)
    assert tree.successor(b"") == ("a", True)
    assert tree.predecessor(b"") == (None, False)
    assert tree.successor(b"b") == (None, False)


def test_repr():
    tree = build(["a", "b"])
    assert repr(tree) == "RadixTree(size=2)"

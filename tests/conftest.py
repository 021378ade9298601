import pytest
from types import SimpleNamespace

from radixtree.tree import RadixTree


WORDS = sorted([
    "aardvark",
    "aardwolf",
    "abacus",
    "babble",
    "backtrack",
    "beehive",
    "create",
    "macro",
    "macroanalysis",
    "macroanalyst",
    "macrochelys",
    "mactroid",
    "obsequious",
    "sequence",
    "to",
    "toa",
    "toad",
    "toady",
    "toadyism",
    "what",
    "win",
    "wink",
    "winkle",
    "winkleman",
    "will",
    "wilting",
    "wit",
])


def build(keys):
    """Tree mapping each key (as bytes) to the key string itself."""
    tree = RadixTree()
    for key in keys:
        tree.insert(key.encode(), key)
    return tree


def check_invariants(tree):
    """Walk the whole tree and assert the structural invariants of a radix tree."""
    count = 0
    stack = [(tree.root, True)]
    while stack:
        node, is_root = stack.pop()
        if node.has_value:
            count += 1
        if not is_root:
            assert node.prefix, "non-root node with an empty prefix"
            assert node.has_value or len(node.children) != 1, f"uncompressed node {node!r}"
            assert node.has_value or node.children, f"valueless leaf {node!r}"
        discriminators = [child.prefix[0] for child in node.children]
        assert discriminators == sorted(set(discriminators)), "children unsorted or sharing a first byte"
        assert node.children._keys == discriminators
        stack.extend((child, False) for child in node.children)
    assert count == len(tree)


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def tree():
    return build(WORDS)


@pytest.fixture
def invariants():
    return check_invariants


class WhitespacePreTokenizer:
    """Stands in for a Hugging Face pre-tokenizer: splits on whitespace and keeps offsets."""

    def pre_tokenize_str(self, text):
        words = []
        start = 0
        for word in text.split():
            start = text.index(word, start)
            words.append((word, (start, start + len(word))))
            start += len(word)
        return words


@pytest.fixture
def hf_tokenizer():
    return SimpleNamespace(backend_tokenizer=SimpleNamespace(pre_tokenizer=WhitespacePreTokenizer()))

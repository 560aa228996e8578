"""
Prefix tree used for autocomplete over one vocabulary.

Whole tokens are inserted character by character and mark their last node
as complete. Multi-word entries ("lait de coco") can additionally register
their later words as sub-tokens: the node for "coco" then carries the parent
value "lait de coco", so completing "coc" surfaces the whole phrase.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator

from .tokenizer import DEFAULT_MIN_WORD_LENGTH, normalize, split_words


class TrieNode:
    """A node in the Trie, keyed by one character in its parent's children."""

    __slots__ = ("children", "complete_word", "parents")

    def __init__(self) -> None:
        self.children: dict[str, TrieNode] = {}
        self.complete_word = False
        self.parents: list[str] = []

    def add_parent(self, parent: str) -> None:
        if parent not in self.parents:
            self.parents.append(parent)


class Trie:
    def __init__(self, min_word_length: int = DEFAULT_MIN_WORD_LENGTH) -> None:
        self.root = TrieNode()
        self.min_word_length = min_word_length
        self._size = 0

    @classmethod
    def from_words(
        cls, words: Iterable[str], min_word_length: int = DEFAULT_MIN_WORD_LENGTH
    ) -> Trie:
        """Build a trie holding each word verbatim."""
        trie = cls(min_word_length)
        for word in words:
            trie.insert(word)
        return trie

    @classmethod
    def from_phrases(
        cls, phrases: Iterable[str], min_word_length: int = DEFAULT_MIN_WORD_LENGTH
    ) -> Trie:
        """Build a trie holding each phrase verbatim plus its later words as sub-tokens."""
        trie = cls(min_word_length)
        for phrase in phrases:
            trie.insert(phrase)
            trie.insert_as_subtoken_of(phrase, phrase)
        return trie

    def _walk(self, word: str, create: bool = False) -> TrieNode | None:
        node = self.root
        for char in word:
            child = node.children.get(char)
            if child is None:
                if not create:
                    return None
                child = node.children[char] = TrieNode()
            node = child
        return node

    def insert(self, word: str) -> None:
        """Insert *word* as a whole token. Re-inserting is a no-op."""
        word = normalize(word)
        if not word:
            return
        node = self._walk(word, create=True)
        if not node.complete_word:
            node.complete_word = True
            self._size += 1

    def insert_as_subtoken_of(self, word: str, parent: str) -> None:
        """Register the significant words of *word* after the first as belonging to *parent*.

        The head word is skipped since the verbatim *parent* path already
        starts with it. Sub-token nodes get the parent value but no
        completion flag.
        """
        parent = normalize(parent)
        tokens = split_words(word, self.min_word_length)
        words = split_words(word, 1)
        if tokens and tokens[0] == words[0]:
            tokens = tokens[1:]
        for token in tokens:
            if token == parent:
                continue
            self._walk(token, create=True).add_parent(parent)

    def complete(self, prefix: str) -> list[str]:
        """Return every known token or parent phrase reachable from *prefix*.

        Order is depth-first traversal order; results are not deduplicated.
        An unknown prefix gives an empty list, an empty prefix the whole trie.
        """
        prefix = prefix.lower()
        node = self._walk(prefix)
        if node is None:
            return []
        return list(self._collect(node, prefix))

    def _collect(self, node: TrieNode, path: str) -> Iterator[str]:
        stack = [(node, path)]
        while stack:
            current, current_path = stack.pop()
            if current.complete_word:
                yield current_path
            yield from current.parents
            # Reversed so children pop in insertion order.
            for char, child in reversed(current.children.items()):
                stack.append((child, current_path + char))

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._walk(normalize(word))
        return node is not None and node.complete_word

    def __len__(self) -> int:
        return self._size

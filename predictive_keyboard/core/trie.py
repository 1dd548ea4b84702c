# trie.py
# Prefix index (trie) mapping every vocabulary word to a frequency.
# Used by the RankingEngine for prefix completion, by the loader for the
# cache snapshot and by the LearningService to boost learned words.

from __future__ import annotations
import heapq
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Tuple

Word = str
Score = int
Candidate = Tuple[Word, Score]


def _rank_key(entry: Candidate) -> Tuple[int, str]:
    # higher freq first, then lexicographic
    return (-entry[1], entry[0])


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode (owned by this node only)
    is_word: marks the end of a real word
    freq: word frequency, only meaningful when is_word is set
    """

    __slots__ = ("children", "is_word", "freq")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = defaultdict(TrieNode)
        self.is_word = False
        self.freq = 0


class PrefixIndex:
    """
    Trie for fast prefix lookup.
     - insert() overwrites: the last frequency written for a word wins
     - traversal uses an explicit stack, so deep vocabularies cannot blow the
       call stack
     - prefix search keeps a bounded top-k instead of materialising the subtree
    """

    def __init__(self, max_nodes: Optional[int] = None) -> None:
        self._root = TrieNode()
        self._count = 0
        self.max_nodes = max_nodes

    # insertion -----------------------------------------------------
    def insert(self, word: str, frequency: int) -> None:
        """
        Insert `word` with `frequency`, replacing any previous frequency.
        Lowercases everything.
        """
        if not word:
            return
        if frequency < 0:
            raise ValueError(f"negative frequency for {word!r}: {frequency}")

        node = self._root
        for ch in word.lower():
            node = node.children[ch]
        if not node.is_word:
            self._count += 1
        node.is_word = True
        node.freq = int(frequency)

    # lookup -----------------------------------------------------
    def _node_for(self, prefix: str) -> Optional[TrieNode]:
        node = self._root
        for ch in prefix:
            nxt = node.children.get(ch)
            if nxt is None:
                return None
            node = nxt
        return node

    def find(self, word: str) -> Optional[Candidate]:
        """Exact match: (word, freq) or None."""
        if not word:
            return None
        key = word.lower()
        node = self._node_for(key)
        if node is None or not node.is_word:
            return None
        return key, node.freq

    def find_all_with_prefix(self, prefix: str, limit: Optional[int] = 50) -> List[Candidate]:
        """
        Return words starting with `prefix` as list[(word, freq)] sorted by
         - higher freq first
         - lexicographically second
        The empty prefix enumerates the whole vocabulary. limit=None returns
        every match.
        """
        if limit is not None and limit <= 0:
            return []

        key = prefix.lower()
        node = self._node_for(key)
        if node is None:
            return []

        found = self._walk(node, key, self.max_nodes)
        if limit is None:
            return sorted(found, key=_rank_key)
        return heapq.nsmallest(limit, found, key=_rank_key)

    # enumeration -----------------------------------------------------
    def _walk(self, start: TrieNode, prefix: str, max_nodes: Optional[int] = None) -> Iterator[Candidate]:
        """Iterative DFS in lexicographic order, yielding (word, freq)."""
        stack = [(start, prefix)]
        visited = 0
        while stack:
            node, word = stack.pop()
            visited += 1
            if max_nodes is not None and visited > max_nodes:
                return
            if node.is_word:
                yield word, node.freq
            for ch in sorted(node.children, reverse=True):
                stack.append((node.children[ch], word + ch))

    def iter_words(self) -> Iterator[Candidate]:
        return self._walk(self._root, "")

    def get_all_words(self) -> List[Candidate]:
        """Every (word, freq) pair, lexicographic order. Used for the cache snapshot."""
        return list(self._walk(self._root, ""))

    def top_words(self, n: int) -> List[Word]:
        """The n most frequent words."""
        return [w for w, _ in heapq.nsmallest(n, self._walk(self._root, ""), key=_rank_key)]

    # convenience -----------------------------------------------------
    def __len__(self) -> int:
        return self._count

    def __contains__(self, word: str) -> bool:
        return self.find(word) is not None

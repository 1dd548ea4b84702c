# bigram_table.py
# Ordered word-pair counts for next-word prediction.
# Two instances live in the engine: the global table built by the loader and
# the user table owned by the UserOverlay.

from __future__ import annotations
from collections import Counter, defaultdict
from typing import Dict, Iterator, List, Tuple

Word = str
Pair = Tuple[Word, Word, int]


class BigramTable:
    """
    first word -> Counter(second word -> frequency)
    word1 -> word2 is distinct from word2 -> word1.
    """

    def __init__(self) -> None:
        self._chain: Dict[Word, Counter] = defaultdict(Counter)
        self._pairs = 0

    def record_pair(self, word1: str, word2: str, amount: int = 1) -> int:
        """Add `amount` to the pair and return the new frequency."""
        if amount <= 0:
            raise ValueError(f"bigram increment must be positive, got {amount}")
        if not word1 or not word2:
            return 0
        followers = self._chain[word1.lower()]
        key = word2.lower()
        if key not in followers:
            self._pairs += 1
        followers[key] += int(amount)
        return followers[key]

    def set_pair(self, word1: str, word2: str, frequency: int) -> None:
        """Overwrite the pair frequency (last write wins)."""
        if frequency <= 0:
            raise ValueError(f"bigram frequency must be positive, got {frequency}")
        followers = self._chain[word1.lower()]
        key = word2.lower()
        if key not in followers:
            self._pairs += 1
        followers[key] = int(frequency)

    def frequency(self, word1: str, word2: str) -> int:
        followers = self._chain.get(word1.lower())
        if not followers:
            return 0
        return followers.get(word2.lower(), 0)

    def predict_scored(self, word1: str, limit: int, boost: float = 1.0) -> List[Tuple[Word, int]]:
        """(word, int(freq * boost)) for followers of word1, best first."""
        if not word1 or limit <= 0:
            return []
        followers = self._chain.get(word1.lower())
        if not followers:
            return []
        scored = [(w, int(c * boost)) for w, c in followers.items()]
        scored.sort(key=lambda t: (-t[1], t[0]))
        return scored[:limit]

    def predict(self, word1: str, limit: int) -> List[Word]:
        return [w for w, _ in self.predict_scored(word1, limit)]

    def pairs(self) -> Iterator[Pair]:
        for first, followers in self._chain.items():
            for second, freq in followers.items():
                yield first, second, freq

    def __contains__(self, word1: str) -> bool:
        return bool(self._chain.get(word1.lower()))

    def __len__(self) -> int:
        return self._pairs

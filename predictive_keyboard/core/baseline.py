# baseline.py
# Built-in vocabulary used when no other data source loads.
# Keeps the engine queryable after any load failure.

from __future__ import annotations
from typing import Dict, List, Tuple

from predictive_keyboard.core.bigram_table import BigramTable
from predictive_keyboard.core.trie import PrefixIndex

COMMON_WORDS: Tuple[str, ...] = (
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
    "or", "an", "will", "my", "one", "all", "would", "there", "their", "what",
    "so", "up", "out", "if", "about", "who", "get", "which", "go", "me",
    "when", "make", "can", "like", "time", "no", "just", "him", "know", "take",
    "people", "into", "year", "your", "good", "some", "could", "them", "see", "other",
    "than", "then", "now", "look", "only", "come", "its", "over", "think", "also",
)

COMMON_BIGRAMS: Dict[str, List[str]] = {
    "thank": ["you", "god", "goodness"],
    "how": ["are", "is", "do", "did", "about"],
    "i": ["am", "will", "have", "think", "was", "can"],
    "let": ["me", "us", "it", "them"],
    "would": ["you", "like", "be", "have"],
    "could": ["you", "be", "have", "get"],
    "please": ["let", "help", "send", "check"],
}

WORD_TOP_FREQ = 10_000
PAIR_TOP_FREQ = 1_000
STEP = 10


def build_baseline(max_nodes=None) -> Tuple[PrefixIndex, BigramTable]:
    """Fresh index + bigram table holding the baseline data; earlier words rank higher."""
    index = PrefixIndex(max_nodes=max_nodes)
    for i, word in enumerate(COMMON_WORDS):
        index.insert(word, WORD_TOP_FREQ - i * STEP)

    bigrams = BigramTable()
    for first, seconds in COMMON_BIGRAMS.items():
        for i, second in enumerate(seconds):
            bigrams.set_pair(first, second, PAIR_TOP_FREQ - i * STEP)
    return index, bigrams

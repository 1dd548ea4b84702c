# user_overlay.py
# Per-user word and word-pair counts layered on top of the global dictionary.
# The only continuously mutated, persisted state in the engine.
#
# Stored as two strings (see encode_records):
#   user_dictionary = "word:freq|word:freq"
#   user_bigrams    = "word1:word2:freq|..."
# ':' and '|' are not escaped, words containing them are refused by
# is_storable() before they reach the overlay.

from __future__ import annotations
import logging
import threading
from collections import Counter
from typing import Dict, Iterator, List, Tuple

from predictive_keyboard.core.bigram_table import BigramTable

logger = logging.getLogger(__name__)

DICTIONARY_KEY = "user_dictionary"
BIGRAMS_KEY = "user_bigrams"

RECORD_SEP = "|"
FIELD_SEP = ":"


def is_storable(word: str) -> bool:
    return bool(word) and RECORD_SEP not in word and FIELD_SEP not in word


def _parse_freq(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        return 1
    return value if value > 0 else 1


class UserOverlay:
    """
    words: Counter(word -> freq)
    bigrams: BigramTable of (word1 -> word2 -> freq)

    `lock` guards every mutation and serialization so a background flush never
    sees a half-updated map.
    """

    def __init__(self) -> None:
        self.words: Counter = Counter()
        self.bigrams = BigramTable()
        self.lock = threading.RLock()

    # mutation -----------------------------------------------------
    def add_word(self, word: str, amount: int = 1) -> int:
        with self.lock:
            self.words[word] += amount
            return self.words[word]

    def add_pair(self, word1: str, word2: str, amount: int = 1) -> int:
        with self.lock:
            return self.bigrams.record_pair(word1, word2, amount)

    def clear(self) -> None:
        with self.lock:
            self.words.clear()
            self.bigrams = BigramTable()

    # queries -----------------------------------------------------
    def word_frequency(self, word: str) -> int:
        return self.words.get(word.lower(), 0)

    def pair_frequency(self, word1: str, word2: str) -> int:
        return self.bigrams.frequency(word1, word2)

    def words_with_prefix(self, prefix: str) -> Iterator[Tuple[str, int]]:
        with self.lock:
            items = list(self.words.items())
        return ((w, c) for w, c in items if w.startswith(prefix))

    def most_common(self, n: int) -> List[Tuple[str, int]]:
        with self.lock:
            return self.words.most_common(n)

    # persistence -----------------------------------------------------
    def encode_records(self) -> Dict[str, str]:
        """Serialize both maps under the lock."""
        with self.lock:
            dictionary = RECORD_SEP.join(f"{w}{FIELD_SEP}{c}" for w, c in self.words.items())
            bigrams = RECORD_SEP.join(
                f"{a}{FIELD_SEP}{b}{FIELD_SEP}{c}" for a, b, c in self.bigrams.pairs()
            )
        return {DICTIONARY_KEY: dictionary, BIGRAMS_KEY: bigrams}

    def load_records(self, records: Dict[str, str]) -> None:
        """
        Replace the overlay with the stored records.
        Entries with the wrong number of fields are skipped; an unparsable
        frequency counts as 1.
        """
        words: Counter = Counter()
        bigrams = BigramTable()
        skipped = 0

        raw = records.get(DICTIONARY_KEY) or ""
        for entry in raw.split(RECORD_SEP) if raw else ():
            parts = entry.split(FIELD_SEP)
            if len(parts) != 2 or not parts[0]:
                skipped += 1
                continue
            words[parts[0]] = _parse_freq(parts[1])

        raw = records.get(BIGRAMS_KEY) or ""
        for entry in raw.split(RECORD_SEP) if raw else ():
            parts = entry.split(FIELD_SEP)
            if len(parts) != 3 or not parts[0] or not parts[1]:
                skipped += 1
                continue
            bigrams.set_pair(parts[0], parts[1], _parse_freq(parts[2]))

        if skipped:
            logger.warning("skipped %d malformed user store entries", skipped)

        with self.lock:
            self.words = words
            self.bigrams = bigrams
        logger.info("user overlay loaded: %d words, %d pairs", len(words), len(bigrams))

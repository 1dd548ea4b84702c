# predictive_keyboard/core/learning.py
"""
LearningService
---------------
Records what the user actually commits and keeps the overlay persisted.

 - learn_word(): +1 on the user word count, and the trie entry for the word is
   boosted to int(count * boost_factor) so it surfaces in prefix search
 - learn_word_pair(): +1 on the user bigram
 - flush on the first update of a word or pair, then every
   `word_flush_interval` (word) or `pair_flush_interval` (pair) updates after that
 - a failed flush is logged and retried at the next scheduled flush; the
   overlay stays in memory either way
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from predictive_keyboard.core.config import EngineConfig
from predictive_keyboard.core.errors import PersistenceError
from predictive_keyboard.core.protocols import UserStore
from predictive_keyboard.core.snapshot import SnapshotSlot
from predictive_keyboard.core.user_overlay import UserOverlay, is_storable

logger = logging.getLogger(__name__)

# (task) -> Future-like; lets the provider push flushes to a background thread
Scheduler = Callable[[Callable[[], bool]], object]


class LearningService:

    def __init__(self, slot: SnapshotSlot, overlay: UserOverlay, store: UserStore,
                 config: Optional[EngineConfig] = None,
                 scheduler: Optional[Scheduler] = None):
        self.slot = slot
        self.overlay = overlay
        self.store = store
        self.cfg = config or EngineConfig()
        self.scheduler = scheduler
        self.failed_flushes = 0

    def _accept(self, word: str) -> Optional[str]:
        if not word:
            return None
        key = word.strip().lower()
        if len(key) < self.cfg.min_word_length:
            return None
        if not is_storable(key):
            logger.debug("not learning %r: contains a store delimiter", key)
            return None
        return key

    # Public API ------------------------------------------------------------
    def learn_word(self, word: str) -> int:
        """Returns the new user frequency, 0 when the word was ignored."""
        key = self._accept(word)
        if key is None:
            return 0

        count = self.overlay.add_word(key)

        snap = self.slot.current()
        if snap is not None:
            snap.index.insert(key, int(count * self.cfg.boost_factor))

        if (count - 1) % self.cfg.word_flush_interval == 0:
            self._schedule_flush()
        return count

    def learn_word_pair(self, word1: str, word2: str) -> int:
        """Returns the new user pair frequency, 0 when the pair was ignored."""
        first, second = self._accept(word1), self._accept(word2)
        if first is None or second is None:
            return 0

        count = self.overlay.add_pair(first, second)
        if (count - 1) % self.cfg.pair_flush_interval == 0:
            self._schedule_flush()
        return count

    def flush(self) -> bool:
        """Write both overlay records in one update. True on success."""
        records = self.overlay.encode_records()
        try:
            self.store.write(records)
        except PersistenceError as e:
            self.failed_flushes += 1
            logger.warning("user overlay flush failed (will retry): %s", e)
            return False
        logger.debug("user overlay flushed (%d words)", len(self.overlay.words))
        return True

    def _schedule_flush(self) -> None:
        if self.cfg.background_flush and self.scheduler is not None:
            self.scheduler(self.flush)
        else:
            self.flush()

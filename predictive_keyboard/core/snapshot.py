# snapshot.py
# The loaded dictionary as one publishable unit, plus the ready gate.
#
# The loader builds index, global bigrams and top words privately and hands
# them over in a single publish(); queries read the slot once per call, so
# they see either nothing or a fully built snapshot.

from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from predictive_keyboard.core.bigram_table import BigramTable
from predictive_keyboard.core.trie import PrefixIndex


@dataclass
class DictionarySnapshot:
    index: PrefixIndex
    bigrams: BigramTable
    top_words: List[str] = field(default_factory=list)

    def refresh_top_words(self, n: int) -> None:
        self.top_words = self.index.top_words(n)


class SnapshotSlot:
    """Holds the published snapshot. Empty until publish() is called."""

    def __init__(self) -> None:
        self._snapshot: Optional[DictionarySnapshot] = None
        self._lock = threading.Lock()
        self._ready = threading.Event()

    def publish(self, snapshot: DictionarySnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
        self._ready.set()

    def current(self) -> Optional[DictionarySnapshot]:
        if not self._ready.is_set():
            return None
        with self._lock:
            return self._snapshot

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

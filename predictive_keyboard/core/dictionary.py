# predictive_keyboard/core/dictionary.py
"""
DictionaryProvider - facade the input layer talks to.

Owns:
 - the snapshot slot (PrefixIndex + global BigramTable + top words)
 - the UserOverlay, restored from the user store at construction
 - DictionaryLoader (background), RankingEngine, LearningService
 - observable status: is_loading, dictionary_size, state

Public API:
  - load() / load_async()
  - get_suggestions(prefix, limit)
  - get_next_word_suggestions(previous_word, limit)
  - get_contextual_suggestions(previous_words, current_prefix, limit)
  - learn_word(word) / learn_word_pair(word1, word2)
  - flush() / close() / stats()
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import List, Optional, Sequence

from predictive_keyboard.core.config import EngineConfig, ResourcePaths
from predictive_keyboard.core.learning import LearningService
from predictive_keyboard.core.loader import DictionaryLoader, LoaderState, LoadReport
from predictive_keyboard.core.protocols import EngineStats, UserStore
from predictive_keyboard.core.ranking import RankingEngine
from predictive_keyboard.core.snapshot import DictionarySnapshot, SnapshotSlot
from predictive_keyboard.core.status import Observable
from predictive_keyboard.core.user_overlay import UserOverlay
from predictive_keyboard.utils.model_store import JsonFileStore
from predictive_keyboard.utils.threaded_runner import BackgroundRunner

logger = logging.getLogger(__name__)


class DictionaryProvider:

    def __init__(self,
                 paths: ResourcePaths,
                 config: Optional[EngineConfig] = None,
                 store: Optional[UserStore] = None):
        self.paths = paths
        self.cfg = config or EngineConfig()
        self.store: UserStore = store if store is not None else JsonFileStore(paths.user_store)

        self.slot = SnapshotSlot()
        self.overlay = UserOverlay()
        self.loader = DictionaryLoader(paths, self.cfg)
        self.report: Optional[LoadReport] = None

        self.is_loading: Observable[bool] = Observable(False)
        self.dictionary_size: Observable[int] = Observable(0)
        self.state: Observable[LoaderState] = Observable(LoaderState.NOT_LOADED)

        self._runner: Optional[BackgroundRunner] = None
        self.ranking = RankingEngine(self.slot, self.overlay, self.cfg)
        self.learning = LearningService(self.slot, self.overlay, self.store, self.cfg,
                                        scheduler=self._submit)

        self._restore_user_overlay()

    # Loading ---------------------------------------------------------
    def _restore_user_overlay(self) -> None:
        self.overlay.load_records(self.store.read())

    def load(self) -> LoadReport:
        """Build and publish the dictionary on the calling thread."""
        if self.slot.ready:
            logger.debug("dictionary already loaded")
            # load_async() raised the flag before queueing this call
            self.is_loading.set(False)
            return self.report
        self.is_loading.set(True)
        self.state.set(LoaderState.LOADING)
        try:
            snapshot, report = self.loader.load()
            self._publish(snapshot)
            self.report = report
            self.state.set(report.state)
        finally:
            self.is_loading.set(False)
        return report

    def load_async(self) -> "Future[LoadReport]":
        """Run load() on the background worker; queries stay non-blocking meanwhile."""
        self.is_loading.set(True)
        return self._submit(self.load)

    def _publish(self, snapshot: DictionarySnapshot) -> None:
        self.slot.publish(snapshot)
        self.dictionary_size.set(len(snapshot.index))

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self.slot.wait(timeout)

    @property
    def ready(self) -> bool:
        return self.slot.ready

    # Queries ---------------------------------------------------------
    def get_suggestions(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        return self.ranking.get_suggestions(prefix, limit)

    def get_next_word_suggestions(self, previous_word: str, limit: Optional[int] = None) -> List[str]:
        return self.ranking.get_next_word_suggestions(previous_word, limit)

    def get_contextual_suggestions(self, previous_words: Sequence[str], current_prefix: str,
                                   limit: Optional[int] = None) -> List[str]:
        return self.ranking.get_contextual_suggestions(previous_words, current_prefix, limit)

    # Learning ---------------------------------------------------------
    def learn_word(self, word: str) -> int:
        count = self.learning.learn_word(word)
        snap = self.slot.current()
        if count and snap is not None:
            self.dictionary_size.set(len(snap.index))
        return count

    def learn_word_pair(self, word1: str, word2: str) -> int:
        return self.learning.learn_word_pair(word1, word2)

    def flush(self) -> bool:
        return self.learning.flush()

    def reset_user_data(self) -> bool:
        """Forget everything learned and persist the empty overlay."""
        self.overlay.clear()
        return self.learning.flush()

    # Lifecycle ---------------------------------------------------------
    def _submit(self, task):
        if self._runner is None:
            self._runner = BackgroundRunner()
        return self._runner.submit(task)

    def close(self) -> None:
        """Wait for background work, then flush the overlay."""
        if self._runner is not None:
            self._runner.shutdown(wait=True)
            self._runner = None
        self.learning.flush()

    def __enter__(self) -> "DictionaryProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def stats(self) -> EngineStats:
        snap = self.slot.current()
        source = self.report.source.value if self.report and self.report.source else None
        return EngineStats(
            state=self.state.value.value,
            source=source,
            is_loading=self.is_loading.value,
            dictionary_size=self.dictionary_size.value,
            global_pairs=len(snap.bigrams) if snap else 0,
            user_words=len(self.overlay.words),
            user_pairs=len(self.overlay.bigrams),
            top_words=len(snap.top_words) if snap else 0,
        )

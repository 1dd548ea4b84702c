# predictive_keyboard/core/ranking.py
"""
RankingEngine - pure query layer over the loaded dictionary and the user overlay.

 - get_suggestions(): prefix completion, blends trie frequencies with boosted
   user frequencies and gives the exact prefix word a small bump
 - get_next_word_suggestions(): tiered next-word prediction, exactly one tier
   per call: user bigrams -> global bigrams -> top frequent words
 - get_contextual_suggestions(): prefix wins over context, no blending

Ordering is deterministic: score desc, then word asc.
Every query returns [] until the dictionary snapshot is published.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from predictive_keyboard.core.config import EngineConfig
from predictive_keyboard.core.snapshot import SnapshotSlot
from predictive_keyboard.core.user_overlay import UserOverlay

logger = logging.getLogger(__name__)

Scored = Tuple[str, float]


class RankingEngine:

    def __init__(self, slot: SnapshotSlot, overlay: UserOverlay,
                 config: Optional[EngineConfig] = None):
        self.slot = slot
        self.overlay = overlay
        self.cfg = config or EngineConfig()

    def _limit(self, limit: Optional[int]) -> int:
        return self.cfg.suggestion_limit if limit is None else int(limit)

    # Prefix completion ------------------------------------------------
    def score_prefix(self, prefix: str, limit: Optional[int] = None) -> List[Scored]:
        """Like get_suggestions() but keeps the blended scores. Useful for debugging."""
        limit = self._limit(limit)
        snap = self.slot.current()
        if snap is None or limit <= 0 or not prefix or not prefix.strip():
            return []

        key = prefix.strip().lower()
        boost = self.cfg.boost_factor

        candidates: List[Tuple[str, int]] = snap.index.find_all_with_prefix(
            key, limit * self.cfg.candidate_multiplier
        )
        candidates += [(w, int(c * boost)) for w, c in self.overlay.words_with_prefix(key)]

        totals: Dict[str, float] = defaultdict(float)
        for word, score in candidates:
            totals[word] += score
        if key in totals:
            totals[key] *= self.cfg.exact_match_boost

        ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
        return ranked[:limit]

    def get_suggestions(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        return [w for w, _ in self.score_prefix(prefix, limit)]

    # Next word ------------------------------------------------
    def get_next_word_suggestions(self, previous_word: str, limit: Optional[int] = None) -> List[str]:
        limit = self._limit(limit)
        snap = self.slot.current()
        if snap is None or limit <= 0:
            return []

        if not previous_word or not previous_word.strip():
            return snap.top_words[:limit]

        key = previous_word.strip().lower()

        user_next = self.overlay.bigrams.predict_scored(key, limit, boost=self.cfg.boost_factor)
        if user_next:
            return [w for w, _ in user_next]

        global_next = snap.bigrams.predict(key, limit)
        if global_next:
            return global_next

        return snap.top_words[:limit]

    # Context ------------------------------------------------
    def get_contextual_suggestions(self, previous_words: Sequence[str], current_prefix: str,
                                   limit: Optional[int] = None) -> List[str]:
        if current_prefix:
            return self.get_suggestions(current_prefix, limit)
        last = previous_words[-1] if previous_words else ""
        return self.get_next_word_suggestions(last, limit)

# predictive_keyboard/core/protocols.py
"""
Protocol interfaces and typed structures shared by the core components.

The core depends on these small Protocols rather than on concrete backends, so
tests can hand in an in-memory store or a store that fails on purpose.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, runtime_checkable
from typing_extensions import TypedDict


# Typed structures ------------------------------------------------------------

class UserRecords(TypedDict, total=False):
    """
    The two persisted user records, both plain strings:
      {"user_dictionary": "hello:3|world:1", "user_bigrams": "hello:world:2"}
    """
    user_dictionary: str
    user_bigrams: str


class EngineStats(TypedDict):
    """Snapshot of engine state returned by DictionaryProvider.stats()."""
    state: str
    source: Optional[str]
    is_loading: bool
    dictionary_size: int
    global_pairs: int
    user_words: int
    user_pairs: int
    top_words: int


# Protocols ------------------------------------------------------------------

@runtime_checkable
class UserStore(Protocol):
    """Key/value persistence for the user overlay."""

    def read(self) -> Dict[str, str]:
        """
        Return every stored record. A missing store reads as {}.
        """
        ...

    def write(self, records: Dict[str, str]) -> None:
        """
        Replace the stored records in one atomic update.
        Raises PersistenceError on failure.
        """
        ...

"""
predictive_keyboard.core

The dictionary/ranking engine behind the keyboard's suggestion bar.
Contains:
 - PrefixIndex (trie) and BigramTable storage
 - UserOverlay, the learned per-user counts
 - DictionaryLoader with cache and baseline fallback
 - RankingEngine and LearningService
 - DictionaryProvider, the facade used by input layers
"""

from .bigram_table import BigramTable
from .config import EngineConfig, ResourcePaths
from .dictionary import DictionaryProvider
from .errors import CacheCorrupt, DictionaryError, ParseError, PersistenceError, ResourceMissing
from .learning import LearningService
from .loader import DictionaryLoader, LoaderState, LoadReport, LoadSource
from .ranking import RankingEngine
from .snapshot import DictionarySnapshot, SnapshotSlot
from .trie import PrefixIndex
from .user_overlay import UserOverlay

__all__ = [
    "BigramTable",
    "CacheCorrupt",
    "DictionaryError",
    "DictionaryLoader",
    "DictionaryProvider",
    "DictionarySnapshot",
    "EngineConfig",
    "LearningService",
    "LoadReport",
    "LoadSource",
    "LoaderState",
    "ParseError",
    "PersistenceError",
    "PrefixIndex",
    "RankingEngine",
    "ResourceMissing",
    "ResourcePaths",
    "SnapshotSlot",
    "UserOverlay",
]

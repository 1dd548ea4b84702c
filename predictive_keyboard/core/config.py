# config.py
# Engine knobs and resource locations, passed explicitly at construction.

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

VOCABULARY_FILENAME = "word_freq_dict.gz"
BIGRAM_FILENAME = "bigram_dict.gz"
CACHE_FILENAME = "dictionary_cache"
USER_STORE_FILENAME = "user_dictionary.json"


@dataclass(frozen=True)
class EngineConfig:
    """
    Configurable knobs for ranking, learning and loading.
    """
    boost_factor: float = 2.5           # user-learned frequency multiplier
    top_words_count: int = 1000         # size of the top-frequent fallback list
    suggestion_limit: int = 3
    exact_match_boost: float = 1.2
    candidate_multiplier: int = 3       # prefix candidates fetched per requested suggestion
    min_word_length: int = 2
    word_flush_interval: int = 5
    pair_flush_interval: int = 3
    max_records: int = 2_000_000        # per input file
    max_line_length: int = 256
    max_prefix_nodes: Optional[int] = None
    background_flush: bool = False

    def __post_init__(self) -> None:
        if self.boost_factor <= 0:
            raise ValueError("boost_factor must be positive")
        if self.exact_match_boost <= 0:
            raise ValueError("exact_match_boost must be positive")
        for name in ("top_words_count", "suggestion_limit", "candidate_multiplier",
                     "min_word_length", "word_flush_interval", "pair_flush_interval",
                     "max_records", "max_line_length"):
            if int(getattr(self, name)) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.max_prefix_nodes is not None and self.max_prefix_nodes < 1:
            raise ValueError("max_prefix_nodes must be >= 1 or None")


@dataclass(frozen=True)
class ResourcePaths:
    """Where the loader and the user store read and write."""
    vocabulary: Path
    bigrams: Path
    cache: Path
    user_store: Path

    @classmethod
    def under(cls, directory: Union[str, Path]) -> "ResourcePaths":
        base = Path(directory)
        return cls(
            vocabulary=base / VOCABULARY_FILENAME,
            bigrams=base / BIGRAM_FILENAME,
            cache=base / CACHE_FILENAME,
            user_store=base / USER_STORE_FILENAME,
        )

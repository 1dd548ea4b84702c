# predictive_keyboard/core/loader.py
"""
DictionaryLoader
----------------
Builds the PrefixIndex and the global BigramTable at startup.

State machine:
    NOT_LOADED -> LOADING -> READY
                          -> DEGRADED_READY   (baseline vocabulary)

Order of attempts:
 1. cache snapshot (plain "word,frequency" lines) if present and non-empty
 2. otherwise the gzip vocabulary resource, then a fresh cache snapshot
 3. the optional gzip bigram resource ("word1,word2,frequency"), either path
 4. any unrecoverable failure: discard everything, use the built-in baseline

Each stage reports its failures as values (ResourceMissing, ParseError,
CacheCorrupt, PersistenceError) collected in LoadReport.errors, so callers can
tell why a start was degraded. load() itself never raises on bad data.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO, Iterator, List, Optional, Tuple

from predictive_keyboard.core.baseline import build_baseline
from predictive_keyboard.core.bigram_table import BigramTable
from predictive_keyboard.core.config import EngineConfig, ResourcePaths
from predictive_keyboard.core.errors import (
    CacheCorrupt,
    DictionaryError,
    ParseError,
    PersistenceError,
    ResourceMissing,
)
from predictive_keyboard.core.snapshot import DictionarySnapshot
from predictive_keyboard.core.trie import PrefixIndex
from predictive_keyboard.utils.logger_utils import Log
from predictive_keyboard.utils.model_store import atomic_write_text

logger = logging.getLogger(__name__)


class LoaderState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"
    DEGRADED_READY = "degraded_ready"


class LoadSource(str, Enum):
    CACHE = "cache"
    RESOURCES = "resources"
    BASELINE = "baseline"


@dataclass
class LoadReport:
    state: LoaderState = LoaderState.NOT_LOADED
    source: Optional[LoadSource] = None
    words: int = 0
    pairs: int = 0
    skipped: int = 0            # malformed records skipped across all sources
    errors: List[DictionaryError] = field(default_factory=list)
    cache_written: bool = False
    elapsed_ms: float = 0.0

    def errors_of(self, kind: type) -> List[DictionaryError]:
        return [e for e in self.errors if isinstance(e, kind)]

    @property
    def degraded(self) -> bool:
        return self.state is LoaderState.DEGRADED_READY


# Record parsing ------------------------------------------------------------

def _parse_frequency(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        return 1
    return value if value >= 0 else 1


def parse_word_record(line: str, lineno: int, source: str) -> Tuple[str, int]:
    """'word,frequency' -> (word, frequency). Frequency defaults to 1."""
    parts = line.split(",")
    word = parts[0].strip().lower()
    if len(parts) < 2 or not word:
        raise ParseError(source, lineno, line)
    return word, _parse_frequency(parts[1])


def parse_bigram_record(line: str, lineno: int, source: str) -> Tuple[str, str, int]:
    """'word1,word2,frequency' -> (word1, word2, frequency). Frequency defaults to 1."""
    parts = line.split(",")
    if len(parts) < 3:
        raise ParseError(source, lineno, line)
    first, second = parts[0].strip().lower(), parts[1].strip().lower()
    if not first or not second:
        raise ParseError(source, lineno, line)
    return first, second, _parse_frequency(parts[2])


class DictionaryLoader:
    """
    Usage:
        loader = DictionaryLoader(ResourcePaths.under("data"), EngineConfig())
        snapshot, report = loader.load()
    """

    def __init__(self, paths: ResourcePaths, config: Optional[EngineConfig] = None):
        self.paths = paths
        self.cfg = config or EngineConfig()
        self.state = LoaderState.NOT_LOADED
        self.report = LoadReport()

    # Public API ------------------------------------------------------------
    def load(self) -> Tuple[DictionarySnapshot, LoadReport]:
        self.state = LoaderState.LOADING
        report = LoadReport(state=LoaderState.LOADING)

        with Log.time_block("dictionary load", logger) as timer:
            try:
                snapshot, source = self._load_sources(report)
                state = LoaderState.READY
            except DictionaryError as e:
                logger.warning("dictionary load failed, using baseline: %s", e)
                report.errors.append(e)
                snapshot, source, state = self._baseline(), LoadSource.BASELINE, LoaderState.DEGRADED_READY
            except Exception as e:
                logger.exception("unexpected failure while loading dictionary")
                report.errors.append(DictionaryError(str(e)))
                snapshot, source, state = self._baseline(), LoadSource.BASELINE, LoaderState.DEGRADED_READY

            snapshot.refresh_top_words(self.cfg.top_words_count)

        report.state = state
        report.source = source
        report.words = len(snapshot.index)
        report.pairs = len(snapshot.bigrams)
        report.elapsed_ms = timer.elapsed_ms
        self.state = state
        self.report = report
        logger.info("dictionary %s from %s: %d words, %d pairs",
                    state.value, source.value, report.words, report.pairs)
        return snapshot, report

    # Stages ------------------------------------------------------------
    def _load_sources(self, report: LoadReport) -> Tuple[DictionarySnapshot, LoadSource]:
        index: Optional[PrefixIndex] = None
        source = LoadSource.CACHE
        try:
            index = self._load_cache(report)
        except CacheCorrupt as e:
            logger.warning("cache snapshot unusable, rebuilding from resources: %s", e)
            report.errors.append(e)

        if index is None:
            source = LoadSource.RESOURCES
            index = self._load_vocabulary(report)
            self._write_cache(index, report)

        bigrams = self._load_bigrams(report)
        return DictionarySnapshot(index=index, bigrams=bigrams), source

    def _load_cache(self, report: LoadReport) -> Optional[PrefixIndex]:
        """Index from the cache snapshot, None when there is no usable cache file."""
        path = self.paths.cache
        try:
            if not path.is_file() or path.stat().st_size == 0:
                logger.debug("no cache snapshot at %s", path)
                return None
        except OSError as e:
            raise CacheCorrupt(f"{path}: {e}") from e

        index = PrefixIndex(max_nodes=self.cfg.max_prefix_nodes)
        skipped_before = report.skipped
        try:
            with open(path, "r", encoding="utf-8") as fh:
                count = self._fill_index(index, fh, str(path), report)
        except (OSError, UnicodeDecodeError) as e:
            raise CacheCorrupt(f"{path}: {e}") from e

        if count == 0:
            report.skipped = skipped_before
            raise CacheCorrupt(f"{path}: no valid records")
        logger.info("loaded %d words from cache snapshot", count)
        return index

    def _load_vocabulary(self, report: LoadReport) -> PrefixIndex:
        path = self.paths.vocabulary
        if not path.is_file():
            raise ResourceMissing(str(path))

        index = PrefixIndex(max_nodes=self.cfg.max_prefix_nodes)
        try:
            with gzip.open(path, "rt", encoding="utf-8") as fh:
                count = self._fill_index(index, fh, str(path), report)
        except (OSError, EOFError, UnicodeDecodeError, zlib.error) as e:
            raise ResourceMissing(str(path), f"unreadable: {e}") from e

        if count == 0:
            raise ParseError(str(path), None)
        logger.info("loaded %d words from %s", count, path.name)
        return index

    def _load_bigrams(self, report: LoadReport) -> BigramTable:
        """Optional: a missing or broken bigram resource leaves the table empty."""
        path = self.paths.bigrams
        table = BigramTable()
        if not path.is_file():
            logger.info("no bigram resource at %s, next-word prediction uses top words", path)
            report.errors.append(ResourceMissing(str(path)))
            return table

        try:
            with gzip.open(path, "rt", encoding="utf-8") as fh:
                for lineno, line in self._lines(fh, str(path), report):
                    try:
                        first, second, freq = parse_bigram_record(line, lineno, str(path))
                    except ParseError as e:
                        report.skipped += 1
                        logger.debug("skipping %s", e)
                        continue
                    if freq > 0:
                        table.set_pair(first, second, freq)
        except (OSError, EOFError, UnicodeDecodeError, zlib.error) as e:
            logger.warning("bigram resource unreadable, ignoring it: %s", e)
            report.errors.append(ResourceMissing(str(path), f"unreadable: {e}"))
            return BigramTable()

        logger.info("loaded %d bigrams from %s", len(table), path.name)
        return table

    def _write_cache(self, index: PrefixIndex, report: LoadReport) -> None:
        path = self.paths.cache
        body = "".join(f"{w},{f}\n" for w, f in index.iter_words())
        try:
            atomic_write_text(path, body)
        except OSError as e:
            logger.warning("could not write cache snapshot %s: %s", path, e)
            report.errors.append(PersistenceError(f"{path}: {e}"))
            return
        report.cache_written = True
        logger.debug("wrote cache snapshot %s (%d words)", path, len(index))

    # Helpers ------------------------------------------------------------
    def _lines(self, fh: IO[str], source: str, report: LoadReport) -> Iterator[Tuple[int, str]]:
        """
        Non-blank lines with bounds applied: oversized lines are skipped,
        reading stops after max_records lines.
        """
        cap = self.cfg.max_line_length
        lineno = 0
        while True:
            raw = fh.readline(cap + 2)
            if not raw:
                return
            lineno += 1
            if lineno > self.cfg.max_records:
                logger.warning("%s: stopping after %d records", source, self.cfg.max_records)
                return
            line = raw.rstrip("\r\n")
            if len(line) > cap:
                # never hold more than one bounded chunk of an oversized line
                while raw and not raw.endswith("\n"):
                    raw = fh.readline(cap + 2)
                report.skipped += 1
                logger.debug("%s: line %d too long, skipped", source, lineno)
                continue
            if not line.strip():
                continue
            yield lineno, line

    def _fill_index(self, index: PrefixIndex, fh: IO[str], source: str, report: LoadReport) -> int:
        count = 0
        for lineno, line in self._lines(fh, source, report):
            try:
                word, freq = parse_word_record(line, lineno, source)
            except ParseError as e:
                report.skipped += 1
                logger.debug("skipping %s", e)
                continue
            index.insert(word, freq)
            count += 1
        return count

    def _baseline(self) -> DictionarySnapshot:
        index, bigrams = build_baseline(max_nodes=self.cfg.max_prefix_nodes)
        return DictionarySnapshot(index=index, bigrams=bigrams)


def write_resource(path: Path, lines: List[str]) -> None:
    """Write a gzip resource file ('word,frequency' or 'word1,word2,frequency' lines)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(path, "wt", encoding="utf-8") as fh:
        for line in lines:
            fh.write(line.rstrip("\n") + "\n")

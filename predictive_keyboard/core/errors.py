# errors.py
# Failure taxonomy for the dictionary core.
# None of these escape the public facade: load failures end up in a LoadReport,
# persistence failures are logged and retried on the next flush.

from __future__ import annotations
from typing import Optional


class DictionaryError(Exception):
    """Base class for every data-source failure in the core."""


class ResourceMissing(DictionaryError):
    """Canonical vocabulary or bigram source is absent or unreadable."""

    def __init__(self, resource: str, reason: str = "not found"):
        super().__init__(f"{resource}: {reason}")
        self.resource = resource
        self.reason = reason


class ParseError(DictionaryError):
    """
    A malformed record. Raised per line by the record parsers; the loader
    skips the record and keeps reading. A source where no record parses at
    all is reported as a single ParseError with line=None.
    """

    def __init__(self, source: str, line: Optional[int], record: str = ""):
        where = f"line {line}" if line is not None else "no valid records"
        super().__init__(f"{source}: {where}: {record!r}" if record else f"{source}: {where}")
        self.source = source
        self.line = line
        self.record = record


class CacheCorrupt(DictionaryError):
    """The cache snapshot exists but cannot be used."""


class PersistenceError(DictionaryError):
    """Writing the user overlay (or the cache snapshot) failed."""

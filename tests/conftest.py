# shared fixtures: temp resource files and ready-made providers

import gzip

import pytest

from predictive_keyboard.core.config import EngineConfig, ResourcePaths
from predictive_keyboard.core.dictionary import DictionaryProvider
from predictive_keyboard.utils.model_store import MemoryStore


def write_gz(path, lines):
    path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(path, "wt", encoding="utf-8") as fh:
        fh.write("\n".join(lines) + "\n")


VOCAB = [
    "the,100",
    "that,50",
    "this,30",
    "thank,40",
    "there,20",
    "hello,15",
    "help,12",
    "you,90",
]

BIGRAMS = [
    "thank,you,10",
    "thank,god,5",
    "hello,there,3",
]


@pytest.fixture
def paths(tmp_path):
    return ResourcePaths.under(tmp_path / "data")


@pytest.fixture
def resources(paths):
    write_gz(paths.vocabulary, VOCAB)
    write_gz(paths.bigrams, BIGRAMS)
    return paths


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_provider(store):
    def _make(paths, config=None, load=True):
        provider = DictionaryProvider(paths, config or EngineConfig(), store=store)
        if load:
            provider.load()
        return provider
    return _make


@pytest.fixture
def gz():
    return write_gz

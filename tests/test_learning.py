# tests/test_learning.py
import pytest

from predictive_keyboard.core.bigram_table import BigramTable
from predictive_keyboard.core.config import EngineConfig
from predictive_keyboard.core.learning import LearningService
from predictive_keyboard.core.snapshot import DictionarySnapshot, SnapshotSlot
from predictive_keyboard.core.trie import PrefixIndex
from predictive_keyboard.core.user_overlay import BIGRAMS_KEY, DICTIONARY_KEY, UserOverlay
from predictive_keyboard.utils.model_store import MemoryStore


@pytest.fixture
def slot():
    index = PrefixIndex()
    index.insert("car", 10)
    s = SnapshotSlot()
    s.publish(DictionarySnapshot(index=index, bigrams=BigramTable()))
    return s


@pytest.fixture
def service(slot, store):
    return LearningService(slot, UserOverlay(), store, EngineConfig())


def test_repeated_word_counts(service):
    for _ in range(3):
        service.learn_word("cat")
    assert service.overlay.word_frequency("cat") == 3


def test_short_words_are_ignored(service, store):
    assert service.learn_word("a") == 0
    assert service.learn_word("") == 0
    assert service.learn_word_pair("a", "cat") == 0
    assert len(service.overlay.words) == 0
    assert len(service.overlay.bigrams) == 0
    assert store.writes == 0


def test_words_are_normalised(service):
    service.learn_word("  Cat ")
    assert service.overlay.word_frequency("cat") == 1


def test_delimiter_words_are_refused(service):
    assert service.learn_word("a:b") == 0
    assert service.learn_word("x|y") == 0
    assert service.learn_word_pair("cat", "do:g") == 0


def test_learning_boosts_index(service, slot):
    service.learn_word("cat")
    service.learn_word("cat")
    assert slot.current().index.find("cat") == ("cat", 5)     # int(2 * 2.5)


def test_learning_before_ready_only_touches_overlay(store):
    service = LearningService(SnapshotSlot(), UserOverlay(), store)
    assert service.learn_word("cat") == 1
    assert service.overlay.word_frequency("cat") == 1


def test_new_word_is_flushed_then_every_fifth_update(service, store):
    service.learn_word("cat")
    assert store.writes == 1
    assert store.records[DICTIONARY_KEY] == "cat:1"
    for _ in range(4):
        service.learn_word("cat")
    assert store.writes == 1
    service.learn_word("cat")
    assert store.writes == 2
    assert store.records[DICTIONARY_KEY] == "cat:6"
    for _ in range(5):
        service.learn_word("cat")
    assert store.writes == 3


def test_new_pair_is_flushed_then_every_third_update(service, store):
    service.learn_word_pair("thank", "you")
    assert store.writes == 1
    assert store.records[BIGRAMS_KEY] == "thank:you:1"
    service.learn_word_pair("thank", "you")
    service.learn_word_pair("thank", "you")
    assert store.writes == 1
    assert service.learn_word_pair("thank", "you") == 4
    assert store.writes == 2
    assert store.records[BIGRAMS_KEY] == "thank:you:4"


def test_flush_intervals_are_configurable(slot, store):
    service = LearningService(slot, UserOverlay(), store,
                              EngineConfig(word_flush_interval=1, pair_flush_interval=1))
    for _ in range(2):
        service.learn_word("cat")
        service.learn_word_pair("the", "cat")
    assert store.writes == 4


def test_failed_flush_keeps_overlay_and_retries(service, store):
    store.fail_writes = True
    for _ in range(5):
        service.learn_word("cat")
    assert service.failed_flushes == 1
    assert service.overlay.word_frequency("cat") == 5
    assert store.writes == 0

    store.fail_writes = False
    service.learn_word("cat")
    assert store.writes == 1
    assert store.records[DICTIONARY_KEY] == "cat:6"


def test_flush_writes_both_records(service, store):
    service.learn_word("cat")
    service.learn_word_pair("the", "cat")
    assert service.flush() is True
    assert set(store.records) == {DICTIONARY_KEY, BIGRAMS_KEY}


def test_background_flush_goes_through_scheduler(slot):
    store = MemoryStore()
    scheduled = []
    service = LearningService(slot, UserOverlay(), store,
                              EngineConfig(background_flush=True, word_flush_interval=1),
                              scheduler=scheduled.append)
    service.learn_word("cat")
    assert store.writes == 0
    assert len(scheduled) == 1
    assert scheduled[0]() is True
    assert store.writes == 1

# tests/test_dictionary_provider.py
from predictive_keyboard.core.config import EngineConfig
from predictive_keyboard.core.dictionary import DictionaryProvider
from predictive_keyboard.core.loader import LoaderState
from predictive_keyboard.core.user_overlay import DICTIONARY_KEY
from predictive_keyboard.utils.model_store import JsonFileStore, MemoryStore


def test_queries_before_load_are_empty(resources, make_provider):
    provider = make_provider(resources, load=False)
    assert provider.state.value is LoaderState.NOT_LOADED
    assert provider.get_suggestions("th") == []
    assert provider.get_next_word_suggestions("thank") == []
    assert provider.get_contextual_suggestions([], "") == []


def test_load_from_resources(resources, make_provider):
    provider = make_provider(resources)
    assert provider.ready
    assert provider.state.value is LoaderState.READY
    assert provider.is_loading.value is False
    assert provider.dictionary_size.value == 8
    assert provider.get_suggestions("th", 3) == ["the", "that", "thank"]
    assert provider.get_next_word_suggestions("thank", 1) == ["you"]


def test_missing_resources_degrade_to_baseline(paths, make_provider):
    provider = make_provider(paths)
    assert provider.state.value is LoaderState.DEGRADED_READY
    assert provider.is_loading.value is False
    assert provider.dictionary_size.value == 80
    assert provider.report.degraded
    assert provider.get_next_word_suggestions("thank", 1) == ["you"]


def test_second_load_is_a_noop(resources, make_provider):
    provider = make_provider(resources)
    first = provider.report
    assert provider.load() is first


def test_load_async_after_load_clears_loading_flag(resources, make_provider):
    provider = make_provider(resources)
    seen = []
    provider.is_loading.subscribe(seen.append)
    provider.load_async().result(timeout=10)
    assert provider.is_loading.value is False
    assert seen == [True, False]
    provider.close()


def test_queued_async_loads_clear_loading_flag(resources, make_provider):
    provider = make_provider(resources, load=False)
    first = provider.load_async()
    second = provider.load_async()
    assert second.result(timeout=10) is first.result(timeout=10)
    assert provider.is_loading.value is False
    assert provider.state.value is LoaderState.READY
    provider.close()


def test_load_async_and_wait(resources, make_provider):
    provider = make_provider(resources, load=False)
    future = provider.load_async()
    report = future.result(timeout=10)
    assert provider.wait_until_ready(timeout=10)
    assert report.state is LoaderState.READY
    assert provider.get_suggestions("he", 2) == ["hello", "help"]
    provider.close()


def test_loading_observers(resources, make_provider):
    provider = make_provider(resources, load=False)
    seen, sizes, states = [], [], []
    provider.is_loading.subscribe(seen.append)
    provider.dictionary_size.subscribe(sizes.append)
    provider.state.subscribe(states.append)
    provider.load()
    assert seen == [True, False]
    assert sizes == [8]
    assert states == [LoaderState.LOADING, LoaderState.READY]


def test_unsubscribe_stops_notifications(resources, make_provider):
    provider = make_provider(resources, load=False)
    seen = []
    unsubscribe = provider.is_loading.subscribe(seen.append)
    unsubscribe()
    provider.load()
    assert seen == []


def test_learning_new_word_grows_dictionary(resources, make_provider):
    provider = make_provider(resources)
    assert provider.learn_word("thesaurus") == 1
    assert provider.dictionary_size.value == 9
    assert "thesaurus" in provider.get_suggestions("thes")


def test_learned_word_outranks_static_vocabulary(resources, make_provider):
    provider = make_provider(resources)
    for _ in range(30):
        provider.learn_word("thorn")
    # index boost int(30 * 2.5) = 75 plus overlay 30 * 2.5 = 75
    assert provider.get_suggestions("th", 1) == ["thorn"]


def test_user_pairs_take_priority(resources, make_provider):
    provider = make_provider(resources)
    provider.learn_word_pair("thank", "goodness")
    assert provider.get_next_word_suggestions("thank") == ["goodness"]


def test_overlay_is_restored_from_store(resources):
    store = MemoryStore({DICTIONARY_KEY: "thorn:50"})
    provider = DictionaryProvider(resources, EngineConfig(), store=store)
    provider.load()
    assert provider.overlay.word_frequency("thorn") == 50
    assert provider.get_suggestions("th", 1) == ["thorn"]


def test_json_store_survives_restart(resources):
    first = DictionaryProvider(resources)
    first.load()
    for _ in range(3):
        first.learn_word("zebra")
    first.learn_word_pair("the", "zebra")
    first.close()
    assert resources.user_store.exists()

    second = DictionaryProvider(resources)
    assert second.overlay.word_frequency("zebra") == 3
    assert second.overlay.pair_frequency("the", "zebra") == 1
    assert isinstance(second.store, JsonFileStore)


def test_close_flushes(resources, make_provider, store):
    provider = make_provider(resources)
    provider.learn_word("cat")
    provider.learn_word("cat")
    assert store.writes == 1
    provider.close()
    assert store.writes == 2
    assert store.records[DICTIONARY_KEY] == "cat:2"


def test_context_manager_closes(resources, store):
    with DictionaryProvider(resources, store=store) as provider:
        provider.load()
        provider.learn_word("cat")
        provider.learn_word("cat")
    assert store.records[DICTIONARY_KEY] == "cat:2"


def test_reset_user_data(resources, make_provider, store):
    provider = make_provider(resources)
    provider.learn_word("cat")
    provider.learn_word_pair("the", "cat")
    assert provider.reset_user_data()
    assert provider.overlay.word_frequency("cat") == 0
    assert store.records[DICTIONARY_KEY] == ""


def test_stats(resources, make_provider):
    provider = make_provider(resources)
    provider.learn_word("cat")
    stats = provider.stats()
    assert stats["state"] == "ready"
    assert stats["source"] == "resources"
    assert stats["is_loading"] is False
    assert stats["dictionary_size"] == 9
    assert stats["global_pairs"] == 3
    assert stats["user_words"] == 1
    assert stats["user_pairs"] == 0
    assert stats["top_words"] == 8


def test_background_flush(resources, store):
    provider = DictionaryProvider(resources, EngineConfig(background_flush=True, word_flush_interval=1),
                                  store=store)
    provider.load()
    provider.learn_word("cat")
    provider.close()
    assert store.writes >= 1
    assert store.records[DICTIONARY_KEY] == "cat:1"

# tests/test_user_overlay.py
from predictive_keyboard.core.user_overlay import (
    BIGRAMS_KEY,
    DICTIONARY_KEY,
    UserOverlay,
    is_storable,
)


def _filled():
    ov = UserOverlay()
    for _ in range(3):
        ov.add_word("cat")
    ov.add_word("dog")
    ov.add_pair("the", "cat")
    ov.add_pair("the", "cat")
    ov.add_pair("good", "dog")
    return ov


def test_encode_format():
    records = _filled().encode_records()
    assert records[DICTIONARY_KEY] == "cat:3|dog:1"
    assert records[BIGRAMS_KEY] == "the:cat:2|good:dog:1"


def test_round_trip_reproduces_sets():
    original = _filled()
    restored = UserOverlay()
    restored.load_records(original.encode_records())

    assert dict(restored.words) == dict(original.words)
    assert sorted(restored.bigrams.pairs()) == sorted(original.bigrams.pairs())


def test_empty_overlay_round_trip():
    restored = UserOverlay()
    restored.load_records(UserOverlay().encode_records())
    assert not restored.words
    assert len(restored.bigrams) == 0


def test_load_skips_malformed_entries():
    ov = UserOverlay()
    ov.load_records({
        DICTIONARY_KEY: "cat:2|broken|dog:x|:4",
        BIGRAMS_KEY: "a1:b1:3|only:two|x:y:z:w",
    })
    assert dict(ov.words) == {"cat": 2, "dog": 1}
    assert sorted(ov.bigrams.pairs()) == [("a1", "b1", 3)]


def test_load_with_missing_keys():
    ov = UserOverlay()
    ov.load_records({})
    assert not ov.words


def test_words_with_prefix():
    ov = _filled()
    assert sorted(ov.words_with_prefix("ca")) == [("cat", 3)]


def test_clear():
    ov = _filled()
    ov.clear()
    assert not ov.words and len(ov.bigrams) == 0


def test_delimiters_are_not_storable():
    assert is_storable("word")
    assert not is_storable("a:b")
    assert not is_storable("a|b")
    assert not is_storable("")

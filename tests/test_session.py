# tests/test_session.py
import pytest

from predictive_keyboard.session import BACKSPACE, TypingSession


@pytest.fixture
def session(resources, make_provider):
    return TypingSession(make_provider(resources))


def test_typing_a_prefix_shows_completions(session):
    assert session.type_text("th") == ["the", "that", "thank"]
    assert session.current_word == "Th"


def test_space_completes_word_and_predicts_next(session):
    session.type_text("thank ")
    assert session.current_word == ""
    assert list(session.previous_words) == ["thank"]
    assert session.suggestions == ["you", "god"]
    assert session.provider.overlay.word_frequency("thank") == 1


def test_pairs_are_learned_between_words(session):
    session.type_text("hello there ")
    assert session.provider.overlay.pair_frequency("hello", "there") == 1


def test_sentence_end_clears_context(session):
    session.type_text("hello there.")
    assert list(session.previous_words) == []
    assert session.suggestions == []
    assert session.provider.overlay.word_frequency("there") == 1


def test_comma_keeps_context(session):
    session.type_text("hello,")
    assert list(session.previous_words) == ["hello"]
    assert session.suggestions == []


def test_single_letters_are_not_learned(session):
    session.type_text("a ")
    assert session.provider.overlay.word_frequency("a") == 0
    assert list(session.previous_words) == []


def test_backspace_edits_current_word(session):
    session.type_text("thx")
    session.process_text(BACKSPACE)
    assert session.current_word == "Th"
    assert session.suggestions == ["the", "that", "thank"]
    session.process_text(BACKSPACE)
    session.process_text(BACKSPACE)
    assert session.current_word == ""
    assert session.suggestions == []


def test_backspace_on_empty_word_drops_context(session):
    session.type_text("hello thank ")
    session.process_text(BACKSPACE)
    assert list(session.previous_words) == ["hello"]
    # the user pair hello -> thank outranks the global hello -> there
    assert session.suggestions == ["thank"]


def test_select_suggestion_commits_word(session):
    session.type_text("than")
    session.select_suggestion("thank")
    assert session.current_word == ""
    assert list(session.previous_words) == ["thank"]
    assert session.suggestions == ["you", "god"]
    assert session.recent_words() == ["thank"]


def test_context_window_is_bounded(resources, make_provider):
    session = TypingSession(make_provider(resources), context_window=2)
    session.type_text("one two three ")
    assert list(session.previous_words) == ["two", "three"]


def test_recent_words_newest_first_without_duplicates(session):
    session.type_text("hello there hello ")
    assert session.recent_words() == ["hello", "there"]


def test_reset_current_word(session):
    session.type_text("th")
    session.reset_current_word()
    assert session.current_word == ""
    assert session.suggestions == []


def test_limit_is_passed_through(resources, make_provider):
    session = TypingSession(make_provider(resources), limit=1)
    assert session.type_text("th") == ["the"]


def test_first_letter_of_sentence_is_capitalized(session):
    session.type_text("hello the")
    assert session.current_word == "the"
    session.type_text("re. so")
    assert session.current_word == "So"
    assert session.provider.overlay.word_frequency("hello") == 1


def test_capitalization_can_be_disabled(resources, make_provider):
    session = TypingSession(make_provider(resources), auto_capitalize=False)
    session.type_text("th")
    assert session.current_word == "th"
    assert session.suggestions == ["the", "that", "thank"]


def test_picked_first_word_ends_sentence_start(session):
    session.select_suggestion("hello")
    session.type_text("th")
    assert session.current_word == "th"

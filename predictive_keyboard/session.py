# session.py
# Short-term typing session: turns key text into dictionary calls.
# DictionaryProvider is long-term (vocabulary + learned counts), TypingSession
# is the current word, the last few completed words and the suggestion bar.
# ----------------------------------------------------------------------

from __future__ import annotations
import re
from collections import deque
from typing import Deque, List, Optional

from predictive_keyboard.core.dictionary import DictionaryProvider

BACKSPACE = "\b"
WORD_BREAK_RE = re.compile(r"[.,!?;:]")
SENTENCE_END_RE = re.compile(r"[.!?]")


class TypingSession:
    """
    Session-level state for one text field.

    Responsibilities:
        - Accumulate the word being typed
        - Learn words and word pairs at word boundaries
        - Keep a short window of completed words for next-word context
        - Refresh suggestions after every key
        - Capitalize the first letter typed after a sentence end
    """

    def __init__(self, provider: DictionaryProvider,
                 context_window: int = 3,
                 max_recent: int = 50,
                 limit: Optional[int] = None,
                 auto_capitalize: bool = True):
        self.provider = provider
        self.limit = limit
        self.auto_capitalize = auto_capitalize
        self.start_of_sentence = True
        self.current_word = ""
        self.previous_words: Deque[str] = deque(maxlen=max(1, context_window))
        self.recent: Deque[str] = deque(maxlen=max(1, max_recent))
        self.suggestions: List[str] = []

    # Key handling -----------------------------------------------------------
    def process_text(self, text: str) -> List[str]:
        """Feed one key's worth of text; returns the refreshed suggestions."""
        if text == " " or WORD_BREAK_RE.fullmatch(text):
            self._complete_word()
            if SENTENCE_END_RE.fullmatch(text):
                self.start_of_sentence = True
                self.previous_words.clear()
            if text == " ":
                self.suggestions = self._contextual("")
            else:
                self.suggestions = []
        elif text == BACKSPACE:
            if self.current_word:
                self.current_word = self.current_word[:-1]
                self._refresh()
            else:
                if self.previous_words:
                    self.previous_words.pop()
                self.suggestions = self._contextual("")
        elif text:
            if self.start_of_sentence and not self.current_word:
                # first letter of a sentence
                self.start_of_sentence = False
                if self.auto_capitalize:
                    text = text.upper()
            self.current_word += text
            self._refresh()
        return self.suggestions

    def type_text(self, text: str) -> List[str]:
        """Feed a string one character at a time."""
        for ch in text:
            self.process_text(ch)
        return self.suggestions

    def select_suggestion(self, word: str) -> List[str]:
        """Commit a picked suggestion as the current word and move to the next one."""
        self.current_word = ""
        self.start_of_sentence = False
        self._commit(word)
        self.suggestions = self._contextual("")
        return self.suggestions

    def reset_current_word(self) -> None:
        self.current_word = ""
        self.suggestions = []

    def recent_words(self, limit: int = 3) -> List[str]:
        return list(self.recent)[:limit]

    # Internals -----------------------------------------------------------
    def _complete_word(self) -> None:
        word, self.current_word = self.current_word, ""
        if len(word) > 1:
            self._commit(word)

    def _commit(self, word: str) -> None:
        # context and history are kept in dictionary case
        word = word.lower()
        self.provider.learn_word(word)
        if self.previous_words:
            self.provider.learn_word_pair(self.previous_words[-1], word)
        self.previous_words.append(word)
        self._remember(word)

    def _remember(self, word: str) -> None:
        if not word.strip():
            return
        if word in self.recent:
            self.recent.remove(word)
        self.recent.appendleft(word)

    def _contextual(self, prefix: str) -> List[str]:
        return self.provider.get_contextual_suggestions(list(self.previous_words), prefix, self.limit)

    def _refresh(self) -> None:
        if self.current_word:
            self.suggestions = self._contextual(self.current_word)
        else:
            self.suggestions = []

"""Predictive text engine for a soft keyboard: prefix completion, next-word
prediction and on-device learning."""

from predictive_keyboard.core import (
    DictionaryProvider,
    EngineConfig,
    LoaderState,
    ResourcePaths,
)
from predictive_keyboard.session import TypingSession

__all__ = ["DictionaryProvider", "EngineConfig", "LoaderState", "ResourcePaths", "TypingSession"]

__version__ = "0.1.0"

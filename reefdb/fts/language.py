"""Language-specific text handling: stop words, stemming and normalisation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

from .stemmer import stem as _english_stem

ENGLISH_STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "were", "will", "with",
    }
)


@dataclass
class LanguageConfig:
    """Settings for a language processor."""

    stop_words: set[str] = field(default_factory=set)
    language_code: str = "en"
    enable_stemming: bool = True
    enable_stop_words: bool = True


class LanguageProcessor(ABC):
    """Turns raw words into normalised search terms for one language."""

    config: LanguageConfig

    @abstractmethod
    def stem(self, word: str) -> str:
        """Reduce a word to its stem."""

    @abstractmethod
    def is_stop_word(self, word: str) -> bool:
        """Tell whether a word is ignored when indexing."""

    @abstractmethod
    def normalize(self, text: str) -> str:
        """Lower-case text and reduce it to single-space separated words."""

    @property
    def stop_words(self) -> set[str]:
        return self.config.stop_words


class EnglishProcessor(LanguageProcessor):
    """Language processor for English text."""

    def __init__(self, config: LanguageConfig | None = None) -> None:
        if config is None:
            config = LanguageConfig()
        config = replace(config, stop_words=set(config.stop_words))
        if not config.stop_words:
            config.stop_words = set(ENGLISH_STOP_WORDS)
        self.config = config

    def __repr__(self) -> str:
        return f"EnglishProcessor(config={self.config!r})"

    def stem(self, word: str) -> str:
        if self.config.enable_stemming:
            return _english_stem(word)
        return word

    def is_stop_word(self, word: str) -> bool:
        if not self.config.enable_stop_words:
            return False
        return word.lower() in self.config.stop_words

    def normalize(self, text: str) -> str:
        cleaned = "".join(ch if ch.isalnum() else " " for ch in text.lower())
        return " ".join(cleaned.split())
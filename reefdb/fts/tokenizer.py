"""Splitting text into word tokens."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from itertools import groupby


class Tokenizer(ABC):
    """Splits text into tokens."""

    @abstractmethod
    def tokenize(self, text: str) -> Iterator[str]:
        """Yield the tokens of ``text`` in order."""


class DefaultTokenizer(Tokenizer):
    """Yields maximal runs of alphanumeric characters."""

    def __repr__(self) -> str:
        return "DefaultTokenizer()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DefaultTokenizer)

    def __hash__(self) -> int:
        return hash(DefaultTokenizer)

    def tokenize(self, text: str) -> Iterator[str]:
        for is_word, chars in groupby(text, key=str.isalnum):
            if is_word:
                yield "".join(chars)
"""Core full-text search value types: tokens, vectors and queries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum


class TextWeight(Enum):
    """Weight category attached to a document's tokens."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    def value_f32(self) -> float:
        return _WEIGHT_VALUES[self]


_WEIGHT_VALUES = {
    TextWeight.A: 1.0,
    TextWeight.B: 0.4,
    TextWeight.C: 0.2,
    TextWeight.D: 0.1,
}


class TokenType(Enum):
    WORD = "word"
    NOT_WORD = "not_word"
    NUMBER = "number"
    EMAIL = "email"
    URL = "url"
    SYMBOL = "symbol"


class OperatorKind(Enum):
    AND = "and"
    OR = "or"
    NOT = "not"
    PHRASE = "phrase"
    PROXIMITY = "proximity"


@dataclass
class Token:
    """A processed term with its 1-based position and weight."""

    text: str
    position: int
    weight: float = 1.0
    token_type: TokenType = TokenType.WORD


@dataclass
class QueryOperator:
    """An operator joining query terms; phrase and proximity carry tokens."""

    kind: OperatorKind
    tokens: list[Token] = field(default_factory=list)
    distance: int = 0


@dataclass
class TsVector:
    """A processed document: its tokens in order."""

    tokens: list[Token] = field(default_factory=list)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> TsVector:
        return cls(list(tokens))

    @property
    def positions(self) -> list[int]:
        return [t.position for t in self.tokens]

    @property
    def weights(self) -> list[float]:
        return [t.weight for t in self.tokens]

    def set_weight(self, weight: TextWeight) -> None:
        """Give every token the value of ``weight``."""
        value = weight.value_f32()
        for token in self.tokens:
            token.weight = value

    def concatenate(self, other: TsVector) -> None:
        """Append copies of ``other``'s tokens, shifting their positions."""
        offset = len(self.tokens)
        self.tokens.extend(
            replace(token, position=token.position + offset) for token in other.tokens
        )

    def __str__(self) -> str:
        return " ".join(f"{t.text}:{t.position}" for t in self.tokens)


@dataclass
class ProcessedDocument:
    tokens: list[Token]
    vector: TsVector


@dataclass
class ProcessedQuery:
    tokens: list[Token] = field(default_factory=list)
    operators: list[QueryOperator] = field(default_factory=list)


@dataclass
class TSQuery:
    """A search query value as stored and passed between functions."""

    tokens: list[Token] = field(default_factory=list)
    operators: list[QueryOperator] = field(default_factory=list)

    @classmethod
    def from_processed(cls, query: ProcessedQuery) -> TSQuery:
        return cls(list(query.tokens), list(query.operators))

    def to_processed(self) -> ProcessedQuery:
        return ProcessedQuery(list(self.tokens), list(self.operators))

    def __str__(self) -> str:
        return " ".join(t.text for t in self.tokens)
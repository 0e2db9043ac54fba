"""Turning raw documents and search strings into processed vectors and queries."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from .language import EnglishProcessor, LanguageProcessor
from .text_processor import (
    OperatorKind,
    ProcessedQuery,
    QueryOperator,
    Token,
    TokenType,
    TsVector,
)

_QUERY_PIECE = re.compile(r"[&|!()]|[^\s&|!()]+")
_AND_WORDS = frozenset({"&", "AND"})
_OR_WORDS = frozenset({"|", "OR"})
_NOT_WORDS = frozenset({"!", "NOT"})
_GROUPING = frozenset({"(", ")"})


class _Connective(Enum):
    AND = "and"
    OR = "or"
    NOT = "not"


@dataclass(frozen=True)
class _Term:
    text: str
    negated: bool = False


@dataclass
class _ParsedQuery:
    terms: list[_Term] = field(default_factory=list)
    connectives: list[_Connective] = field(default_factory=list)


def _pieces(text: str) -> Iterator[str]:
    return (m.group(0) for m in _QUERY_PIECE.finditer(text))


def _parse_query(text: str) -> _ParsedQuery:
    """Split a search string into terms and the connectives between them."""
    parsed = _ParsedQuery()
    negate_next = False
    for piece in _pieces(text):
        if piece in _AND_WORDS:
            parsed.connectives.append(_Connective.AND)
        elif piece in _OR_WORDS:
            parsed.connectives.append(_Connective.OR)
        elif piece in _NOT_WORDS:
            parsed.connectives.append(_Connective.NOT)
            negate_next = True
        elif piece in _GROUPING:
            continue
        else:
            parsed.terms.append(_Term(piece, negate_next))
            negate_next = False
    return parsed


class DefaultTextProcessor:
    """Processes text with per-language stemming and stop-word removal."""

    def __init__(
        self,
        language_processors: Mapping[str, LanguageProcessor] | None = None,
        default_language: str = "english",
    ) -> None:
        if language_processors is None:
            language_processors = {"english": EnglishProcessor()}
        self.language_processors: dict[str, LanguageProcessor] = dict(language_processors)
        if default_language not in self.language_processors:
            raise ValueError(f"no processor for default language: {default_language}")
        self.default_language = default_language

    def __repr__(self) -> str:
        return (
            f"DefaultTextProcessor(default_language={self.default_language!r}, "
            f"language_processors=<{len(self.language_processors)} processors>)"
        )

    def language_processor(self, language: str | None = None) -> LanguageProcessor:
        """Processor for ``language``, falling back to the default language."""
        name = language if language is not None else self.default_language
        processor = self.language_processors.get(name)
        if processor is None:
            processor = self.language_processors[self.default_language]
        return processor

    def process_document(self, text: str, language: str | None = None) -> TsVector:
        """Normalise, filter and stem a document into a vector of positioned tokens."""
        processor = self.language_processor(language)
        words = (
            word
            for word in processor.normalize(text).split()
            if not processor.is_stop_word(word)
        )
        return TsVector.from_tokens(
            Token(processor.stem(word), position)
            for position, word in enumerate(words, start=1)
        )

    def process_query(self, text: str, language: str | None = None) -> ProcessedQuery:
        """Turn a search string into query tokens and the operators joining them."""
        processor = self.language_processor(language)
        is_phrase = len(text) >= 2 and text.startswith('"') and text.endswith('"')
        body = text[1:-1] if is_phrase else text
        parsed = _parse_query(body)

        if not parsed.terms and text:
            terms = [_Term(word) for word in text.split()]
        else:
            terms = parsed.terms

        tokens: list[Token] = []
        for term in terms:
            word = term.text.lower()
            if processor.is_stop_word(word):
                continue
            tokens.append(
                Token(
                    processor.stem(word),
                    len(tokens) + 1,
                    1.0,
                    TokenType.NOT_WORD if term.negated else TokenType.WORD,
                )
            )

        if is_phrase:
            phrase = QueryOperator(OperatorKind.PHRASE, [replace(t) for t in tokens])
            return ProcessedQuery(tokens, [phrase])

        operators: list[QueryOperator] = []
        for connective in parsed.connectives:
            if connective is _Connective.AND:
                operators.append(QueryOperator(OperatorKind.AND))
            elif connective is _Connective.OR:
                operators.append(QueryOperator(OperatorKind.OR))
            elif tokens:
                # Negation lives on the token type; it joins with AND.
                operators.append(QueryOperator(OperatorKind.AND))

        if not operators and len(tokens) > 1:
            operators = [QueryOperator(OperatorKind.AND) for _ in range(len(tokens) - 1)]

        return ProcessedQuery(tokens, operators)
"""Relevance ranking of processed documents against processed queries."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag

from .text_processor import ProcessedQuery, TsVector

_BM25_POSITION_WEIGHTS = {1: 256.0, 2: 128.0, 3: 64.0, 4: 32.0, 5: 16.0, 6: 8.0}
_LEXEME_POSITION_BOOSTS = {1: 512.0, 2: 256.0, 3: 128.0, 4: 64.0, 5: 32.0, 6: 16.0}
_MAX_POSITION_BOOST = 256.0


def _fdiv(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics instead of raising on a zero divisor."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _ln(value: float) -> float:
    """Natural logarithm with IEEE results for zero and negative input."""
    if value == 0:
        return -math.inf
    if value < 0:
        return math.nan
    return math.log(value)


class RankNormalization(IntFlag):
    """Document-length normalisations; may be combined with ``|``."""

    NONE = 0
    LOG_LENGTH = 1
    LENGTH = 2
    MEAN_HARMONIC = 4
    UNIQUE_WORD_COUNT = 8
    LOG_UNIQUE_WORD_COUNT = 16
    UNIQUE_WORD_COUNT_PLUS_ONE = 32


class LexemeWeight(IntEnum):
    """Weight categories for lexemes, indexing ``RankingConfig.weights``."""

    D = 0
    C = 1
    B = 2
    A = 3

    @classmethod
    def from_position(cls, position: int) -> LexemeWeight:
        """Category for a 0-based word position."""
        if position < 0:
            raise ValueError(f"position must not be negative: {position}")
        if position <= 10:
            return cls.A
        if position <= 25:
            return cls.B
        if position <= 50:
            return cls.C
        return cls.D


@dataclass(frozen=True)
class BM25Params:
    """BM25 term-frequency saturation ``k1`` and length normalisation ``b``."""

    k1: float = 1.5
    b: float = 0.75


class TfIdfNormalization(Enum):
    NONE = "none"
    L1 = "l1"
    L2 = "l2"
    MAX = "max"
    LOG = "log"
    DOUBLE_NORM_K = "double_norm_k"


@dataclass(frozen=True)
class TfIdfParams:
    """TF-IDF settings; ``double_norm_k`` is used with ``DOUBLE_NORM_K``."""

    tf_normalization: TfIdfNormalization = TfIdfNormalization.LOG
    doc_normalization: TfIdfNormalization = TfIdfNormalization.L2
    use_smoothed_idf: bool = True
    use_length_penalty: bool = True
    double_norm_k: float = 0.5


@dataclass
class RankingConfig:
    """Options shared by the ranking systems."""

    weights: tuple[float, float, float, float] = (0.1, 0.2, 0.4, 1.0)
    normalization: int = RankNormalization.NONE
    use_idf: bool = True
    use_lexeme_weights: bool = True
    bm25_params: BM25Params | None = None


@dataclass
class CollectionStats:
    """Corpus statistics used for inverse document frequency."""

    total_docs: int = 0
    term_doc_frequencies: dict[str, int] = field(default_factory=dict)


def term_occurrences(doc: TsVector, term: str) -> list[tuple[int, float]]:
    """Positions and weights of every token in ``doc`` equal to ``term``."""
    return [(t.position, t.weight) for t in doc.tokens if t.text == term]


def unique_term_count(doc: TsVector) -> int:
    """Number of distinct token texts in ``doc``."""
    return len({t.text for t in doc.tokens})


def lexeme_weight(position: int, config: RankingConfig) -> float:
    """Weight of a token at a 1-based position, boosting early positions."""
    if not config.use_lexeme_weights:
        return 1.0
    if position < 1:
        raise ValueError(f"positions are 1-based, got {position}")
    category_weight = float(config.weights[LexemeWeight.from_position(position - 1)])
    boost = _LEXEME_POSITION_BOOSTS.get(position, 1.0)
    return category_weight * boost * (2.0 + 1.0 / position)


def cover_density(doc: TsVector, query: ProcessedQuery) -> float:
    """Score how closely and completely the query terms cluster in ``doc``."""
    if len(query.tokens) < 2:
        return 1.0
    query_terms = {qt.text for qt in query.tokens}
    positions = sorted(t.position for t in doc.tokens if t.text in query_terms)
    if len(positions) < 2:
        return 0.0

    span = positions[-1] - positions[0]
    min_span = span + 1
    proximity = 1.0 / float(min_span) ** 3
    density = (len(positions) / len(query.tokens)) ** 2
    avg_distance = span / (len(positions) - 1)
    combined = proximity * density * (1.0 + _fdiv(1.0, avg_distance**2))
    return combined * 128.0


def _combine_with_cover_density(base_score: float, density: float) -> float:
    if base_score > 0.0 and density > 0.0:
        return base_score * (1.0 + density)
    return base_score


class RankingSystem(ABC):
    """Scores a document against a query."""

    @abstractmethod
    def rank(self, doc: TsVector, query: ProcessedQuery, config: RankingConfig) -> float:
        """Standard relevance score."""

    @abstractmethod
    def rank_cd(self, doc: TsVector, query: ProcessedQuery, config: RankingConfig) -> float:
        """Relevance score boosted by cover density."""


@dataclass
class BM25Ranking(RankingSystem):
    """BM25 ranking, falling back to weighted TF-IDF without BM25 parameters."""

    collection_stats: CollectionStats | None = field(default_factory=CollectionStats)
    avg_doc_length: float = 0.0

    @classmethod
    def with_collection_stats(
        cls,
        total_docs: int,
        term_doc_frequencies: Mapping[str, int],
        avg_doc_length: float,
    ) -> BM25Ranking:
        stats = CollectionStats(total_docs, dict(term_doc_frequencies))
        return cls(stats, avg_doc_length)

    def _idf(self, term: str) -> float:
        if self.collection_stats is None:
            return 1.0
        stats = self.collection_stats
        doc_freq = stats.term_doc_frequencies.get(term, 1)
        return math.log(1.0 + (stats.total_docs - doc_freq + 0.5) / (doc_freq + 0.5))

    def _bm25_score(self, doc: TsVector, query: ProcessedQuery, params: BM25Params) -> float:
        doc_length = float(len(doc.tokens))
        score = 0.0
        for query_token in query.tokens:
            occurrences = term_occurrences(doc, query_token.text)
            if not occurrences:
                continue
            term_freq = float(len(occurrences))
            idf = self._idf(query_token.text)
            numerator = term_freq * (params.k1 + 1.0)
            length_norm = 1.0 - params.b + params.b * (doc_length / max(self.avg_doc_length, 1.0))
            denominator = term_freq + params.k1 * length_norm
            term_score = idf * _fdiv(numerator, denominator)
            for position, weight in occurrences:
                position_weight = _BM25_POSITION_WEIGHTS.get(position, 1.0)
                score += term_score * position_weight * weight
        return score

    def _weighted_tf_score(
        self, doc: TsVector, query: ProcessedQuery, config: RankingConfig
    ) -> float:
        score = 0.0
        for query_token in query.tokens:
            occurrences = term_occurrences(doc, query_token.text)
            if not occurrences:
                continue
            tf = float(len(occurrences))
            idf = self._idf(query_token.text) if config.use_idf else 1.0
            for position, weight in occurrences:
                lw = lexeme_weight(position, config) if config.use_lexeme_weights else 1.0
                score += tf * idf * weight * lw
        return score

    @staticmethod
    def _apply_normalization(score: float, doc: TsVector, config: RankingConfig) -> float:
        flags = int(config.normalization)
        doc_length = len(doc.tokens)
        unique_terms = unique_term_count(doc)
        normalized = score

        if flags & RankNormalization.LOG_LENGTH:
            normalized = _fdiv(normalized, 1.0 + _ln(doc_length))
        if flags & RankNormalization.LENGTH:
            normalized = _fdiv(normalized, float(doc_length))
        if flags & RankNormalization.UNIQUE_WORD_COUNT:
            normalized = _fdiv(normalized, float(unique_terms))
        if flags & RankNormalization.LOG_UNIQUE_WORD_COUNT:
            normalized = _fdiv(normalized, 1.0 + _ln(unique_terms))
        if flags & RankNormalization.UNIQUE_WORD_COUNT_PLUS_ONE:
            normalized = _fdiv(normalized, float(unique_terms + 1))
        if flags & RankNormalization.MEAN_HARMONIC and doc.tokens:
            reciprocals = sum(_fdiv(1.0, float(t.position)) for t in doc.tokens)
            normalized = _fdiv(normalized, _fdiv(float(len(doc.tokens)), reciprocals))
        return normalized

    def rank(self, doc: TsVector, query: ProcessedQuery, config: RankingConfig) -> float:
        if config.bm25_params is not None:
            raw = self._bm25_score(doc, query, config.bm25_params)
            normalized = self._apply_normalization(raw, doc, config)
            if config.use_lexeme_weights:
                return normalized
            return normalized / _MAX_POSITION_BOOST
        score = self._weighted_tf_score(doc, query, config)
        return self._apply_normalization(score, doc, config)

    def rank_cd(self, doc: TsVector, query: ProcessedQuery, config: RankingConfig) -> float:
        return _combine_with_cover_density(self.rank(doc, query, config), cover_density(doc, query))
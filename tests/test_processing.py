import pytest

from reefdb.fts.language import EnglishProcessor, LanguageConfig
from reefdb.fts.processing import DefaultTextProcessor
from reefdb.fts.text_processor import OperatorKind, TokenType


@pytest.fixture
def processor():
    return DefaultTextProcessor()


def texts(tokens):
    return [t.text for t in tokens]


def test_process_document(processor):
    doc = processor.process_document("Running quickly and efficiently", None)
    words = texts(doc.tokens)
    assert "run" in words
    assert "quick" in words
    assert "effici" in words
    assert "and" not in words


def test_process_query(processor):
    query = processor.process_query("running AND quick", None)
    words = texts(query.tokens)
    assert "run" in words
    assert "quick" in words
    assert len(query.operators) == 1
    assert query.operators[0].kind is OperatorKind.AND


def test_word_boundaries(processor):
    doc = processor.process_document("word1,word2;word3.word4!word5", None)
    assert texts(doc.tokens) == ["word1", "word2", "word3", "word4", "word5"]
    assert [t.position for t in doc.tokens] == [1, 2, 3, 4, 5]


def test_stop_words_do_not_consume_positions(processor):
    doc = processor.process_document("the cat and the dog", None)
    assert texts(doc.tokens) == ["cat", "dog"]
    assert doc.positions == [1, 2]
    assert doc.weights == [1.0, 1.0]


def test_empty_document(processor):
    assert processor.process_document("", None).tokens == []


def test_query_without_operators_defaults_to_and(processor):
    query = processor.process_query("quick brown fox", None)
    assert texts(query.tokens) == ["quick", "brown", "fox"]
    assert [op.kind for op in query.operators] == [OperatorKind.AND, OperatorKind.AND]


def test_single_word_query_has_no_operators(processor):
    query = processor.process_query("rust", None)
    assert texts(query.tokens) == ["rust"]
    assert query.operators == []


def test_or_operator(processor):
    query = processor.process_query("rust | web", None)
    assert texts(query.tokens) == ["rust", "web"]
    assert [op.kind for op in query.operators] == [OperatorKind.OR]


def test_negated_term(processor):
    query = processor.process_query("rust & web & !database", None)
    assert [t.token_type for t in query.tokens] == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.NOT_WORD,
    ]
    assert [op.kind for op in query.operators] == [OperatorKind.AND] * 3


def test_query_positions_skip_stop_words(processor):
    query = processor.process_query("the fox", None)
    assert texts(query.tokens) == ["fox"]
    assert query.tokens[0].position == 1


def test_phrase_query(processor):
    query = processor.process_query('"quick brown fox"', None)
    assert texts(query.tokens) == ["quick", "brown", "fox"]
    assert len(query.operators) == 1
    phrase = query.operators[0]
    assert phrase.kind is OperatorKind.PHRASE
    assert texts(phrase.tokens) == ["quick", "brown", "fox"]


def test_unknown_language_falls_back_to_default(processor):
    assert processor.language_processor("french") is processor.language_processor(None)
    assert processor.language_processor("english") is processor.language_processors["english"]


def test_custom_language_processor():
    plain = EnglishProcessor(LanguageConfig(enable_stemming=False))
    processor = DefaultTextProcessor({"english": EnglishProcessor(), "plain": plain})
    doc = processor.process_document("Running books", "plain")
    assert texts(doc.tokens) == ["running", "books"]
    stemmed = processor.process_document("Running books", None)
    assert texts(stemmed.tokens) == ["run", "book"]


def test_missing_default_language_rejected():
    with pytest.raises(ValueError):
        DefaultTextProcessor({"english": EnglishProcessor()}, default_language="german")
# reefdb

Building blocks for a small database engine, in pure Python with no runtime
dependencies: full-text search processing and ranking, and deadlock detection
over a wait-for graph.

## What is inside

### Full-text search: `reefdb.fts`

- `reefdb.fts.stemmer.stem(word)` returns the English (Porter2) stem of a
  lower-case word, e.g. `stem("running") == "run"`.
- `reefdb.fts.language` provides `LanguageConfig` (stop words, language code,
  stemming and stop-word switches), the abstract `LanguageProcessor`, and
  `EnglishProcessor`, which lower-cases text, turns every non-alphanumeric
  character into a space, drops English stop words and stems. An empty stop-word
  set in the config is replaced by the built-in English list.
- `reefdb.fts.tokenizer.DefaultTokenizer.tokenize(text)` yields the maximal runs
  of alphanumeric characters in `text`.
- `reefdb.fts.text_processor` defines the value types: `Token` (text, 1-based
  position, weight, `TokenType`), `TsVector` (with `from_tokens`, `set_weight`
  taking a `TextWeight`, and `concatenate`), `QueryOperator` with its
  `OperatorKind`, `ProcessedDocument`, `ProcessedQuery` and `TSQuery`
  (`from_processed` / `to_processed`).
- `reefdb.fts.processing.DefaultTextProcessor` turns documents into `TsVector`s
  and search strings into `ProcessedQuery`s. Queries understand `&`/`AND`,
  `|`/`OR` and `!`/`NOT` (negated terms get `TokenType.NOT_WORD`); a query in
  double quotes becomes a single phrase operator; terms without explicit
  operators are joined with AND. Unknown languages fall back to the default
  (`"english"`).
- `reefdb.fts.ranking` scores documents:
  - `BM25Ranking.rank` uses BM25 when `RankingConfig.bm25_params` is set
    (`BM25Params(k1=1.5, b=0.75)` by default), and otherwise a term-frequency
    score weighted by IDF and by position (`lexeme_weight`).
  - `BM25Ranking.rank_cd` additionally rewards query terms that occur close
    together (`cover_density`).
  - `BM25Ranking.with_collection_stats(total_docs, term_doc_frequencies,
    avg_doc_length)` supplies corpus statistics for IDF.
  - `RankNormalization` flags, combined with `|` into
    `RankingConfig.normalization`, divide the score by document length, unique
    word count and similar measures.
  - `TfIdfNormalization` and `TfIdfParams` describe TF-IDF settings.

### Deadlock detection: `reefdb.deadlock`

`DeadlockDetector` records `WaitForEdge`s with `add_wait(waiting_tx,
holding_tx, resource)`, forgets a transaction with `remove_transaction`, and
finds cycles with `find_cycle` and `detect_deadlock`. The victim chosen by
`select_victim` is the transaction in the cycle with the latest start time;
transactions are any objects with `id` and `start_timestamp` attributes.

## Examples

```python
from reefdb.fts.processing import DefaultTextProcessor
from reefdb.fts.ranking import BM25Params, BM25Ranking, RankingConfig

processor = DefaultTextProcessor()
doc = processor.process_document("Learn Rust programming language basics")
query = processor.process_query("rust & programming")

ranking = BM25Ranking()
print(ranking.rank(doc, query, RankingConfig()))
print(ranking.rank(doc, query, RankingConfig(bm25_params=BM25Params())))
print(ranking.rank_cd(doc, query, RankingConfig()))
```

```python
from dataclasses import dataclass

from reefdb.deadlock import DeadlockDetector


@dataclass
class Tx:
    id: int
    start_timestamp: float


t1, t2 = Tx(1, 100.0), Tx(2, 200.0)
detector = DeadlockDetector()
detector.add_wait(1, 2, "users")
detector.add_wait(2, 1, "posts")
print(detector.detect_deadlock([t1, t2]))  # 2, the younger transaction
```

## What this package does not do

It is a set of components, not a database. There is no SQL parser or executor,
no table storage or on-disk persistence, no transaction manager or isolation
snapshots, no registry of SQL functions, no TF-IDF ranking class and no
command-line tool or server. Errors are reported with Python's built-in
exceptions such as `ValueError`.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```
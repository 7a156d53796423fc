# grepai

Building blocks for semantic code search over a project's source tree.

## What it provides

- **Vector storage** (`grepai.store`, `grepai.local_store`): the `Chunk`,
  `Document`, `SearchResult`, `IndexStats` and `FileStats` records, the
  abstract `VectorStore` interface (usable as a context manager that closes the
  store), and `LocalStore`, an in-memory store saved to a single JSON index
  file and ranked by `cosine_similarity`.
- **PostgreSQL schema SQL** (`grepai.postgres_sql`): `schema_statements(dim)`
  returns the statements that create the pgvector `chunks` and `documents`
  tables and their indexes; `build_ensure_vector_sql(dim)` returns a block that
  resizes the `chunks.vector` column only when its dimension differs.
- **Ranking** (`grepai.boost`, `grepai.hybrid`, `grepai.search`): path-based
  score boosting with `BoostConfig` and `BoostRule` (`apply_boost`,
  `compute_boost_factor`), keyword `text_search` with `tokenize`,
  `reciprocal_rank_fusion`, and a `Searcher` that embeds a query with an
  `Embedder`, searches a `VectorStore` (optionally hybrid, per `HybridConfig`),
  boosts and trims the results.
- **Symbol data** (`grepai.trace_types`, `grepai.patterns`,
  `grepai.symbol_store`): `Symbol`, `Reference`, `CallEdge`, `CallGraph` and
  related records; per-language regular expressions (`get_patterns_for_language`,
  `supported_extensions`, `is_keyword`) for Go, JavaScript, TypeScript, Python,
  PHP, C, C++, Zig, Rust and Java; and `SymbolStore`, a JSON-backed index that
  answers symbol, caller, callee and call-graph queries.
- **File watching** (`grepai.watcher`): a debounced `Watcher` that puts
  `FileEvent`s (`EventType.CREATE`, `MODIFY`, `DELETE`, `RENAME`) for source
  files under a root directory onto a queue.

## Installation

```
pip install grepai
```

## Examples

Store chunks and search them:

```python
from grepai.local_store import LocalStore
from grepai.store import Chunk

with LocalStore("index.json") as store:
    store.load()
    store.save_chunks([
        Chunk(id="c1", file_path="main.go", content="func main() {}", vector=[1.0, 0.0]),
        Chunk(id="c2", file_path="util.go", content="func helper() {}", vector=[0.0, 1.0]),
    ])
    for result in store.search([0.9, 0.1], limit=5):
        print(result.chunk.file_path, result.score)
```

Search through an embedder, with boosting and hybrid ranking:

```python
from grepai.boost import BoostConfig, BoostRule
from grepai.search import Embedder, HybridConfig, SearchConfig, Searcher

class MyEmbedder(Embedder):
    def embed(self, text):
        return [1.0, 0.0]  # call your embedding model here

cfg = SearchConfig(
    boost=BoostConfig(enabled=True, penalties=[BoostRule(pattern="_test.go", factor=0.5)]),
    hybrid=HybridConfig(enabled=True, k=60),
)
results = Searcher(store, MyEmbedder(), cfg).search("user login", 10)
```

Record symbols and trace calls:

```python
from grepai.symbol_store import SymbolStore
from grepai.trace_types import Reference, Symbol, SymbolKind

with SymbolStore("symbols.json") as symbols_db:
    symbols_db.save_file(
        "main.go",
        [Symbol(name="main", kind=SymbolKind.FUNCTION, file="main.go", line=1, language="go")],
        [Reference(symbol_name="helper", file="main.go", line=2, caller_name="main")],
    )
    print(symbols_db.lookup_callers("helper"))
    print(symbols_db.get_call_graph("main", 2))
```

Watch a tree for changes:

```python
from grepai.watcher import Watcher

with Watcher("path/to/project", ignore=None, debounce_ms=300) as watcher:
    event = watcher.events().get()
    print(event.type, event.path)
```

## What it does not do

- It does not extract symbols from source files: `grepai.patterns` supplies
  the regular expressions, but turning file contents into `Symbol` and
  `Reference` records is left to the caller.
- It has no PostgreSQL-backed `VectorStore`, only the schema SQL; `LocalStore`
  is the one storage backend included.
- It ships no `Embedder` implementation and no embedding model client.
- It has no command-line tool and no self-update mechanism.

## Running the tests

```
pip install "grepai[test]"
pytest
```
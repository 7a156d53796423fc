from datetime import datetime, timedelta, timezone

import pytest

from grepai.local_store import LocalStore, cosine_similarity
from grepai.store import Chunk, Document


def _now():
    return datetime.now(timezone.utc)


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "index.json")


def test_save_and_search_chunks(store):
    chunks = [
        Chunk(id="chunk1", file_path="test.go", start_line=1, end_line=10,
              content="func main() {}", vector=[1.0, 0.0, 0.0], hash="abc123",
              updated_at=_now()),
        Chunk(id="chunk2", file_path="test.go", start_line=11, end_line=20,
              content="func helper() {}", vector=[0.0, 1.0, 0.0], hash="def456",
              updated_at=_now()),
    ]
    store.save_chunks(chunks)

    results = store.search([0.9, 0.1, 0.0], 10)
    assert len(results) == 2
    assert results[0].chunk.id == "chunk1"
    assert results[0].score >= results[1].score


def test_search_limit(store):
    store.save_chunks([Chunk(id=str(i), vector=[1.0, float(i)]) for i in range(5)])
    assert len(store.search([1.0, 0.0], 2)) == 2
    assert len(store.search([1.0, 0.0], 0)) == 5


def test_delete_by_file(store):
    store.save_document(Document(path="test.go", hash="abc123", mod_time=_now(),
                                 chunk_ids=["chunk1", "chunk2"]))
    store.save_chunks([
        Chunk(id="chunk1", file_path="test.go", vector=[1.0, 0.0]),
        Chunk(id="chunk2", file_path="test.go", vector=[0.0, 1.0]),
    ])

    store.delete_by_file("test.go")

    assert store.search([1.0, 0.0], 10) == []


def test_delete_by_unknown_file_keeps_chunks(store):
    store.save_chunks([Chunk(id="c", file_path="a.go", vector=[1.0])])
    store.delete_by_file("other.go")
    assert [c.id for c in store.get_all_chunks()] == ["c"]


def test_persist_and_load(tmp_path):
    path = tmp_path / "index.json"
    store1 = LocalStore(path)
    store1.save_chunks([Chunk(id="chunk1", file_path="test.go", content="test content",
                              vector=[1.0, 0.0])])
    store1.save_document(Document(path="test.go", hash="abc", chunk_ids=["chunk1"]))
    store1.persist()

    store2 = LocalStore(path)
    store2.load()

    results = store2.search([1.0, 0.0], 10)
    assert len(results) == 1
    assert results[0].chunk.content == "test content"
    assert store2.get_document("test.go") == Document(path="test.go", hash="abc",
                                                      chunk_ids=["chunk1"])


def test_load_round_trips_times(tmp_path):
    path = tmp_path / "index.json"
    when = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    store1 = LocalStore(path)
    chunk = Chunk(id="x", file_path="f.py", start_line=3, end_line=4, content="pass",
                  vector=[0.5, 0.25], hash="h", updated_at=when)
    store1.save_chunks([chunk])
    store1.close()

    store2 = LocalStore(path)
    store2.load()
    assert store2.get_all_chunks() == [chunk]


def test_load_missing_file_leaves_store_empty(store):
    store.load()
    assert store.stats() == (0, 0)


def test_load_corrupt_file_raises(tmp_path):
    path = tmp_path / "index.json"
    path.write_text("not json at all", encoding="utf-8")
    with pytest.raises(ValueError, match="failed to decode index"):
        LocalStore(path).load()


def test_list_documents(store):
    for path, h in [("file1.go", "a"), ("file2.go", "b"), ("file3.go", "c")]:
        store.save_document(Document(path=path, hash=h))
    assert sorted(store.list_documents()) == ["file1.go", "file2.go", "file3.go"]


def test_get_and_delete_document(store):
    assert store.get_document("a.go") is None
    store.save_document(Document(path="a.go", hash="h", chunk_ids=["1"]))
    doc = store.get_document("a.go")
    assert doc.hash == "h"
    doc.chunk_ids.append("2")
    assert store.get_document("a.go").chunk_ids == ["1"]
    store.delete_document("a.go")
    assert store.get_document("a.go") is None


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ([1.0, 0.0, 0.0], [1.0, 0.0, 0.0], 1.0),
        ([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], 0.0),
        ([1.0, 0.0, 0.0], [-1.0, 0.0, 0.0], -1.0),
        ([1.0, 0.0], [1.0, 0.0, 0.0], 0.0),
    ],
    ids=["identical", "orthogonal", "opposite", "different-lengths"],
)
def test_cosine_similarity(a, b, expected):
    assert cosine_similarity(a, b) == pytest.approx(expected, abs=0.0001)


def test_cosine_similarity_zero_vector():
    assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0


def test_get_stats(store):
    store.save_chunks([
        Chunk(id="1", file_path="file1.go", content="test1", updated_at=_now()),
        Chunk(id="2", file_path="file1.go", content="test2", updated_at=_now()),
        Chunk(id="3", file_path="file2.go", content="test3", updated_at=_now()),
    ])
    store.save_document(Document(path="file1.go", chunk_ids=["1", "2"]))
    store.save_document(Document(path="file2.go", chunk_ids=["3"]))

    stats = store.get_stats()
    assert stats.total_files == 2
    assert stats.total_chunks == 3
    assert stats.index_size == 0


def test_get_stats_last_updated_and_size(store):
    early = datetime(2023, 1, 1, tzinfo=timezone.utc)
    late = early + timedelta(days=3)
    store.save_chunks([Chunk(id="a", updated_at=early), Chunk(id="b", updated_at=late)])
    store.persist()
    stats = store.get_stats()
    assert stats.last_updated == late
    assert stats.index_size > 0


def test_list_files_with_stats(store):
    store.save_document(Document(path="a.go", chunk_ids=["1", "2"]))
    store.save_document(Document(path="b.go", chunk_ids=["3"]))

    files = store.list_files_with_stats()
    assert len(files) == 2
    counts = {f.path: f.chunk_count for f in files}
    assert counts == {"a.go": 2, "b.go": 1}


def test_get_chunks_for_file(store):
    store.save_chunks([
        Chunk(id="1", file_path="file.go", start_line=1, end_line=10, content="chunk1"),
        Chunk(id="2", file_path="file.go", start_line=11, end_line=20, content="chunk2"),
    ])
    store.save_document(Document(path="file.go", chunk_ids=["1", "2"]))

    result = store.get_chunks_for_file("file.go")
    assert [c.content for c in result] == ["chunk1", "chunk2"]
    assert store.get_chunks_for_file("nonexistent.go") == []


def test_context_manager_persists(tmp_path):
    path = tmp_path / "index.json"
    with LocalStore(path) as store:
        store.save_document(Document(path="x.go", hash="h"))
    reloaded = LocalStore(path)
    reloaded.load()
    assert reloaded.list_documents() == ["x.go"]
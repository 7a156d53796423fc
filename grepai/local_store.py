"""File-backed vector store held in memory and saved as JSON."""

from __future__ import annotations

import json
import math
import os
import threading
from dataclasses import asdict, replace
from datetime import datetime
from typing import Any

from grepai.store import (
    ZERO_TIME,
    Chunk,
    Document,
    FileStats,
    IndexStats,
    SearchResult,
    VectorStore,
)


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two vectors; 0.0 for unequal lengths or zero norms."""
    if len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = sum(x * x for x in a)
    norm_b = sum(y * y for y in b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


def _encode_chunk(chunk: Chunk) -> dict[str, Any]:
    data = asdict(chunk)
    data["updated_at"] = chunk.updated_at.isoformat()
    return data


def _decode_chunk(data: dict[str, Any]) -> Chunk:
    return Chunk(
        id=data["id"],
        file_path=data["file_path"],
        start_line=int(data["start_line"]),
        end_line=int(data["end_line"]),
        content=data["content"],
        vector=[float(v) for v in data.get("vector") or []],
        hash=data["hash"],
        updated_at=datetime.fromisoformat(data["updated_at"]),
    )


def _encode_document(doc: Document) -> dict[str, Any]:
    data = asdict(doc)
    data["mod_time"] = doc.mod_time.isoformat()
    return data


def _decode_document(data: dict[str, Any]) -> Document:
    return Document(
        path=data["path"],
        hash=data["hash"],
        mod_time=datetime.fromisoformat(data["mod_time"]),
        chunk_ids=list(data.get("chunk_ids") or []),
    )


class LocalStore(VectorStore):
    """Vector store kept in memory and persisted to a single index file."""

    def __init__(self, index_path: str | os.PathLike[str]) -> None:
        self._index_path = os.fspath(index_path)
        self._chunks: dict[str, Chunk] = {}
        self._documents: dict[str, Document] = {}
        self._lock = threading.RLock()

    @property
    def index_path(self) -> str:
        return self._index_path

    def save_chunks(self, chunks: list[Chunk]) -> None:
        with self._lock:
            for chunk in chunks:
                self._chunks[chunk.id] = chunk

    def delete_by_file(self, file_path: str) -> None:
        with self._lock:
            doc = self._documents.get(file_path)
            if doc is None:
                return
            for chunk_id in doc.chunk_ids:
                self._chunks.pop(chunk_id, None)

    def search(self, query_vector: list[float], limit: int) -> list[SearchResult]:
        with self._lock:
            results = [
                SearchResult(chunk=chunk, score=cosine_similarity(query_vector, chunk.vector))
                for chunk in self._chunks.values()
            ]
        results.sort(key=lambda r: r.score, reverse=True)
        if limit > 0:
            results = results[:limit]
        return results

    def get_document(self, file_path: str) -> Document | None:
        with self._lock:
            doc = self._documents.get(file_path)
            if doc is None:
                return None
            return replace(doc, chunk_ids=list(doc.chunk_ids))

    def save_document(self, doc: Document) -> None:
        with self._lock:
            self._documents[doc.path] = doc

    def delete_document(self, file_path: str) -> None:
        with self._lock:
            self._documents.pop(file_path, None)

    def list_documents(self) -> list[str]:
        with self._lock:
            return list(self._documents)

    def load(self) -> None:
        """Read the index file; a missing file leaves the store empty."""
        with self._lock:
            try:
                with open(self._index_path, encoding="utf-8") as fh:
                    raw = fh.read()
            except FileNotFoundError:
                return
            try:
                data = json.loads(raw)
                chunks = {
                    cid: _decode_chunk(value)
                    for cid, value in (data.get("chunks") or {}).items()
                }
                documents = {
                    path: _decode_document(value)
                    for path, value in (data.get("documents") or {}).items()
                }
            except (ValueError, TypeError, KeyError, AttributeError) as exc:
                raise ValueError(f"failed to decode index: {exc}") from exc
            self._chunks = chunks
            self._documents = documents

    def persist(self) -> None:
        with self._lock:
            payload = {
                "chunks": {cid: _encode_chunk(c) for cid, c in self._chunks.items()},
                "documents": {p: _encode_document(d) for p, d in self._documents.items()},
            }
        with open(self._index_path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh)

    def close(self) -> None:
        self.persist()

    def stats(self) -> tuple[int, int]:
        """Return the number of documents and the number of chunks."""
        with self._lock:
            return len(self._documents), len(self._chunks)

    def get_stats(self) -> IndexStats:
        with self._lock:
            last_updated = max(
                (c.updated_at for c in self._chunks.values()),
                default=ZERO_TIME,
            )
            if last_updated < ZERO_TIME:
                last_updated = ZERO_TIME
            try:
                size = os.stat(self._index_path).st_size
            except OSError:
                size = 0
            return IndexStats(
                total_files=len(self._documents),
                total_chunks=len(self._chunks),
                index_size=size,
                last_updated=last_updated,
            )

    def list_files_with_stats(self) -> list[FileStats]:
        with self._lock:
            return [
                FileStats(path=doc.path, chunk_count=len(doc.chunk_ids), mod_time=doc.mod_time)
                for doc in self._documents.values()
            ]

    def get_chunks_for_file(self, file_path: str) -> list[Chunk]:
        with self._lock:
            doc = self._documents.get(file_path)
            if doc is None:
                return []
            return [self._chunks[cid] for cid in doc.chunk_ids if cid in self._chunks]

    def get_all_chunks(self) -> list[Chunk]:
        with self._lock:
            return list(self._chunks.values())
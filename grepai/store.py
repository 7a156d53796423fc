"""Data types and the storage interface for indexed code chunks."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from datetime import datetime, timezone

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
"""Timestamp used where no time has been recorded."""


@dataclass
class Chunk:
    """A piece of code with its vector embedding."""

    id: str = ""
    file_path: str = ""
    start_line: int = 0
    end_line: int = 0
    content: str = ""
    vector: list[float] = field(default_factory=list)
    hash: str = ""
    updated_at: datetime = ZERO_TIME


@dataclass
class Document:
    """A file together with the ids of its chunks."""

    path: str = ""
    hash: str = ""
    mod_time: datetime = ZERO_TIME
    chunk_ids: list[str] = field(default_factory=list)


@dataclass
class SearchResult:
    """A search match with its relevance score."""

    chunk: Chunk
    score: float = 0.0


@dataclass
class IndexStats:
    """Statistics about the whole index."""

    total_files: int = 0
    total_chunks: int = 0
    index_size: int = 0
    last_updated: datetime = ZERO_TIME


@dataclass
class FileStats:
    """Statistics for a single indexed file."""

    path: str = ""
    chunk_count: int = 0
    mod_time: datetime = ZERO_TIME


class VectorStore(abc.ABC):
    """Interface shared by vector storage backends.

    A store is a context manager: leaving the ``with`` block closes it.
    """

    def __enter__(self) -> "VectorStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abc.abstractmethod
    def save_chunks(self, chunks: list[Chunk]) -> None:
        """Store several chunks, replacing any with the same id."""

    @abc.abstractmethod
    def delete_by_file(self, file_path: str) -> None:
        """Remove all chunks belonging to a file."""

    @abc.abstractmethod
    def search(self, query_vector: list[float], limit: int) -> list[SearchResult]:
        """Return the chunks most similar to a query vector."""

    @abc.abstractmethod
    def get_document(self, file_path: str) -> Document | None:
        """Return document metadata for a path, or None if unknown."""

    @abc.abstractmethod
    def save_document(self, doc: Document) -> None:
        """Store document metadata."""

    @abc.abstractmethod
    def delete_document(self, file_path: str) -> None:
        """Remove document metadata."""

    @abc.abstractmethod
    def list_documents(self) -> list[str]:
        """Return the paths of all indexed documents."""

    @abc.abstractmethod
    def load(self) -> None:
        """Read the store from persistent storage."""

    @abc.abstractmethod
    def persist(self) -> None:
        """Write the store to persistent storage."""

    @abc.abstractmethod
    def close(self) -> None:
        """Shut the store down cleanly."""

    @abc.abstractmethod
    def get_stats(self) -> IndexStats:
        """Return index statistics."""

    @abc.abstractmethod
    def list_files_with_stats(self) -> list[FileStats]:
        """Return every file with its chunk count."""

    @abc.abstractmethod
    def get_chunks_for_file(self, file_path: str) -> list[Chunk]:
        """Return the chunks of one file."""

    @abc.abstractmethod
    def get_all_chunks(self) -> list[Chunk]:
        """Return every chunk in the store."""
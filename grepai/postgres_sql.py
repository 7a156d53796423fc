"""SQL statements that set up the PostgreSQL (pgvector) schema."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

_TEXT = "TEXT NOT NULL"
_STAMP = "TIMESTAMP NOT NULL"

_CHUNK_COLUMNS = (
    ("id", "TEXT PRIMARY KEY"),
    ("project_id", _TEXT),
    ("file_path", _TEXT),
    ("start_line", "INTEGER NOT NULL"),
    ("end_line", "INTEGER NOT NULL"),
    ("content", _TEXT),
    ("vector", "vector(768)"),
    ("hash", _TEXT),
    ("updated_at", _STAMP),
)

_DOCUMENT_COLUMNS = (
    ("path", _TEXT),
    ("project_id", _TEXT),
    ("hash", _TEXT),
    ("mod_time", _STAMP),
    ("chunk_ids", "TEXT[] NOT NULL"),
)


def _create_table(
    table: str,
    columns: Iterable[tuple[str, str]],
    primary_key: Sequence[str] = (),
) -> str:
    parts = [f"{name} {kind}" for name, kind in columns]
    if primary_key:
        parts.append(f"PRIMARY KEY ({', '.join(primary_key)})")
    body = ",\n\t".join(parts)
    return f"CREATE TABLE IF NOT EXISTS {table} (\n\t{body}\n)"


def _create_index(table: str, suffix: str, columns: Sequence[str]) -> str:
    return (
        f"CREATE INDEX IF NOT EXISTS idx_{table}_{suffix} "
        f"ON {table}({', '.join(columns)})"
    )


def build_ensure_vector_sql(dim: int) -> str:
    """Return a block that resizes ``chunks.vector`` only when its dimension differs."""
    alter = f"ALTER TABLE chunks ALTER COLUMN vector TYPE vector({dim})"
    lines = (
        "DO $$",
        "DECLARE",
        "\tcurrent_length int;",
        "BEGIN",
        "\tSELECT atttypmod - 4 INTO current_length FROM pg_attribute",
        "\tWHERE attrelid = 'chunks'::regclass AND attname = 'vector';",
        f"\tIF current_length IS DISTINCT FROM {dim} THEN",
        f"\t\tRAISE NOTICE 'Altering vector size from % to {dim}', current_length;",
        f"\t\tEXECUTE '{alter}';",
        "\tELSE",
        f"\t\tRAISE NOTICE 'Vector size already {dim}, skipping ALTER';",
        "\tEND IF;",
        "END$$;",
    )
    return "\n" + "\n".join(lines) + "\n"


def schema_statements(dim: int) -> list[str]:
    """Return, in order, the statements that create and adjust the schema."""
    return [
        "CREATE EXTENSION IF NOT EXISTS vector",
        _create_table("chunks", _CHUNK_COLUMNS),
        _create_index("chunks", "project", ("project_id",)),
        _create_index("chunks", "file", ("project_id", "file_path")),
        _create_table("documents", _DOCUMENT_COLUMNS, ("project_id", "path")),
        build_ensure_vector_sql(dim),
    ]
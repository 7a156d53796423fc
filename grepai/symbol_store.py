"""File-backed store of symbols, references and call graph edges."""

from __future__ import annotations

import json
import os
import threading
from collections import deque
from dataclasses import asdict, replace
from datetime import datetime, timezone
from typing import Any

from grepai.trace_types import (
    CallEdge,
    CallGraph,
    Reference,
    Symbol,
    SymbolIndex,
    SymbolKind,
    SymbolStats,
)

TOP_LEVEL = "<top-level>"
INDEX_VERSION = 1


def _encode_symbol(sym: Symbol) -> dict[str, Any]:
    data = asdict(sym)
    data["kind"] = SymbolKind(sym.kind).value
    return data


def _decode_symbol(data: dict[str, Any]) -> Symbol:
    values = dict(data)
    values["kind"] = SymbolKind(values.get("kind", SymbolKind.FUNCTION.value))
    return Symbol(**values)


def _encode_index(index: SymbolIndex) -> dict[str, Any]:
    return {
        "symbols": {
            name: [_encode_symbol(s) for s in syms] for name, syms in index.symbols.items()
        },
        "references": {
            name: [asdict(r) for r in refs] for name, refs in index.references.items()
        },
        "call_graph": [asdict(e) for e in index.call_graph],
        "updated_at": index.updated_at.isoformat(),
        "version": index.version,
    }


def _decode_index(data: dict[str, Any]) -> SymbolIndex:
    index = SymbolIndex(
        symbols={
            name: [_decode_symbol(s) for s in syms]
            for name, syms in (data.get("symbols") or {}).items()
        },
        references={
            name: [Reference(**r) for r in refs]
            for name, refs in (data.get("references") or {}).items()
        },
        call_graph=[CallEdge(**e) for e in data.get("call_graph") or []],
        version=int(data.get("version", 0)),
    )
    if data.get("updated_at"):
        index.updated_at = datetime.fromisoformat(data["updated_at"])
    return index


class SymbolStore:
    """Symbol index kept in memory and persisted to a single file."""

    def __init__(self, index_path: str | os.PathLike[str]) -> None:
        self._index_path = os.fspath(index_path)
        self._index = SymbolIndex(version=INDEX_VERSION)
        self._file_index: dict[str, bool] = {}
        self._lock = threading.RLock()

    def __enter__(self) -> "SymbolStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def index_path(self) -> str:
        return self._index_path

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
                index = _decode_index(data.get("index") or {})
                file_index = {str(k): bool(v) for k, v in (data.get("file_index") or {}).items()}
            except (ValueError, TypeError, KeyError, AttributeError) as exc:
                raise ValueError(f"failed to decode symbol index: {exc}") from exc
            self._index = index
            self._file_index = file_index

    def persist(self) -> None:
        """Write the index to its file, stamping the update time."""
        with self._lock:
            self._index.updated_at = datetime.now(timezone.utc)
            payload = {
                "index": _encode_index(self._index),
                "file_index": dict(self._file_index),
            }
            with open(self._index_path, "w", encoding="utf-8") as fh:
                json.dump(payload, fh)

    def save_file(
        self, file_path: str, symbols: list[Symbol], refs: list[Reference]
    ) -> None:
        """Replace everything recorded for a file with new symbols and references."""
        with self._lock:
            self._delete_file_unlocked(file_path)
            for sym in symbols:
                self._index.symbols.setdefault(sym.name, []).append(sym)
            for ref in refs:
                self._index.references.setdefault(ref.symbol_name, []).append(ref)
            self._index.call_graph.extend(
                CallEdge(
                    caller=ref.caller_name,
                    callee=ref.symbol_name,
                    file=ref.file,
                    line=ref.line,
                    call_type="direct",
                )
                for ref in refs
                if ref.caller_name and ref.caller_name != TOP_LEVEL
            )
            self._file_index[file_path] = True

    def delete_file(self, file_path: str) -> None:
        """Remove all symbols, references and edges of a file."""
        with self._lock:
            self._delete_file_unlocked(file_path)

    def _delete_file_unlocked(self, file_path: str) -> None:
        for name, syms in list(self._index.symbols.items()):
            kept = [s for s in syms if s.file != file_path]
            if kept:
                self._index.symbols[name] = kept
            else:
                del self._index.symbols[name]
        for name, refs in list(self._index.references.items()):
            kept_refs = [r for r in refs if r.file != file_path]
            if kept_refs:
                self._index.references[name] = kept_refs
            else:
                del self._index.references[name]
        self._index.call_graph = [e for e in self._index.call_graph if e.file != file_path]
        self._file_index.pop(file_path, None)

    def lookup_symbol(self, name: str) -> list[Symbol]:
        """Return the definitions of a symbol name."""
        with self._lock:
            return list(self._index.symbols.get(name, []))

    def lookup_callers(self, symbol_name: str) -> list[Reference]:
        """Return every reference to a symbol."""
        with self._lock:
            return list(self._index.references.get(symbol_name, []))

    def lookup_callees(self, symbol_name: str, file: str) -> list[Reference]:
        """Return the calls made from within a function."""
        with self._lock:
            callees: list[Reference] = []
            seen: set[tuple[str, int]] = set()
            for edge in self._index.call_graph:
                if edge.caller != symbol_name:
                    continue
                key = (edge.file, edge.line)
                if key in seen:
                    continue
                seen.add(key)

                for ref in self._index.references.get(edge.callee, []):
                    if (
                        ref.caller_name == symbol_name
                        and ref.file == edge.file
                        and ref.line == edge.line
                    ):
                        callees.append(ref)
                        break

                if not callees:
                    callees.append(
                        Reference(
                            symbol_name=edge.callee,
                            file=edge.file,
                            line=edge.line,
                            caller_name=symbol_name,
                        )
                    )
            return callees

    def get_call_graph(self, symbol_name: str, depth: int) -> CallGraph:
        """Build the graph of callers and callees around a symbol, up to ``depth`` hops."""
        with self._lock:
            graph = CallGraph(root=symbol_name, depth=depth)
            visited: set[str] = set()
            queue: deque[tuple[str, int]] = deque([(symbol_name, 0)])

            while queue:
                name, level = queue.popleft()
                if name in visited or level > depth:
                    continue
                visited.add(name)

                syms = self._index.symbols.get(name)
                if syms:
                    graph.nodes[name] = syms[0]

                edge_seen: set[tuple[str, str]] = set()
                for edge in self._index.call_graph:
                    if edge.caller == name:
                        if (edge.caller, edge.callee) not in edge_seen:
                            graph.edges.append(replace(edge))
                            edge_seen.add((edge.caller, edge.callee))
                        if edge.callee not in visited:
                            queue.append((edge.callee, level + 1))
                    if edge.callee == name:
                        if (edge.caller, edge.callee) not in edge_seen:
                            graph.edges.append(replace(edge))
                            edge_seen.add((edge.caller, edge.callee))
                        if edge.caller not in visited:
                            queue.append((edge.caller, level + 1))
            return graph

    def close(self) -> None:
        """Persist the index."""
        self.persist()

    def get_stats(self) -> SymbolStats:
        """Return counts of symbols, references and files, and the index size."""
        with self._lock:
            try:
                size = os.stat(self._index_path).st_size
            except OSError:
                size = 0
            return SymbolStats(
                total_symbols=sum(len(s) for s in self._index.symbols.values()),
                total_references=sum(len(r) for r in self._index.references.values()),
                total_files=len(self._file_index),
                index_size=size,
                last_updated=self._index.updated_at,
            )

    def is_file_indexed(self, file_path: str) -> bool:
        """Tell whether a file has been saved to the index."""
        with self._lock:
            return self._file_index.get(file_path, False)
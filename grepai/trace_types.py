"""Data types for symbol extraction and call graph analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from grepai.store import ZERO_TIME


class SymbolKind(str, Enum):
    """The kind of a symbol definition."""

    FUNCTION = "function"
    METHOD = "method"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    VARIABLE = "variable"
    CONSTANT = "constant"

    def __str__(self) -> str:
        return self.value


@dataclass
class Symbol:
    """A symbol definition in the codebase."""

    name: str = ""
    kind: SymbolKind = SymbolKind.FUNCTION
    file: str = ""
    line: int = 0
    end_line: int = 0
    signature: str = ""
    receiver: str = ""
    package: str = ""
    exported: bool = False
    language: str = ""


@dataclass
class Reference:
    """A usage or call of a symbol."""

    symbol_name: str = ""
    file: str = ""
    line: int = 0
    column: int = 0
    context: str = ""
    caller_name: str = ""
    caller_file: str = ""
    caller_line: int = 0


@dataclass
class CallEdge:
    """A caller -> callee relationship."""

    caller: str = ""
    callee: str = ""
    file: str = ""
    line: int = 0
    call_type: str = ""


@dataclass
class SymbolIndex:
    """Symbols and references by name, plus the call graph edges."""

    symbols: dict[str, list[Symbol]] = field(default_factory=dict)
    references: dict[str, list[Reference]] = field(default_factory=dict)
    call_graph: list[CallEdge] = field(default_factory=list)
    updated_at: datetime = ZERO_TIME
    version: int = 0


@dataclass
class CallSite:
    """The location of a function call."""

    file: str = ""
    line: int = 0
    context: str = ""


@dataclass
class CallerInfo:
    """A function that calls the target."""

    symbol: Symbol = field(default_factory=Symbol)
    call_site: CallSite = field(default_factory=CallSite)


@dataclass
class CalleeInfo:
    """A function called by the target."""

    symbol: Symbol = field(default_factory=Symbol)
    call_site: CallSite = field(default_factory=CallSite)


@dataclass
class CallGraph:
    """A multi-level call graph rooted at one symbol."""

    root: str = ""
    nodes: dict[str, Symbol] = field(default_factory=dict)
    edges: list[CallEdge] = field(default_factory=list)
    depth: int = 0


@dataclass
class TraceResult:
    """The output of a trace query."""

    query: str = ""
    mode: str = ""
    symbol: Symbol | None = None
    callers: list[CallerInfo] = field(default_factory=list)
    callees: list[CalleeInfo] = field(default_factory=list)
    graph: CallGraph | None = None


@dataclass
class SymbolStats:
    """Statistics about the symbol index."""

    total_symbols: int = 0
    total_references: int = 0
    total_files: int = 0
    index_size: int = 0
    last_updated: datetime = ZERO_TIME
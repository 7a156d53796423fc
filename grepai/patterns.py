"""Per-language regular expressions used for symbol and call extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass

_FLAGS = re.ASCII


def _m(*parts: str) -> re.Pattern[str]:
    """Compile a line-anchored pattern from its parts."""
    return re.compile("".join(parts), _FLAGS | re.MULTILINE)


def _c(*parts: str) -> re.Pattern[str]:
    """Compile a free-floating pattern from its parts."""
    return re.compile("".join(parts), _FLAGS)


@dataclass(frozen=True)
class LanguagePatterns:
    """Regular expressions describing definitions and calls in one language."""

    extension: str
    language: str
    functions: tuple[re.Pattern[str], ...] = ()
    methods: tuple[re.Pattern[str], ...] = ()
    classes: tuple[re.Pattern[str], ...] = ()
    interfaces: tuple[re.Pattern[str], ...] = ()
    types: tuple[re.Pattern[str], ...] = ()
    function_call: re.Pattern[str] | None = None
    method_call: re.Pattern[str] | None = None


# Shared building blocks.
_ID = r"[A-Za-z_][A-Za-z0-9_]*"
_NAME = "(" + _ID + ")"
_UPPER = r"([A-Z][A-Za-z0-9_]*)"
_LOWER = r"([a-z][A-Za-z0-9_]*)"
_PAREN = r"\s*\("
_GEN = r"(?:<[^>]*>)?"
_INDENT = r"^[ \t]+"
_PUB = r"(?:pub\s+)?"
_C_BODY = r"\s*\([^;]*\)\s*\{"

_WORD_CALL = _c(r"\b", _NAME, _PAREN)
_DOT_CALL = _c(r"\.", _NAME, _PAREN)

_GO = LanguagePatterns(
    extension=".go",
    language="go",
    functions=(_m(r"^func\s+", _NAME, _PAREN),),
    methods=(_m(r"^func\s+\(\w+\s+\*?", _NAME, r"\)\s+", _NAME, _PAREN),),
    interfaces=(_m(r"^type\s+", _UPPER, r"\s+interface\s*\{"),),
    types=(
        _m(r"^type\s+", _UPPER, r"\s+struct\s*\{"),
        _m(r"^type\s+", _UPPER, r"\s+[^=\s{]+"),
    ),
    function_call=_WORD_CALL,
    method_call=_DOT_CALL,
)

_JSID = r"[A-Za-z_$][A-Za-z0-9_$]*"
_JSNAME = "(" + _JSID + ")"
_EXPORT = r"(?:export\s+)?"
_ASYNC = r"(?:async\s+)?"
_DECL = r"(?:const|let|var)\s+" + _JSNAME + r"\s*=\s*"
_JS_BODY = r"\s*\([^)]*\)\s*\{"

_JS = LanguagePatterns(
    extension=".js",
    language="javascript",
    functions=(
        _m(_EXPORT, _ASYNC, r"function\s+", _JSNAME, _PAREN),
        _m(_DECL, _ASYNC, r"function\s*\("),
        _m(_DECL, _ASYNC, r"\([^)]*\)\s*=>"),
        _m(_DECL, r"async\s+", _JSID, r"\s*=>"),
    ),
    methods=(
        _m(r"^\s+", _ASYNC, _JSNAME, _JS_BODY),
        _m(r"^\s+static\s+", _ASYNC, _JSNAME, _JS_BODY),
    ),
    classes=(
        _m(_EXPORT, r"class\s+", _JSNAME, r"(?:\s+extends\s+", _JSID, r")?\s*\{"),
    ),
    function_call=_c(r"\b", _JSNAME, _PAREN),
    method_call=_c(r"\.", _JSNAME, _PAREN),
)

_TS = LanguagePatterns(
    extension=".ts",
    language="typescript",
    functions=_JS.functions
    + (_m(_EXPORT, _ASYNC, r"function\s+", _JSNAME, r"\s*<[^>]*>", _PAREN),),
    methods=_JS.methods,
    classes=_JS.classes,
    interfaces=(
        _m(_EXPORT, r"interface\s+", _JSNAME, r"\s*", _GEN, r"\s*(?:extends\s+[^{]+)?\{"),
    ),
    types=(_m(_EXPORT, r"type\s+", _JSNAME, r"\s*", _GEN, r"\s*="),),
    function_call=_JS.function_call,
    method_call=_JS.method_call,
)

_JSX = LanguagePatterns(
    extension=".jsx",
    language="javascript",
    functions=_JS.functions,
    methods=_JS.methods,
    classes=_JS.classes,
    function_call=_JS.function_call,
    method_call=_JS.method_call,
)

_TSX = LanguagePatterns(
    extension=".tsx",
    language="typescript",
    functions=_TS.functions,
    methods=_TS.methods,
    classes=_TS.classes,
    interfaces=_TS.interfaces,
    types=_TS.types,
    function_call=_TS.function_call,
    method_call=_TS.method_call,
)

_PYTHON = LanguagePatterns(
    extension=".py",
    language="python",
    functions=(
        _m(r"^def\s+", _NAME, _PAREN),
        _m(r"^async\s+def\s+", _NAME, _PAREN),
    ),
    methods=(
        _m(_INDENT, r"def\s+", _NAME, r"\s*\(self"),
        _m(_INDENT, r"async\s+def\s+", _NAME, r"\s*\(self"),
    ),
    classes=(_m(r"^class\s+", _NAME, r"(?:\s*\([^)]*\))?\s*:"),),
    function_call=_WORD_CALL,
    method_call=_DOT_CALL,
)

_PHP = LanguagePatterns(
    extension=".php",
    language="php",
    functions=(_m(r"^function\s+", _NAME, _PAREN),),
    methods=(
        _m(
            r"^\s+(?:public|protected|private)\s+(?:static\s+)?function\s+",
            _NAME,
            _PAREN,
        ),
    ),
    classes=(
        _m(
            r"^(?:abstract\s+)?class\s+", _NAME,
            r"(?:\s+extends\s+", _ID, r")?(?:\s+implements\s+[^{]+)?\s*\{",
        ),
    ),
    interfaces=(_m(r"^interface\s+", _NAME, r"\s*\{"),),
    function_call=_WORD_CALL,
    method_call=_c(r"(?:->|::)", _NAME, _PAREN),
)

_C = LanguagePatterns(
    extension=".c",
    language="c",
    functions=(
        _m(
            r"^(?:static\s+)?(?:inline\s+)?(?:const\s+)?(?:unsigned\s+)?(?:signed\s+)?",
            r"(?:struct\s+)?(?:enum\s+)?", _ID, r"(?:\s*\*+)?\s+", _NAME, _C_BODY,
        ),
        _m(
            r"^(?:void|int|char|short|long|float|double|size_t|ssize_t|bool|_Bool)\s+",
            _NAME, _C_BODY,
        ),
    ),
    types=(
        _m(r"^typedef\s+(?:struct|union|enum)\s*\{[^}]*\}\s*", _NAME, r"\s*;"),
        _m(r"^typedef\s+[A-Za-z_][A-Za-z0-9_\s\*]+\s+", _NAME, r"\s*;"),
        _m(r"^struct\s+", _NAME, r"\s*\{"),
        _m(r"^enum\s+", _NAME, r"\s*\{"),
    ),
    function_call=_WORD_CALL,
    method_call=_c(r"(?:->|\.)\s*", _NAME, _PAREN),
)

_ZCONST = _PUB + r"const\s+" + _NAME + r"\s*=\s*"
_PACKED = r"(?:packed\s+|extern\s+)?"
_ZIG_BODY = r"\s*(?:\([^)]*\))?\s*\{"

_ZIG = LanguagePatterns(
    extension=".zig",
    language="zig",
    functions=(
        _m(r"^", _PUB, r"fn\s+", _NAME, _PAREN),
        _m(r"^", _PUB, r"(?:inline\s+|export\s+|extern\s+)fn\s+", _NAME, _PAREN),
    ),
    methods=(_m(_INDENT, _PUB, r"(?:inline\s+)?fn\s+", _NAME, _PAREN),),
    types=(
        _m(r"^", _ZCONST, _PACKED, r"struct", _ZIG_BODY),
        _m(r"^", _ZCONST, _PACKED, r"union", _ZIG_BODY),
        _m(r"^", _ZCONST, r"enum", _ZIG_BODY),
        _m(r"^", _ZCONST, r"error\s*\{"),
        _m(r"^", _ZCONST, r"opaque\s*\{"),
        _m(_INDENT, _ZCONST, _PACKED, r"(?:struct|enum|union)", _ZIG_BODY),
    ),
    function_call=_WORD_CALL,
    method_call=_DOT_CALL,
)

_RUST_MODS = r"(?:async\s+)?(?:unsafe\s+)?(?:const\s+)?"

_RUST = LanguagePatterns(
    extension=".rs",
    language="rust",
    functions=(
        _m(
            r"^", _PUB, _RUST_MODS, r'(?:extern\s+"[^"]*"\s+)?',
            r"fn\s+", _NAME, r"\s*", _GEN, _PAREN,
        ),
    ),
    methods=(_m(_INDENT, _PUB, _RUST_MODS, r"fn\s+", _NAME, r"\s*", _GEN, _PAREN),),
    types=(
        _m(r"^", _PUB, r"struct\s+", _NAME, _GEN, r"\s*(?:where\s+[^{;(]+)?(?:\{|;|\()"),
        _m(r"^", _PUB, r"enum\s+", _NAME, _GEN, r"\s*(?:where\s+[^{]+)?\{"),
        _m(r"^", _PUB, r"type\s+", _NAME, _GEN, r"\s*="),
    ),
    interfaces=(
        _m(r"^", _PUB, r"(?:unsafe\s+)?trait\s+", _NAME, _GEN, r"\s*(?::\s*[^{]+)?\s*\{"),
    ),
    function_call=_c(r"\b", _NAME, r"\s*(?:!?\s*)?\("),
    method_call=_DOT_CALL,
)

_CPPT = r"[A-Za-z_][A-Za-z0-9_:<>]*"
_REF = r"(?:\s*[&*]+)?"
_QUALS = r"(?:const\s*)?(?:noexcept\s*)?(?:override\s*)?(?:final\s*)?"
_TEMPLATE = r"^(?:template\s*<[^>]*>\s*)?"
_BASES = r"(?:\s*:\s*(?:public|protected|private)\s+[A-Za-z_][A-Za-z0-9_:<>,\s]*)?\s*\{"
_INNER_ARGS = r"\s*\([^;)]*\)\s*"

_CPP = LanguagePatterns(
    extension=".cpp",
    language="cpp",
    functions=(
        _m(
            r"^(?:static\s+)?(?:inline\s+)?(?:virtual\s+)?(?:const\s+)?(?:constexpr\s+)?",
            r"(?:unsigned\s+)?(?:signed\s+)?", _CPPT, _REF, r"\s+", _NAME,
            r"\s*\([^;]*\)\s*", _QUALS, r"\{",
        ),
        _m(r"^(?:void|int|char|short|long|float|double|bool|auto)\s+", _NAME, _C_BODY),
        _m(r"^template\s*<[^>]*>\s*(?:inline\s+)?", _CPPT, _REF, r"\s+", _NAME, _PAREN),
        _m(
            _INDENT, r"(?:static\s+)?(?:inline\s+)?",
            r"(?:void|int|char|short|long|float|double|bool|auto|", _CPPT, r")\s+",
            _NAME, _INNER_ARGS, r"\{",
        ),
    ),
    methods=(
        _m(r"^", _CPPT, _REF, r"\s+", _ID, r"::", _NAME, _PAREN),
        _m(
            _INDENT,
            r"(?:virtual\s+)?(?:static\s+)?(?:inline\s+)?(?:constexpr\s+)?(?:explicit\s+)?",
            r"(?:void|int|char|bool|auto|size_t|", _CPPT, _REF, r")\s+",
            _NAME, _INNER_ARGS, _QUALS, r"(?:\{|=)",
        ),
        _m(
            _INDENT, r"(?:explicit\s+)?(?:virtual\s+)?(~?[A-Z][A-Za-z0-9_]*)",
            _INNER_ARGS, r"(?:noexcept\s*)?(?::\s*[^{]+)?\{",
        ),
    ),
    classes=(
        _m(_TEMPLATE, r"class\s+", _NAME, _BASES),
        _m(_TEMPLATE, r"struct\s+", _NAME, _BASES),
    ),
    types=(
        _m(r"^using\s+", _NAME, r"\s*="),
        _m(r"^typedef\s+[A-Za-z_][A-Za-z0-9_\s\*<>:,]+\s+", _NAME, r"\s*;"),
        _m(r"^enum\s+(?:class\s+)?", _NAME, r"\s*(?::\s*", _ID, r")?\s*\{"),
    ),
    function_call=_WORD_CALL,
    method_call=_c(r"(?:->|\.|::)", _NAME, _PAREN),
)

_VIS = r"(?:(?:public|protected|private)\s+)?"
_PUBLIC = r"^(?:public\s+)?"
_TGEN = r"(?:<[^>]+>\s+)?"
_JTYPE = r"[A-Za-z_][A-Za-z0-9_<>,\[\]\s]*\s+"
_JARGS = r"\s*\([^)]*\)\s*"
_THROWS = r"(?:throws\s+[A-Za-z_][A-Za-z0-9_,\s]*)?\s*\{"
_JLIST = r"[A-Za-z_][A-Za-z0-9_<>,\s]*"
_EXTENDS = r"(?:\s+extends\s+" + _JLIST + ")?"
_IMPLEMENTS = r"(?:\s+implements\s+" + _JLIST + ")?"
_PERMITS = r"(?:\s+permits\s+[A-Za-z_][A-Za-z0-9_,\s]*)?"
_SEALING = r"(?:sealed\s+)?(?:non-sealed\s+)?"

# Java has no free functions: everything is a method.
_JAVA = LanguagePatterns(
    extension=".java",
    language="java",
    functions=(),
    methods=(
        _m(
            r"^\s+", _VIS, r"(?:static\s+)?(?:final\s+)?(?:abstract\s+)?",
            r"(?:synchronized\s+)?(?:native\s+)?(?:strictfp\s+)?",
            _TGEN, _JTYPE, _LOWER, _JARGS, _THROWS,
        ),
        _m(r"^\s+", _VIS, _UPPER, _JARGS, _THROWS),
        _m(
            r"^\s+", _VIS, r"(?:static\s+)?(?:abstract\s+)?",
            _TGEN, _JTYPE, _LOWER, _JARGS, r";",
        ),
        _m(r"^\s+default\s+", _TGEN, _JTYPE, _LOWER, _JARGS, r"\{"),
    ),
    classes=(
        _m(
            _PUBLIC, r"(?:abstract\s+)?(?:final\s+)?", _SEALING, r"(?:strictfp\s+)?",
            r"class\s+", _UPPER, _GEN, _EXTENDS, _IMPLEMENTS, _PERMITS, r"\s*\{",
        ),
        _m(
            r"^\s+", _VIS, r"(?:static\s+)?(?:abstract\s+)?(?:final\s+)?", _SEALING,
            r"class\s+", _UPPER, _GEN, _EXTENDS, _IMPLEMENTS, r"\s*\{",
        ),
        _m(_PUBLIC, r"enum\s+", _UPPER, _IMPLEMENTS, r"\s*\{"),
        _m(_PUBLIC, r"record\s+", _UPPER, _GEN, r"\s*\([^)]*\)", _IMPLEMENTS, r"\s*\{"),
    ),
    interfaces=(
        _m(
            _PUBLIC, r"(?:sealed\s+)?interface\s+", _UPPER, _GEN,
            _EXTENDS, _PERMITS, r"\s*\{",
        ),
        _m(_PUBLIC, r"@interface\s+", _UPPER, r"\s*\{"),
    ),
    types=(_m(r"^\s+", _VIS, r"(?:static\s+)?enum\s+", _UPPER, r"\s*\{"),),
    function_call=_WORD_CALL,
    method_call=_DOT_CALL,
)

LANGUAGE_PATTERNS: dict[str, LanguagePatterns] = {
    ".go": _GO,
    ".js": _JS,
    ".ts": _TS,
    ".jsx": _JSX,
    ".tsx": _TSX,
    ".py": _PYTHON,
    ".php": _PHP,
    ".c": _C,
    ".h": _C,
    ".zig": _ZIG,
    ".rs": _RUST,
    ".cpp": _CPP,
    ".hpp": _CPP,
    ".cc": _CPP,
    ".cxx": _CPP,
    ".hxx": _CPP,
    ".java": _JAVA,
}

_BASE = frozenset({"if", "for", "return"})
_LOOPS = _BASE | {"while", "switch"}

_JS_KEYWORDS = _LOOPS | {
    "new", "typeof", "instanceof", "await", "yield", "throw", "try", "catch",
    "finally", "delete", "void", "import", "export", "require",
}

LANGUAGE_KEYWORDS: dict[str, frozenset[str]] = {
    "go": _BASE | {
        "range", "switch", "select", "go", "defer", "make", "new", "append",
        "len", "cap", "panic", "recover", "close", "delete", "copy", "print",
        "println", "complex", "real", "imag",
    },
    "javascript": _JS_KEYWORDS,
    "typescript": _JS_KEYWORDS | {"keyof"},
    "python": _BASE | {
        "while", "with", "yield", "raise", "assert", "print", "len", "range",
        "enumerate", "zip", "map", "filter", "list", "dict", "set", "tuple",
        "str", "int", "float", "bool", "type", "isinstance", "hasattr",
        "getattr", "setattr", "delattr", "open", "input", "super",
    },
    "php": _LOOPS | {
        "foreach", "new", "echo", "print", "isset", "empty", "array", "unset",
        "include", "require", "include_once", "require_once", "die", "exit",
    },
    "c": _LOOPS | {
        "sizeof", "typeof", "goto", "break", "continue", "malloc", "calloc",
        "realloc", "free", "printf", "fprintf", "sprintf", "scanf", "memcpy",
        "memset", "strlen", "strcmp", "strcpy", "strcat",
    },
    "cpp": _LOOPS | {
        "new", "delete", "sizeof", "typeof", "typeid", "throw", "try", "catch",
        "static_cast", "dynamic_cast", "const_cast", "reinterpret_cast",
        "decltype", "noexcept",
    },
    "zig": _LOOPS | {
        "break", "continue", "unreachable", "defer", "errdefer", "try", "catch",
        "orelse", "comptime", "inline", "assert", "expect", "expectEqual",
        "expectError",
    },
    "rust": _BASE | {
        "while", "loop", "match", "break", "continue", "panic", "assert",
        "assert_eq", "vec", "Box", "Rc", "Arc", "Some", "None", "Ok", "Err",
        "println", "print", "format",
    },
    "java": _LOOPS | {
        "else", "do", "case", "default", "break", "continue", "throw", "try",
        "catch", "finally", "new", "instanceof", "this", "super", "assert",
        "synchronized", "println", "print", "printf", "valueOf", "toString",
        "equals", "hashCode", "length", "size", "get", "set", "add", "remove",
        "isEmpty", "contains", "containsKey", "containsValue", "put", "clear",
        "toArray",
    },
}


def get_patterns_for_language(ext: str) -> LanguagePatterns | None:
    """Return the patterns for a file extension such as ``".go"``, or None."""
    return LANGUAGE_PATTERNS.get(ext)


def supported_extensions() -> list[str]:
    """Return every file extension that has patterns."""
    return list(LANGUAGE_PATTERNS)


def is_keyword(name: str, lang: str) -> bool:
    """Tell whether ``name`` is a keyword or builtin to skip as a call in ``lang``."""
    return name in LANGUAGE_KEYWORDS.get(lang, frozenset())
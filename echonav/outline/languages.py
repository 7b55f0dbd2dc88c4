"""Language/grammar configuration for symbol extraction."""

from __future__ import annotations

import re

from .types import SymbolKind

LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".pyw": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
    ".rb": "ruby",
    ".php": "php",
    ".cs": "c_sharp",
    ".kt": "kotlin",
    ".scala": "scala",
}

# Editor language ids that name the same grammar.
LANGUAGE_ALIASES: dict[str, str] = {
    "c++": "cpp",
    "javascriptreact": "javascript",
    "js": "javascript",
    "typescriptreact": "tsx",
    "ts": "typescript",
    "csharp": "c_sharp",
    "py": "python",
    "python3": "python",
}

CLASS_NODE_TYPES = {
    "class_definition",
    "class_declaration",
    "class_specifier",
    "class",
}
STRUCT_NODE_TYPES = {
    "struct_specifier",
    "struct_item",
    "struct_declaration",
}
FUNCTION_NODE_TYPES = {
    "function_definition",
    "function_declaration",
    "function_item",
    "method",
}
METHOD_NODE_TYPES = {
    "method_definition",
    "method_declaration",
}
CONSTRUCTOR_NODE_TYPES = {
    "constructor_declaration",
}
# Containers whose functions are methods but which are not symbols themselves.
IMPL_NODE_TYPES = {
    "impl_item",
}
DECORATED_NODE_TYPES = {
    "decorated_definition",
    "decorated_declaration",
}
# Method names that denote constructors in languages without a dedicated node.
CONSTRUCTOR_NAMES = {
    "__init__",
    "constructor",
    "initialize",
}
IDENTIFIER_NODE_TYPES = {
    "identifier",
    "type_identifier",
    "property_identifier",
    "field_identifier",
    "namespace_identifier",
    "constant",
}

MISSING_PARSER_ERROR = (
    "Tree-sitter parser package not found. Install tree-sitter-language-pack or tree-sitter-languages."
)

DEFAULT_FALLBACK_LANGUAGE = "python"

_JS_FAMILY_PATTERNS: tuple[tuple[SymbolKind, re.Pattern[str]], ...] = (
    (SymbolKind.CLASS, re.compile(r"^\s*(?P<keyword>(?:export\s+)?class)\s+(?P<name>[A-Za-z_$][\w$]*)")),
    (
        SymbolKind.FUNCTION,
        re.compile(r"^\s*(?P<keyword>(?:export\s+)?(?:async\s+)?function)\s+(?P<name>[A-Za-z_$][\w$]*)"),
    ),
    (
        SymbolKind.FUNCTION,
        re.compile(
            r"^\s*(?P<keyword>(?:export\s+)?(?:const|let|var))\s+(?P<name>[A-Za-z_$][\w$]*)"
            r"\s*=\s*(?:async\s*)?\([^)]*\)\s*=>"
        ),
    ),
)

FALLBACK_PATTERNS_BY_LANGUAGE: dict[str, tuple[tuple[SymbolKind, re.Pattern[str]], ...]] = {
    "python": (
        (SymbolKind.CLASS, re.compile(r"^\s*(?P<keyword>class)\s+(?P<name>[A-Za-z_][\w]*)")),
        (SymbolKind.FUNCTION, re.compile(r"^\s*(?P<keyword>(?:async\s+)?def)\s+(?P<name>[A-Za-z_][\w]*)")),
    ),
    "javascript": _JS_FAMILY_PATTERNS,
    "typescript": _JS_FAMILY_PATTERNS,
    "tsx": _JS_FAMILY_PATTERNS,
    "go": (
        (SymbolKind.STRUCT, re.compile(r"^\s*(?P<keyword>type)\s+(?P<name>[A-Za-z_][\w]*)\s+struct\b")),
        (SymbolKind.FUNCTION, re.compile(r"^\s*(?P<keyword>func)\s+(?:\([^)]*\)\s*)?(?P<name>[A-Za-z_][\w]*)\s*\(")),
    ),
    "rust": (
        (SymbolKind.STRUCT, re.compile(r"^\s*(?P<keyword>(?:pub\s+)?struct)\s+(?P<name>[A-Za-z_][\w]*)\b")),
        (SymbolKind.FUNCTION, re.compile(r"^\s*(?P<keyword>(?:pub\s+)?(?:async\s+)?fn)\s+(?P<name>[A-Za-z_][\w]*)\s*[(<]")),
    ),
    "ruby": (
        (SymbolKind.CLASS, re.compile(r"^\s*(?P<keyword>class)\s+(?P<name>[A-Za-z_][\w:]*)")),
        (SymbolKind.FUNCTION, re.compile(r"^\s*(?P<keyword>def)\s+(?P<name>[A-Za-z_][\w!?=]*)")),
    ),
}


def normalize_language_id(language_id: str | None) -> str:
    """Fold editor language ids onto grammar names (``c++`` -> ``cpp``)."""
    key = (language_id or "").strip().lower()
    return LANGUAGE_ALIASES.get(key, key)

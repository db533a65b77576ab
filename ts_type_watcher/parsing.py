"""Tree-sitter helpers for parsing TypeScript sources."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

_GRAMMARS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_PARSERS: Dict[str, Parser] = {}


def dialect_for_path(path: Path) -> str:
    """Return the grammar name used to parse ``path``."""
    return "tsx" if path.suffix.lower() == ".tsx" else "typescript"


def get_parser(dialect: str = "typescript") -> Parser:
    """Return a cached parser for the requested TypeScript dialect."""
    parser = _PARSERS.get(dialect)
    if parser is not None:
        return parser
    try:
        grammar = _GRAMMARS[dialect]
    except KeyError:
        raise ValueError(f"Unsupported TypeScript dialect: {dialect}") from None
    parser = Parser(Language(grammar()))
    _PARSERS[dialect] = parser
    return parser


def parse_source(source_bytes: bytes, dialect: str = "typescript") -> Tree:
    return get_parser(dialect).parse(source_bytes)


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def significant_children(node: Node) -> List[Node]:
    """Named children of ``node`` with comments filtered out."""
    return [child for child in node.named_children if child.type != "comment"]


def unwrap_declaration(node: Node) -> Optional[Node]:
    """Strip ``export`` and ``declare`` wrappers from a top-level statement."""
    while node.type in {"export_statement", "ambient_declaration"}:
        inner = node.child_by_field_name("declaration")
        if inner is None:
            children = significant_children(node)
            inner = children[0] if children else None
        if inner is None:
            return None
        node = inner
    return node


def type_annotation_text(node: Optional[Node], source_bytes: bytes) -> Optional[str]:
    """Return the type text of a ``: T`` annotation, without the colon."""
    if node is None:
        return None
    if node.type.endswith("annotation"):
        children = significant_children(node)
        if not children:
            return None
        return node_text(children[0], source_bytes)
    return node_text(node, source_bytes)


__all__ = [
    "dialect_for_path",
    "get_parser",
    "node_text",
    "parse_source",
    "significant_children",
    "type_annotation_text",
    "unwrap_declaration",
]

"""Static extraction of return types from top-level service functions.

Two strategies are applied in order:

* **annotation** - the function's explicit return type, with one level of
  ``Promise<...>`` removed so consumers see the awaited value.
* **literal** - when no annotation exists, the type is inferred from the literal
  shape of the first ``return`` statement that sits directly in the function's
  body block. Returns nested in branches, loops or inner blocks are never
  consulted.

A function whose return type cannot be determined still yields a record, with
``raw_return_text`` left empty and ``skip_reason`` describing the failure.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List

from tree_sitter import Node

from .errors import ExtractionSkipped
from .models import FunctionReturnRecord
from .parsing import (
    dialect_for_path,
    node_text,
    parse_source,
    significant_children,
    type_annotation_text,
    unwrap_declaration,
)

_PROMISE_PATTERN = re.compile(r"^Promise<(.*)>$", re.DOTALL)

_FUNCTION_NODE_TYPES = {"arrow_function", "function_expression", "function"}
_VARIABLE_NODE_TYPES = {"lexical_declaration", "variable_declaration"}
_STRING_NODE_TYPES = {"string", "template_string"}
_BOOLEAN_NODE_TYPES = {"true", "false"}
_OBJECT_KEY_TYPES = {"property_identifier", "string", "number"}

NUMBER_TYPE = "number"
STRING_TYPE = "string"
BOOLEAN_TYPE = "boolean"
EMPTY_ARRAY_ELEMENT = "unknown"


def unwrap_promise_type(type_text: str) -> str:
    """Strip a single outer ``Promise<...>`` from ``type_text``."""
    match = _PROMISE_PATTERN.match(type_text)
    if match:
        return match.group(1)
    return type_text


def extract_file(path: Path) -> List[FunctionReturnRecord]:
    """Read and parse ``path``, returning one record per top-level function binding."""
    source = Path(path).read_bytes().decode("utf-8", errors="replace")
    records = extract_return_types(source, dialect=dialect_for_path(Path(path)))
    for record in records:
        record.source_file = Path(path)
    return records


def extract_return_types(source: str, dialect: str = "typescript") -> List[FunctionReturnRecord]:
    """Return a record for every top-level variable bound to a function expression."""
    source_bytes = source.encode("utf-8")
    tree = parse_source(source_bytes, dialect)
    records: List[FunctionReturnRecord] = []
    for name, function_node in _iter_function_bindings(tree.root_node, source_bytes):
        record = FunctionReturnRecord(function_name=name)
        annotation = type_annotation_text(
            function_node.child_by_field_name("return_type"), source_bytes
        )
        if annotation is not None:
            record.raw_return_text = unwrap_promise_type(annotation)
            record.strategy = "annotation"
        else:
            try:
                record.raw_return_text = _infer_from_body(function_node, source_bytes)
                record.strategy = "literal"
            except ExtractionSkipped as exc:
                record.skip_reason = exc.reason
        records.append(record)
    return records


def _iter_function_bindings(root: Node, source_bytes: bytes) -> Iterator[tuple[str, Node]]:
    for statement in root.named_children:
        declaration = unwrap_declaration(statement)
        if declaration is None or declaration.type not in _VARIABLE_NODE_TYPES:
            continue
        for declarator in significant_children(declaration):
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name_node is None or name_node.type != "identifier" or value is None:
                continue
            if value.type in _FUNCTION_NODE_TYPES:
                yield node_text(name_node, source_bytes), value


def _infer_from_body(function_node: Node, source_bytes: bytes) -> str:
    body = function_node.child_by_field_name("body")
    if body is None:
        raise ExtractionSkipped("function has no body")
    if body.type != "statement_block":
        # Concise arrow body: the expression is the implicit return value.
        return infer_literal_type(body, source_bytes)

    return_statement = next(
        (child for child in body.named_children if child.type == "return_statement"), None
    )
    if return_statement is None:
        raise ExtractionSkipped("no return statement in the function body")
    expressions = significant_children(return_statement)
    if not expressions:
        raise ExtractionSkipped("return statement has no value")
    return infer_literal_type(expressions[0], source_bytes)


def infer_literal_type(node: Node, source_bytes: bytes) -> str:
    """Infer a type expression from the literal shape of ``node``.

    Raises:
        ExtractionSkipped: when ``node`` (or anything nested in it) is not a
            number, string, boolean, array or object literal.
    """
    kind = node.type
    if kind == "parenthesized_expression":
        inner = significant_children(node)
        if len(inner) != 1:
            raise ExtractionSkipped("unsupported parenthesized expression")
        return infer_literal_type(inner[0], source_bytes)
    if kind == "number":
        return NUMBER_TYPE
    if kind == "unary_expression" and _is_signed_number(node):
        return NUMBER_TYPE
    if kind in _STRING_NODE_TYPES:
        return STRING_TYPE
    if kind in _BOOLEAN_NODE_TYPES:
        return BOOLEAN_TYPE
    if kind == "array":
        return _infer_array(node, source_bytes)
    if kind == "object":
        return _infer_object(node, source_bytes)
    raise ExtractionSkipped(f"unsupported return expression '{kind}'")


def _is_signed_number(node: Node) -> bool:
    operator = node.child_by_field_name("operator")
    argument = node.child_by_field_name("argument")
    return (
        operator is not None
        and argument is not None
        and operator.type in {"-", "+"}
        and argument.type == "number"
    )


def _infer_array(node: Node, source_bytes: bytes) -> str:
    element_types: List[str] = []
    for element in significant_children(node):
        element_type = infer_literal_type(element, source_bytes)
        if element_type not in element_types:
            element_types.append(element_type)
    if not element_types:
        return f"Array<{EMPTY_ARRAY_ELEMENT}>"
    return f"Array<{' | '.join(element_types)}>"


def _infer_object(node: Node, source_bytes: bytes) -> str:
    fields: List[str] = []
    for prop in significant_children(node):
        if prop.type != "pair":
            raise ExtractionSkipped(f"unsupported object member '{prop.type}'")
        key = prop.child_by_field_name("key")
        value = prop.child_by_field_name("value")
        if key is None or value is None or key.type not in _OBJECT_KEY_TYPES:
            raise ExtractionSkipped("unsupported object key")
        fields.append(f"{node_text(key, source_bytes)}: {infer_literal_type(value, source_bytes)}")
    if not fields:
        return "{}"
    return "{ " + "; ".join(fields) + " }"


__all__ = [
    "BOOLEAN_TYPE",
    "NUMBER_TYPE",
    "STRING_TYPE",
    "extract_file",
    "extract_return_types",
    "infer_literal_type",
    "unwrap_promise_type",
]

"""Build the catalog of named shapes from a Prisma-style schema declaration file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from tree_sitter import Node

from .errors import ConfigurationError
from .logging import get_logger
from .models import Catalog, ShapeEntry, ShapeKind
from .parsing import (
    dialect_for_path,
    node_text,
    parse_source,
    significant_children,
    type_annotation_text,
    unwrap_declaration,
)

UNTYPED_MEMBER = "any"

_RECORD_BODY_TYPES = {"interface_body", "object_type"}

logger = get_logger("schema")


def build_catalog(schema_path: Path) -> Catalog:
    """Parse ``schema_path`` into a name to shape catalog.

    Raises:
        ConfigurationError: when the schema file does not exist.
    """
    schema_path = Path(schema_path)
    if not schema_path.is_file():
        raise ConfigurationError(f"Prisma index file not found at {schema_path}")
    source = schema_path.read_bytes().decode("utf-8", errors="replace")
    catalog = parse_schema_source(source, dialect=dialect_for_path(schema_path))
    logger.debug("Catalog built from %s with %d entries", schema_path, len(catalog))
    return catalog


def parse_schema_source(source: str, dialect: str = "typescript") -> Catalog:
    """Collect record and enum shapes declared at the top level of ``source``."""
    source_bytes = source.encode("utf-8")
    tree = parse_source(source_bytes, dialect)
    catalog: Catalog = {}
    for statement in tree.root_node.named_children:
        declaration = unwrap_declaration(statement)
        if declaration is None:
            continue
        entry = _shape_for_declaration(declaration, source_bytes)
        if entry is None:
            continue
        if entry.name in catalog:
            logger.debug("Schema redeclares %s; keeping the last declaration", entry.name)
        catalog[entry.name] = entry
    return catalog


def _shape_for_declaration(node: Node, source_bytes: bytes) -> Optional[ShapeEntry]:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    name = node_text(name_node, source_bytes)

    if node.type == "interface_declaration":
        body = node.child_by_field_name("body")
        members = list(_record_members(body, source_bytes))
    elif node.type == "type_alias_declaration":
        value = node.child_by_field_name("value")
        if value is None or value.type not in _RECORD_BODY_TYPES:
            return None
        members = list(_record_members(value, source_bytes))
    elif node.type == "enum_declaration":
        labels = list(_enum_labels(node.child_by_field_name("body"), source_bytes))
        if not labels:
            return None
        return ShapeEntry(name=name, kind=ShapeKind.UNION, body_text=" | ".join(labels))
    else:
        return None

    if not members:
        return None
    return ShapeEntry(
        name=name, kind=ShapeKind.RECORD, body_text="{ " + "; ".join(members) + " }"
    )


def _record_members(body: Optional[Node], source_bytes: bytes) -> Iterable[str]:
    if body is None:
        return
    for member in significant_children(body):
        if member.type != "property_signature":
            continue
        name_node = member.child_by_field_name("name")
        if name_node is None:
            continue
        member_type = type_annotation_text(member.child_by_field_name("type"), source_bytes)
        yield f"{node_text(name_node, source_bytes)}: {member_type or UNTYPED_MEMBER}"


def _enum_labels(body: Optional[Node], source_bytes: bytes) -> List[str]:
    if body is None:
        return []
    labels: List[str] = []
    for member in significant_children(body):
        if member.type == "enum_assignment":
            name_node = member.child_by_field_name("name")
            if name_node is not None:
                labels.append(node_text(name_node, source_bytes))
        else:
            labels.append(node_text(member, source_bytes))
    return labels


__all__ = ["UNTYPED_MEMBER", "build_catalog", "parse_schema_source"]

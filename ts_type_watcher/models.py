"""Core data models shared across the regeneration pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class ShapeKind(str, Enum):
    """How a catalog entry renders its body."""

    RECORD = "record"
    UNION = "union"


@dataclass(frozen=True)
class ShapeEntry:
    """A named shape parsed from the schema file."""

    name: str
    kind: ShapeKind
    body_text: str


Catalog = Dict[str, ShapeEntry]


@dataclass
class FunctionReturnRecord:
    """Return type information for one top-level function binding."""

    function_name: str
    source_file: Optional[Path] = None
    raw_return_text: Optional[str] = None
    resolved_return_text: Optional[str] = None
    strategy: Optional[str] = None
    skip_reason: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.raw_return_text is not None and self.resolved_return_text is not None


@dataclass
class RunReport:
    """Summary of a completed regeneration run."""

    output_path: Path
    catalog_size: int
    files_scanned: int
    emitted: List[FunctionReturnRecord] = field(default_factory=list)
    skipped: List[FunctionReturnRecord] = field(default_factory=list)


__all__ = [
    "Catalog",
    "FunctionReturnRecord",
    "RunReport",
    "ShapeEntry",
    "ShapeKind",
]

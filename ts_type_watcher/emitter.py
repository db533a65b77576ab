"""Render and write the merged declarations file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .errors import WriteError
from .models import Catalog, FunctionReturnRecord

RETURN_TYPE_SUFFIX = "ReturnType"


def render_declarations(catalog: Catalog, records: Iterable[FunctionReturnRecord]) -> str:
    """Render catalog declarations followed by resolved function return types."""
    lines: List[str] = [
        f"type {name} = {entry.body_text};" for name, entry in catalog.items()
    ]
    for record in records:
        if not record.is_resolved:
            continue
        lines.append(
            f"type {record.function_name}{RETURN_TYPE_SUFFIX} = {record.resolved_return_text};"
        )
    return "\n".join(lines)


def write_declarations(
    output_path: Path, catalog: Catalog, records: Iterable[FunctionReturnRecord]
) -> Path:
    """Write the declarations file, replacing any previous content.

    Raises:
        WriteError: when the output directory or file cannot be written.
    """
    content = render_declarations(catalog, records)
    output_path = Path(output_path).expanduser().resolve()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Unable to write types file {output_path}: {exc}") from exc
    return output_path


__all__ = ["RETURN_TYPE_SUFFIX", "render_declarations", "write_declarations"]

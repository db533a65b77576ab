"""Token-level substitution of catalog names inside return type text.

``resolve`` replaces every maximal identifier token that names a catalog entry
with that entry's rendered body. It does not parse the type: a catalog name
that also appears as a common word, property key or string literal is replaced
all the same. Unknown tokens pass through unchanged and substituted text is not
scanned again.
"""

from __future__ import annotations

import re
from typing import Iterable

from .models import Catalog, FunctionReturnRecord

_IDENTIFIER_TOKEN = re.compile(r"\w+", re.ASCII)


def resolve(text: str, catalog: Catalog) -> str:
    """Return ``text`` with catalog names expanded to their shapes."""

    def _substitute(match: re.Match[str]) -> str:
        entry = catalog.get(match.group(0))
        return entry.body_text if entry is not None else match.group(0)

    return _IDENTIFIER_TOKEN.sub(_substitute, text)


def resolve_records(records: Iterable[FunctionReturnRecord], catalog: Catalog) -> None:
    """Fill ``resolved_return_text`` on every record that has raw text."""
    for record in records:
        if record.raw_return_text is not None:
            record.resolved_return_text = resolve(record.raw_return_text, catalog)


__all__ = ["resolve", "resolve_records"]

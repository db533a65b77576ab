"""Keep generated TypeScript return-type declarations in sync with service files."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]

"""List service files that are candidates for return type extraction."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import List

from .errors import DirectoryNotFoundError

SERVICE_FILE_SUFFIX = "Services.ts"


def scan_service_files(directory: Path, suffix: str = SERVICE_FILE_SUFFIX) -> List[Path]:
    """Return regular files directly inside ``directory`` whose name ends with ``suffix``.

    Entries come back in filesystem listing order, which is not guaranteed to be
    stable across platforms. Symlinks and directories are excluded.
    """
    root = Path(directory).expanduser().resolve()
    try:
        names = os.listdir(root)
    except FileNotFoundError:
        raise DirectoryNotFoundError(f"Services directory not found: {directory}") from None
    except NotADirectoryError:
        raise DirectoryNotFoundError(f"Services path is not a directory: {directory}") from None

    files: List[Path] = []
    for name in names:
        if not name.endswith(suffix):
            continue
        candidate = root / name
        try:
            mode = candidate.lstat().st_mode
        except FileNotFoundError:
            # Removed between listing and stat.
            continue
        if stat.S_ISREG(mode):
            files.append(candidate)
    return files


__all__ = ["SERVICE_FILE_SUFFIX", "scan_service_files"]

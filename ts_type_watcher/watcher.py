"""File watcher that triggers regeneration when service files change."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, Optional, Set, Tuple

from watchfiles import Change, DefaultFilter, watch

from .config import WatcherConfig
from .logging import get_logger
from .scheduler import RegenerationScheduler

EVENT_NAMES = {
    Change.added: "add",
    Change.modified: "change",
    Change.deleted: "unlink",
}

logger = get_logger("watcher")


class ServiceFileFilter(DefaultFilter):
    """Accept service files anywhere below the services directory."""

    def __init__(self, services_directory: Path, suffix: str) -> None:
        super().__init__()
        self.services_directory = Path(services_directory).resolve()
        self.suffix = suffix

    def __call__(self, change: Change, path: str) -> bool:
        if not path.endswith(self.suffix):
            return False
        candidate = Path(path).resolve()
        if self.services_directory not in candidate.parents:
            return False
        return super().__call__(change, path)


def watch_root(services_directory: Path) -> Path:
    """Return the directory to watch: the services directory or its nearest existing ancestor."""
    candidate = Path(services_directory).resolve()
    while not candidate.exists() and candidate.parent != candidate:
        candidate = candidate.parent
    return candidate


def handle_changes(changes: Iterable[Tuple[Change, str]], scheduler: RegenerationScheduler) -> bool:
    """Log each change and request one regeneration for the batch."""
    seen = False
    for change, path in sorted(changes, key=lambda item: item[1]):
        logger.info(
            "File %s has been changed (%s). Regenerating types...",
            path,
            EVENT_NAMES.get(change, change.name),
        )
        seen = True
    if not seen:
        return False
    return scheduler.request("file change")


def watch_services(
    config: WatcherConfig,
    scheduler: RegenerationScheduler,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Regenerate once, then on every batch of service file changes until stopped."""
    scheduler.request("initial scan")

    root = watch_root(config.services_directory)
    watch_filter = ServiceFileFilter(config.services_directory, config.service_suffix)
    logger.info("Watching for file changes in %s...", root)
    changes: Set[Tuple[Change, str]]
    for changes in watch(root, watch_filter=watch_filter, stop_event=stop_event):
        handle_changes(changes, scheduler)


__all__ = ["EVENT_NAMES", "ServiceFileFilter", "handle_changes", "watch_root", "watch_services"]

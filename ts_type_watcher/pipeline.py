"""Regeneration pipeline: schema catalog, scan, extract, resolve, emit."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List

from .config import WatcherConfig
from .emitter import write_declarations
from .extractor import extract_file
from .logging import get_logger
from .models import FunctionReturnRecord, RunReport
from .resolver import resolve_records
from .scanner import scan_service_files
from .schema import build_catalog


class PipelineState(str, Enum):
    IDLE = "idle"
    CATALOG_BUILT = "catalog_built"
    FILES_SCANNED = "files_scanned"
    EXTRACTED = "extracted"
    RESOLVED = "resolved"
    EMITTED = "emitted"


class RegenerationPipeline:
    """Runs one full regeneration of the declarations file per call to ``run``.

    Nothing is carried between runs: the catalog is rebuilt from the schema
    file every time and threaded explicitly through resolution and emission.
    The output file is only opened once every earlier stage has succeeded, so
    a failed run leaves the previous artifact untouched.
    """

    def __init__(self, config: WatcherConfig) -> None:
        self.config = config
        self.state = PipelineState.IDLE
        self.logger = get_logger("pipeline")

    def run(self) -> RunReport:
        try:
            return self._run()
        finally:
            self.state = PipelineState.IDLE

    def _run(self) -> RunReport:
        config = self.config
        catalog = build_catalog(config.prisma_index_file)
        self._advance(PipelineState.CATALOG_BUILT)

        files = scan_service_files(config.services_directory, config.service_suffix)
        self._advance(PipelineState.FILES_SCANNED)
        self.logger.debug("Scanner found %d service file(s)", len(files))

        records: List[FunctionReturnRecord] = []
        for path in files:
            try:
                records.extend(extract_file(path))
            except OSError as exc:
                # Removed or unreadable between the listing and the read.
                self.logger.warning("Skipping service file %s: %s", path, exc)
        self._advance(PipelineState.EXTRACTED)

        resolve_records(records, catalog)
        self._advance(PipelineState.RESOLVED)

        emitted: List[FunctionReturnRecord] = []
        skipped: List[FunctionReturnRecord] = []
        for record in records:
            if record.is_resolved:
                self.logger.info(
                    "Extracted type for %s: %s", record.function_name, record.resolved_return_text
                )
                emitted.append(record)
            else:
                self.logger.warning(
                    "Could not extract type for %s (%s)",
                    record.function_name,
                    record.skip_reason or "no return type",
                )
                skipped.append(record)

        output_path = write_declarations(config.output_file, catalog, emitted)
        self._advance(PipelineState.EMITTED)
        self.logger.info("Types file has been generated at %s.", output_path)

        return RunReport(
            output_path=output_path,
            catalog_size=len(catalog),
            files_scanned=len(files),
            emitted=emitted,
            skipped=skipped,
        )

    def _advance(self, state: PipelineState) -> None:
        self.logger.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state


def regenerate(config: WatcherConfig) -> Path:
    """Run a single regeneration and return the written output path."""
    return RegenerationPipeline(config).run().output_path


__all__ = ["PipelineState", "RegenerationPipeline", "regenerate"]

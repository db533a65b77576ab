"""Helper utilities for constructing temporary TypeScript projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Mapping

from ts_type_watcher.config import WatcherConfig, load_config


class ProjectBuilder:
    """Writes a schema file, service files and a config file into a throwaway project."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self.services_dir = self.root / "src" / "services"
        self.schema_path = self.root / "prisma" / "index.d.ts"
        self.output_path = self.root / "src" / "types" / "generated.d.ts"

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the project root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_schema(self, content: str) -> Path:
        self.write({self.schema_path.relative_to(self.root).as_posix(): content})
        return self.schema_path

    def write_service(self, name: str, content: str) -> Path:
        relative = (self.services_dir / name).relative_to(self.root).as_posix()
        self.write({relative: content})
        return self.services_dir / name

    def write_config(self) -> Path:
        config_path = self.root / "ts-type-watcher-config.json"
        payload = {
            "servicesDirectory": "src/services",
            "outputFile": "src/types/generated.d.ts",
            "prismaIndexFile": "prisma/index.d.ts",
        }
        config_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return config_path

    def config(self) -> WatcherConfig:
        """Write the config file and load it back."""
        return load_config(self.write_config())

    def output(self) -> str:
        return self.output_path.read_text(encoding="utf-8")


__all__ = ["ProjectBuilder"]

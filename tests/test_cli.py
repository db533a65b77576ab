"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder
from ts_type_watcher import cli
from ts_type_watcher.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["watch", "--verbose"])
    assert args.verbose is True
    assert args.command == "watch"


def test_cli_requires_a_command() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_generate_writes_types(project: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    project.write_schema("interface User { id: string }\n")
    project.write_service(
        "userServices.ts",
        """
        export const getUser = (): Promise<User> => load();
        export const broken = () => load();
        """,
    )
    config_path = project.write_config()

    main(["--config", str(config_path), "generate"])

    out = capsys.readouterr().out
    assert "Types written to" in out
    assert "Skipped 1 function(s): broken" in out
    assert project.output().splitlines() == [
        "type User = { id: string };",
        "type getUserReturnType = { id: string };",
    ]


def test_generate_missing_schema_exits_nonzero(
    project: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project.write_service("userServices.ts", "export const ping = () => 1;\n")
    config_path = project.write_config()

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_path), "generate"])

    assert excinfo.value.code == 1
    assert "Prisma index file not found" in capsys.readouterr().err
    assert not project.output_path.exists()


def test_missing_config_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "absent.json"), "generate"])

    assert excinfo.value.code == 1
    assert "Failed to load configuration." in capsys.readouterr().err


def test_watch_exits_nonzero_on_missing_schema(
    project: ProjectBuilder, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = project.write_config()

    def fail_fast_watch(root, watch_filter, stop_event):  # type: ignore[no-untyped-def]
        raise AssertionError("watch loop should not start")

    monkeypatch.setattr("ts_type_watcher.watcher.watch", fail_fast_watch)

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_path), "watch"])

    assert excinfo.value.code == 1


def test_watch_stops_cleanly_on_interrupt(
    project: ProjectBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = project.write_config()

    def interrupted(config, scheduler):  # type: ignore[no-untyped-def]
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "watch_services", interrupted)

    main(["--config", str(config_path), "watch"])

    assert "Stopped watching." in capsys.readouterr().out

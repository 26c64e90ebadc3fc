"""End-to-end tests of the terminal entry point with a stand-in `dotnet`."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

from conftest import SDK_PROJECT
from nuget_publisher.cli.logger import RichLogger
from nuget_publisher.cli.main_cli import build_settings, main, parse_arguments
from nuget_publisher.core.api_key_store import ApiKeyStore
from nuget_publisher.core.descriptor import BuildDescriptor


SOURCE = "https://nuget.example.test/v3/index.json"


@pytest.fixture(name="project_dir")
def project_dir_fixture(tmp_path: Path) -> Path:
    project_dir = tmp_path / "Foo"
    project_dir.mkdir()
    (project_dir / "Foo.csproj").write_text(SDK_PROJECT.format(version="1.2.9"), encoding="utf-8")
    return project_dir


def cli_args(project_dir, tool, *extra):
    return [str(project_dir), "--config", str(project_dir.parent / "config.json"),
            "--tool", str(tool), "-s", SOURCE, "-k", "s3cr3t-api-key", "-n", *extra]


def version_of(project_dir: Path) -> str:
    return BuildDescriptor.open(project_dir / "Foo.csproj").get_property("PackageVersion")


def test_parse_arguments_maps_overrides(tmp_path: Path) -> None:
    args = parse_arguments(["Foo", "-c", "Debug", "--threshold", "100", "--timeout", "90", "--dry-run"])

    assert args.project == "Foo"
    assert args.dry_run
    assert not args.gui

    settings = build_settings(parse_arguments(
        ["--config", str(tmp_path / "config.json"), "-c", "Debug", "--threshold", "100", "--timeout", "90"]
    ))
    assert settings.get("configuration") == "Debug"
    assert settings.get("rollover_threshold") == 100
    assert settings.get("process_timeout") == 90.0
    assert settings.get("tool") == "dotnet"


def test_version_flag(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as ei:
        parse_arguments(["--version"])

    assert ei.value.code == 0
    assert "nuget-publisher" in capsys.readouterr().out


def test_publish_end_to_end(project_dir: Path, fake_dotnet: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(cli_args(project_dir, fake_dotnet)) == 0

    assert version_of(project_dir) == "1.3.0"
    assert (project_dir / "bin" / "Release" / "Foo.1.3.0.nupkg").is_file()
    out = capsys.readouterr().out
    assert "Your package was pushed." in out
    assert "s3cr3t-api-key" not in out


def test_dry_run_leaves_project_alone(project_dir: Path, fake_dotnet: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(cli_args(project_dir, fake_dotnet, "--dry-run")) == 0

    assert version_of(project_dir) == "1.2.9"
    assert not (project_dir / "bin").exists()
    assert "1.3.0" in capsys.readouterr().out


def test_missing_tool_fails_after_bump(project_dir: Path, tmp_path: Path) -> None:
    assert main(cli_args(project_dir, tmp_path / "no-such-dotnet")) == 1

    assert version_of(project_dir) == "1.3.0"


def test_missing_api_key_fails_without_bump(project_dir: Path, fake_dotnet: Path) -> None:
    args = [str(project_dir), "--config", str(project_dir.parent / "config.json"),
            "--tool", str(fake_dotnet), "-s", SOURCE, "-n"]

    assert main(args) == 1
    assert version_of(project_dir) == "1.2.9"


def test_working_directory_without_project_does_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.chdir(empty)

    assert main(["--config", str(tmp_path / "config.json"), "-n"]) == 0
    assert "No project selected" in capsys.readouterr().out


def test_working_directory_with_project_is_used(
    project_dir: Path, fake_dotnet: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(project_dir)

    args = ["--config", str(project_dir.parent / "config.json"),
            "--tool", str(fake_dotnet), "-s", SOURCE, "-k", "KEY", "-n"]
    assert main(args) == 0
    assert version_of(project_dir) == "1.3.0"
    assert os.path.isfile(project_dir / "bin" / "Release" / "Foo.1.3.0.nupkg")


def test_saved_api_key_is_used_by_later_runs(project_dir: Path, fake_dotnet: Path, isolated_home: Path) -> None:
    config = str(project_dir.parent / "config.json")

    assert main(["--config", config, "-s", SOURCE, "-k", "QUJDREVGRw==", "--save-api-key", "-n"]) == 0
    assert ApiKeyStore().get_key(SOURCE) == "QUJDREVGRw=="
    assert version_of(project_dir) == "1.2.9"

    assert main([str(project_dir), "--config", config, "--tool", str(fake_dotnet), "-s", SOURCE, "-n"]) == 0
    assert version_of(project_dir) == "1.3.0"

    assert main(["--config", config, "-s", SOURCE, "--forget-api-key", "-n"]) == 0
    assert ApiKeyStore().get_key(SOURCE) == ""


def test_save_api_key_needs_a_key(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        main(["--config", str(tmp_path / "config.json"), "--save-api-key", "-n"])

    assert ei.value.code == 1


def test_save_and_reset_settings(tmp_path: Path) -> None:
    config = tmp_path / "config.json"

    assert main(["--config", str(config), "-c", "Debug", "--threshold", "100",
                 "-k", "never-stored", "--save-settings", "-n"]) == 0

    saved = json.loads(config.read_text())
    assert saved["configuration"] == "Debug"
    assert saved["rollover_threshold"] == 100
    assert "api_key" not in saved
    assert "never-stored" not in config.read_text()

    assert main(["--config", str(config), "--reset-settings", "-n"]) == 0
    assert json.loads(config.read_text())["configuration"] == "Release"


def test_maintenance_options_are_exclusive(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        parse_arguments(["--save-settings", "--reset-settings"])

    assert ei.value.code == 2


def test_gui_unavailable_exits_with_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.setitem(sys.modules, "nuget_publisher.gui.main_gui", None)

    with pytest.raises(SystemExit) as ei:
        main(["--config", str(tmp_path / "config.json"), "--gui", "-n"])

    assert ei.value.code == 1
    assert "graphical interface is not available" in capsys.readouterr().out


def test_unwritable_log_directory_only_warns(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    logger = RichLogger(use_colors=False)

    logger.setup_log_file("Foo", log_dir_base=str(blocker))
    logger.log("white", "still printed")

    assert logger.log_file is None
    out = capsys.readouterr().out
    assert "Could not create log directory" in out
    assert "still printed" in out


def test_die_logs_and_exits(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    logger = RichLogger(use_colors=False)
    logger.log_file = str(tmp_path / "publisher.log")

    with pytest.raises(SystemExit) as ei:
        logger.die("red", "tool missing", exit_code=3)

    assert ei.value.code == 3
    assert "ERROR: tool missing" in capsys.readouterr().out
    assert "ERROR: tool missing" in (tmp_path / "publisher.log").read_text()

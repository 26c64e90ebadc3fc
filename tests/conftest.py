"""Shared fixtures for the publisher tests."""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from nuget_publisher.core.api_key_store import ApiKeyStore
from nuget_publisher.core.process_runner import ProcessResult
from nuget_publisher.core.project import ProjectDescriptor
from nuget_publisher.core.settings import Settings


SDK_PROJECT = """\
<Project Sdk="Microsoft.NET.Sdk">

  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
    <PackageVersion>{version}</PackageVersion>
  </PropertyGroup>

</Project>
"""

UNVERSIONED_PROJECT = """\
<Project Sdk="Microsoft.NET.Sdk">

  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
  </PropertyGroup>

</Project>
"""

# Stand-in for `dotnet`: `pack` writes bin/<cfg>/<name>.<version>.nupkg, `nuget push` echoes.
FAKE_DOTNET = """\
#!{python}
import os, re, sys

args = sys.argv[1:]
if args[0] == "pack":
    project, configuration = args[1], args[3]
    with open(project, encoding="utf-8") as fh:
        version = re.search(r"<PackageVersion>(.*?)</PackageVersion>", fh.read()).group(1)
    name = os.path.splitext(os.path.basename(project))[0]
    out_dir = os.path.join(os.path.dirname(project), "bin", configuration)
    os.makedirs(out_dir, exist_ok=True)
    package = os.path.join(out_dir, f"{{name}}.{{version}}.nupkg")
    open(package, "wb").close()
    print(f"Successfully created package '{{package}}'.")
elif args[:2] == ["nuget", "push"]:
    print(f"Pushing {{os.path.basename(args[2])}} to '{{args[4]}}'...")
    print("Your package was pushed.")
else:
    print("unknown command", file=sys.stderr)
    sys.exit(1)
"""


@dataclass
class RecordingLogger:
    """Logger double that keeps every (style, message) pair."""

    messages: list = field(default_factory=list)

    def log(self, style: str, message: str) -> None:
        self.messages.append((style, message))

    @property
    def text(self) -> str:
        return "\n".join(message for _style, message in self.messages)


@dataclass
class RecordingHost:
    """Host double with a fixed selection that records shown reports."""

    project: ProjectDescriptor | None
    reports: list = field(default_factory=list)

    def get_selected_project(self) -> ProjectDescriptor | None:
        return self.project

    def show_report(self, text: str) -> None:
        self.reports.append(text)


@dataclass
class FakeRunner:
    """ProcessRunner double; `on_pack` runs before the pack result is returned."""

    results: dict = field(default_factory=dict)
    on_pack: Callable[[list], None] | None = None
    commands: list = field(default_factory=list)
    secrets: list = field(default_factory=list)

    def run(self, command, secrets=()):
        self.commands.append(list(command))
        self.secrets.append(tuple(secrets))
        step = "push" if command[1] == "nuget" else command[1]
        if step == "pack" and self.on_pack:
            self.on_pack(command)
        shown = ["***" if arg in secrets else arg for arg in command]
        return self.results.get(step) or ProcessResult(shown, 0, [f"{step} ok"], [])


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep ~/.config lookups and NUGET_API_KEY out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("NUGET_API_KEY", raising=False)
    return home


@pytest.fixture(name="make_project")
def make_project_fixture(tmp_path: Path) -> Callable[..., ProjectDescriptor]:
    """Returns a factory writing <tmp>/<name>/<name>.csproj."""

    def make_project(contents: str = UNVERSIONED_PROJECT, name: str = "Foo") -> ProjectDescriptor:
        project_dir = tmp_path / name
        project_dir.mkdir(exist_ok=True)
        csproj = project_dir / f"{name}.csproj"
        csproj.write_text(contents, encoding="utf-8")
        return ProjectDescriptor.from_path(csproj)

    return make_project


@pytest.fixture(name="settings")
def settings_fixture(tmp_path: Path) -> Settings:
    """Default settings backed by a file in the temp directory."""
    settings = Settings(str(tmp_path / "config.json"))
    settings.override(source="https://nuget.example.test/v3/index.json", artifact_timeout=1.0)
    return settings


@pytest.fixture(name="api_keys")
def api_keys_fixture(tmp_path: Path) -> ApiKeyStore:
    store = ApiKeyStore(str(tmp_path / "api_keys"))
    store.upsert("default", "secret-key")
    return store


@pytest.fixture(name="fake_dotnet")
def fake_dotnet_fixture(tmp_path: Path) -> Path:
    """Executable script behaving like the parts of `dotnet` we call."""
    if sys.platform == "win32":
        pytest.skip("shebang scripts need a POSIX system")

    script = tmp_path / "fake-dotnet"
    script.write_text(FAKE_DOTNET.format(python=sys.executable), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def touch_artifact(command: list) -> None:
    """FakeRunner.on_pack hook creating the package `pack` would produce."""
    project = command[2]
    configuration = command[4]
    base = os.path.dirname(project)
    name = os.path.splitext(os.path.basename(project))[0]
    with open(project, encoding="utf-8") as fh:
        text = fh.read()
    version = text.split("<PackageVersion>", 1)[1].split("</PackageVersion>", 1)[0]
    out_dir = os.path.join(base, "bin", configuration)
    os.makedirs(out_dir, exist_ok=True)
    Path(out_dir, f"{name}.{version}.nupkg").touch()

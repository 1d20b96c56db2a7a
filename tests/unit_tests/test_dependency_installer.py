"""Unit tests for the Chromium dependency check."""

from __future__ import annotations

import subprocess

from mathjax_bridge.infrastructure.engine import dependency_installer as module
from mathjax_bridge.infrastructure.engine.dependency_installer import (
    ChromiumDependencyInstaller,
)


def test_non_linux_platforms_skip_library_check(monkeypatch) -> None:
    monkeypatch.setattr(module.platform, "system", lambda: "Darwin")
    installer = ChromiumDependencyInstaller()
    assert installer.is_installed()
    assert installer.diagnose() == ""


def test_missing_libraries_are_reported(monkeypatch) -> None:
    monkeypatch.setattr(module.platform, "system", lambda: "Linux")
    monkeypatch.setattr(
        ChromiumDependencyInstaller,
        "_can_load_lib",
        lambda self, lib: lib != "libnspr4.so",
    )
    installer = ChromiumDependencyInstaller()

    assert installer.missing_libs() == ["libnspr4.so"]
    assert "libnspr4.so" in installer.diagnose()


def test_install_is_skipped_without_auto_install(monkeypatch) -> None:
    monkeypatch.setattr(module.platform, "system", lambda: "Linux")
    monkeypatch.setattr(ChromiumDependencyInstaller, "_can_load_lib", lambda self, lib: False)

    def fail_run(*args, **kwargs):
        raise AssertionError("installer must not run")

    monkeypatch.setattr(module.subprocess, "run", fail_run)
    assert ChromiumDependencyInstaller(auto_install=False).check_and_install() is False


def test_auto_install_runs_playwright_commands(monkeypatch) -> None:
    monkeypatch.setattr(module.platform, "system", lambda: "Linux")
    installed = {"done": False}
    monkeypatch.setattr(
        ChromiumDependencyInstaller, "_can_load_lib", lambda self, lib: installed["done"]
    )
    commands: list[list[str]] = []

    def fake_run(command, **kwargs):
        commands.append(command)
        if command[-2] == "install-deps":
            installed["done"] = True
        return subprocess.CompletedProcess(command, 0, b"", b"")

    monkeypatch.setattr(module.subprocess, "run", fake_run)

    assert ChromiumDependencyInstaller(auto_install=True).check_and_install() is True
    assert [command[-2:] for command in commands] == [
        ["install", "chromium"],
        ["install-deps", "chromium"],
    ]


def test_failed_install_is_attempted_once(monkeypatch) -> None:
    monkeypatch.setattr(module.platform, "system", lambda: "Linux")
    monkeypatch.setattr(ChromiumDependencyInstaller, "_can_load_lib", lambda self, lib: False)
    calls: list[list[str]] = []

    def fake_run(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, 1, b"", b"permission denied")

    monkeypatch.setattr(module.subprocess, "run", fake_run)
    installer = ChromiumDependencyInstaller(auto_install=True)

    assert installer.check_and_install() is False
    assert installer.check_and_install() is False
    assert len(calls) == 1

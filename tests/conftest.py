from pathlib import Path

import pytest

from core.config import PortsSettings


class FakeRunner:
    """CommandRunner returning canned outputs, one per call."""

    def __init__(self, outputs=None):
        self.outputs = list(outputs or [])
        self.calls = []

    def run(self, argv, *, ok_returncodes=(0,)):
        self.calls.append((list(argv), tuple(ok_returncodes)))
        if self.outputs:
            return self.outputs.pop(0)
        return ""

    @property
    def argvs(self):
        return [argv for argv, _ in self.calls]


@pytest.fixture()
def port_dbdir(tmp_path: Path) -> Path:
    path = tmp_path / "db" / "ports"
    path.mkdir(parents=True)
    return path


@pytest.fixture()
def settings(port_dbdir: Path) -> PortsSettings:
    return PortsSettings(
        _env_file=None,
        portsdir=Path("/usr/ports"),
        port_dbdir=port_dbdir,
        make_command="make",
        pkg_command="pkg",
        include_moved=False,
        warn_unattainable_fields=False,
    )


@pytest.fixture()
def make_runner():
    def _make(*outputs):
        return FakeRunner(outputs)

    return _make


@pytest.fixture()
def write_options(port_dbdir: Path):
    def _write(subdir: str, text: str, name: str = "options") -> Path:
        path = port_dbdir / subdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write

"""Shared pytest fixtures for podshell tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from click.testing import CliRunner

from podshell.infrastructure.pod import VirtualPod
from podshell.infrastructure.store import TableStore, create_store
from podshell.shell.context import BufferOutput, ShellContext, create_context

ROOT = "https://pod.example/"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> Iterator[TableStore]:
    """Fresh in-memory table store."""
    s = create_store()
    try:
        yield s
    finally:
        s.engine.dispose()


@pytest.fixture
def pod(store: TableStore) -> VirtualPod:
    return VirtualPod(store, ROOT)


@pytest.fixture
def output() -> BufferOutput:
    return BufferOutput()


@pytest.fixture
def context(store: TableStore, output: BufferOutput) -> ShellContext:
    """Shell session at the pod root, with output captured in a buffer."""
    return create_context(store, ROOT, output=output)


@pytest.fixture(autouse=True)
def _isolated_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep tests away from any real ``podshell.toml`` or ``PODSHELL_*`` env."""
    monkeypatch.delenv("PODSHELL_CONFIG", raising=False)
    monkeypatch.delenv("PODSHELL_POD__ROOT", raising=False)
    monkeypatch.delenv("PODSHELL_STORE__URL", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """CLI invocations reconfigure logging; put the root logger back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)

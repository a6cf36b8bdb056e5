import subprocess

import pytest

from csync.config import AppConfig


class FakeRun:
    """Stand-in for subprocess.run that records aws invocations."""

    def __init__(self):
        self.calls = []
        self.failures = {}
        self.outputs = {}

    def fail(self, *subcommand, returncode=1):
        self.failures[subcommand] = returncode

    def respond(self, *subcommand, stdout=""):
        self.outputs[subcommand] = stdout

    def _lookup(self, table, cmd, default):
        value = default
        for subcommand, result in table.items():
            if tuple(cmd[1:1 + len(subcommand)]) == subcommand:
                value = result
        return value

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        returncode = self._lookup(self.failures, cmd, 0)
        stdout = self._lookup(self.outputs, cmd, "")
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")

    @property
    def transfer_calls(self):
        return [call for call in self.calls if call[1] == "s3"]


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def config():
    return AppConfig(
        backup_bucket="bucket",
        profile="backup-profile",
        path_to_remove="/Users/alice",
    )

import subprocess

import pytest

from deploy_chromadb import runtime
from deploy_chromadb.settings import DeploySettings
from deploy_chromadb.shell import CommandRunner

DEFAULT_OUTPUTS = {
    "blkid": (2, ""),
    "findmnt": (1, ""),
    "dpkg": (0, "amd64\n"),
}


class FakeRunner(CommandRunner):
    """Records commands instead of running them. File writes still hit the (temporary) filesystem."""

    def __init__(self, fail_on=None, fail_output="boom", outputs=None):
        super().__init__(use_sudo=False)
        self.fail_on = fail_on
        self.fail_output = fail_output
        self.outputs = dict(DEFAULT_OUTPUTS)
        self.outputs.update(outputs or {})
        self.commands = []
        self.inputs = []

    def _execute(self, cmd, input=None):
        self.commands.append(cmd)
        self.inputs.append(input)
        line = " ".join(cmd)
        if self.fail_on and self.fail_on in line:
            return subprocess.CompletedProcess(cmd, 1, self.fail_output)
        returncode, stdout = self.outputs.get(cmd[0], (0, ""))
        return subprocess.CompletedProcess(cmd, returncode, stdout)

    def ran(self, fragment):
        return any(fragment in " ".join(cmd) for cmd in self.commands)

    def index(self, fragment):
        for i, cmd in enumerate(self.commands):
            if fragment in " ".join(cmd):
                return i
        raise ValueError(fragment)


class FakeResponse:
    def __init__(self, content=b"-----BEGIN PGP PUBLIC KEY BLOCK-----\n", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        pass


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def settings(tmp_path):
    for name in ("etc", "systemd", "sources.list.d", "keyrings"):
        (tmp_path / name).mkdir()
    return DeploySettings(
        persist_disk="/dev/sdb",
        mount_point=str(tmp_path / "data"),
        fstab_path=str(tmp_path / "etc" / "fstab"),
        deploy_user="chroma",
        deploy_dir=str(tmp_path / "chromadb"),
        systemd_dir=str(tmp_path / "systemd"),
        keyring_dir=str(tmp_path / "keyrings"),
        apt_sources_dir=str(tmp_path / "sources.list.d"),
    )


@pytest.fixture
def gpg_key(monkeypatch):
    calls = []

    def fake_get(url, timeout=None):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(runtime.requests, "get", fake_get)
    return calls

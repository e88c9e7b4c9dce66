import pytest

from deploy_chromadb.shell import CommandError, CommandRunner


def test_privileged_commands_get_sudo() -> None:
    runner = CommandRunner(use_sudo=True)
    assert runner.command(["mount", "/dev/sda", "/data"], privileged=True) == ["sudo", "mount", "/dev/sda", "/data"]
    assert runner.command(["mkdir", "-p", "/home/chroma/chromadb"]) == ["mkdir", "-p", "/home/chroma/chromadb"]


def test_root_does_not_need_sudo() -> None:
    runner = CommandRunner(use_sudo=False)
    assert runner.command(["systemctl", "daemon-reload"], privileged=True) == ["systemctl", "daemon-reload"]


def test_run_captures_output() -> None:
    result = CommandRunner(use_sudo=False).run(["echo", "hello"])
    assert result.returncode == 0
    assert result.stdout == "hello\n"


def test_run_feeds_input() -> None:
    result = CommandRunner(use_sudo=False).run(["cat"], input="piped")
    assert result.stdout == "piped"


def test_non_zero_exit_raises() -> None:
    with pytest.raises(CommandError) as excinfo:
        CommandRunner(use_sudo=False).run(["false"])
    assert excinfo.value.returncode == 1
    assert excinfo.value.cmd == ["false"]


def test_unchecked_failure_is_returned() -> None:
    result = CommandRunner(use_sudo=False).run(["false"], check=False)
    assert result.returncode == 1


def test_missing_executable() -> None:
    with pytest.raises(CommandError) as excinfo:
        CommandRunner(use_sudo=False).run(["definitely-not-a-real-binary-4711"])
    assert excinfo.value.returncode == 127


def test_dry_run_executes_nothing(tmp_path) -> None:
    runner = CommandRunner(use_sudo=True, dry_run=True)
    result = runner.run(["mkfs.ext4", "-F", "/dev/sda"], privileged=True)
    assert result.returncode == 0
    assert result.args == ["sudo", "mkfs.ext4", "-F", "/dev/sda"]

    target = tmp_path / "fstab"
    runner.write_file(str(target), "line\n", append=True, privileged=True)
    runner.make_dirs(str(tmp_path / "deploy"))
    assert not target.exists()
    assert not (tmp_path / "deploy").exists()


def test_write_and_append(tmp_path) -> None:
    runner = CommandRunner(use_sudo=False)
    target = str(tmp_path / "file.txt")
    runner.write_file(target, "a\n")
    runner.write_file(target, "b\n", append=True)
    runner.write_file(target, "c\n", append=True)
    with open(target) as fh:
        assert fh.read() == "a\nb\nc\n"
    runner.write_file(target, "d\n")
    with open(target) as fh:
        assert fh.read() == "d\n"


def test_write_into_missing_directory_raises(tmp_path) -> None:
    with pytest.raises(CommandError):
        CommandRunner(use_sudo=False).write_file(str(tmp_path / "missing" / "file"), "x")

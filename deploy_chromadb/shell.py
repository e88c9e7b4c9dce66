import os
import shlex
import subprocess

from .console import print_build, print_info


class CommandError(Exception):
    """A command exited non-zero (or could not be started at all)."""

    def __init__(self, cmd, returncode, output=""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output
        super().__init__(f"Command '{shlex.join(self.cmd)}' failed with exit code {returncode}")


class CommandRunner:
    """
    Runs host commands one at a time and blocks until each one finishes.

    Privileged commands get a sudo prefix unless we are already root. With
    dry_run set nothing is executed or written; every call is logged and
    reported as a success with empty output.
    """

    def __init__(self, use_sudo=None, dry_run=False):
        if use_sudo is None:
            use_sudo = os.geteuid() != 0
        self.use_sudo = use_sudo
        self.dry_run = dry_run

    def command(self, args, privileged=False):
        args = [str(arg) for arg in args]
        if privileged and self.use_sudo:
            return ["sudo"] + args
        return args

    def run(self, args, privileged=False, input=None, check=True):
        cmd = self.command(args, privileged=privileged)
        if self.dry_run:
            print_info(f"[dry-run] {shlex.join(cmd)}")
            return subprocess.CompletedProcess(cmd, 0, "")

        print_build(shlex.join(cmd))
        result = self._execute(cmd, input)
        if check and result.returncode != 0:
            raise CommandError(cmd, result.returncode, result.stdout)
        return result

    def _execute(self, cmd, input=None):
        if isinstance(input, str):
            input = input.encode("utf-8")
        try:
            proc = subprocess.run(cmd, input=input, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        except FileNotFoundError:
            raise CommandError(cmd, 127, f"{cmd[0]}: command not found")
        output = proc.stdout.decode("utf-8", errors="replace") if proc.stdout else ""
        return subprocess.CompletedProcess(cmd, proc.returncode, output)

    def write_file(self, path, content, append=False, privileged=False):
        """Write (or append) text to path, through sudo tee when the file is root-owned."""
        mode = "append" if append else "write"
        if self.dry_run:
            print_info(f"[dry-run] {mode} {len(content)} bytes to {path}")
            return

        if privileged and self.use_sudo:
            tee = ["tee", "-a", path] if append else ["tee", path]
            self.run(tee, privileged=True, input=content)
            return

        print_build(f"{mode} {path}")
        try:
            with open(path, "a" if append else "w", encoding="utf-8") as fh:
                fh.write(content)
        except OSError as e:
            raise CommandError(["write", path], 1, str(e))

    def make_dirs(self, path, privileged=False):
        if privileged:
            return self.run(["mkdir", "-p", path], privileged=True)
        if self.dry_run:
            print_info(f"[dry-run] mkdir -p {path}")
            return
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise CommandError(["mkdir", "-p", path], 1, str(e))

import requests

from .console import print_info, print_success, print_warn
from .errors import PackageError, PrivilegeError, ServiceError, from_command_error
from .shell import CommandError

PREREQUISITES = ["ca-certificates", "curl", "gnupg", "lsb-release"]
DOCKER_PACKAGES = ["docker-ce", "docker-ce-cli", "containerd.io", "docker-compose-plugin"]
APT_ENV = ["env", "DEBIAN_FRONTEND=noninteractive"]


def apt_get(runner, *args):
    return runner.run(APT_ENV + ["apt-get"] + list(args), privileged=True)


def fetch_docker_gpg_key(url, timeout=30):
    """Download Docker's ASCII-armored signing key."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise PackageError(f"Failed to download Docker GPG key from {url}: {e}", step="runtime")
    return response.content


def docker_repository_line(settings, arch):
    return (
        f"deb [arch={arch} signed-by={settings.keyring_path}] "
        f"{settings.docker_repo_url} {settings.docker_codename} stable"
    )


def add_docker_repository(runner, settings):
    print_info("Adding Docker GPG key...")
    runner.make_dirs(settings.keyring_dir, privileged=True)
    if runner.dry_run:
        print_info(f"[dry-run] fetch {settings.docker_gpg_url}")
        key = b""
    else:
        key = fetch_docker_gpg_key(settings.docker_gpg_url)
    runner.run(["gpg", "--dearmor", "--yes", "-o", settings.keyring_path], privileged=True, input=key)

    print_info("Adding Docker repository...")
    arch = runner.run(["dpkg", "--print-architecture"]).stdout.strip()
    if not arch:
        if not runner.dry_run:
            raise PackageError("dpkg --print-architecture printed nothing", step="runtime")
        arch = "amd64"
    line = docker_repository_line(settings, arch)
    runner.write_file(settings.docker_list_path, line + "\n", privileged=True)
    return line


def install_runtime(runner, settings):
    """
    Install Docker engine and the compose plugin from Docker's apt
    repository, start it at boot and let the deploy user talk to it.
    """
    try:
        print_info("Installing dependencies...")
        apt_get(runner, "update")
        apt_get(runner, "install", "-y", *PREREQUISITES)

        add_docker_repository(runner, settings)

        print_info("Installing Docker...")
        apt_get(runner, "update")
        apt_get(runner, "install", "-y", *DOCKER_PACKAGES)
    except CommandError as e:
        raise from_command_error(e, PackageError, "runtime") from e

    try:
        print_info("Enabling Docker to start on boot...")
        runner.run(["systemctl", "enable", "docker"], privileged=True)
        runner.run(["systemctl", "start", "docker"], privileged=True)
    except CommandError as e:
        raise from_command_error(e, ServiceError, "runtime") from e

    try:
        runner.run(["usermod", "-aG", "docker", settings.deploy_user], privileged=True)
    except CommandError as e:
        raise from_command_error(e, PrivilegeError, "runtime") from e
    print_warn("You may need to log out and back in for Docker permissions to take effect.")

    print_success("Docker installed and running")
    return "Docker engine and compose plugin installed"

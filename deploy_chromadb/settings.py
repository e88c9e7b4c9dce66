import getpass
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import ConfigurationError

TRUE_VALUES = ("1", "true", "yes", "on")

# Environment variable -> DeploySettings field
ENV_FIELDS = {
    "PERSIST_DISK": "persist_disk",
    "MOUNT_POINT": "mount_point",
    "FILESYSTEM": "filesystem",
    "FSTAB_PATH": "fstab_path",
    "DEPLOY_USER": "deploy_user",
    "DEPLOY_DIR": "deploy_dir",
    "SERVICE_NAME": "service_name",
    "SYSTEMD_DIR": "systemd_dir",
    "DOCKER_BINARY": "docker_binary",
    "DOCKER_DISTRO": "docker_distro",
    "DOCKER_CODENAME": "docker_codename",
    "KEYRING_DIR": "keyring_dir",
    "APT_SOURCES_DIR": "apt_sources_dir",
    "CHROMA_IMAGE": "chroma_image",
    "ZIPKIN_IMAGE": "zipkin_image",
    "OTEL_IMAGE": "otel_image",
    "CHROMA_PORT": "chroma_port",
    "ZIPKIN_PORT": "zipkin_port",
    "OTLP_GRPC_PORT": "otlp_grpc_port",
    "OTLP_HTTP_PORT": "otlp_http_port",
    "FORCE_FORMAT": "force_format",
    "DRY_RUN": "dry_run",
    "WEBHOOK_URL": "webhook_url",
    "LOG_FILE": "log_file",
}

PORT_FIELDS = ("chroma_port", "zipkin_port", "otlp_grpc_port", "otlp_http_port")
FLAG_FIELDS = ("force_format", "dry_run")


def _default_user():
    return os.environ.get("USER") or getpass.getuser()


@dataclass
class DeploySettings:
    """Everything the deployment needs to know about the target host."""

    persist_disk: str = "/dev/sda"
    mount_point: str = "/data"
    filesystem: str = "ext4"
    fstab_path: str = "/etc/fstab"
    deploy_user: str = field(default_factory=_default_user)
    deploy_dir: str = field(default_factory=lambda: os.path.expanduser("~/chromadb"))
    service_name: str = "chromadb"
    systemd_dir: str = "/etc/systemd/system"
    docker_binary: str = "/usr/bin/docker"
    docker_distro: str = "debian"
    docker_codename: str = "bookworm"
    keyring_dir: str = "/etc/apt/keyrings"
    apt_sources_dir: str = "/etc/apt/sources.list.d"
    chroma_image: str = "chromadb/chroma"
    zipkin_image: str = "openzipkin/zipkin"
    otel_image: str = "otel/opentelemetry-collector-contrib:0.111.0"
    chroma_port: int = 8000
    zipkin_port: int = 9411
    otlp_grpc_port: int = 4317
    otlp_http_port: int = 4318
    force_format: bool = False
    dry_run: bool = False
    webhook_url: str = ""
    log_file: str = ""

    @property
    def docker_gpg_url(self):
        return f"https://download.docker.com/linux/{self.docker_distro}/gpg"

    @property
    def docker_repo_url(self):
        return f"https://download.docker.com/linux/{self.docker_distro}"

    @property
    def keyring_path(self):
        return os.path.join(self.keyring_dir, "docker.gpg")

    @property
    def docker_list_path(self):
        return os.path.join(self.apt_sources_dir, "docker.list")

    @property
    def compose_path(self):
        return os.path.join(self.deploy_dir, "docker-compose.yml")

    @property
    def otel_config_path(self):
        return os.path.join(self.deploy_dir, "otel-collector-config.yaml")

    @property
    def unit_path(self):
        return os.path.join(self.systemd_dir, f"{self.service_name}.service")

    def validate(self):
        for name in ("persist_disk", "mount_point"):
            value = getattr(self, name)
            if not os.path.isabs(value):
                raise ConfigurationError(f"{name} must be an absolute path, got '{value}'")
        for name in PORT_FIELDS:
            port = getattr(self, name)
            if not 1 <= port <= 65535:
                raise ConfigurationError(f"{name} must be between 1 and 65535, got {port}")
        if not self.deploy_user:
            raise ConfigurationError("deploy_user is empty")
        return self


def _convert(name, raw):
    if name in PORT_FIELDS:
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got '{raw}'")
    if name in FLAG_FIELDS:
        return raw.strip().lower() in TRUE_VALUES
    if name == "deploy_dir":
        return os.path.expanduser(raw)
    return raw


def load_settings(environ=None, env_file=None):
    """
    Build DeploySettings from the environment.

    When environ is None the process environment is used, after .env
    (or env_file) has been loaded into it.
    """
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    values = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        values[field_name] = _convert(field_name, raw)

    return DeploySettings(**values).validate()

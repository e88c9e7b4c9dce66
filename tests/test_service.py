import pytest
from conftest import FakeRunner

from deploy_chromadb.errors import ServiceError
from deploy_chromadb.generate_service import build_unit
from deploy_chromadb.service import activate_service, register_service, summary_lines


def test_unit_file(runner, settings) -> None:
    register_service(runner, settings)
    with open(settings.unit_path) as fh:
        unit = fh.read()

    assert unit == (
        "[Unit]\n"
        "Description=ChromaDB Docker Compose Stack\n"
        "Requires=docker.service\n"
        "After=docker.service\n"
        "\n"
        "[Service]\n"
        "Type=oneshot\n"
        f"WorkingDirectory={settings.deploy_dir}\n"
        "ExecStart=/usr/bin/docker compose up -d\n"
        "ExecStop=/usr/bin/docker compose down\n"
        "RemainAfterExit=yes\n"
        "\n"
        "[Install]\n"
        "WantedBy=multi-user.target\n"
    )


def test_unit_is_rewritten_identically(runner, settings) -> None:
    register_service(runner, settings)
    with open(settings.unit_path, "rb") as fh:
        first = fh.read()
    register_service(runner, settings)
    with open(settings.unit_path, "rb") as fh:
        assert fh.read() == first


def test_unit_uses_configured_docker_binary(settings) -> None:
    settings.docker_binary = "/usr/local/bin/docker"
    assert "ExecStart=/usr/local/bin/docker compose up -d" in build_unit(settings)


def test_activation_order(runner, settings) -> None:
    activate_service(runner, settings)
    assert runner.commands == [
        ["systemctl", "daemon-reload"],
        ["systemctl", "enable", "chromadb"],
        ["systemctl", "start", "chromadb"],
    ]


def test_enable_failure_is_fatal(settings) -> None:
    runner = FakeRunner(fail_on="systemctl enable")
    with pytest.raises(ServiceError) as excinfo:
        activate_service(runner, settings)
    assert excinfo.value.step == "activate"
    assert not runner.ran("systemctl start")


def test_summary(settings) -> None:
    assert summary_lines(settings) == [
        "ChromaDB deployment completed!",
        f"Persistent data directory: {settings.mount_point}",
        "Chroma API port: 8000 (expose via firewall if needed)",
        "Zipkin port: 9411 (internal only or expose if needed)",
        "Docker Compose stack auto-starts on reboot.",
    ]

from .console import print_info, print_success
from .errors import ServiceError, from_command_error
from .generate_service import build_unit
from .shell import CommandError


def register_service(runner, settings):
    print_info(f"Creating systemd service for ChromaDB at {settings.unit_path}...")
    try:
        runner.write_file(settings.unit_path, build_unit(settings), privileged=True)
    except CommandError as e:
        raise from_command_error(e, ServiceError, "service") from e
    return f"{settings.unit_path} written"


def activate_service(runner, settings):
    """Reload systemd, enable the stack unit for boot and start it now, then print the summary."""
    name = settings.service_name
    try:
        print_info("Reloading systemd daemon...")
        runner.run(["systemctl", "daemon-reload"], privileged=True)

        print_info("Enabling ChromaDB service to start on boot...")
        runner.run(["systemctl", "enable", name], privileged=True)

        print_info("Starting ChromaDB stack...")
        runner.run(["systemctl", "start", name], privileged=True)
    except CommandError as e:
        raise from_command_error(e, ServiceError, "activate") from e

    print_summary(settings)
    return f"{name}.service enabled and started"


def summary_lines(settings):
    return [
        "ChromaDB deployment completed!",
        f"Persistent data directory: {settings.mount_point}",
        f"Chroma API port: {settings.chroma_port} (expose via firewall if needed)",
        f"Zipkin port: {settings.zipkin_port} (internal only or expose if needed)",
        "Docker Compose stack auto-starts on reboot.",
    ]


def print_summary(settings):
    lines = summary_lines(settings)
    print_success(lines[0])
    for line in lines[1:]:
        print_info(line)

import yaml

COMPOSE_VERSION = "3.9"
NETWORK = "internal"
CHROMA_DATA_DIR = "/data"
OTEL_CONFIG_FILE = "otel-collector-config.yaml"
OTEL_CONFIG_MOUNT = f"/etc/{OTEL_CONFIG_FILE}"


def telemetry_endpoint(settings):
    return f"http://otel-collector:{settings.otlp_grpc_port}/"


def build_compose(settings):
    """
    Stack definition for chroma, zipkin and the OpenTelemetry collector.

    depends_on only orders container start-up; compose does not wait for
    the collector or zipkin to be ready before starting chroma.
    """
    chroma = {
        "image": settings.chroma_image,
        "volumes": [f"{settings.mount_point}:{CHROMA_DATA_DIR}"],
        "ports": [f"{settings.chroma_port}:8000"],
        "restart": "unless-stopped",
        "environment": [
            f"PERSIST_DIRECTORY={CHROMA_DATA_DIR}",
            f"CHROMA_OPEN_TELEMETRY__ENDPOINT={telemetry_endpoint(settings)}",
            "CHROMA_OPEN_TELEMETRY__SERVICE_NAME=chroma",
        ],
        "networks": [NETWORK],
        "depends_on": ["otel-collector", "zipkin"],
    }
    zipkin = {
        "image": settings.zipkin_image,
        "ports": [f"{settings.zipkin_port}:9411"],
        "networks": [NETWORK],
    }
    collector = {
        "image": settings.otel_image,
        "command": [f"--config={OTEL_CONFIG_MOUNT}"],
        "volumes": [f"./{OTEL_CONFIG_FILE}:{OTEL_CONFIG_MOUNT}"],
        "networks": [NETWORK],
    }
    return {
        "version": COMPOSE_VERSION,
        "services": {
            "chroma": chroma,
            "zipkin": zipkin,
            "otel-collector": collector,
        },
        "networks": {NETWORK: None},
    }


def render_yaml(data):
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def render_compose(settings):
    return render_yaml(build_compose(settings))

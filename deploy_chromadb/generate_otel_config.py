from .generate_compose import render_yaml

ZIPKIN_SPANS_PATH = "/api/v2/spans"


def build_otel_config(settings):
    """Collector config: OTLP in over gRPC and HTTP, traces out to zipkin and the debug log."""
    return {
        "receivers": {
            "otlp": {
                "protocols": {
                    "grpc": {"endpoint": f"0.0.0.0:{settings.otlp_grpc_port}"},
                    "http": {"endpoint": f"0.0.0.0:{settings.otlp_http_port}"},
                },
            },
        },
        "exporters": {
            "debug": None,
            "zipkin": {"endpoint": f"http://zipkin:9411{ZIPKIN_SPANS_PATH}"},
        },
        "service": {
            "pipelines": {
                "traces": {
                    "receivers": ["otlp"],
                    "exporters": ["zipkin", "debug"],
                },
            },
        },
    }


def render_otel_config(settings):
    return render_yaml(build_otel_config(settings))

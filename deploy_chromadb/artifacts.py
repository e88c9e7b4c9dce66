from .console import print_info, print_success
from .errors import ArtifactError, from_command_error
from .generate_compose import render_compose
from .generate_otel_config import render_otel_config
from .shell import CommandError


def generate_artifacts(runner, settings):
    """Write docker-compose.yml and the collector config into the deploy directory, replacing any previous copies."""
    try:
        runner.make_dirs(settings.deploy_dir)

        print_info("Creating docker-compose.yml...")
        runner.write_file(settings.compose_path, render_compose(settings))

        print_info("Creating otel-collector-config.yaml...")
        runner.write_file(settings.otel_config_path, render_otel_config(settings))
    except CommandError as e:
        raise from_command_error(e, ArtifactError, "artifacts") from e

    print_success(f"Compose files written to {settings.deploy_dir}")
    return f"Compose files written to {settings.deploy_dir}"

from .console import configure_logging, print_error, print_info, print_success
from .errors import ConfigurationError
from .pipeline import build_steps, run_pipeline, succeeded
from .settings import load_settings
from .shell import CommandRunner
from .status import StatusNotifier


def main(environ=None, runner=None):
    """
    Provision ChromaDB on this host. Returns the process exit status:
    0 on success, 1 when a step failed, 2 for bad configuration.
    """
    try:
        settings = load_settings(environ)
    except ConfigurationError as e:
        configure_logging()
        print_error(f"Invalid configuration: {e}")
        return 2

    configure_logging(settings.log_file)
    print_info(f"Deploying ChromaDB from {settings.persist_disk} to {settings.deploy_dir}")
    if settings.dry_run:
        print_info("Dry run: no command will be executed")

    runner = runner or CommandRunner(dry_run=settings.dry_run)
    notifier = StatusNotifier(settings.webhook_url)

    results = run_pipeline(build_steps(), runner, settings, notifier)
    if not succeeded(results):
        failed = results[-1]
        print_error(f"Deployment aborted during '{failed.name}': {failed.message}")
        return 1

    print_success("All provisioning steps completed")
    return 0

from collections import namedtuple

from .artifacts import generate_artifacts
from .console import print_error, print_info
from .disk import prepare_disk
from .errors import ProvisioningError
from .runtime import install_runtime
from .service import activate_service, register_service
from .shell import CommandError

Step = namedtuple("Step", ["name", "description", "action"])
StepResult = namedtuple("StepResult", ["name", "ok", "message"])


def build_steps():
    """The five provisioning stages, in the order they have to run."""
    return [
        Step("disk", "Preparing persistent disk", prepare_disk),
        Step("runtime", "Installing Docker & Docker Compose", install_runtime),
        Step("artifacts", "Creating Docker Compose directory & files", generate_artifacts),
        Step("service", "Registering systemd service", register_service),
        Step("activate", "Starting ChromaDB stack", activate_service),
    ]


def _no_notifier(status, step, message):
    return None


def run_pipeline(steps, runner, settings, notifier=None):
    """
    Run steps in order and stop at the first one that fails.

    Returns one StepResult per step that ran; when something failed the
    last result is the failure and nothing after it was attempted.
    Nothing done by earlier steps is undone.
    """
    notify = notifier or _no_notifier
    results = []
    total = len(steps)

    for index, step in enumerate(steps, start=1):
        print_info(f"[{index}/{total}] {step.description}...")
        notify("provisioning", step.name, step.description)
        try:
            message = step.action(runner, settings)
        except (ProvisioningError, CommandError) as e:
            category = getattr(e, "category", "command")
            print_error(f"[{index}/{total}] {step.name} failed ({category}): {e}")
            notify("failed", step.name, str(e))
            results.append(StepResult(step.name, False, str(e)))
            return results
        results.append(StepResult(step.name, True, message or step.description))

    notify("completed", "done", "ChromaDB deployment completed")
    return results


def succeeded(results):
    return bool(results) and all(result.ok for result in results)

class ProvisioningError(Exception):
    """Base class for every failure that aborts a deployment."""

    category = "provisioning"

    def __init__(self, message, step=None):
        super().__init__(message)
        self.step = step


class ConfigurationError(ProvisioningError):
    category = "configuration"


class PrivilegeError(ProvisioningError):
    category = "privilege"


class DiskError(ProvisioningError):
    category = "disk"


class PackageError(ProvisioningError):
    category = "package"


class ArtifactError(ProvisioningError):
    category = "artifact"


class ServiceError(ProvisioningError):
    category = "service"


PRIVILEGE_MARKERS = ("permission denied", "sudo:", "operation not permitted", "must be root")


def from_command_error(error, error_cls, step):
    """Translate a failed command into the failure category of the step that ran it."""
    output = (error.output or "").strip()
    message = f"{error}: {output}" if output else str(error)
    if any(marker in output.lower() for marker in PRIVILEGE_MARKERS):
        error_cls = PrivilegeError
    return error_cls(message, step=step)

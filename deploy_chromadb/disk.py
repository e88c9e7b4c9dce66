from .console import print_info, print_success, print_warn
from .errors import DiskError, from_command_error
from .shell import CommandError


def fstab_entry(device, mount_point, filesystem="ext4"):
    return f"{device} {mount_point} {filesystem} defaults 0 2"


def append_fstab_entry(runner, settings):
    """
    Append the mount record for the persistent disk to the filesystem table.

    This never looks at what is already there: calling it twice leaves two
    identical lines behind.
    """
    entry = fstab_entry(settings.persist_disk, settings.mount_point, settings.filesystem)
    runner.write_file(settings.fstab_path, entry + "\n", append=True, privileged=True)
    return entry


def fstab_has_entry(settings):
    try:
        with open(settings.fstab_path, encoding="utf-8") as fh:
            lines = fh.readlines()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise DiskError(f"Cannot read {settings.fstab_path}: {e}", step="disk") from e
    for line in lines:
        parts = line.split()
        if len(parts) >= 2 and not parts[0].startswith("#"):
            if parts[0] == settings.persist_disk and parts[1] == settings.mount_point:
                return True
    return False


def current_filesystem(runner, settings):
    """Filesystem type blkid reports on the device, or "" for a blank device."""
    result = runner.run(
        ["blkid", "-o", "value", "-s", "TYPE", settings.persist_disk],
        privileged=True,
        check=False,
    )
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def is_mounted(runner, settings):
    """True only when the persistent disk itself is what sits on the mount point."""
    result = runner.run(
        ["findmnt", "--source", settings.persist_disk, "--mountpoint", settings.mount_point],
        check=False,
    )
    return result.returncode == 0 and bool(result.stdout.strip())


def prepare_disk(runner, settings):
    """
    Create the mount point, format and mount the persistent disk, hand it
    to the deploy user and record it in fstab.

    Formatting destroys whatever the device held. Unless force_format is
    set, a device already carrying the target filesystem is not
    reformatted, an existing mount is left alone and an fstab line that
    is already present is not appended again. force_format restores the
    unconditional behaviour, duplicate fstab lines included.
    """
    device = settings.persist_disk
    mount_point = settings.mount_point
    guarded = not settings.force_format

    try:
        print_info("Creating mount point...")
        runner.make_dirs(mount_point, privileged=True)

        if guarded and current_filesystem(runner, settings) == settings.filesystem:
            print_warn(f"{device} already has a {settings.filesystem} filesystem, not reformatting")
        else:
            print_info(f"Formatting persistent disk {device}...")
            runner.run([f"mkfs.{settings.filesystem}", "-F", device], privileged=True)

        if guarded and is_mounted(runner, settings):
            print_warn(f"{mount_point} is already mounted")
        else:
            print_info(f"Mounting {device} to {mount_point}...")
            runner.run(["mount", device, mount_point], privileged=True)

        print_info("Setting permissions...")
        owner = f"{settings.deploy_user}:{settings.deploy_user}"
        runner.run(["chown", owner, mount_point], privileged=True)

        if guarded and fstab_has_entry(settings):
            print_warn(f"{settings.fstab_path} already mounts {device} on {mount_point}")
        else:
            print_info("Adding to fstab for auto-mount on reboot...")
            append_fstab_entry(runner, settings)
    except CommandError as e:
        raise from_command_error(e, DiskError, "disk") from e

    print_success(f"{device} mounted on {mount_point}")
    return f"{device} mounted on {mount_point}"

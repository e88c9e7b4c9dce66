import textwrap


def build_unit(settings):
    """Returns the systemd unit that brings the compose stack up at boot."""
    docker = settings.docker_binary
    return textwrap.dedent(f"""\
    [Unit]
    Description=ChromaDB Docker Compose Stack
    Requires=docker.service
    After=docker.service

    [Service]
    Type=oneshot
    WorkingDirectory={settings.deploy_dir}
    ExecStart={docker} compose up -d
    ExecStop={docker} compose down
    RemainAfterExit=yes

    [Install]
    WantedBy=multi-user.target
    """)

import typer

from docker_actions import __version__
from docker_actions.log import stdout_console


def version():
    """Display the version of docker-actions"""
    stdout_console.print(f"docker-actions v{__version__}", highlight=False)
    raise typer.Exit()

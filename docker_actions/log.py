import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from docker_actions.const import GITHUB_ANNOTATION_ERROR, GITHUB_ANNOTATION_WARNING

default_theme = Theme(
    {
        "info": "bright_blue",
        "error": "bright_red",
        "warning": "yellow",
        "success": "green3",
        "quiet": "bright_black",
    }
)

stdout_console = Console(theme=default_theme)
stderr_console = Console(stderr=True, theme=default_theme)


def init_logging(log_level: str | int = logging.INFO) -> None:
    """Initialize logging for the docker-actions CLI

    :param log_level: The log level to use
    """
    tb_frames = 0
    if log_level == logging.DEBUG:
        tb_frames = 20

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=stderr_console,
                markup=False,
                rich_tracebacks=True,
                tracebacks_suppress=[typer],
                tracebacks_max_frames=tb_frames,
                tracebacks_show_locals=True if log_level == logging.DEBUG else False,
            ),
        ],
    )


def annotate_error(message: str) -> None:
    """Print an error as a GitHub Actions annotation on stderr."""
    stderr_console.print(
        f"{GITHUB_ANNOTATION_ERROR}{message}", style="error", markup=False, highlight=False, soft_wrap=True
    )


def annotate_warning(message: str) -> None:
    """Print a warning as a GitHub Actions annotation on stderr."""
    stderr_console.print(
        f"{GITHUB_ANNOTATION_WARNING}{message}", style="warning", markup=False, highlight=False, soft_wrap=True
    )

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from docker_actions.cli.common import exit_with_error, parse_key_value_pairs, with_verbosity_flags
from docker_actions.config import DockerConfig
from docker_actions.error import ActionsError
from docker_actions.image import ImageBuild
from docker_actions.log import stderr_console
from docker_actions.manifest import DockerManifestPublisher
from docker_actions.outputs import resolve_output_writer

log = logging.getLogger(__name__)


@with_verbosity_flags
def build(
    config_file: Annotated[
        Path,
        typer.Option(
            "--config",
            show_default=False,
            help="Path to the Docker config JSON file for the image.",
        ),
    ],
    platform: Annotated[
        str,
        typer.Option(show_default=False, help="The platform to build for, e.g. 'linux/amd64'."),
    ],
    tag: Annotated[
        Optional[list[str]],
        typer.Option(
            show_default=False,
            help="Tag to apply to the image. The config's tag suffix is appended. May be given more than once.",
        ),
    ] = None,
    context: Annotated[
        Path,
        typer.Option(
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
            resolve_path=True,
            help="The build context. Defaults to the current working directory where invoked.",
        ),
    ] = Path("."),
    label: Annotated[
        Optional[list[str]],
        typer.Option(show_default=False, help="Label to apply to the image as key=value. May be given more than once."),
    ] = None,
    push: Annotated[
        Optional[bool],
        typer.Option(help="Push the image to its registry instead of loading it locally."),
    ] = False,
    cache: Annotated[
        Optional[bool],
        typer.Option(help="Enable layer caching for the image build."),
    ] = True,
) -> None:
    """Builds a single-platform image from a Docker config

    The Dockerfile and build target are read from the config. When pushing, the pushed image is inspected and its
    digest is written to the `digest` and `image-ref` step outputs, ready to be passed as a source to
    `create-manifest`.
    """
    try:
        image_build = ImageBuild(
            config=DockerConfig.load(config_file),
            context=context,
            platform=platform,
            tags=tag or [],
            labels=parse_key_value_pairs(label),
            cache=cache,
        )
        if push:
            outputs = image_build.push(DockerManifestPublisher())
        else:
            outputs = image_build.load()
        resolve_output_writer().write_all(outputs)
    except (ActionsError, FileNotFoundError) as e:
        exit_with_error(e)

    stderr_console.print("✅ Build completed", style="success")

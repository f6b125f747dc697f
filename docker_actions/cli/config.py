import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from docker_actions.cli.common import exit_with_error, require_arguments, with_verbosity_flags
from docker_actions.config import DockerConfig
from docker_actions.error import ActionsError
from docker_actions.outputs import resolve_output_writer

log = logging.getLogger(__name__)


@with_verbosity_flags
def read_config(
    ctx: typer.Context,
    config_file: Annotated[
        Optional[Path],
        typer.Argument(show_default=False, help="Path to the Docker config JSON file for the image."),
    ] = None,
) -> None:
    """Reads a Docker config file and writes its values as step outputs

    Outputs are written to the file named by `GITHUB_OUTPUT`, or to standard output when it is not set:

    \b
    - `image-name`: Docker image name (required in the config as `imageName`)
    - `dockerfile`: Path to the Dockerfile (defaults to `./Dockerfile`)
    - `target`: Build target stage (optional)
    - `tag-suffix`: Tag suffix based on the target, e.g. `-dev`
    - `metadata-tags`: docker/metadata-action `tags` input (optional, may span several lines)
    - `metadata-flavor`: docker/metadata-action `flavor` input (optional)
    """
    try:
        require_arguments(ctx, config_file=config_file)
        config = DockerConfig.load(config_file)

        log.info(f"image-name: {config.image_name}")
        log.info(f"Dockerfile: {config.dockerfile}")
        log.info(f"Target: {config.target}")
        log.info(f"Tag suffix: {config.tag_suffix}")
        if config.metadata_tags:
            log.info(f"Metadata tags from config: {config.metadata_tags}")
        if config.metadata_flavor:
            log.info(f"Metadata flavor from config: {config.metadata_flavor}")

        resolve_output_writer().write_all(config.outputs())
    except ActionsError as e:
        exit_with_error(e)

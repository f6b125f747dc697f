import logging
from typing import Annotated, Optional

import typer

from docker_actions.cli.common import exit_with_error, require_arguments, with_verbosity_flags
from docker_actions.error import ActionsError, ManifestErrorGroup
from docker_actions.log import annotate_warning, stderr_console
from docker_actions.manifest import DockerManifestPublisher, FailurePolicy, InspectFailureMode, ManifestAssembler
from docker_actions.outputs import resolve_output_writer

log = logging.getLogger(__name__)


@with_verbosity_flags
def create_manifest(
    ctx: typer.Context,
    image_name: Annotated[
        Optional[str],
        typer.Argument(show_default=False, help="Docker image name *(ex. org/image-name)*."),
    ] = None,
    tags: Annotated[
        Optional[str],
        typer.Argument(show_default=False, help="Comma-separated list of tags *(ex. 1.0.0,latest)*."),
    ] = None,
    sources: Annotated[
        Optional[str],
        typer.Argument(
            show_default=False,
            help="Newline-separated list of source images *(ex. org/image@sha256:...)*.",
        ),
    ] = None,
    failure_policy: Annotated[
        FailurePolicy,
        typer.Option(
            case_sensitive=False,
            help="'fail-fast' aborts on the first failed tag, leaving manifests already created in place. "
            "'continue' attempts every tag and then reports all failures.",
        ),
    ] = FailurePolicy.FAIL_FAST,
    inspect_failures: Annotated[
        InspectFailureMode,
        typer.Option(
            case_sensitive=False,
            help="Whether a failed inspection after a successful creation fails the tag or is only reported "
            "as a warning.",
        ),
    ] = InspectFailureMode.FAIL,
    dry_run: Annotated[
        Optional[bool],
        typer.Option("--dry-run", help="Show the manifests that would be created without pushing them."),
    ] = False,
) -> None:
    """Creates multi-platform manifests from platform-specific images

    One manifest is created with `docker buildx imagetools create` for each tag, combining every source image. The
    manifest for the first tag is written to the `manifest` step output.
    """
    try:
        require_arguments(ctx, image_name=image_name, tags=tags, sources=sources)

        assembler = ManifestAssembler(
            publisher=DockerManifestPublisher(),
            failure_policy=failure_policy,
            inspect_failures=inspect_failures,
            dry_run=dry_run,
        )
        assembly = assembler.assemble(image_name, tags, sources)
        for result in assembly.results:
            for warning in result.warnings:
                annotate_warning(warning)

        if dry_run:
            stderr_console.print("✅ Dry run completed, no manifests were pushed", style="success")
            return

        resolve_output_writer().write_all(assembly.outputs())
    except (ActionsError, ManifestErrorGroup) as e:
        exit_with_error(e)

    stderr_console.print(f"✅ Created {len(assembly.results)} manifest(s)", style="success")

import typer

from docker_actions.cli import build, config, manifest, version
from docker_actions.const import APP_NAME

app = typer.Typer(
    name=APP_NAME,
    no_args_is_help=True,
    rich_markup_mode="markdown",
    help="Helpers for building multi-platform Docker images in GitHub Actions",
)

app.command(
    name="read-config",
    short_help="Read a Docker config file into step outputs",
    rich_help_panel="Configuration",
)(config.read_config)

app.command(
    name="build",
    short_help="Build and push a single-platform image",
    rich_help_panel="Image Building",
)(build.build)

app.command(
    name="create-manifest",
    short_help="Combine platform-specific images into multi-platform manifests",
    rich_help_panel="Image Building",
)(manifest.create_manifest)

app.command(name="version", help="Show the docker-actions version")(version.version)

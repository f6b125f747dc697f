import abc
import logging
import subprocess
from typing import Annotated

import python_on_whales
from python_on_whales import DockerException
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docker_actions.error import ToolRuntimeError

log = logging.getLogger(__name__)


def docker_command() -> list[str]:
    """Return the base Docker CLI command python-on-whales is configured to use."""
    return [str(x) for x in python_on_whales.docker.docker_cmd]


class ManifestPlatform(BaseModel):
    """Platform of a single image referenced by a manifest."""

    model_config = ConfigDict(extra="allow")

    architecture: Annotated[str | None, Field(default=None, description="CPU architecture.", examples=["amd64"])]
    os: Annotated[str | None, Field(default=None, description="Operating system.", examples=["linux"])]
    variant: Annotated[str | None, Field(default=None, description="CPU variant.", examples=["v8"])]

    def __str__(self) -> str:
        s = "/".join(p for p in [self.os, self.architecture] if p)
        if self.variant:
            s += f"/{self.variant}"
        return s or "unknown"


class ManifestDescriptor(BaseModel):
    """Descriptor of a single image referenced by a manifest."""

    model_config = ConfigDict(extra="allow")

    media_type: Annotated[str | None, Field(default=None, alias="mediaType")]
    digest: Annotated[str | None, Field(default=None)]
    size: Annotated[int | None, Field(default=None)]
    platform: Annotated[ManifestPlatform | None, Field(default=None)]


class ManifestInfo(BaseModel):
    """Representation of `docker buildx imagetools inspect --format '{{json .Manifest}}'` output."""

    model_config = ConfigDict(extra="allow")

    schema_version: Annotated[int | None, Field(default=None, alias="schemaVersion")]
    media_type: Annotated[str | None, Field(default=None, alias="mediaType")]
    digest: Annotated[str | None, Field(default=None)]
    size: Annotated[int | None, Field(default=None)]
    manifests: Annotated[list[ManifestDescriptor], Field(default_factory=list)]

    @property
    def platforms(self) -> list[str]:
        """Platforms of the images referenced by this manifest, attestation entries excluded."""
        platforms = []
        for m in self.manifests:
            if m.platform is None or m.platform.os == "unknown":
                continue
            platforms.append(str(m.platform))
        return platforms


class ManifestPublisher(abc.ABC):
    """Creates and inspects multi-platform manifests in a registry."""

    @abc.abstractmethod
    def create(self, reference: str, sources: list[str], dry_run: bool = False) -> None:
        """Create a manifest at `reference` combining all `sources`.

        :param reference: The tag reference to push the manifest to.
        :param sources: Image references to combine, in order.
        :param dry_run: If True, show the manifest without pushing it.

        :raises ToolRuntimeError: If the manifest could not be created.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def inspect(self, reference: str) -> ManifestInfo:
        """Inspect the manifest at `reference`.

        :raises ToolRuntimeError: If the manifest could not be inspected.
        """
        raise NotImplementedError


class DockerManifestPublisher(ManifestPublisher):
    """Publishes manifests with `docker buildx imagetools`."""

    TOOL_NAME = "docker"

    def create(self, reference: str, sources: list[str], dry_run: bool = False) -> None:
        try:
            manifest = python_on_whales.docker.buildx.imagetools.create(
                sources=sources,
                tags=[reference],
                dry_run=dry_run,
            )
        except DockerException as e:
            raise ToolRuntimeError(
                f"Failed to create manifest '{reference}'",
                tool_name=self.TOOL_NAME,
                cmd=[str(x) for x in e.docker_command],
                stdout=e.stdout,
                stderr=e.stderr,
                exit_code=e.return_code,
                metadata={"reference": reference, "sources": ", ".join(sources)},
            ) from e

        if dry_run and manifest is not None:
            log.info(f"Manifest for '{reference}' (dry run):")
            log.info(manifest.model_dump_json(indent=2, exclude_none=True, by_alias=True))

    def inspect(self, reference: str) -> ManifestInfo:
        """Inspect a manifest using the Docker CLI directly.

        python-on-whales does not properly support inspection of index-based images, so the JSON descriptor is read
        with `--format '{{json .Manifest}}'` instead.
        """
        command = docker_command()
        command.extend(["buildx", "imagetools", "inspect", reference, "--format", "{{json .Manifest}}"])

        log.debug(f"Executing: {' '.join(command)}")
        p = subprocess.run(command, capture_output=True)
        if p.returncode != 0:
            raise ToolRuntimeError(
                f"Failed to inspect manifest '{reference}'",
                tool_name=self.TOOL_NAME,
                cmd=command,
                stdout=p.stdout,
                stderr=p.stderr,
                exit_code=p.returncode,
                metadata={"reference": reference},
            )

        try:
            return ManifestInfo.model_validate_json(p.stdout.decode())
        except ValidationError as e:
            raise ToolRuntimeError(
                f"Unexpected inspection output for manifest '{reference}'",
                tool_name=self.TOOL_NAME,
                cmd=command,
                stdout=p.stdout,
                stderr=p.stderr,
                exit_code=p.returncode,
                metadata={"reference": reference},
            ) from e

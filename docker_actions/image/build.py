import logging
from pathlib import Path
from typing import Annotated

import python_on_whales
from python_on_whales import DockerException
from pydantic import BaseModel, Field, computed_field

from docker_actions.config import DockerConfig
from docker_actions.const import DIGEST_OUTPUT, IMAGE_REF_OUTPUT
from docker_actions.error import ActionsUsageError, ToolRuntimeError
from docker_actions.manifest.parse import manifest_reference
from docker_actions.manifest.publisher import ManifestPublisher

log = logging.getLogger(__name__)


class ImageBuild(BaseModel):
    """A single-platform image build derived from a Docker config."""

    config: Annotated[DockerConfig, Field(description="The resolved Docker config.")]
    context: Annotated[Path, Field(default=Path("."), description="Path to the build context.")]
    platform: Annotated[str, Field(description="Platform to build for.", examples=["linux/amd64", "linux/arm64"])]
    tags: Annotated[list[str], Field(description="Bare tags, without the target suffix.", examples=[["1.0.0"]])]
    labels: Annotated[dict[str, str], Field(default_factory=dict, description="Labels to apply to the image.")]
    cache: Annotated[bool, Field(default=True, description="Whether to use the build cache.")]

    @computed_field
    @property
    def references(self) -> list[str]:
        """Full tag references for the image, `<image>:<tag><tag-suffix>`."""
        refs = []
        for tag in self.tags:
            tag = tag.strip()
            if not tag:
                continue
            refs.append(manifest_reference(self.config.image_name, f"{tag}{self.config.tag_suffix}"))
        return refs

    @property
    def dockerfile(self) -> Path:
        """Path of the Dockerfile, resolved against the build context."""
        return self.context / self.config.dockerfile

    def build(self, push: bool = False) -> python_on_whales.Image | None:
        """Build the image with buildx, loading it locally or pushing it to its registry.

        :param push: If True, push the image instead of loading it into the local Docker daemon.

        :raises ActionsUsageError: If no tags are set.
        :raises FileNotFoundError: If the Dockerfile does not exist.
        :raises ToolRuntimeError: If the build fails.
        """
        if not self.references:
            raise ActionsUsageError("At least one tag is required to build an image")
        if not self.dockerfile.is_file():
            raise FileNotFoundError(f"Dockerfile '{self.dockerfile}' does not exist.")

        log.info(f"Building {', '.join(self.references)} for {self.platform}")
        if self.config.target:
            log.info(f"Target: {self.config.target}")

        try:
            return python_on_whales.docker.buildx.build(
                context_path=self.context,
                file=self.dockerfile,
                target=self.config.target or None,
                platforms=[self.platform],
                tags=self.references,
                labels=self.labels,
                load=not push,
                push=push,
                cache=self.cache,
            )
        except DockerException as e:
            raise ToolRuntimeError(
                f"Failed to build image '{self.references[0]}'",
                tool_name="docker",
                cmd=[str(x) for x in e.docker_command],
                stdout=e.stdout,
                stderr=e.stderr,
                exit_code=e.return_code,
                metadata={"platform": self.platform, "dockerfile": str(self.dockerfile)},
            ) from e

    def push(self, publisher: ManifestPublisher) -> dict[str, str]:
        """Build and push the image, then resolve its digest.

        :param publisher: Used to inspect the pushed reference for its digest.

        :return: The step outputs, `image-ref` as `<image>@<digest>` and `digest`.
        """
        self.build(push=True)

        info = publisher.inspect(self.references[0])
        if not info.digest:
            raise ToolRuntimeError(
                f"Pushed image '{self.references[0]}' has no digest",
                tool_name="docker",
                metadata={"reference": self.references[0]},
            )
        log.info(f"Pushed {self.references[0]} as {info.digest}")

        return {
            IMAGE_REF_OUTPUT: f"{self.config.image_name}@{info.digest}",
            DIGEST_OUTPUT: info.digest,
        }

    def load(self) -> dict[str, str]:
        """Build the image into the local Docker daemon.

        :return: The step outputs, `image-ref` as the first tag reference.
        """
        self.build(push=False)
        return {IMAGE_REF_OUTPUT: self.references[0]}

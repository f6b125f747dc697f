import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_validator

from docker_actions.const import DEFAULT_DOCKERFILE, ConfigOutputEnum
from docker_actions.error import ConfigNotFoundError, ConfigParseError, MissingRequiredFieldError

log = logging.getLogger(__name__)

# jq renders JSON null as the string "null"; configs written by hand sometimes carry it literally.
NULL_STRING = "null"


class DockerConfig(BaseModel):
    """Model representing the Docker config JSON file for a single image."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    image_name: Annotated[
        str,
        Field(
            alias="imageName",
            min_length=1,
            description="Name of the image, without a tag.",
            examples=["myorg/myimage", "ghcr.io/myorg/myimage"],
        ),
    ]
    dockerfile: Annotated[
        str,
        Field(
            default=DEFAULT_DOCKERFILE,
            validate_default=True,
            description="Path to the Dockerfile relative to the build context.",
            examples=["./Dockerfile", "./docker/Dockerfile.prod"],
        ),
    ]
    target: Annotated[
        str,
        Field(default="", validate_default=True, description="Build stage to target.", examples=["dev", "production"]),
    ]
    metadata_tags: Annotated[
        str,
        Field(
            default="",
            alias="metadata-tags",
            validate_default=True,
            description="Value passed through to docker/metadata-action's `tags` input. May span several lines.",
            examples=["type=ref,event=branch\ntype=semver,pattern={{version}}"],
        ),
    ]
    metadata_flavor: Annotated[
        str,
        Field(
            default="",
            alias="metadata-flavor",
            validate_default=True,
            description="Value passed through to docker/metadata-action's `flavor` input.",
            examples=["latest=true"],
        ),
    ]

    @field_validator("dockerfile", mode="before")
    @classmethod
    def default_dockerfile(cls, value: Any) -> Any:
        """Fall back to the default Dockerfile when the field is null."""
        if value is None:
            return DEFAULT_DOCKERFILE
        return value

    @field_validator("target", mode="before")
    @classmethod
    def default_target(cls, value: Any) -> Any:
        """Treat a null target as no target."""
        if value is None:
            return ""
        return value

    @field_validator("metadata_tags", "metadata_flavor", mode="before")
    @classmethod
    def default_metadata(cls, value: Any) -> Any:
        """Treat null and the literal string "null" as an empty metadata value."""
        if value is None or value == NULL_STRING:
            return ""
        return value

    @computed_field
    @property
    def tag_suffix(self) -> str:
        """Suffix appended to image tags for a non-default build target.

        :return: `-<target>` when a target is set, otherwise an empty string.
        """
        if self.target:
            return f"-{self.target}"
        return ""

    def outputs(self) -> dict[str, str]:
        """Return the step outputs for this config in emission order."""
        return {
            ConfigOutputEnum.IMAGE_NAME.value: self.image_name,
            ConfigOutputEnum.DOCKERFILE.value: self.dockerfile,
            ConfigOutputEnum.TARGET.value: self.target,
            ConfigOutputEnum.TAG_SUFFIX.value: self.tag_suffix,
            ConfigOutputEnum.METADATA_TAGS.value: self.metadata_tags,
            ConfigOutputEnum.METADATA_FLAVOR.value: self.metadata_flavor,
        }

    @classmethod
    def load(cls, filepath: Union[str, bytes, os.PathLike]) -> "DockerConfig":
        """Load and validate a Docker config file.

        :param filepath: Path to the Docker config JSON file.

        :return: The validated DockerConfig.

        :raises ConfigNotFoundError: If the path is not an existing file.
        :raises ConfigParseError: If the file is not a JSON object or a field has the wrong type.
        :raises MissingRequiredFieldError: If `imageName` is absent, null, or empty.
        """
        filepath = Path(os.fsdecode(filepath))
        if not filepath.is_file():
            raise ConfigNotFoundError(f"Docker config file not found: {filepath}", filepath)

        log.debug(f"Reading Docker config from {filepath}")
        try:
            data = json.loads(filepath.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Failed to parse {filepath} as JSON: {e}", filepath) from e

        if not isinstance(data, dict):
            raise ConfigParseError(f"Expected a JSON object in {filepath}, got {type(data).__name__}", filepath)

        image_name = data.get("imageName")
        if image_name is None or image_name == "" or image_name == NULL_STRING:
            raise MissingRequiredFieldError("imageName", filepath)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigParseError(f"Invalid Docker config in {filepath}: {e}", filepath) from e

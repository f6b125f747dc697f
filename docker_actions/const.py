from enum import Enum

APP_NAME = "docker-actions"

DEFAULT_DOCKERFILE = "./Dockerfile"

# GitHub Actions workflow command prefixes.
GITHUB_ANNOTATION_ERROR = "::error::"
GITHUB_ANNOTATION_WARNING = "::warning::"

GITHUB_OUTPUT_ENV_VAR = "GITHUB_OUTPUT"
GITHUB_OUTPUT_DELIMITER_PREFIX = "ghadelimiter_"


class ConfigOutputEnum(str, Enum):
    """Step output names written by `read-config`, in emission order."""

    IMAGE_NAME = "image-name"
    DOCKERFILE = "dockerfile"
    TARGET = "target"
    TAG_SUFFIX = "tag-suffix"
    METADATA_TAGS = "metadata-tags"
    METADATA_FLAVOR = "metadata-flavor"


MANIFEST_OUTPUT = "manifest"
IMAGE_REF_OUTPUT = "image-ref"
DIGEST_OUTPUT = "digest"

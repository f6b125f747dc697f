import json
from pathlib import Path

from docker_actions.error import ToolRuntimeError
from docker_actions.manifest import ManifestInfo, ManifestPublisher

TEST_DIRECTORY = Path(__file__).parent

AMD64_SOURCE = "myorg/myimage@sha256:amd64digest"
ARM64_SOURCE = "myorg/myimage@sha256:arm64digest"


def sample_manifest_info() -> ManifestInfo:
    """Load the sample `imagetools inspect` descriptor used across tests."""
    data = json.loads((TEST_DIRECTORY / "testdata" / "inspect-index.json").read_text())
    return ManifestInfo.model_validate(data)


class FakeManifestPublisher(ManifestPublisher):
    """In-memory publisher that records calls and fails on request."""

    def __init__(self, fail_create: list[str] | None = None, fail_inspect: list[str] | None = None):
        self.calls: list[tuple] = []
        self.fail_create = fail_create or []
        self.fail_inspect = fail_inspect or []

    @property
    def created(self) -> list[tuple[str, list[str]]]:
        return [(c[1], c[2]) for c in self.calls if c[0] == "create"]

    @property
    def inspected(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "inspect"]

    def create(self, reference: str, sources: list[str], dry_run: bool = False) -> None:
        self.calls.append(("create", reference, list(sources), dry_run))
        if reference in self.fail_create:
            raise ToolRuntimeError(
                f"Failed to create manifest '{reference}'",
                tool_name="docker",
                cmd=["docker", "buildx", "imagetools", "create", "-t", reference, *sources],
                stderr="ERROR: failed to push",
                exit_code=1,
            )

    def inspect(self, reference: str) -> ManifestInfo:
        self.calls.append(("inspect", reference))
        if reference in self.fail_inspect:
            raise ToolRuntimeError(
                f"Failed to inspect manifest '{reference}'",
                tool_name="docker",
                cmd=["docker", "buildx", "imagetools", "inspect", reference],
                stderr="ERROR: not found",
                exit_code=1,
            )
        return sample_manifest_info()

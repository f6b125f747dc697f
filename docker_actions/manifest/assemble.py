import logging
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, computed_field

from docker_actions.const import MANIFEST_OUTPUT
from docker_actions.error import ActionsUsageError, ManifestErrorGroup, NoSourcesError, ToolRuntimeError
from docker_actions.manifest.parse import manifest_reference, parse_sources, parse_tags
from docker_actions.manifest.publisher import ManifestInfo, ManifestPublisher

log = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    """What to do when creating or inspecting the manifest for one tag fails."""

    FAIL_FAST = "fail-fast"  # Abort on the first failure. Manifests created for earlier tags are left in place.
    CONTINUE = "continue"  # Attempt every tag, then fail with a summary of all failed tags.


class InspectFailureMode(str, Enum):
    """How an inspection failure after a successful creation is treated."""

    FAIL = "fail"
    WARN = "warn"


class TagResult(BaseModel):
    """Outcome of creating and inspecting the manifest for one tag."""

    tag: Annotated[str, Field(description="The trimmed tag.")]
    reference: Annotated[str, Field(description="The manifest reference, `<image>:<tag>`.")]
    created: Annotated[bool, Field(default=False, description="Whether the manifest was created.")]
    info: Annotated[ManifestInfo | None, Field(default=None, description="Inspection result, if inspected.")]
    error: Annotated[str | None, Field(default=None, description="Error message if the tag failed.")]
    warnings: Annotated[list[str], Field(default_factory=list, description="Non-fatal problems for this tag.")]

    @property
    def ok(self) -> bool:
        return self.created and self.error is None


class ManifestAssembly(BaseModel):
    """A request to combine source images under one or more tags, and its per-tag outcomes."""

    image_name: Annotated[str, Field(description="Image name without a tag.", examples=["myorg/myimage"])]
    tags: Annotated[list[str], Field(description="Trimmed tags in input order. The first is the primary tag.")]
    sources: Annotated[list[str], Field(description="Trimmed, non-empty source image references in input order.")]
    results: Annotated[list[TagResult], Field(default_factory=list)]

    @computed_field
    @property
    def primary_reference(self) -> str:
        """Reference of the manifest for the first tag."""
        return manifest_reference(self.image_name, self.tags[0])

    @property
    def references(self) -> list[str]:
        return [manifest_reference(self.image_name, tag) for tag in self.tags]

    @property
    def failed(self) -> list[TagResult]:
        return [r for r in self.results if not r.ok]

    @classmethod
    def from_inputs(cls, image_name: str, tags: str, sources: str) -> "ManifestAssembly":
        """Parse raw tag and source inputs into an assembly request.

        :param image_name: Image name, e.g. `org/image-name`.
        :param tags: Comma-separated tags, e.g. `1.0.0,latest`.
        :param sources: Newline-separated source images, e.g. `org/image@sha256:...`.

        :raises NoSourcesError: If no non-blank source lines are given.
        :raises ActionsUsageError: If no tags are given at all.
        """
        parsed_sources = parse_sources(sources)
        if not parsed_sources:
            raise NoSourcesError()

        parsed_tags = parse_tags(tags)
        if not any(parsed_tags):
            raise ActionsUsageError("No tags provided")

        return cls(image_name=image_name, tags=parsed_tags, sources=parsed_sources)

    def outputs(self) -> dict[str, str]:
        """Return the step outputs for this assembly."""
        return {MANIFEST_OUTPUT: self.primary_reference}


class ManifestAssembler:
    """Creates one multi-platform manifest per tag from a shared list of source images."""

    def __init__(
        self,
        publisher: ManifestPublisher,
        failure_policy: FailurePolicy = FailurePolicy.FAIL_FAST,
        inspect_failures: InspectFailureMode = InspectFailureMode.FAIL,
        dry_run: bool = False,
    ):
        self.publisher = publisher
        self.failure_policy = failure_policy
        self.inspect_failures = inspect_failures
        self.dry_run = dry_run

    def assemble(self, image_name: str, tags: str, sources: str) -> ManifestAssembly:
        """Parse the inputs and create a manifest for every tag.

        :param image_name: Image name, e.g. `org/image-name`.
        :param tags: Comma-separated tags, e.g. `1.0.0,latest`.
        :param sources: Newline-separated source images, e.g. `org/image@sha256:...`.

        :return: The completed assembly with one result per tag.

        :raises NoSourcesError: If no sources are given.
        :raises ToolRuntimeError: On the first failure with the fail-fast policy.
        :raises ManifestErrorGroup: After all tags were attempted with the continue policy, if any failed.
        """
        assembly = ManifestAssembly.from_inputs(image_name, tags, sources)

        log.info(f"Creating manifest for {assembly.image_name}")
        log.info(f"Tags: {' '.join(assembly.tags)}")
        log.info(f"Sources: {' '.join(assembly.sources)}")

        errors: list[ToolRuntimeError] = []
        for tag in assembly.tags:
            result = TagResult(tag=tag, reference=manifest_reference(assembly.image_name, tag))
            assembly.results.append(result)
            try:
                self._process(result, assembly.sources)
            except ToolRuntimeError as e:
                result.error = e.message
                log.error(f"Manifest '{result.reference}' failed: {e.message}")
                if self.failure_policy == FailurePolicy.FAIL_FAST:
                    leftover = [r.reference for r in assembly.results if r.created]
                    if leftover:
                        log.warning(f"Manifests already created in this run were left in place: {', '.join(leftover)}")
                    raise
                errors.append(e)

        if errors:
            log.error(f"{len(errors)} of {len(assembly.tags)} manifest(s) failed:")
            for r in assembly.failed:
                log.error(f"  - {r.reference}: {r.error}")
            raise ManifestErrorGroup("Multiple errors occurred while creating manifests.", errors)

        return assembly

    def _process(self, result: TagResult, sources: list[str]) -> None:
        """Create, then inspect, the manifest for a single tag."""
        log.info(f"Creating manifest: {result.reference}")
        log.debug(f"Executing: docker buildx imagetools create -t {result.reference} {' '.join(sources)}")
        self.publisher.create(result.reference, sources, dry_run=self.dry_run)
        result.created = True

        if self.dry_run:
            return

        log.info(f"Inspecting manifest: {result.reference}")
        try:
            result.info = self.publisher.inspect(result.reference)
        except ToolRuntimeError as e:
            if self.inspect_failures == InspectFailureMode.FAIL:
                raise
            result.warnings.append(e.message)
            log.warning(f"Could not inspect manifest '{result.reference}' after creating it: {e.message}")
            return

        log.info(f"  - Digest: {result.info.digest}")
        for platform in result.info.platforms:
            log.info(f"  - Platform: {platform}")

from .assemble import FailurePolicy, InspectFailureMode, ManifestAssembler, ManifestAssembly, TagResult
from .publisher import DockerManifestPublisher, ManifestInfo, ManifestPublisher

__all__ = [
    "DockerManifestPublisher",
    "FailurePolicy",
    "InspectFailureMode",
    "ManifestAssembler",
    "ManifestAssembly",
    "ManifestInfo",
    "ManifestPublisher",
    "TagResult",
]

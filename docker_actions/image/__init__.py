from .build import ImageBuild

__all__ = ["ImageBuild"]

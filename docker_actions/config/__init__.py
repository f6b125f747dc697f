from .docker import DockerConfig

__all__ = ["DockerConfig"]

import os
from pathlib import Path

from docker_actions.const import GITHUB_OUTPUT_ENV_VAR


class Settings:
    """Application settings read from the CI environment."""

    def __init__(self):
        self.output_env_var = GITHUB_OUTPUT_ENV_VAR

    @property
    def output_path(self) -> Path | None:
        """Path of the step output file, or None when running outside of GitHub Actions."""
        value = os.environ.get(self.output_env_var)
        if not value:
            return None
        return Path(value)


SETTINGS = Settings()

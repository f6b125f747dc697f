import json
import os
from pathlib import Path

import pytest

from test.helpers import FakeManifestPublisher

TEST_DIRECTORY = Path(os.path.dirname(os.path.realpath(__file__)))


@pytest.fixture(autouse=True)
def clean_github_output(monkeypatch):
    """Ensure tests never write to a real GitHub Actions output file."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


@pytest.fixture(scope="session")
def testdata_path():
    """Return the path to the test data directory"""
    return TEST_DIRECTORY / "testdata"


@pytest.fixture
def output_file(tmp_path, monkeypatch) -> Path:
    """Point GITHUB_OUTPUT at an empty temporary file and return its path."""
    path = tmp_path / "github_output.txt"
    path.touch()
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


@pytest.fixture
def write_config(tmp_path):
    """Return a function that writes a Docker config JSON file and returns its path"""

    def _write_config(data: dict | str, name: str = "docker-config.json") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(json.dumps(data))
        return path

    return _write_config


@pytest.fixture
def fake_publisher():
    return FakeManifestPublisher()

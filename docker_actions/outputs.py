"""Step output writers for GitHub Actions.

GitHub Actions reads step outputs from the file named by `GITHUB_OUTPUT`. Single-line values are
written as `name=value`. Values spanning several lines use the heredoc form:

```
name<<ghadelimiter_<uuid>
line one
line two
ghadelimiter_<uuid>
```
"""

import abc
import logging
import sys
import uuid
from pathlib import Path
from typing import Mapping, TextIO

from docker_actions.const import GITHUB_OUTPUT_DELIMITER_PREFIX
from docker_actions.error import OutputFormatError
from docker_actions.settings import SETTINGS, Settings

log = logging.getLogger(__name__)


def format_output(key: str, value: str, delimiter: str | None = None) -> str:
    """Encode one step output in the GitHub Actions output file format.

    :param key: The output name.
    :param value: The output value. May contain newlines.
    :param delimiter: The heredoc delimiter to use for multi-line values. Generated when omitted.

    :return: The encoded output, always terminated by a newline.
    """
    if "\n" in key or "\r" in key or "=" in key:
        raise OutputFormatError(f"Invalid output name '{key}'")

    if "\n" not in value and "\r" not in value:
        return f"{key}={value}\n"

    if delimiter is None:
        delimiter = f"{GITHUB_OUTPUT_DELIMITER_PREFIX}{uuid.uuid4()}"
    if delimiter in key or delimiter in value:
        raise OutputFormatError(f"Unexpected input: value of output '{key}' should not contain the delimiter")

    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def parse_outputs(text: str) -> dict[str, str]:
    """Decode a GitHub Actions output file back into a mapping.

    Later entries for the same key replace earlier ones, matching how the runner reads the file.

    :param text: The content of an output file.

    :return: The decoded outputs.
    """
    outputs: dict[str, str] = {}
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line:
            continue

        heredoc_pos = line.find("<<")
        equals_pos = line.find("=")
        if heredoc_pos != -1 and (equals_pos == -1 or heredoc_pos < equals_pos):
            key, delimiter = line[:heredoc_pos], line[heredoc_pos + 2 :]
            value_lines = []
            while i < len(lines) and lines[i] != delimiter:
                value_lines.append(lines[i])
                i += 1
            if i >= len(lines):
                raise OutputFormatError(f"Missing closing delimiter '{delimiter}' for output '{key}'")
            i += 1
            outputs[key] = "\n".join(value_lines)
        elif equals_pos != -1:
            outputs[line[:equals_pos]] = line[equals_pos + 1 :]
        else:
            raise OutputFormatError(f"Malformed output line: {line}")

    return outputs


class OutputWriter(abc.ABC):
    """Destination for step outputs."""

    @abc.abstractmethod
    def write(self, key: str, value: str) -> None:
        """Write a single output value.

        :param key: The output name.
        :param value: The output value.
        """
        raise NotImplementedError

    def write_all(self, values: Mapping[str, str]) -> None:
        """Write several outputs in mapping order."""
        for key, value in values.items():
            self.write(key, value)


class FileOutputWriter(OutputWriter):
    """Appends outputs to the file GitHub Actions provides in `GITHUB_OUTPUT`."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def write(self, key: str, value: str) -> None:
        log.debug(f"Writing output '{key}' to {self.path}")
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(format_output(key, value))

    def __repr__(self):
        return f"FileOutputWriter(path={self.path})"


class StreamOutputWriter(OutputWriter):
    """Writes outputs to a text stream, standard output by default."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def write(self, key: str, value: str) -> None:
        self.stream.write(format_output(key, value))
        self.stream.flush()


class MemoryOutputWriter(OutputWriter):
    """Keeps outputs in memory."""

    def __init__(self):
        self.outputs: dict[str, str] = {}

    def write(self, key: str, value: str) -> None:
        self.outputs[key] = value


def resolve_output_writer(settings: Settings = SETTINGS) -> OutputWriter:
    """Return a file writer when `GITHUB_OUTPUT` is set, otherwise a standard output writer."""
    if settings.output_path is not None:
        return FileOutputWriter(settings.output_path)
    log.debug(f"{settings.output_env_var} is not set, writing outputs to standard output")
    return StreamOutputWriter()

import os
from typing import Union, List


class ActionsError(Exception):
    """Base class for all docker-actions exceptions"""

    pass


class ActionsUsageError(ActionsError):
    """Error for missing or malformed command line arguments"""

    def __init__(self, message: str = None, usage: str = None) -> None:
        super().__init__(message)
        self.message = message
        self.usage = usage

    def __str__(self) -> str:
        if self.usage and self.message:
            return f"{self.message}\n{self.usage}"
        return self.usage or self.message or ""


class ConfigError(ActionsError):
    """Generic error for Docker config file issues"""

    def __init__(self, message: str = None, filepath: Union[str, bytes, os.PathLike] = None) -> None:
        super().__init__(message)
        self.message = message
        self.filepath = filepath

        if filepath:
            self.add_note(f"Config filepath: {filepath}")


class ConfigNotFoundError(ConfigError):
    """Error for a Docker config file that does not exist"""

    pass


class ConfigParseError(ConfigError):
    """Error for a Docker config file that is not valid JSON or has wrongly typed fields"""

    pass


class MissingRequiredFieldError(ConfigError):
    """Error for a required Docker config field that is absent, null, or empty"""

    def __init__(self, field: str, filepath: Union[str, bytes, os.PathLike] = None) -> None:
        message = f"{field} not found in {filepath}" if filepath else f"{field} not found"
        super().__init__(message, filepath)
        self.field = field


class NoSourcesError(ActionsError):
    """Error for a manifest request without any source images"""

    def __init__(self, message: str = "No source images provided") -> None:
        super().__init__(message)
        self.message = message


class OutputFormatError(ActionsError):
    """Error for a step output that cannot be encoded safely"""

    pass


class ToolError(ActionsError):
    """Generic error for external tool issues"""

    def __init__(self, message: str = None, tool_name: str = None) -> None:
        super().__init__(message)
        self.message = message
        self.tool_name = tool_name


class ToolRuntimeError(ToolError):
    def __init__(
        self,
        message: str = None,
        tool_name: str = None,
        cmd: List[str] = None,
        stdout: str | bytes | None = None,
        stderr: str | bytes | None = None,
        exit_code: int = 1,
        metadata: dict | None = None,
    ) -> None:
        super().__init__(message, tool_name)
        self.exit_code = exit_code
        self.cmd = cmd or []
        self.stdout = stdout
        self.stderr = stderr
        self.metadata = metadata

    def dump_stdout(self, lines: int = 10) -> str:
        if not self.stdout:
            return ""
        if isinstance(self.stdout, bytes):
            return "\n".join(self.stdout.decode().splitlines()[:lines])
        else:
            return "\n".join(self.stdout.splitlines()[:lines])

    def dump_stderr(self, lines: int = 10) -> str:
        if not self.stderr:
            return ""
        if isinstance(self.stderr, bytes):
            return "\n".join(self.stderr.decode().splitlines()[:lines])
        else:
            return "\n".join(self.stderr.splitlines()[:lines])

    def __str__(self) -> str:
        s = f"{self.message}\n"
        s += f"  - Exit code: {self.exit_code}\n"
        s += f"  - Command executed: {' '.join(self.cmd)}\n"
        stderr = self.dump_stderr()
        if stderr:
            s += f"  - Command error output:\n"
            for line in stderr.splitlines():
                s += f"      {line}\n"
        if self.metadata:
            s += "  - Metadata:\n"
            for key, value in self.metadata.items():
                s += f"    - {key}: {value}\n"
        return s


class ManifestErrorGroup(ExceptionGroup):
    """Group of per-tag manifest errors"""

    def __str__(self) -> str:
        s = f""
        for e in self.exceptions:
            s += f"{e}\n"
        s += "\n"
        s += f"{len(self.exceptions)} manifest(s) returned errors\n"

        return s

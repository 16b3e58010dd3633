"""
Domain Errors

Architectural Intent:
- Fatal conditions that end a run with exit status 1
- Raised by loaders and use cases, caught and reported once by the CLI
- Host-local failures (probe, per-host deploy) are NOT represented here;
  they are logged and recorded in results instead of raised
"""


class DoUpdatesError(Exception):
    """Base class for every fatal doupdates error."""


class ConfigNotFoundError(DoUpdatesError):
    """
    Raised after a default deploy.json has been written on first run.
    """

    def __init__(self, path) -> None:
        super().__init__(
            f"Didn't find deploy.json at {path}. A default one was written; "
            "please edit it and run again."
        )
        self.path = path


class ConfigError(DoUpdatesError):
    """Raised when deploy.json exists but cannot be understood."""


class FlakeNotFoundError(DoUpdatesError):
    def __init__(self, path) -> None:
        super().__init__(
            f"Didn't find flake.nix at {path}. Please run this from a NixOS machine."
        )
        self.path = path


class FlakeReadError(DoUpdatesError):
    """Raised when flake.nix exists but cannot be read as UTF-8 text."""

    def __init__(self, path, reason) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path


class FlakeParseError(DoUpdatesError):
    """
    Raised when a line carries the nixosConfigurations marker but no usable
    configuration name.
    """

    def __init__(self, path, line_number: int, line: str) -> None:
        super().__init__(
            f"{path}:{line_number}: cannot read a configuration name from "
            f"{line.strip()!r}"
        )
        self.path = path
        self.line_number = line_number
        self.line = line


class RefreshFailedError(DoUpdatesError):
    def __init__(self, stderr: str) -> None:
        message = "Failed to update flake."
        if stderr.strip():
            message = f"{message} {stderr.strip()}"
        super().__init__(message)
        self.stderr = stderr

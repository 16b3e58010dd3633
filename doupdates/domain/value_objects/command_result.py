"""
Command Result Value Object

Architectural Intent:
- Typed outcome of one external process invocation
- Lets use cases decide fatal vs recoverable without inspecting processes
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommandResult:
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @classmethod
    def timeout(cls, seconds: float, stderr: str = "") -> "CommandResult":
        message = f"timed out after {seconds:g}s"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        return cls(returncode=None, stderr=message, timed_out=True)

    @classmethod
    def missing_executable(cls, executable: str) -> "CommandResult":
        return cls(returncode=127, stderr=f"'{executable}' not found on PATH")

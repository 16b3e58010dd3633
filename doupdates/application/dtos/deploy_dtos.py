"""
Deploy DTOs

Architectural Intent:
- Data Transfer Objects for the deploy and run use case boundaries
- Carry per-host outcomes out of the sequencer without exposing processes
"""

from dataclasses import dataclass, field
from typing import Optional
from doupdates.domain.value_objects.host_status import HostStatus


@dataclass(frozen=True)
class HostDeployResult:
    name: str
    address: Optional[str] = None
    mode: Optional[str] = None
    success: bool = False
    skipped: bool = False
    error: str = ""
    duration_seconds: float = 0.0
    current_system: Optional[str] = None


@dataclass(frozen=True)
class DeployReport:
    results: tuple[HostDeployResult, ...] = ()

    @property
    def deployed(self) -> list[str]:
        return [r.name for r in self.results if r.success]

    @property
    def failed(self) -> list[str]:
        return [r.name for r in self.results if not r.success and not r.skipped]

    @property
    def skipped(self) -> list[str]:
        return [r.name for r in self.results if r.skipped]


@dataclass(frozen=True)
class RunSummary:
    online_hosts: dict[str, str] = field(default_factory=dict)
    statuses: tuple[tuple[str, HostStatus], ...] = ()
    refreshed: bool = False
    report: Optional[DeployReport] = None

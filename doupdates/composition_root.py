"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the doupdates application
- Single place where all adapters and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- The Fabric inspector is only wired when post-deploy verification is asked for
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from doupdates.domain.errors import ConfigError
from doupdates.infrastructure.adapters.nix_adapter import NixAdapter
from doupdates.infrastructure.adapters.fabric_adapter import FabricAdapter
from doupdates.infrastructure.config import RunSettings
from doupdates.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter
from doupdates.application.use_cases.probe_remotes import ProbeRemotes
from doupdates.application.use_cases.refresh_flake import RefreshFlake
from doupdates.application.use_cases.deploy_hosts import DeployHosts
from doupdates.application.use_cases.run_updates import RunUpdates


@dataclass
class DoUpdatesContainer:
    """DI container holding all wired dependencies."""

    nix_adapter: NixAdapter
    fabric_adapter: Optional[FabricAdapter]
    telemetry: OTELExporter
    probe_remotes: ProbeRemotes
    refresh_flake: RefreshFlake
    deploy_hosts: DeployHosts
    run_updates: RunUpdates


def create_container(
    settings: RunSettings,
    verify: bool = False,
) -> DoUpdatesContainer:
    """Create and wire all dependencies."""
    nix_adapter = NixAdapter()
    fabric_adapter = FabricAdapter() if verify else None
    try:
        otel_config = OTELConfig(
            endpoint=settings.telemetry_endpoint,
            insecure=settings.telemetry_insecure,
        )
    except ValueError as e:
        raise ConfigError(f"Invalid telemetry settings: {e}") from e
    telemetry = OTELExporter(otel_config)

    probe_remotes = ProbeRemotes(nix_adapter, timeout=settings.probe_timeout)
    refresh_flake = RefreshFlake(
        nix_adapter, staleness=timedelta(hours=settings.staleness_hours)
    )
    deploy_hosts = DeployHosts(nix_adapter, inspector=fabric_adapter)
    run_updates = RunUpdates(
        probe_remotes, refresh_flake, deploy_hosts, telemetry=telemetry
    )

    return DoUpdatesContainer(
        nix_adapter=nix_adapter,
        fabric_adapter=fabric_adapter,
        telemetry=telemetry,
        probe_remotes=probe_remotes,
        refresh_flake=refresh_flake,
        deploy_hosts=deploy_hosts,
        run_updates=run_updates,
    )

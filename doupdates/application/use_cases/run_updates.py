"""
Run Updates Use Case

Architectural Intent:
- The whole run as a flat pipeline of stages:
  probe -> read topology -> report -> refresh -> deploy
- Each stage's result is passed explicitly to the next
- Fatal stage errors (DoUpdatesError) propagate to the caller unchanged
- Telemetry, when wired, observes stage results and never alters them
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional
from doupdates.application.dtos.deploy_dtos import RunSummary
from doupdates.application.use_cases.deploy_hosts import DeployHosts
from doupdates.application.use_cases.probe_remotes import ProbeRemotes
from doupdates.application.use_cases.refresh_flake import RefreshFlake
from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.services.status_report import report_status
from doupdates.domain.services.topology import read_config_names

logger = logging.getLogger(__name__)


class RunUpdates:
    def __init__(
        self,
        probe_remotes: ProbeRemotes,
        refresh_flake: RefreshFlake,
        deploy_hosts: DeployHosts,
        telemetry: Optional[Any] = None,
    ):
        self.probe_remotes = probe_remotes
        self.refresh_flake = refresh_flake
        self.deploy_hosts = deploy_hosts
        self.telemetry = telemetry

    async def execute(
        self,
        config: DeployConfig,
        flake_path: Path,
        status_only: bool = False,
        only: Optional[Iterable[str]] = None,
    ) -> RunSummary:
        online_hosts = await self.probe_remotes.execute(config)
        if self.telemetry is not None:
            for remote in config.remotes:
                if remote.is_probeable:
                    self.telemetry.record_probe(
                        remote.name, remote.name in online_hosts
                    )

        config_names = read_config_names(flake_path)
        statuses = report_status(config_names, online_hosts, config)

        if status_only:
            return RunSummary(online_hosts=online_hosts, statuses=tuple(statuses))

        refreshed = await self.refresh_flake.execute(config, flake_path)

        report = await self.deploy_hosts.execute(
            config, config_names, online_hosts, flake_path.parent, only=only
        )
        if self.telemetry is not None:
            for result in report.results:
                if not result.skipped:
                    self.telemetry.record_deploy(
                        result.name, result.success, result.duration_seconds
                    )
            await self.telemetry.export()

        if report.failed:
            logger.warning("Hosts that failed to deploy: %s", ", ".join(report.failed))

        return RunSummary(
            online_hosts=online_hosts,
            statuses=tuple(statuses),
            refreshed=refreshed,
            report=report,
        )

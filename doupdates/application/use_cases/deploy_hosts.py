"""
Deploy Hosts Use Case

Architectural Intent:
- Deploys every online flake configuration, one host at a time, in flake order
- One `nixos-rebuild --target-host` per host does build, copy and activation
- A failed host is logged and recorded; the remaining hosts still deploy
- Optional post-deploy inspection reads the active system path from the host
"""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional
from doupdates.application.dtos.deploy_dtos import DeployReport, HostDeployResult
from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.ports.nix_port import NixPort
from doupdates.domain.ports.remote_inspector_port import RemoteInspectorPort

logger = logging.getLogger(__name__)


class DeployHosts:
    def __init__(
        self,
        nix_port: NixPort,
        inspector: Optional[RemoteInspectorPort] = None,
    ):
        self.nix_port = nix_port
        self.inspector = inspector

    async def execute(
        self,
        config: DeployConfig,
        config_names: list[str],
        online_hosts: dict[str, str],
        flake_dir: Path,
        only: Optional[Iterable[str]] = None,
    ) -> DeployReport:
        selected = set(only) if only else None
        if selected is not None:
            unknown = sorted(selected.difference(config_names))
            if unknown:
                logger.warning(
                    "No flake configuration named %s; ignoring.", ", ".join(unknown)
                )
        results = []

        for name in config_names:
            if selected is not None and name not in selected:
                continue

            if name not in online_hosts:
                logger.error(
                    "Skipping %s because it's offline or not configured.", name
                )
                results.append(HostDeployResult(name=name, skipped=True))
                continue

            results.append(
                await self._deploy_one(config, name, online_hosts[name], flake_dir)
            )

        logger.info("Deploy Complete")
        return DeployReport(results=tuple(results))

    async def _deploy_one(
        self, config: DeployConfig, name: str, address: str, flake_dir: Path
    ) -> HostDeployResult:
        remote = config.find_deployable(name)
        if remote is None:
            # online_hosts is only ever filled from deployable remotes
            raise RuntimeError(f"Online host {name!r} has no matching remote")

        mode = remote.switch_or_boot
        logger.info(
            "Deploying %s (%s) to %s@%s...", name, mode, config.username, address
        )
        started = time.monotonic()
        result = await self.nix_port.rebuild(
            mode, flake_dir, name, config.username, address
        )
        duration = time.monotonic() - started

        if not result.ok:
            logger.error("Failed to deploy %s: %s", name, result.stderr.strip())
            return HostDeployResult(
                name=name,
                address=address,
                mode=mode.value,
                error=result.stderr.strip(),
                duration_seconds=duration,
            )

        logger.info("Successfully deployed %s.", name)
        current_system = None
        if self.inspector is not None:
            current_system = await self.inspector.current_system(
                config.username, address
            )
            if current_system:
                logger.info("%s is running %s", name, current_system)
            else:
                logger.warning("Could not read the active system on %s", name)

        return HostDeployResult(
            name=name,
            address=address,
            mode=mode.value,
            success=True,
            duration_seconds=duration,
            current_system=current_system,
        )

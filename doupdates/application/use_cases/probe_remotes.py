"""
Probe Remotes Use Case

Architectural Intent:
- Checks every deploy-enabled remote with a bounded `nix store ping`
- Returns the OnlineHosts mapping (configuration name -> address)
- A failed probe degrades the run; it never stops it
"""

import logging
from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.ports.nix_port import NixPort

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS = 2.0


class ProbeRemotes:
    def __init__(self, nix_port: NixPort, timeout: float = PROBE_TIMEOUT_SECONDS):
        self.nix_port = nix_port
        self.timeout = timeout

    async def execute(self, config: DeployConfig) -> dict[str, str]:
        online_hosts: dict[str, str] = {}
        for remote in config.remotes:
            if not remote.is_probeable:
                continue

            result = await self.nix_port.ping_store(remote.ip, self.timeout)
            if not result.ok:
                logger.warning(
                    "Failed to ping %s (%s): %s",
                    remote.ip,
                    remote.name,
                    result.stderr.strip(),
                )
                continue

            logger.info("Successfully pinged %s.", remote.ip)
            online_hosts[remote.name] = remote.ip
        return online_hosts

"""
Refresh Flake Use Case

Architectural Intent:
- Runs `nix flake update` when enabled and the flake looks stale
- A failed refresh is fatal: deploying from a half-updated lock is unsafe
"""

import logging
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Optional
from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.errors import FlakeNotFoundError, RefreshFailedError
from doupdates.domain.ports.nix_port import NixPort

logger = logging.getLogger(__name__)

REFRESH_STALENESS = timedelta(hours=12)


class RefreshFlake:
    def __init__(self, nix_port: NixPort, staleness: timedelta = REFRESH_STALENESS):
        self.nix_port = nix_port
        self.staleness = staleness

    def is_stale(self, flake_path: Path, now: Optional[datetime] = None) -> bool:
        if not flake_path.exists():
            raise FlakeNotFoundError(flake_path)
        now = now or datetime.now(UTC)
        modified = datetime.fromtimestamp(flake_path.stat().st_mtime, UTC)
        return modified < now - self.staleness

    async def execute(
        self,
        config: DeployConfig,
        flake_path: Path,
        now: Optional[datetime] = None,
    ) -> bool:
        """Returns True if the refresh command ran (and succeeded)."""
        if not config.update_flake:
            logger.debug("Flake refresh disabled in config")
            return False
        if not self.is_stale(flake_path, now):
            logger.debug("Flake modified within %s, not refreshing", self.staleness)
            return False

        logger.info("Updating flake...")
        result = await self.nix_port.update_flake(flake_path.parent)
        if not result.ok:
            raise RefreshFailedError(result.stderr)
        logger.info("Successfully updated flake.")
        return True

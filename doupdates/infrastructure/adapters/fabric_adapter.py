"""
Fabric Adapter

Architectural Intent:
- Infrastructure adapter implementing RemoteInspectorPort via Fabric/SSH
- Reads which system generation a host is running after a deploy

Security:
- SSH connections use connect_timeout, allow_agent, look_for_keys
- Read-only: the only remote command is a readlink
"""

import asyncio
import logging
from typing import Optional
from fabric import Connection
from doupdates.domain.ports.remote_inspector_port import RemoteInspectorPort

logger = logging.getLogger(__name__)

CURRENT_SYSTEM_CMD = "readlink -f /run/current-system"


class FabricAdapter(RemoteInspectorPort):
    """Adapter implementing RemoteInspectorPort via Fabric/SSH."""

    def __init__(self, connect_timeout: int = 30):
        self.connect_timeout = connect_timeout

    def _get_connection(self, username: str, address: str) -> Connection:
        return Connection(
            host=address,
            user=username,
            connect_timeout=self.connect_timeout,
            connect_kwargs={
                "allow_agent": True,
                "look_for_keys": True,
            },
        )

    async def current_system(self, username: str, address: str) -> Optional[str]:
        def _read() -> Optional[str]:
            try:
                with self._get_connection(username, address) as conn:
                    result = conn.run(CURRENT_SYSTEM_CMD, hide=True, warn=True)
            except Exception as e:
                logger.warning("Could not connect to %s@%s: %s", username, address, e)
                return None
            if not result.ok:
                logger.warning(
                    "readlink failed on %s: %s", address, result.stderr.strip()
                )
                return None
            return result.stdout.strip() or None

        return await asyncio.get_event_loop().run_in_executor(None, _read)

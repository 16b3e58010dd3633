"""
Remote Inspector Port

Architectural Intent:
- Port interface for read-only queries against a deployed host
- Used to confirm which system a host runs after a deploy
- Implemented by FabricAdapter
"""

from abc import ABC, abstractmethod
from typing import Optional


class RemoteInspectorPort(ABC):

    @abstractmethod
    async def current_system(self, username: str, address: str) -> Optional[str]:
        """
        Returns the store path of the active system on the host, or None if
        it cannot be determined.
        """
        pass

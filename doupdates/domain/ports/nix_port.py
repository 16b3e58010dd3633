"""
Nix Port

Architectural Intent:
- Port interface for the Nix tooling a run shells out to
- Abstracts store ping, flake update, and nixos-rebuild
- Implemented by NixAdapter; faked with AsyncMock in tests
"""

from abc import ABC, abstractmethod
from pathlib import Path
from doupdates.domain.value_objects.command_result import CommandResult
from doupdates.domain.value_objects.remote import ActivationMode


class NixPort(ABC):
    """
    Port interface for interacting with the Nix toolchain.
    """

    @abstractmethod
    async def ping_store(self, address: str, timeout: float) -> CommandResult:
        """
        Checks that the Nix store on `address` answers over SSH within `timeout`.
        """
        pass

    @abstractmethod
    async def update_flake(self, flake_dir: Path) -> CommandResult:
        """
        Refreshes the flake lock file in `flake_dir`. Waits without a timeout.
        """
        pass

    @abstractmethod
    async def rebuild(
        self,
        mode: ActivationMode,
        flake_dir: Path,
        config_name: str,
        username: str,
        address: str,
    ) -> CommandResult:
        """
        Builds `config_name` from the flake, copies it to `username@address`
        and activates it there with `mode`.
        """
        pass

"""
Nix Adapter

Architectural Intent:
- Infrastructure adapter implementing NixPort
- Provides store ping, flake update and nixos-rebuild via the Nix CLI
- Uses subprocess for Nix CLI operations wrapped in async

Design Decisions:
- Commands never raise for a non-zero exit; they return CommandResult
- Only the store ping is time-bounded; update and rebuild wait indefinitely
- stdout of update/rebuild is left on the terminal so progress stays visible
"""

import asyncio
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Optional
from doupdates.domain.ports.nix_port import NixPort
from doupdates.domain.value_objects.command_result import CommandResult
from doupdates.domain.value_objects.remote import ActivationMode

logger = logging.getLogger(__name__)


def _run(
    cmd: list[str],
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
    capture_stdout: bool = True,
) -> CommandResult:
    logger.debug("Running %s", shlex.join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            stdout=subprocess.PIPE if capture_stdout else None,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return CommandResult.missing_executable(cmd[0])
    except subprocess.TimeoutExpired as e:
        stderr = e.stderr or ""
        if isinstance(stderr, bytes):
            stderr = stderr.decode(errors="replace")
        return CommandResult.timeout(timeout or 0, stderr)

    return CommandResult(
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )


class NixAdapter(NixPort):
    def ping_command(self, address: str) -> list[str]:
        return ["nix", "store", "ping", "--store", f"ssh://{address}"]

    def update_command(self) -> list[str]:
        return ["nix", "flake", "update"]

    def rebuild_command(
        self,
        mode: ActivationMode,
        flake_dir: Path,
        config_name: str,
        username: str,
        address: str,
    ) -> list[str]:
        return [
            "nixos-rebuild",
            mode.value,
            "--flake",
            f"{flake_dir}#{config_name}",
            "--target-host",
            f"{username}@{address}",
        ]

    async def ping_store(self, address: str, timeout: float) -> CommandResult:
        cmd = self.ping_command(address)
        return await asyncio.get_event_loop().run_in_executor(
            None, lambda: _run(cmd, timeout=timeout)
        )

    async def update_flake(self, flake_dir: Path) -> CommandResult:
        cmd = self.update_command()
        return await asyncio.get_event_loop().run_in_executor(
            None, lambda: _run(cmd, cwd=flake_dir, capture_stdout=False)
        )

    async def rebuild(
        self,
        mode: ActivationMode,
        flake_dir: Path,
        config_name: str,
        username: str,
        address: str,
    ) -> CommandResult:
        cmd = self.rebuild_command(mode, flake_dir, config_name, username, address)
        return await asyncio.get_event_loop().run_in_executor(
            None, lambda: _run(cmd, cwd=flake_dir, capture_stdout=False)
        )

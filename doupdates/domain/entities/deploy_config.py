"""
Deploy Config Entity

Architectural Intent:
- Process-wide deployment settings read once from deploy.json
- Frozen after load so every stage sees the same remotes and username
- Owns the mapping between the JSON document and the typed model

Design Decisions:
- Canonical JSON keys are PascalCase (Remotes, UpdateFlake, Username, ...)
- Keys are matched case-insensitively on read so older files using
  `updateFlake` or `IP` keep working
- Unknown keys are ignored; wrong value types raise ConfigError
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional
from doupdates.domain.errors import ConfigError
from doupdates.domain.value_objects.remote import ActivationMode, Remote

DEFAULT_USERNAME = "root"


def _lookup(data: dict, key: str, default: Any = None) -> Any:
    """Case-insensitive dict lookup."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for k, v in data.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return default


def _expect(value: Any, expected: type, where: str) -> Any:
    if not isinstance(value, expected):
        raise ConfigError(
            f"{where} must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class DeployConfig:
    """
    Root of deploy.json.
    """
    remotes: tuple[Remote, ...] = ()
    update_flake: bool = True
    username: str = DEFAULT_USERNAME

    def find_remote(self, name: str) -> Optional[Remote]:
        for remote in self.remotes:
            if remote.name == name:
                return remote
        return None

    def find_deployable(self, name: str) -> Optional[Remote]:
        """Like find_remote, but only among remotes that opted in to deploys."""
        for remote in self.remotes:
            if remote.name == name and remote.is_probeable:
                return remote
        return None

    @classmethod
    def default(cls) -> "DeployConfig":
        """Template written on first run; inert until edited."""
        return cls(
            remotes=(
                Remote(
                    name="remotehost",
                    ip="10.1",
                    switch_or_boot=ActivationMode.SWITCH,
                ),
            ),
            update_flake=True,
            username=DEFAULT_USERNAME,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Remotes": [
                {
                    "Name": r.name,
                    "Ip": r.ip,
                    "SwitchOrBoot": r.switch_or_boot.value,
                    "Deploy": r.deploy,
                }
                for r in self.remotes
            ],
            "UpdateFlake": self.update_flake,
            "Username": self.username,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "DeployConfig":
        if not isinstance(data, dict):
            raise ConfigError(
                f"top level must be an object, got {type(data).__name__}"
            )

        raw_remotes = _expect(_lookup(data, "Remotes", []), list, "Remotes")
        remotes = tuple(
            _remote_from_dict(item, index) for index, item in enumerate(raw_remotes)
        )
        seen = set()
        for index, remote in enumerate(remotes):
            if remote.name in seen:
                raise ConfigError(
                    f"Remotes[{index}].Name {remote.name!r} is declared more than once"
                )
            seen.add(remote.name)
        update_flake = _expect(_lookup(data, "UpdateFlake", True), bool, "UpdateFlake")
        username = _expect(
            _lookup(data, "Username", DEFAULT_USERNAME), str, "Username"
        )
        if not username:
            raise ConfigError("Username cannot be empty")

        return cls(remotes=remotes, update_flake=update_flake, username=username)


def _remote_from_dict(item: Any, index: int) -> Remote:
    where = f"Remotes[{index}]"
    if not isinstance(item, dict):
        raise ConfigError(f"{where} must be an object, got {type(item).__name__}")

    name = _lookup(item, "Name")
    ip = _lookup(item, "Ip")
    if name is None:
        raise ConfigError(f"{where}.Name is required")
    if ip is None:
        raise ConfigError(f"{where}.Ip is required")
    _expect(name, str, f"{where}.Name")
    _expect(ip, str, f"{where}.Ip")
    mode = _expect(
        _lookup(item, "SwitchOrBoot", ActivationMode.SWITCH.value),
        str,
        f"{where}.SwitchOrBoot",
    )
    deploy = _expect(_lookup(item, "Deploy", False), bool, f"{where}.Deploy")

    try:
        return Remote(
            name=name,
            ip=ip,
            switch_or_boot=ActivationMode.parse(mode),
            deploy=deploy,
        )
    except ValueError as e:
        raise ConfigError(f"{where}: {e}") from e

"""
Remote Value Object

Architectural Intent:
- Immutable value object describing one deployable machine from deploy.json
- Validates the activation mode at construction time
- `is_probeable` is the single opt-in gate used by the prober
"""

from dataclasses import dataclass
from enum import Enum

# Address value that marks a remote as intentionally unreachable
NULL_ADDRESS = "null"


class ActivationMode(str, Enum):
    """How the new system is activated on the remote."""

    SWITCH = "switch"
    BOOT = "boot"

    @classmethod
    def parse(cls, value: str) -> "ActivationMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"SwitchOrBoot must be 'switch' or 'boot', got {value!r}"
            ) from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Remote:
    """
    Value Object representing a machine declared in deploy.json.
    """
    name: str
    ip: str
    switch_or_boot: ActivationMode = ActivationMode.SWITCH
    deploy: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Remote name cannot be empty")
        if not self.ip:
            raise ValueError(f"Remote {self.name!r} has an empty Ip")
        if not isinstance(self.switch_or_boot, ActivationMode):
            object.__setattr__(
                self, "switch_or_boot", ActivationMode.parse(self.switch_or_boot)
            )

    @property
    def is_probeable(self) -> bool:
        return self.deploy and self.ip != NULL_ADDRESS

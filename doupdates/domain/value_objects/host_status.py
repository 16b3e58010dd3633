from enum import Enum


class HostStatus(Enum):
    """Classification of a flake configuration for the current run."""

    ONLINE = "Online"
    OFFLINE = "Offline"
    NOT_LISTED = "Not Listed in Config"

    @property
    def label(self) -> str:
        return self.value

"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from doupdates.domain.ports.nix_port import NixPort
from doupdates.domain.ports.remote_inspector_port import RemoteInspectorPort

__all__ = [
    "NixPort",
    "RemoteInspectorPort",
]

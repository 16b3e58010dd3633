"""
Domain Services Package

Architectural Intent:
- Contains domain services that need no external collaborators
"""

from doupdates.domain.services.topology import (
    CONFIGURATIONS_MARKER,
    extract_config_name,
    read_config_names,
)
from doupdates.domain.services.status_report import classify, report_status

__all__ = [
    "CONFIGURATIONS_MARKER",
    "extract_config_name",
    "read_config_names",
    "classify",
    "report_status",
]

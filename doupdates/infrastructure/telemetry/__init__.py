"""
doupdates Telemetry Infrastructure

Architectural Intent:
- Optional OpenTelemetry metrics for probe and deploy outcomes
"""

from doupdates.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
]

"""
OpenTelemetry Exporter for doupdates

Architectural Intent:
- Exports probe and deploy outcomes to OTLP-compatible backends
- Off unless an endpoint is configured; a run never depends on it

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

logger = logging.getLogger(__name__)


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "doupdates"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://."
                )


class OTELExporter:
    """
    Records run metrics and, when initialized, forwards them over OTLP.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: list[dict[str, Any]] = []
        self._meter: Any = None
        self._provider: Any = None
        self._instruments: dict[str, Any] = {}

    async def initialize(self) -> None:
        """Initialize the OpenTelemetry metrics SDK."""
        if not self.config.endpoint:
            logger.debug("OTEL endpoint not configured, telemetry disabled")
            return

        try:
            from opentelemetry import metrics
            from opentelemetry.sdk.metrics import MeterProvider
            from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
            from opentelemetry.sdk.resources import Resource, SERVICE_NAME
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )
        except ImportError:
            logger.warning("OpenTelemetry SDK not installed, telemetry disabled")
            return

        resource = Resource(attributes={SERVICE_NAME: self.config.service_name})
        reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(
                endpoint=self.config.endpoint, insecure=self.config.insecure
            )
        )
        self._provider = MeterProvider(resource=resource, metric_readers=[reader])
        metrics.set_meter_provider(self._provider)
        self._meter = metrics.get_meter(__name__)
        self._initialized = True

    def _counter(self, name: str) -> Any:
        if name not in self._instruments and self._meter:
            self._instruments[name] = self._meter.create_counter(name)
        return self._instruments.get(name)

    def _histogram(self, name: str, unit: str) -> Any:
        if name not in self._instruments and self._meter:
            self._instruments[name] = self._meter.create_histogram(name, unit=unit)
        return self._instruments.get(name)

    def _buffer(self, name: str, value: float, attributes: dict[str, str]) -> None:
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "attributes": attributes,
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

    def record_probe(self, host: str, online: bool) -> None:
        attributes = {"host": host, "online": str(online)}
        self._buffer("doupdates.probe", 1.0, attributes)
        if self._initialized:
            self._counter("doupdates.probe").add(1, attributes=attributes)

    def record_deploy(self, host: str, success: bool, duration_seconds: float) -> None:
        attributes = {"host": host, "success": str(success)}
        self._buffer("doupdates.deploy.duration", duration_seconds, attributes)
        if self._initialized:
            self._histogram("doupdates.deploy.duration", "s").record(
                duration_seconds, attributes=attributes
            )

    async def export(self) -> None:
        """Flush buffered metrics via OTLP."""
        if not self._initialized:
            return

        self._provider.force_flush()
        exported_count = len(self._metrics_buffer)
        self._metrics_buffer.clear()
        if exported_count:
            logger.debug("Flushed %d buffered metrics", exported_count)


"""
Status Report Service

Architectural Intent:
- Cross-references flake configurations with probe results and deploy.json
- Pure classification plus one log line per configuration
"""

import logging
from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.value_objects.host_status import HostStatus

logger = logging.getLogger(__name__)


def classify(
    name: str, online_hosts: dict[str, str], config: DeployConfig
) -> HostStatus:
    if name in online_hosts:
        return HostStatus.ONLINE
    if config.find_remote(name) is not None:
        return HostStatus.OFFLINE
    return HostStatus.NOT_LISTED


def report_status(
    config_names: list[str],
    online_hosts: dict[str, str],
    config: DeployConfig,
) -> list[tuple[str, HostStatus]]:
    """Classify and log every configuration in topology order."""
    statuses = []
    for name in config_names:
        status = classify(name, online_hosts, config)
        if status is HostStatus.ONLINE:
            logger.info("Online:  %s", name)
        else:
            logger.info("%s: %s", status.label, name)
        statuses.append((name, status))
    return statuses

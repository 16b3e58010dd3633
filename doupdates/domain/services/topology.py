"""
Flake Topology Reader

Architectural Intent:
- Discovers which hosts the flake declares, one nixosConfigurations
  attribute per deployable machine
- Plain textual scan, not a Nix parser
- Every marker line must yield a valid attribute name or the read fails
  with FlakeParseError pointing at the offending line
"""

import logging
import re
from pathlib import Path
from typing import Optional
from doupdates.domain.errors import (
    FlakeNotFoundError,
    FlakeParseError,
    FlakeReadError,
)

logger = logging.getLogger(__name__)

CONFIGURATIONS_MARKER = "nixosConfigurations."

# Nix identifier: letter or underscore, then letters, digits, _ ' -
_ATTR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_'-]*$")


def extract_config_name(line: str) -> Optional[str]:
    """
    Returns the configuration name declared on `line`, or None if the line
    carries the marker without one.

    `nixosConfigurations.desktop = nixpkgs.lib.nixosSystem {` -> "desktop"
    """
    _, _, rest = line.partition(CONFIGURATIONS_MARKER)
    name = rest.split("=", 1)[0].split(".", 1)[0].strip()
    if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
        name = name[1:-1]
    if not _ATTR_NAME_RE.match(name):
        return None
    return name


def read_config_names(flake_path: Path) -> list[str]:
    """
    Scans `flake_path` for nixosConfigurations declarations, in file order.

    Duplicates are kept.
    """
    if not flake_path.exists():
        raise FlakeNotFoundError(flake_path)

    try:
        text = flake_path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        raise FlakeReadError(flake_path, e) from e

    names = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if CONFIGURATIONS_MARKER not in line:
            continue
        name = extract_config_name(line)
        if name is None:
            raise FlakeParseError(flake_path, line_number, line)
        names.append(name)

    logger.debug("Found %d configurations in %s", len(names), flake_path)
    return names

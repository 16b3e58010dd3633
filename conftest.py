"""Global test configuration.

Shared fixtures for a throwaway ~/NixOS-style directory with a flake and a
deploy.json.
"""

import json
import logging
import os
import time

import pytest

FLAKE_TEMPLATE = """{{
  description = "test fleet";

  outputs = {{ self, nixpkgs }}: {{
{configurations}
  }};
}}
"""


def write_flake(path, names):
    configurations = "\n".join(
        f"    nixosConfigurations.{name} = nixpkgs.lib.nixosSystem {{ }};"
        for name in names
    )
    path.write_text(FLAKE_TEMPLATE.format(configurations=configurations))
    return path


def age_file(path, hours):
    stamp = time.time() - hours * 3600
    os.utime(path, (stamp, stamp))


@pytest.fixture
def flake_dir(tmp_path):
    directory = tmp_path / "NixOS"
    directory.mkdir()
    return directory


@pytest.fixture
def make_flake(flake_dir):
    def _make(names, age_hours=0):
        path = write_flake(flake_dir / "flake.nix", names)
        if age_hours:
            age_file(path, age_hours)
        return path

    return _make


@pytest.fixture
def make_deploy_json(flake_dir):
    def _make(data):
        path = flake_dir / "deploy.json"
        path.write_text(json.dumps(data, indent=2))
        return path

    return _make


@pytest.fixture(autouse=True)
def _reset_doupdates_logger():
    """Drop handlers a test's configure_logging() attached."""
    yield
    logger = logging.getLogger("doupdates")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)

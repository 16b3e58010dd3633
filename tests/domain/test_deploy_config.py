"""Tests for the DeployConfig entity."""

import pytest
from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.errors import ConfigError
from doupdates.domain.value_objects.remote import ActivationMode, Remote


def _sample():
    return DeployConfig(
        remotes=(
            Remote(name="h1", ip="1.2.3.4", switch_or_boot=ActivationMode.SWITCH, deploy=True),
            Remote(name="h2", ip="null", switch_or_boot=ActivationMode.BOOT),
        ),
        update_flake=False,
        username="deployer",
    )


class TestDefaultTemplate:
    def test_single_inert_remote(self):
        config = DeployConfig.default()
        assert len(config.remotes) == 1
        remote = config.remotes[0]
        assert remote.name == "remotehost"
        assert remote.ip == "10.1"
        assert remote.switch_or_boot is ActivationMode.SWITCH
        assert remote.deploy is False

    def test_top_level_defaults(self):
        config = DeployConfig.default()
        assert config.update_flake is True
        assert config.username == "root"


class TestSerialization:
    def test_canonical_keys(self):
        data = _sample().to_dict()
        assert set(data) == {"Remotes", "UpdateFlake", "Username"}
        assert data["Remotes"][0] == {
            "Name": "h1",
            "Ip": "1.2.3.4",
            "SwitchOrBoot": "switch",
            "Deploy": True,
        }

    def test_round_trip(self):
        config = _sample()
        assert DeployConfig.from_dict(config.to_dict()) == config

    def test_legacy_key_casing(self):
        config = DeployConfig.from_dict({
            "Remotes": [{"Name": "h1", "IP": "1.2.3.4", "SwitchOrBoot": "boot", "Deploy": True}],
            "updateFlake": False,
        })
        assert config.remotes[0].ip == "1.2.3.4"
        assert config.remotes[0].switch_or_boot is ActivationMode.BOOT
        assert config.update_flake is False

    def test_missing_keys_take_defaults(self):
        config = DeployConfig.from_dict({"Remotes": [{"Name": "h1", "Ip": "1.2.3.4"}]})
        assert config.update_flake is True
        assert config.username == "root"
        assert config.remotes[0].deploy is False
        assert config.remotes[0].switch_or_boot is ActivationMode.SWITCH

    def test_unknown_keys_ignored(self):
        config = DeployConfig.from_dict({"Remotes": [], "Colour": "blue"})
        assert config.remotes == ()


class TestValidation:
    def test_root_must_be_object(self):
        with pytest.raises(ConfigError, match="top level"):
            DeployConfig.from_dict([])

    def test_remotes_must_be_list(self):
        with pytest.raises(ConfigError, match="Remotes must be list"):
            DeployConfig.from_dict({"Remotes": {"Name": "h1"}})

    def test_name_required(self):
        with pytest.raises(ConfigError, match=r"Remotes\[0\].Name is required"):
            DeployConfig.from_dict({"Remotes": [{"Ip": "1.2.3.4"}]})

    def test_deploy_must_be_bool(self):
        with pytest.raises(ConfigError, match="Deploy must be bool"):
            DeployConfig.from_dict(
                {"Remotes": [{"Name": "h1", "Ip": "1.2.3.4", "Deploy": "yes"}]}
            )

    def test_unknown_mode(self):
        with pytest.raises(ConfigError, match="SwitchOrBoot"):
            DeployConfig.from_dict(
                {"Remotes": [{"Name": "h1", "Ip": "1.2.3.4", "SwitchOrBoot": "dry-run"}]}
            )

    def test_empty_username(self):
        with pytest.raises(ConfigError, match="Username"):
            DeployConfig.from_dict({"Username": ""})

    def test_duplicate_names_rejected(self):
        data = {
            "Remotes": [
                {"Name": "h1", "Ip": "10.0.0.1", "Deploy": False},
                {"Name": "h1", "Ip": "10.0.0.2", "Deploy": True},
            ]
        }
        with pytest.raises(ConfigError, match=r"Remotes\[1\].Name 'h1' is declared more than once"):
            DeployConfig.from_dict(data)


class TestFindRemote:
    def test_found(self):
        assert _sample().find_remote("h2").ip == "null"

    def test_missing(self):
        assert _sample().find_remote("nope") is None


class TestFindDeployable:
    def test_skips_remotes_that_did_not_opt_in(self):
        config = DeployConfig(
            remotes=(
                Remote(name="h1", ip="10.0.0.1", deploy=False),
                Remote(name="h1", ip="10.0.0.2", deploy=True),
            )
        )
        assert config.find_deployable("h1").ip == "10.0.0.2"

    def test_null_address_is_not_deployable(self):
        assert _sample().find_deployable("h2") is None

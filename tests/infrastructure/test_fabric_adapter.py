"""Tests for FabricAdapter."""

import pytest
from unittest.mock import patch, MagicMock
from doupdates.infrastructure.adapters.fabric_adapter import (
    CURRENT_SYSTEM_CMD,
    FabricAdapter,
)


def _connection(result=None, error=None):
    conn = MagicMock()
    conn.__enter__.return_value = conn
    if error is not None:
        conn.run.side_effect = error
    else:
        conn.run.return_value = result
    return conn


class TestFabricAdapter:
    def test_get_connection(self):
        adapter = FabricAdapter()
        with patch(
            "doupdates.infrastructure.adapters.fabric_adapter.Connection"
        ) as mock_conn_cls:
            adapter._get_connection("root", "10.0.0.1")
            mock_conn_cls.assert_called_once_with(
                host="10.0.0.1",
                user="root",
                connect_timeout=30,
                connect_kwargs={"allow_agent": True, "look_for_keys": True},
            )

    @pytest.mark.asyncio
    async def test_current_system_success(self):
        adapter = FabricAdapter()
        result = MagicMock()
        result.ok = True
        result.stdout = "/nix/store/abc-nixos-system-desktop\n"
        conn = _connection(result)

        with patch.object(adapter, "_get_connection", return_value=conn):
            path = await adapter.current_system("root", "10.0.0.1")

        assert path == "/nix/store/abc-nixos-system-desktop"
        conn.run.assert_called_once_with(CURRENT_SYSTEM_CMD, hide=True, warn=True)

    @pytest.mark.asyncio
    async def test_current_system_command_failure(self):
        adapter = FabricAdapter()
        result = MagicMock()
        result.ok = False
        result.stderr = "readlink: missing operand"

        with patch.object(adapter, "_get_connection", return_value=_connection(result)):
            assert await adapter.current_system("root", "10.0.0.1") is None

    @pytest.mark.asyncio
    async def test_current_system_connection_failure(self):
        adapter = FabricAdapter()
        conn = _connection(error=OSError("connection refused"))

        with patch.object(adapter, "_get_connection", return_value=conn):
            assert await adapter.current_system("root", "10.0.0.1") is None

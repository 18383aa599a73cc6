"""Tests for explicit device registration."""

import pytest
from unittest.mock import MagicMock

from app.exceptions import ValidationException
from app.services.device_store import DeviceStore
from app.services.registrar import DeviceRegistrar


class TestDeviceRegistrar:

    def test_register_round_trip(self, registrar, store):
        record = registrar.register("ana", "tok-1", mail="ana@example.com",
                                    password="secret", device_type="ios", active="true")

        assert store.get("ana", "tok-1") == record
        assert record.active is True

    def test_register_twice_replaces_instead_of_merging(self, registrar, store):
        registrar.register("ana", "tok-1", mail="ana@example.com", device_type="ios", active="true")
        registrar.register("ana", "tok-1", password="other")

        stored = store.get("ana", "tok-1")
        assert stored.mail == ""
        assert stored.device_type == ""
        assert stored.password == "other"
        assert stored.active is False

    @pytest.mark.parametrize("raw, expected", [
        (None, False),
        ("", False),
        ("TRUE", True),
        (" True ", True),
        ("false", False),
        ("yes", False),
        ("1", False),
    ])
    def test_active_flag_parsing(self, registrar, store, raw, expected):
        registrar.register("ana", "tok-1", active=raw)
        assert store.get("ana", "tok-1").active is expected

    @pytest.mark.parametrize("user, token", [("", "tok"), ("ana", ""), ("  ", "tok"), (None, "tok")])
    def test_missing_key_is_rejected_without_store_access(self, user, token):
        store = MagicMock(spec=DeviceStore)

        with pytest.raises(ValidationException):
            DeviceRegistrar(store).register(user, token)

        assert store.mock_calls == []

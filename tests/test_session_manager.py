"""Tests for the login/logout device state machine."""

import pytest
from unittest.mock import MagicMock

from app.exceptions import NotFoundException, UnauthorizedException, ValidationException
from app.services.device_store import DeviceStore
from app.services.session_manager import SessionManager


class TestLogin:

    def test_login_with_new_token_creates_active_device(self, sessions, store, make_device):
        make_device(token="phone", mail="ana@example.com", device_type="android", active=False)

        result = sessions.login("ana", "secret", "tablet")

        assert result.created is True
        created = store.get("ana", "tablet")
        assert created.active is True
        assert created.mail == "ana@example.com"
        assert created.device_type == "android"
        assert created.password == "secret"
        # The credential device is untouched
        assert store.get("ana", "phone").active is False

    def test_login_with_existing_token_only_flips_active(self, sessions, store, make_device):
        make_device(token="phone", mail="ana@example.com", device_type="android", active=False)
        make_device(token="tablet", mail="tablet@example.com", password="secret",
                    device_type="ipad", active=False)

        result = sessions.login("ana", "secret", "tablet")

        assert result.created is False
        stored = store.get("ana", "tablet")
        assert stored.active is True
        assert stored.mail == "tablet@example.com"
        assert stored.device_type == "ipad"

    def test_login_with_already_active_token_stays_active(self, sessions, store, make_device):
        make_device(active=True)
        sessions.login("ana", "secret", "tok-1")
        assert store.get("ana", "tok-1").active is True

    def test_any_matching_device_password_authenticates(self, sessions, store, make_device):
        make_device(token="old", password="first")
        make_device(token="new", password="second")

        sessions.login("ana", "first", "third-device")

        assert store.get("ana", "third-device").active is True

    @pytest.mark.parametrize("token", ["tok-1", "unknown-token"])
    def test_wrong_password_is_unauthorized(self, sessions, store, make_device, token):
        make_device(active=False)

        with pytest.raises(UnauthorizedException):
            sessions.login("ana", "wrong", token)

        assert store.get("ana", "tok-1").active is False
        assert store.get("ana", "unknown-token") is None

    def test_unknown_user_is_unauthorized(self, sessions):
        with pytest.raises(UnauthorizedException):
            sessions.login("ghost", "secret", "tok-1")

    @pytest.mark.parametrize("params", [
        ("", "secret", "tok"),
        ("ana", "", "tok"),
        ("ana", "secret", ""),
        ("ana", "secret", "   "),
    ])
    def test_missing_parameter_is_rejected_without_store_access(self, params):
        store = MagicMock(spec=DeviceStore)

        with pytest.raises(ValidationException):
            SessionManager(store).login(*params)

        assert store.mock_calls == []


class TestLogout:

    def test_logout_deactivates_active_device(self, sessions, store, make_device):
        make_device(active=True)

        deactivated = sessions.logout("ana", "tok-1")

        assert deactivated == ["tok-1"]
        stored = store.get("ana", "tok-1")
        assert stored.active is False
        assert stored.mail == "ana@example.com"

    def test_logout_of_inactive_device_is_not_found(self, sessions, make_device):
        make_device(active=False)
        with pytest.raises(NotFoundException):
            sessions.logout("ana", "tok-1")

    def test_logout_twice_is_not_found(self, sessions, make_device):
        make_device(active=True)
        sessions.logout("ana", "tok-1")
        with pytest.raises(NotFoundException):
            sessions.logout("ana", "tok-1")

    def test_logout_of_unknown_token_is_not_found(self, sessions, make_device):
        make_device(active=True)
        with pytest.raises(NotFoundException):
            sessions.logout("ana", "other")

    def test_logout_only_touches_the_given_token(self, sessions, store, make_device):
        make_device(token="phone", active=True)
        make_device(token="tablet", active=True)

        sessions.logout("ana", "phone")

        assert store.get("ana", "tablet").active is True

    def test_login_after_logout_reactivates(self, sessions, store, make_device):
        make_device(active=True)
        sessions.logout("ana", "tok-1")
        sessions.login("ana", "secret", "tok-1")
        assert store.get("ana", "tok-1").active is True

    def test_missing_parameter_is_rejected_without_store_access(self):
        store = MagicMock(spec=DeviceStore)

        with pytest.raises(ValidationException):
            SessionManager(store).logout("ana", "")

        assert store.mock_calls == []

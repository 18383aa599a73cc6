"""Login and logout: the per-device activation state machine.

A device is Unregistered (no row), Inactive (active=False) or Active.
Login moves one device to Active, creating the row when the token is new;
logout moves an Active device back to Inactive. Rows are never deleted.
"""

import logging
from dataclasses import dataclass
from typing import List

from app.exceptions import NotFoundException, UnauthorizedException
from app.schemas.device import DeviceRecord
from app.services import audit
from app.services.device_store import DeviceStore
from app.utils.validation import require_params

logger = logging.getLogger("app.devices.session")


@dataclass
class LoginResult:
    user: str
    token: str
    created: bool


class SessionManager:
    def __init__(self, store: DeviceStore):
        self.store = store

    def login(self, username: str, password: str, token: str) -> LoginResult:
        """Authenticate against any device of the user and activate `token`.

        The credential check only needs one existing row of the user with the
        same password; a brand-new token is then trusted and registered with
        the mail and device type of that row. The scan and the write are two
        separate store calls and are not isolated from concurrent requests.
        """
        require_params("login", username=username, password=password, fcmtoken=token)

        matches = self.store.scan(user=username, password=password)
        if not matches:
            audit.log_login_rejected(username)
            raise UnauthorizedException()
        credential = matches[0]

        existing = self.store.get(username, token)
        if existing is not None:
            # Field-level merge: mail, password and device_type stay as they are
            self.store.merge(username, token, active=True)
            created = False
        else:
            self.store.insert(
                DeviceRecord(
                    user=username,
                    token=token,
                    mail=credential.mail or "",
                    password=password,
                    device_type=credential.device_type or "",
                    active=True,
                )
            )
            created = True

        logger.info("User '%s' authenticated, token '%s' %s", username, token,
                    "registered as active" if created else "marked active")
        audit.log_login(username, token, created)
        return LoginResult(user=username, token=token, created=created)

    def logout(self, username: str, token: str) -> List[str]:
        """Deactivate the user's active device with this token.

        Raises NotFoundException when no active device matches, which covers
        unknown tokens, devices that never logged in and repeated logouts.
        """
        require_params("logout", username=username, fcmtoken=token)

        deactivated = []
        for device in self.store.scan(user=username, token=token, active=True):
            self.store.merge(device.user, device.token, active=False)
            deactivated.append(device.token)

        if not deactivated:
            raise NotFoundException(
                f"No active device with token '{token}' found for user '{username}'."
            )

        logger.info("Deactivated %d device(s) for user '%s'", len(deactivated), username)
        audit.log_logout(username, deactivated)
        return deactivated

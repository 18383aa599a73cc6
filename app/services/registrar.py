import logging
from typing import Optional

from app.schemas.device import DeviceRecord
from app.services import audit
from app.services.device_store import DeviceStore
from app.utils.validation import parse_bool, require_params

logger = logging.getLogger("app.devices.registrar")


class DeviceRegistrar:
    """Explicit device registration, independent of login."""

    def __init__(self, store: DeviceStore):
        self.store = store

    def register(
        self,
        user: str,
        token: str,
        mail: Optional[str] = None,
        password: Optional[str] = None,
        device_type: Optional[str] = None,
        active: str | bool | None = None,
    ) -> DeviceRecord:
        """Write the device record for (user, token), replacing any previous one.

        Registration is a pure overwrite: creating and updating look the same
        to the caller. `active` defaults to False when absent or unparseable.
        """
        require_params("registerdevice", user=user, fcmtoken=token)

        record = DeviceRecord(
            user=user,
            token=token,
            mail=mail or "",
            password=password or "",
            device_type=device_type or "",
            active=parse_bool(active),
        )
        self.store.upsert(record)
        logger.info("Device registered: user='%s', token='%s'", user, token)
        audit.log_device_register(user, token, record.device_type, record.active)
        return record

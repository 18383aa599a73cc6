"""Request boundary: route an action name and its string parameters to a service.

Every outcome, including failures, comes back as an ActionResult; the HTTP
layer only maps the result kind to a status code.
"""

import logging
from typing import Callable, Dict, Mapping, Optional

from app.exceptions import AppException, StoreError
from app.schemas.device import ActionResult, ResultKind
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.registrar import DeviceRegistrar
from app.services.session_manager import SessionManager

logger = logging.getLogger("app.devices.actions")

VALID_ACTIONS = ("sendnotifications", "registerdevice", "login", "logout")

Params = Mapping[str, Optional[str]]


class ActionHandler:
    def __init__(
        self,
        registrar: DeviceRegistrar,
        sessions: SessionManager,
        dispatcher: NotificationDispatcher,
    ):
        self.registrar = registrar
        self.sessions = sessions
        self.dispatcher = dispatcher
        self._handlers: Dict[str, Callable[[Params], ActionResult]] = {
            "sendnotifications": self._send_notifications,
            "registerdevice": self._register_device,
            "login": self._login,
            "logout": self._logout,
        }

    def handle(self, action: Optional[str], params: Params) -> ActionResult:
        valid = ", ".join(f"'{name}'" for name in VALID_ACTIONS)
        if action is None or not action.strip():
            return ActionResult(
                kind=ResultKind.invalid_input,
                message=f"The 'action' parameter is required (one of {valid}).",
            )
        handler = self._handlers.get(action.strip().lower())
        if handler is None:
            return ActionResult(
                kind=ResultKind.invalid_input,
                message=f"Invalid action '{action}'. Use one of {valid}.",
            )

        try:
            return handler(params)
        except StoreError as e:
            logger.error(f"Action '{action}' failed in the device store: {e.message}")
            return ActionResult(kind=ResultKind.internal_error, message=f"Internal error: {e.message}")
        except AppException as e:
            return ActionResult(kind=ResultKind(e.kind), message=e.message)
        except Exception as e:
            logger.exception(f"Unexpected error while handling action '{action}'")
            return ActionResult(kind=ResultKind.internal_error, message=f"Internal error: {e}")

    def _send_notifications(self, params: Params) -> ActionResult:
        summary = self.dispatcher.dispatch(params.get("user"), params.get("message"))
        return ActionResult.ok(
            summary.message,
            attempted=summary.attempted,
            succeeded=summary.succeeded,
            failed=summary.failed,
            details=[outcome.describe() for outcome in summary.details],
            outcomes=[outcome.model_dump() for outcome in summary.details],
        )

    def _register_device(self, params: Params) -> ActionResult:
        record = self.registrar.register(
            user=params.get("user"),
            token=params.get("fcmtoken"),
            mail=params.get("mail"),
            password=params.get("password"),
            device_type=params.get("devicetype"),
            active=params.get("active"),
        )
        return ActionResult.ok(
            "Device registered successfully (or updated if it already existed).",
            user=record.user,
            token=record.token,
        )

    def _login(self, params: Params) -> ActionResult:
        result = self.sessions.login(
            params.get("username"), params.get("password"), params.get("fcmtoken")
        )
        return ActionResult.ok(
            f"User '{result.user}' authenticated. Token '{result.token}' marked/registered as active.",
            user=result.user,
            token=result.token,
            created=result.created,
        )

    def _logout(self, params: Params) -> ActionResult:
        username, token = params.get("username"), params.get("fcmtoken")
        deactivated = self.sessions.logout(username, token)
        return ActionResult.ok(
            f"Device with token '{token}' deactivated for user '{username}'.",
            user=username,
            devices=deactivated,
        )

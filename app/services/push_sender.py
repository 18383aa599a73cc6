"""Push delivery via Firebase Cloud Messaging."""

import logging
from typing import Protocol

from app.exceptions import DeliveryError

logger = logging.getLogger("app.push")


def _is_fcm_available() -> bool:
    """Check if Firebase Cloud Messaging is available."""
    try:
        import firebase_admin
        # Check if Firebase app is initialized
        firebase_admin.get_app()
        return True
    except (ImportError, ValueError):
        return False


class PushSender(Protocol):
    def send(self, token: str, title: str, body: str) -> str:
        """Deliver one notification and return the provider message id.

        Raises DeliveryError when the provider rejects or cannot be reached.
        """
        ...


class FirebasePushSender:
    """Sends single-token notifications with the Firebase Admin SDK."""

    def __init__(self, sound: str = "default", channel_id: str = "default"):
        self.sound = sound
        self.channel_id = channel_id

    def send(self, token: str, title: str, body: str) -> str:
        if not _is_fcm_available():
            raise DeliveryError("FCM not configured")

        from firebase_admin import messaging
        from firebase_admin.exceptions import FirebaseError

        message = self._build_message(token, title, body)
        try:
            response = messaging.send(message)
        except FirebaseError as e:
            raise DeliveryError(str(e)) from e
        except ValueError as e:
            # The SDK validates tokens and payloads locally before sending
            raise DeliveryError(str(e)) from e
        logger.debug("Sent message %s to token %s...", response, token[:20])
        return response

    def _build_message(self, token: str, title: str, body: str):
        """Build a single FCM message."""
        from firebase_admin import messaging

        android_config = messaging.AndroidConfig(
            priority="high",
            notification=messaging.AndroidNotification(
                sound=self.sound,
                channel_id=self.channel_id
            )
        )

        apns_config = messaging.APNSConfig(
            payload=messaging.APNSPayload(
                aps=messaging.Aps(sound=self.sound)
            )
        )

        return messaging.Message(
            token=token,
            notification=messaging.Notification(title=title, body=body),
            android=android_config,
            apns=apns_config
        )

import os
import json
import logging
import firebase_admin
from firebase_admin import credentials

logger = logging.getLogger("app.push")


def init_firebase(cert_path: str | None = None) -> bool:
    """Initialize Firebase admin SDK for push delivery.

    Behavior:
    - If FIREBASE_CERT_JSON env var is present, parse it as JSON and use it.
    - Else if FIREBASE_CERT_PATH env var is set or file 'firebase_key.json' exists, use that path.
    - Else, do nothing; every delivery then fails with "FCM not configured".

    Returns True when an app is initialized.
    """
    try:
        firebase_admin.get_app()
        return True
    except ValueError:
        pass

    fb_json = os.environ.get("FIREBASE_CERT_JSON")
    if fb_json:
        try:
            cred = credentials.Certificate(json.loads(fb_json))
            firebase_admin.initialize_app(cred)
            return True
        except (ValueError, OSError) as e:
            # Fall through to file-based loading which may still work
            logger.warning(f"Failed to init Firebase from FIREBASE_CERT_JSON: {e}")

    fb_path = cert_path or os.environ.get("FIREBASE_CERT_PATH", "firebase_key.json")
    if fb_path and os.path.exists(fb_path):
        try:
            cred = credentials.Certificate(fb_path)
            firebase_admin.initialize_app(cred)
            return True
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to init Firebase from path {fb_path}: {e}")

    logger.warning("No Firebase credentials found; push deliveries will fail until configured.")
    return False

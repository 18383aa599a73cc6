"""Audit logging helper functions for device lifecycle events.

Standard JSON-ish single-line logs so they are easy to index.
"""
from __future__ import annotations
import logging
from typing import Optional, Any

from app.utils.datetime import utc_now

_logger = logging.getLogger("app.audit")


def _emit(event: str, user_id: Optional[str] = None, **data: Any):
    payload = {"ts": utc_now().isoformat(), "event": event}
    if user_id:
        payload["user_id"] = user_id
    payload.update(data)
    parts = [f"{k}={repr(v)}" for k,v in payload.items()]
    _logger.info("AUDIT " + " ".join(parts))


def _short(token: str) -> str:
    return token[:12] + "..." if len(token) > 12 else token

# Public convenience wrappers

def log_device_register(user_id: str, token: str, device_type: str, active: bool):
    _emit("device.register", user_id=user_id, token=_short(token), device_type=device_type, active=active)

def log_login(user_id: str, token: str, created: bool):
    _emit("session.login", user_id=user_id, token=_short(token), created=created)

def log_login_rejected(user_id: str):
    _emit("session.login_rejected", user_id=user_id)

def log_logout(user_id: str, tokens: list[str]):
    _emit("session.logout", user_id=user_id, tokens=[_short(t) for t in tokens])

def log_dispatch(user_id: str, attempted: int, succeeded: int):
    _emit("push.dispatch", user_id=user_id, attempted=attempted, succeeded=succeeded, failed=attempted - succeeded)

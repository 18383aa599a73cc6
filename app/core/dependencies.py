from fastapi import Depends, HTTPException, Request, status

from app.core.settings import Settings
from app.services.actions import ActionHandler
from app.services.device_store import DeviceStore
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.push_sender import PushSender
from app.services.registrar import DeviceRegistrar
from app.services.session_manager import SessionManager


def build_action_handler(store: DeviceStore, sender: PushSender, settings: Settings) -> ActionHandler:
    """Wire the device services around one shared store handle."""
    return ActionHandler(
        registrar=DeviceRegistrar(store),
        sessions=SessionManager(store),
        dispatcher=NotificationDispatcher(
            store,
            sender,
            title=settings.push_notification_title,
            max_concurrency=settings.push_max_concurrency,
        ),
    )


def get_device_store(request: Request) -> DeviceStore:
    store = getattr(request.app.state, "device_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Device store not initialized"
        )
    return store


def get_action_handler(request: Request, store: DeviceStore = Depends(get_device_store)) -> ActionHandler:
    return build_action_handler(store, request.app.state.push_sender, request.app.state.settings)

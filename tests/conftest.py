import os

os.environ["ENV"] = "test"
os.environ.setdefault("DEVICE_STORE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.dependencies import build_action_handler, get_action_handler, get_device_store
from app.core.settings import StoreConfig, settings
from app.db import ensure_schema
from app.exceptions import DeliveryError
from app.schemas.device import DeviceRecord
from app.services.device_store import DeviceStore
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.registrar import DeviceRegistrar
from app.services.session_manager import SessionManager

# Use SQLite in-memory for the device store. create_store_engine gives it a
# StaticPool so every session of one store shares the same database.
TEST_STORE_URL = "sqlite+pysqlite:///:memory:"


class FakePushSender:
    """Records deliveries; tokens listed in `failing` raise DeliveryError."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def send(self, token, title, body):
        self.calls.append((token, title, body))
        if token in self.failing:
            raise DeliveryError(f"Requested entity was not found ({token})")
        return f"projects/test/messages/{len(self.calls)}"


@pytest.fixture
def store():
    # fresh database for each test to ensure isolation
    device_store = DeviceStore.from_config(StoreConfig(url=TEST_STORE_URL))
    ensure_schema(device_store.engine)
    yield device_store
    device_store.engine.dispose()


@pytest.fixture
def sender():
    return FakePushSender()


@pytest.fixture
def registrar(store):
    return DeviceRegistrar(store)


@pytest.fixture
def sessions(store):
    return SessionManager(store)


@pytest.fixture
def dispatcher(store, sender):
    return NotificationDispatcher(store, sender, title="Test title")


@pytest.fixture
def make_device(store):
    """Factory writing a device row straight into the store."""
    def _make(user="ana", token="tok-1", mail="ana@example.com", password="secret",
              device_type="android", active=False):
        record = DeviceRecord(user=user, token=token, mail=mail, password=password,
                              device_type=device_type, active=active)
        store.upsert(record)
        return record
    return _make


@pytest.fixture
def client(store, sender):
    app.dependency_overrides[get_device_store] = lambda: store
    app.dependency_overrides[get_action_handler] = lambda: build_action_handler(store, sender, settings)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_sender():
    return FakePushSender

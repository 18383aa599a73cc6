"""Table access for device records keyed by (user, token)."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from sqlalchemy import select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.settings import StoreConfig
from app.db import check_database_health, create_store_engine, make_session_factory
from app.exceptions import StoreError
from app.models.device import Device
from app.schemas.device import DeviceRecord

logger = logging.getLogger("app.devices.store")

# Columns a scan may filter on (equality only)
SCAN_FIELDS = ("user", "token", "password", "active", "mail", "device_type")
MERGE_FIELDS = ("mail", "password", "device_type", "active")


class DeviceStore:
    """Point lookups, equality scans, upserts and merges over the devices table.

    Every call runs in its own short transaction, so single-row writes are
    atomic while multi-call sequences are not. Filter values always travel as
    bound parameters.
    """

    def __init__(self, session_factory: sessionmaker, engine: Optional[Engine] = None):
        self._session_factory = session_factory
        self.engine = engine

    @classmethod
    def from_config(cls, config: StoreConfig) -> "DeviceStore":
        engine = create_store_engine(config)
        return cls(make_session_factory(engine), engine)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        try:
            with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error("Device store %s failed: %s", operation, e)
            raise StoreError(f"Device store {operation} failed: {e}") from e

    def ping(self) -> dict:
        """Connectivity probe for the health routes."""
        if self.engine is None:
            return {"status": "unknown", "database": "no engine attached"}
        return check_database_health(self.engine)

    def upsert(self, record: DeviceRecord) -> DeviceRecord:
        """Write every field of the record, replacing any existing row."""
        with self._transaction("upsert") as session:
            session.merge(Device(**record.model_dump()))
        return record

    def insert(self, record: DeviceRecord) -> DeviceRecord:
        """Create a row; an existing (user, token) row is a StoreError."""
        with self._transaction("insert") as session:
            session.add(Device(**record.model_dump()))
        return record

    def get(self, user: str, token: str) -> Optional[DeviceRecord]:
        with self._transaction("get") as session:
            device = session.get(Device, (user, token))
            return DeviceRecord.model_validate(device) if device is not None else None

    def scan(self, **criteria: Any) -> List[DeviceRecord]:
        """Return every row matching all of the given field equalities."""
        unknown = set(criteria) - set(SCAN_FIELDS)
        if unknown:
            raise ValueError(f"Cannot filter devices on {sorted(unknown)}")
        stmt = select(Device).filter_by(**criteria).order_by(Device.user, Device.token)
        with self._transaction("scan") as session:
            return [DeviceRecord.model_validate(d) for d in session.scalars(stmt)]

    def merge(self, user: str, token: str, /, **fields: Any) -> bool:
        """Update only the named fields of one row. Returns False if no row matched."""
        unknown = set(fields) - set(MERGE_FIELDS)
        if unknown or not fields:
            raise ValueError(f"Cannot merge device fields {sorted(unknown) or '(none)'}")
        stmt = (
            update(Device)
            .where(Device.user == user, Device.token == token)
            .values(**fields)
        )
        with self._transaction("merge") as session:
            result = session.execute(stmt)
            return result.rowcount > 0

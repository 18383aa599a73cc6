"""Device model for push notifications."""

from sqlalchemy import Boolean, Column, Index, String
from app.db import Base


class Device(Base):
    """One row per (user, push token) pair.

    The password is stored on every device of a user and the login check
    accepts any row whose password matches. `active` is the only gate for
    notification delivery; rows are never deleted, logout only deactivates.
    """
    __tablename__ = "devices"

    user = Column(String, primary_key=True)
    token = Column(String, primary_key=True)
    mail = Column(String, nullable=False, default="")
    password = Column(String, nullable=False, default="")
    device_type = Column(String, nullable=False, default="")
    active = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_devices_user_active", "user", "active"),
    )

    def __repr__(self):
        return f"<Device user={self.user} active={self.active}>"

"""Installation model - binds a device and application to a user for push delivery."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, event
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from ..database import Base
from ..hooks import stamp_modified


class InstallationSubscription(Base):
    """A topic/channel an installation is subscribed to."""

    __tablename__ = "installation_subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    installation_id = Column(
        Integer, ForeignKey("installations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    topic = Column(String, nullable=False, index=True)

    installation = relationship("Installation", back_populates="subscription_rows")


class Installation(Base):
    """A mobile application installed on a device, as seen by the push service.

    Users may have many installations. Installations are located by
    application id/version, user id, device type and subscriptions.
    """

    __tablename__ = "installations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    app_id = Column(String, nullable=False, index=True)
    app_version = Column(String, nullable=True)
    badge = Column(Integer, default=0)  # Last displayed badge count (iOS)
    created = Column(DateTime, default=datetime.utcnow)
    device_token = Column(String, nullable=False)  # Token from APNs/FCM
    device_type = Column(String, nullable=False, index=True)  # ios, android
    modified = Column(DateTime, nullable=True)
    status = Column(String, nullable=True)  # Provider dependent, e.g. "Active"
    time_zone = Column(String, nullable=True)  # e.g. America/Vancouver
    user_id = Column(String, nullable=True, index=True)

    subscription_rows = relationship(
        "InstallationSubscription",
        back_populates="installation",
        cascade="all, delete-orphan",
        order_by="InstallationSubscription.id",
        lazy="selectin",
    )
    subscriptions = association_proxy(
        "subscription_rows",
        "topic",
        creator=lambda topic: InstallationSubscription(topic=topic),
    )


@event.listens_for(Installation, "before_insert")
def _stamp_on_insert(mapper, connection, target):
    stamp_modified(target)
    if target.created is None:
        target.created = target.modified


@event.listens_for(Installation, "before_update")
def _stamp_on_update(mapper, connection, target):
    stamp_modified(target)

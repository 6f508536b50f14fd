"""
SQLAlchemy model for archived (deleted) events.
"""

from sqlalchemy import Column, JSON, Text, Uuid
import uuid

from app.data.models.base import Base, UTCDateTime, utc_now


class DeletedEventModel(Base):
    __tablename__ = "deleted_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    original_event = Column(JSON, nullable=False)  # full snapshot, not a live reference
    original_event_id = Column(Uuid, nullable=False, unique=True)
    deleted_by_id = Column(Uuid, nullable=False, index=True)
    deleted_at = Column(
        UTCDateTime, default=utc_now, nullable=False
    )
    reason = Column(Text, nullable=True)

"""
SQLAlchemy models for users and their created-events index.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    String,
    Text,
    Uuid,
)
import uuid

from app.data.models.base import Base, UTCDateTime, utc_now


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    external_id = Column(String(255), nullable=False, unique=True, index=True)
    display_name = Column(String(255), nullable=True)
    email = Column(String(320), nullable=True)
    profile_photo = Column(Text, nullable=True)
    location_lat = Column(Float, nullable=True)
    location_lon = Column(Float, nullable=True)

    # Verification submission
    verified_profile = Column(Boolean, nullable=False, default=False)
    verification_full_name = Column(String(255), nullable=True)
    verification_father_name = Column(String(255), nullable=True)
    verification_mobile_number = Column(String(50), nullable=True)
    verification_full_address = Column(Text, nullable=True)
    verification_document_url = Column(Text, nullable=True)
    verification_submitted_at = Column(UTCDateTime, nullable=True)

    created_at = Column(
        UTCDateTime, default=utc_now, nullable=False
    )
    updated_at = Column(UTCDateTime, nullable=True)


class UserCreatedEventModel(Base):
    """One row per entry of a user's created-events index.

    No foreign key to ``events``: the index is derived and may drift.
    """

    __tablename__ = "user_created_events"

    user_id = Column(Uuid, ForeignKey("users.id"), primary_key=True)
    event_id = Column(Uuid, primary_key=True)
    added_at = Column(
        UTCDateTime, default=utc_now, nullable=False
    )

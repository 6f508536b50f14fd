"""
SQLAlchemy model for Event entity.
"""

from sqlalchemy import Column, String, Text, Integer, Float, Uuid
import uuid

from app.data.models.base import Base, UTCDateTime, utc_now


class EventModel(Base):
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=False, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False, default="")
    location = Column(String(500), nullable=False, index=True)
    date = Column(UTCDateTime, nullable=False)
    last_registration_date = Column(UTCDateTime, nullable=True)
    category = Column(String(100), nullable=True)
    sub_category = Column(String(100), nullable=True)
    fee = Column(Float, nullable=False, default=0.0)
    image_url = Column(Text, nullable=True)
    instagram_link = Column(Text, nullable=True)
    website_link = Column(Text, nullable=True)
    registration_link = Column(Text, nullable=True)
    max_participants = Column(Integer, nullable=False)
    current_participants = Column(Integer, nullable=False, default=0)
    location_lat = Column(Float, nullable=True)
    location_lon = Column(Float, nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(
        UTCDateTime, default=utc_now, nullable=False
    )
    updated_at = Column(UTCDateTime, nullable=True)

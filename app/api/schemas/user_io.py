"""
User and verification schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from app.domain_core.entities.user import User, VerificationDetails
from .base import CamelModel


class VerificationSubmissionResponse(CamelModel):
    full_name: str
    father_name: str = ""
    mobile_number: str
    full_address: str = ""
    document_url: str
    submitted_at: datetime

    @classmethod
    def from_entity(cls, details: VerificationDetails) -> "VerificationSubmissionResponse":
        return cls(
            full_name=details.full_name,
            father_name=details.father_name,
            mobile_number=details.mobile_number,
            full_address=details.full_address,
            document_url=details.document_url,
            submitted_at=details.submitted_at,
        )


class VerificationResponse(CamelModel):
    message: str
    submission: VerificationSubmissionResponse


class UserResponse(CamelModel):
    id: UUID
    display_name: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None
    location_lat: Optional[float] = None
    location_lon: Optional[float] = None
    verified_profile: bool = False
    verification_details: Optional[VerificationSubmissionResponse] = None
    created_events: List[UUID] = []
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        details = user.verification_details
        return cls(
            id=user.id,
            display_name=user.display_name,
            email=user.email,
            profile_photo=user.profile_photo,
            location_lat=user.location_lat,
            location_lon=user.location_lon,
            verified_profile=user.verified_profile,
            verification_details=(
                VerificationSubmissionResponse.from_entity(details) if details else None
            ),
            created_events=list(user.created_events),
            created_at=user.created_at,
        )


class CreatedEventsResponse(CamelModel):
    event_ids: List[UUID]

"""
User domain entity and identity-provider profile.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID
from datetime import datetime, UTC


@dataclass(frozen=True)
class IdentityProfile:
    """Profile handed back by the identity provider after a successful login."""

    external_id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None


@dataclass
class VerificationDetails:
    full_name: str
    mobile_number: str
    document_url: str
    father_name: str = ""
    full_address: str = ""
    submitted_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class User:
    id: UUID
    external_id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None
    location_lat: Optional[float] = None
    location_lon: Optional[float] = None
    verified_profile: bool = False
    verification_details: Optional[VerificationDetails] = None
    created_events: List[UUID] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: Optional[datetime] = None

    def mirror_profile(self, profile: IdentityProfile) -> None:
        """Business rule: the provider is the source of truth, overwrite don't merge."""
        self.display_name = profile.display_name
        self.email = profile.email
        self.profile_photo = profile.profile_photo
        self.updated_at = datetime.now(UTC)

    def submit_verification(self, details: VerificationDetails) -> None:
        """Business rule: a new submission always resets approval."""
        self.verification_details = details
        self.verified_profile = False
        self.updated_at = datetime.now(UTC)

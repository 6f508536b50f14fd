"""
Archive record for a deleted event.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import UUID, uuid4
from datetime import datetime, UTC

DEFAULT_DELETION_REASON = "User initiated deletion"


@dataclass(frozen=True)
class DeletedEvent:
    original_event: Dict[str, Any]
    original_event_id: UUID
    deleted_by_id: UUID
    reason: Optional[str] = DEFAULT_DELETION_REASON
    id: UUID = field(default_factory=uuid4)
    deleted_at: datetime = field(default_factory=lambda: datetime.now(UTC))

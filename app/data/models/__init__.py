"""ORM models; importing this package registers every table on ``Base``."""

from .base import Base
from .event_model import EventModel
from .deleted_event_model import DeletedEventModel
from .user_model import UserModel, UserCreatedEventModel

__all__ = [
    "Base",
    "EventModel",
    "DeletedEventModel",
    "UserModel",
    "UserCreatedEventModel",
]

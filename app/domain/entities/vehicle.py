"""Vehicle domain entity."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.utils.time_utils import utc_now


@dataclass
class Vehicle:
    """Vehicle domain entity.

    Positions reference a vehicle by id; they are owned by the position
    repository, not by this object.
    """
    id: Optional[int]
    name: str
    is_active: bool = True
    created_date: datetime = field(default_factory=utc_now)

    def is_valid(self) -> bool:
        """Validate vehicle business rules."""
        return bool(self.name and self.name.strip())

    def activate(self):
        self.is_active = True

    def deactivate(self):
        self.is_active = False

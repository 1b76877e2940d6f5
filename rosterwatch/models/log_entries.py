from typing import List

from pydantic import BaseModel

from .changes import ChangeRecord
from .enums import UpdateType
from .team import Team


class UpdateLogEntry(BaseModel):
    """Audit entry appended once per tick per region that produced changes."""

    timestamp: str
    region: str
    type: UpdateType = UpdateType.CHANGES
    old: List[Team]  # The snapshot the changes were computed against
    changes: List[ChangeRecord]


class MessageLogEntry(BaseModel):
    """A human-readable update; the feed keeps these newest first."""

    timestamp: str
    region: str
    message: str

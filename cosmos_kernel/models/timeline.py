"""Timeline — snapshots of the forest and the change notices that produce them."""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel

from cosmos_kernel.models.universe import System


class ChangeCause(str, Enum):
    EDIT = "edit"           # A committed structural or field mutation
    RESTORE = "restore"     # A snapshot was copied back into the live universe


class ChangeNotice(BaseModel):
    """Payload of the "state-updated" channel. Subscribers re-read the universe."""

    cause: ChangeCause = ChangeCause.EDIT
    reason: str = "state-change"


class TimelineState(str, Enum):
    LIVE = "live"
    SCRUBBING = "scrubbing"
    PLAYING = "playing"


class Snapshot(BaseModel):
    """One entry of the append-only history log."""

    time: datetime
    systems: List[System]
    reason: str = "update"

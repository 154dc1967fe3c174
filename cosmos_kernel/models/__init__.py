"""Cosmos Kernel data models."""

from cosmos_kernel.models.config import CosmosConfig
from cosmos_kernel.models.mutation import NodePayload
from cosmos_kernel.models.selection import (
    ResolvedSelection,
    Selection,
    SelectionSummary,
)
from cosmos_kernel.models.timeline import (
    ChangeCause,
    ChangeNotice,
    Snapshot,
    TimelineState,
)
from cosmos_kernel.models.universe import (
    Camera,
    Entry,
    Mode,
    Moon,
    Planet,
    System,
    Theme,
    Universe,
)

__all__ = [
    "Camera",
    "ChangeCause",
    "ChangeNotice",
    "CosmosConfig",
    "Entry",
    "Mode",
    "Moon",
    "NodePayload",
    "Planet",
    "ResolvedSelection",
    "Selection",
    "SelectionSummary",
    "Snapshot",
    "System",
    "Theme",
    "TimelineState",
    "Universe",
]

"""Session configuration."""

from pydantic import BaseModel, Field


class CosmosConfig(BaseModel):
    """Configuration for a CosmosSession and its collaborators."""

    playback_interval_seconds: float = Field(gt=0, default=0.6)
    storage_key: str = "cosmos.state.v1"
    db_path: str = ":memory:"
    record_restores: bool = False           # Legacy: every restore appends a history entry
    promote_carries_subtree: bool = False
    focus_zoom: float = Field(gt=0, default=1.8)

"""Mutation payloads — what a caller hands the Mutation Engine."""

from typing import Optional

from pydantic import BaseModel


class NodePayload(BaseModel):
    """Fields for a new node. Entries only use text and tone."""

    title: str = ""
    text: str = ""
    tone: Optional[str] = None
    energy: int = 0

"""
Schemas for moving content entities between review stages.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class EntityStageUpdate(BaseModel):
    """Request to put a content entity on a review stage."""

    stage_id: UUID


class EntityStageRead(BaseModel):
    """The stage link of one content entity."""

    type: str
    id: UUID
    review_stage_id: Optional[UUID] = None

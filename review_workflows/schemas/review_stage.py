"""
ReviewStage Pydantic schemas.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from review_workflows.schemas.base import TimestampedRead


class StageInput(BaseModel):
    """
    One entry of a proposed stage list.

    Entries without an id (or with an id unknown to the workflow) are
    created; entries with a known id are kept, renamed if the name changed.
    """

    id: Optional[UUID] = None
    name: str = Field(min_length=1, max_length=255)


class ReplaceStagesRequest(BaseModel):
    """Request body for replacing the stage list of a workflow."""

    stages: List[StageInput]
    expected_revision: Optional[int] = None


class ReviewStageRead(TimestampedRead):
    """Schema for reading review stage data (API response)."""

    name: str
    workflow_id: UUID
    position: int

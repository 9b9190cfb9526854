"""
ReviewWorkflow Pydantic schemas.
"""

from typing import List

from review_workflows.schemas.base import TimestampedRead
from review_workflows.schemas.review_stage import ReviewStageRead


class ReviewWorkflowRead(TimestampedRead):
    """Schema for reading a workflow together with its ordered stages."""

    name: str
    is_default: bool
    revision: int
    stages: List[ReviewStageRead] = []

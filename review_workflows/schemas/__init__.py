"""
Schemas package.

Import all schemas here for easy access.
"""

from review_workflows.schemas.review_stage import ReplaceStagesRequest, ReviewStageRead, StageInput
from review_workflows.schemas.workflow import ReviewWorkflowRead
from review_workflows.schemas.content import EntityStageRead, EntityStageUpdate

__all__ = [
    # Review stage
    "StageInput", "ReplaceStagesRequest", "ReviewStageRead",
    # Workflow
    "ReviewWorkflowRead",
    # Content
    "EntityStageUpdate", "EntityStageRead",
]

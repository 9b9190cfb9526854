"""
Review workflow business logic service.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from review_workflows.errors import NotFoundError
from review_workflows.models.workflow import ReviewWorkflow
from review_workflows.repositories.stage_repository import StageRepository
from review_workflows.repositories.workflow_repository import WorkflowRepository

logger = logging.getLogger(__name__)

DEFAULT_WORKFLOW_NAME = "Default"
DEFAULT_STAGE_NAMES = ("To do", "Ready to review", "In progress", "Reviewed")


class WorkflowService:
    """Service for review workflow business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = WorkflowRepository(db)

    async def list_workflows(self, limit: int = 50, offset: int = 0) -> List[ReviewWorkflow]:
        return await self.repository.list(limit=limit, offset=offset)

    async def get_workflow(self, workflow_id: UUID, refresh: bool = False) -> ReviewWorkflow:
        """Get a workflow with its ordered stages; NotFoundError if missing."""
        workflow = await self.repository.get_by_id(workflow_id, refresh=refresh)
        if not workflow:
            raise NotFoundError(f"Workflow {workflow_id} not found", details={"workflow_id": str(workflow_id)})
        return workflow

    async def get_default_workflow(self) -> ReviewWorkflow:
        """
        Get the default workflow.

        This is the workflow whose stage order decides where content goes
        when its stage is deleted, whichever workflow is being edited.
        """
        workflow = await self.repository.get_default()
        if not workflow:
            raise NotFoundError("No review workflow exists")
        return workflow

    async def ensure_default_workflow(self) -> ReviewWorkflow:
        """Create the default workflow and its stages if no workflow exists yet."""
        if await self.repository.count() > 0:
            return await self.get_default_workflow()

        workflow = await self.repository.create(DEFAULT_WORKFLOW_NAME, is_default=True)
        await StageRepository(self.db).create_many(workflow.id, DEFAULT_STAGE_NAMES)
        logger.info("Created default review workflow %s with %d stages", workflow.id, len(DEFAULT_STAGE_NAMES))
        return await self.get_workflow(workflow.id, refresh=True)

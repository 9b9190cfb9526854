"""
ReviewWorkflow repository - database operations for ReviewWorkflow.
"""

from typing import List, Optional, Sequence
from uuid import UUID
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from review_workflows.errors import ConflictError
from review_workflows.models.review_stage import ReviewStage
from review_workflows.models.workflow import ReviewWorkflow


class WorkflowRepository:
    """Repository for ReviewWorkflow database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, limit: int = 50, offset: int = 0) -> List[ReviewWorkflow]:
        """List workflows, oldest first."""
        query = (
            select(ReviewWorkflow)
            .order_by(ReviewWorkflow.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, workflow_id: UUID, refresh: bool = False) -> Optional[ReviewWorkflow]:
        """
        Get a workflow with its ordered stages.

        refresh=True reloads the row and the stage collection even when the
        workflow is already in the session.
        """
        query = (
            select(ReviewWorkflow)
            .options(selectinload(ReviewWorkflow.stages))
            .where(ReviewWorkflow.id == workflow_id)
        )
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_default(self) -> Optional[ReviewWorkflow]:
        """Get the workflow flagged as default, falling back to the oldest one."""
        result = await self.db.execute(
            select(ReviewWorkflow)
            .order_by(ReviewWorkflow.is_default.desc(), ReviewWorkflow.created_at.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(ReviewWorkflow))
        return result.scalar_one()

    async def create(self, name: str, is_default: bool = False) -> ReviewWorkflow:
        """Create a new workflow without stages."""
        workflow = ReviewWorkflow(
            id=uuid.uuid4(),
            name=name,
            is_default=is_default,
            revision=0,
        )
        self.db.add(workflow)
        await self.db.flush()
        return workflow

    async def update_stages(self, workflow: ReviewWorkflow, stage_ids: Sequence[UUID]) -> ReviewWorkflow:
        """
        Commit the ordered stage membership of a workflow.

        Each stage's position becomes its index in stage_ids and the
        workflow revision is bumped, but only while the stored revision is
        still the one read into ``workflow``.

        Raises:
            ConflictError: another transaction committed the workflow first
        """
        result = await self.db.execute(
            select(ReviewStage).where(ReviewStage.id.in_(list(stage_ids)))
        )
        stages_by_id = {stage.id: stage for stage in result.scalars().all()}
        for position, stage_id in enumerate(stage_ids):
            stages_by_id[stage_id].position = position

        read_revision = workflow.revision
        result = await self.db.execute(
            update(ReviewWorkflow)
            .where(ReviewWorkflow.id == workflow.id, ReviewWorkflow.revision == read_revision)
            .values(revision=read_revision + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError(
                f"Workflow {workflow.id} was modified concurrently",
                details={"expected_revision": read_revision},
            )

        await self.db.refresh(workflow)
        return workflow

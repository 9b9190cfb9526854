"""
ReviewStage repository - database operations for ReviewStage.
"""

from typing import List, Optional, Sequence
from uuid import UUID
import uuid

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from review_workflows.models.review_stage import ReviewStage


class StageRepository:
    """Repository for ReviewStage database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, workflow_id: UUID) -> List[ReviewStage]:
        """List the stages of a workflow in order."""
        result = await self.db.execute(
            select(ReviewStage)
            .where(ReviewStage.workflow_id == workflow_id)
            .order_by(ReviewStage.position.asc(), ReviewStage.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(
        self,
        stage_id: UUID,
        workflow_id: Optional[UUID] = None,
    ) -> Optional[ReviewStage]:
        """Get a stage by ID, optionally scoped to one workflow."""
        query = select(ReviewStage).where(ReviewStage.id == stage_id)
        if workflow_id is not None:
            query = query.where(ReviewStage.workflow_id == workflow_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create_many(
        self,
        workflow_id: UUID,
        names: Sequence[str],
        start_position: int = 0,
    ) -> List[ReviewStage]:
        """Insert stages in the given order and return them with their ids."""
        stages = [
            ReviewStage(
                id=uuid.uuid4(),
                workflow_id=workflow_id,
                name=name,
                position=start_position + offset,
            )
            for offset, name in enumerate(names)
        ]
        self.db.add_all(stages)
        await self.db.flush()
        return stages

    async def update(self, stage_id: UUID, name: str) -> Optional[ReviewStage]:
        """Rename a stage."""
        stage = await self.get_by_id(stage_id)
        if not stage:
            return None

        stage.name = name
        await self.db.flush()
        await self.db.refresh(stage)
        return stage

    async def delete(self, stage: ReviewStage) -> None:
        await self.db.delete(stage)
        await self.db.flush()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(ReviewStage))
        return result.scalar_one()

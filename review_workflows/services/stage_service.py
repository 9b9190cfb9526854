"""
Review stage business logic service.

Besides plain stage lookups this service replaces the whole stage list of a
workflow in one transaction, moving content off every deleted stage to the
nearest stage that survives.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from review_workflows.db.session import run_in_transaction
from review_workflows.errors import ConflictError, NotFoundError, StageRelocationError, ValidationError
from review_workflows.models.review_stage import ReviewStage
from review_workflows.models.workflow import ReviewWorkflow
from review_workflows.repositories.entity_repository import EntityRelocator, LinkedEntity
from review_workflows.repositories.stage_repository import StageRepository
from review_workflows.repositories.workflow_repository import WorkflowRepository
from review_workflows.schemas.review_stage import StageInput
from review_workflows.services.stage_diff import (
    assert_at_least_one_stage_remains,
    find_nearest_surviving_stage_id,
    get_diff_between_stages,
)
from review_workflows.services.workflow_service import WorkflowService

logger = logging.getLogger(__name__)


class StageService:
    """Service for review stage business logic."""

    def __init__(self, db: AsyncSession, entities: Optional[EntityRelocator] = None):
        self.db = db
        self.repository = StageRepository(db)
        self.workflows = WorkflowRepository(db)
        self.workflow_service = WorkflowService(db)
        self.entities = entities or EntityRelocator(db)

    async def find(self, workflow_id: UUID) -> List[ReviewStage]:
        """List the stages of a workflow in order."""
        await self.workflow_service.get_workflow(workflow_id)
        return await self.repository.list(workflow_id)

    async def find_by_id(self, stage_id: UUID, workflow_id: Optional[UUID] = None) -> ReviewStage:
        stage = await self.repository.get_by_id(stage_id, workflow_id=workflow_id)
        if not stage:
            raise NotFoundError(f"Stage {stage_id} not found", details={"stage_id": str(stage_id)})
        return stage

    async def create_many(self, workflow_id: UUID, names: Sequence[str]) -> List[ReviewStage]:
        return await self.repository.create_many(workflow_id, names)

    async def update(self, stage_id: UUID, name: str) -> ReviewStage:
        stage = await self.repository.update(stage_id, name)
        if not stage:
            raise NotFoundError(f"Stage {stage_id} not found", details={"stage_id": str(stage_id)})
        return stage

    async def delete(self, stage_id: UUID) -> None:
        await self.repository.delete(await self.find_by_id(stage_id))

    async def count(self) -> int:
        return await self.repository.count()

    async def update_entity(self, type_tag: str, entity_id: UUID, stage_id: UUID) -> Optional[UUID]:
        """Put one content entity on a stage and return the stored link."""
        await self.find_by_id(stage_id)
        await self.entities.relocate(type_tag, entity_id, stage_id)
        return await self.entities.get_stage_id(type_tag, entity_id)

    async def replace_workflow_stages(
        self,
        workflow_id: UUID,
        stages: Sequence[StageInput],
        expected_revision: Optional[int] = None,
    ) -> ReviewWorkflow:
        """
        Replace the stage list of a workflow.

        Stages are created, renamed and deleted so that the workflow ends up
        with exactly ``stages`` in the given order. Content linked to a
        deleted stage is moved to the nearest surviving stage of the default
        workflow, preferring earlier stages. Everything runs in one
        transaction; any failure leaves stages, workflow and content as
        they were.

        Raises:
            NotFoundError: the workflow does not exist
            ValidationError: no stage would remain, or an id is repeated
            ConflictError: expected_revision does not match the stored revision
            StageRelocationError: content has no surviving stage to go to
        """
        async with run_in_transaction(self.db):
            workflow = await self.workflow_service.get_workflow(workflow_id, refresh=True)
            if expected_revision is not None and workflow.revision != expected_revision:
                raise ConflictError(
                    f"Workflow {workflow_id} was modified concurrently",
                    details={"expected_revision": expected_revision, "revision": workflow.revision},
                )
            _assert_unique_ids(stages)

            current_stages = list(workflow.stages)
            diff = get_diff_between_stages(current_stages, stages)
            assert_at_least_one_stage_remains(current_stages, diff)
            logger.info(
                "Replacing stages of workflow %s: %d created, %d updated, %d deleted",
                workflow_id,
                len(diff.created),
                len(diff.updated),
                len(diff.deleted),
            )

            new_stages = await self.repository.create_many(workflow_id, [stage.name for stage in diff.created])
            for stage in diff.updated:
                await self.repository.update(stage.id, stage.name)

            # created stages were inserted in proposal order, so they are
            # consumed in that same order
            current_ids = {stage.id for stage in current_stages}
            generated = iter(new_stages)
            stage_ids = [
                stage.id if stage.id in current_ids else next(generated).id
                for stage in stages
            ]

            moves = await self._delete_stages(diff.deleted)
            for entity, target_stage_id in moves:
                await self.entities.relocate(entity.type, entity.id, target_stage_id)
            if moves:
                logger.info("Moved %d entities off deleted stages of workflow %s", len(moves), workflow_id)

            if diff.is_empty and stage_ids == [stage.id for stage in current_stages]:
                logger.info("Stages of workflow %s are unchanged", workflow_id)
            else:
                await self.workflows.update_stages(workflow, stage_ids)

        return await self.workflow_service.get_workflow(workflow_id, refresh=True)

    async def _delete_stages(self, deleted: Sequence[ReviewStage]) -> List[Tuple[LinkedEntity, UUID]]:
        """
        Delete stages, returning the moves for the content linked to them.

        Linked content is looked up on the default workflow's stages and its
        target is found in the default workflow's order. Each stage is
        deleted only once its content has been queued for a move.
        """
        if not deleted:
            return []

        default_workflow = await self.workflow_service.get_default_workflow()
        default_stages = list(default_workflow.stages)
        default_ids = [stage.id for stage in default_stages]
        deleted_ids = {stage.id for stage in deleted}

        moves: List[Tuple[LinkedEntity, UUID]] = []
        for stage in deleted:
            linked: List[LinkedEntity] = []
            if stage.id in default_ids:
                linked = await self.entities.find_linked(stage.id)

            if linked:
                target_stage_id = find_nearest_surviving_stage_id(
                    default_stages,
                    default_ids.index(stage.id),
                    lambda candidate: candidate.id not in deleted_ids,
                )
                if target_stage_id is None:
                    logger.error(
                        "No surviving stage in default workflow %s for %d entities on stage %s",
                        default_workflow.id,
                        len(linked),
                        stage.id,
                    )
                    raise StageRelocationError(
                        f"No surviving stage to move the content of stage {stage.id} to",
                        details={"stage_id": str(stage.id), "default_workflow_id": str(default_workflow.id)},
                    )
                moves.extend((entity, target_stage_id) for entity in linked)

            await self.repository.delete(stage)

        return moves


def _assert_unique_ids(stages: Sequence[StageInput]) -> None:
    seen = set()
    for stage in stages:
        if stage.id is None:
            continue
        if stage.id in seen:
            raise ValidationError(
                f"Stage {stage.id} appears more than once",
                details={"stage_id": str(stage.id)},
            )
        seen.add(stage.id)

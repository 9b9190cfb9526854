"""
Content stage router - moves a content entity onto a review stage.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from review_workflows.db.session import get_db
from review_workflows.schemas.content import EntityStageRead, EntityStageUpdate
from review_workflows.services.stage_service import StageService

router = APIRouter(prefix="/content", tags=["Review Workflows"])


@router.put("/{type_tag}/{entity_id}/stage", response_model=EntityStageRead)
async def update_entity_stage(
    type_tag: str,
    entity_id: UUID,
    request: EntityStageUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Put a content entity (article, page) on a review stage."""
    service = StageService(db)
    stage_id = await service.update_entity(type_tag, entity_id, request.stage_id)
    return EntityStageRead(type=type_tag, id=entity_id, review_stage_id=stage_id)

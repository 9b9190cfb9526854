"""
Review workflow router - API endpoints for workflows and their stages.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from review_workflows.db.session import get_db
from review_workflows.schemas.review_stage import ReplaceStagesRequest, ReviewStageRead
from review_workflows.schemas.workflow import ReviewWorkflowRead
from review_workflows.services.stage_service import StageService
from review_workflows.services.workflow_service import WorkflowService

router = APIRouter(prefix="/workflows", tags=["Review Workflows"])


@router.get("", response_model=List[ReviewWorkflowRead])
async def list_workflows(
    db: AsyncSession = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """List review workflows with their ordered stages."""
    service = WorkflowService(db)
    return await service.list_workflows(limit=limit, offset=offset)


@router.get("/{workflow_id}", response_model=ReviewWorkflowRead)
async def get_workflow(
    workflow_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a workflow by ID."""
    service = WorkflowService(db)
    return await service.get_workflow(workflow_id)


@router.get("/{workflow_id}/stages", response_model=List[ReviewStageRead])
async def list_stages(
    workflow_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """List the stages of a workflow in order."""
    service = StageService(db)
    return await service.find(workflow_id)


@router.get("/{workflow_id}/stages/{stage_id}", response_model=ReviewStageRead)
async def get_stage(
    workflow_id: UUID,
    stage_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get one stage of a workflow."""
    service = StageService(db)
    return await service.find_by_id(stage_id, workflow_id=workflow_id)


@router.put("/{workflow_id}/stages", response_model=ReviewWorkflowRead)
async def replace_stages(
    workflow_id: UUID,
    request: ReplaceStagesRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Replace the stage list of a workflow.

    Stages without an id are created, stages left out are deleted and
    content on them moves to the nearest remaining stage.
    """
    service = StageService(db)
    return await service.replace_workflow_stages(
        workflow_id,
        request.stages,
        expected_revision=request.expected_revision,
    )

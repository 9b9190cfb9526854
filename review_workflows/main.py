"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from review_workflows.core.config import settings
from review_workflows.db.session import get_async_session_context
from review_workflows.errors import AppError, app_error_handler
from review_workflows.routers import content, health, workflows
from review_workflows.services.workflow_service import WorkflowService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    On startup logging is configured and, unless disabled, the default
    workflow is created when the database holds none.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s...", settings.APP_NAME)

    if settings.BOOTSTRAP_DEFAULT_WORKFLOW:
        async with get_async_session_context() as db:
            workflow = await WorkflowService(db).ensure_default_workflow()
            logger.info("Default review workflow: %s (%s)", workflow.name, workflow.id)

    yield  # The server runs while we're "yielded" here

    logger.info("Shutting down %s...", settings.APP_NAME)


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Review workflow stages and content reassignment API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)

# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(workflows.router, prefix=settings.API_PREFIX)
app.include_router(content.router, prefix=settings.API_PREFIX)

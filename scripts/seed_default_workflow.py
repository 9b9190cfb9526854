"""
Seed the default review workflow and a few articles sitting on its stages.

Run after migrations. Safe to run twice: the default workflow is only
created when no workflow exists, and sample content only when none exists.

Usage:
    python scripts/seed_default_workflow.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import review_workflows modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import func, select

from review_workflows.db.session import get_async_session_context
from review_workflows.models import Article
from review_workflows.services.workflow_service import WorkflowService

SAMPLE_ARTICLES = [
    ("Release notes draft", 0),
    ("Onboarding guide", 1),
    ("Pricing FAQ", 1),
    ("Quarterly report", 2),
]


async def seed_default_workflow() -> None:
    async with get_async_session_context() as db:
        workflow = await WorkflowService(db).ensure_default_workflow()
        print(f"[OK] Default workflow: {workflow.name} ({workflow.id})")
        for stage in workflow.stages:
            print(f"     {stage.position}. {stage.name} ({stage.id})")

        existing = (await db.execute(select(func.count()).select_from(Article))).scalar_one()
        if existing:
            print(f"[SKIP] {existing} articles already present")
            return

        for title, stage_index in SAMPLE_ARTICLES:
            db.add(Article(title=title, review_stage_id=workflow.stages[stage_index].id))
        await db.flush()
        print(f"[OK] Created {len(SAMPLE_ARTICLES)} sample articles")


if __name__ == "__main__":
    asyncio.run(seed_default_workflow())

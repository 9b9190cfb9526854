"""
Pytest configuration and shared fixtures.

Service and API tests run against an in-memory SQLite database (aiosqlite)
with foreign keys enforced. Tests marked ``db`` use the
database configured through DATABASE_URL instead and are skipped unless
RUN_DB_TESTS=1. Tests marked ``server`` talk to a running instance at
SERVER_URL and are skipped unless RUN_SERVER_TESTS=1.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BOOTSTRAP_DEFAULT_WORKFLOW", "false")

from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from review_workflows.db.base import Base
from review_workflows.models import Article, Page, ReviewStage, ReviewWorkflow


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires the database configured by DATABASE_URL")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)


@pytest_asyncio.fixture
async def engine():
    """A fresh in-memory database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces ON DELETE rules with this pragma
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded(session_maker):
    """
    Default workflow with stages S1, S2, S3 and four entities on S2
    (three articles and one page).
    """
    async with session_maker() as db:
        workflow = ReviewWorkflow(name="Default", is_default=True, revision=0)
        db.add(workflow)
        await db.flush()

        stages = [
            ReviewStage(workflow_id=workflow.id, name=name, position=position)
            for position, name in enumerate(["S1", "S2", "S3"])
        ]
        db.add_all(stages)
        await db.flush()

        s2 = stages[1]
        articles = [Article(title=f"Article {i}", review_stage_id=s2.id) for i in range(3)]
        page = Page(title="About", slug="about", review_stage_id=s2.id)
        db.add_all(articles + [page])
        await db.commit()

        return SimpleNamespace(
            workflow_id=workflow.id,
            s1=stages[0].id,
            s2=stages[1].id,
            s3=stages[2].id,
            article_ids=[article.id for article in articles],
            page_id=page.id,
        )

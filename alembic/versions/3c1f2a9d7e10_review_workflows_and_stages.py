"""Review workflows, stages and stage-linked content

Revision ID: 3c1f2a9d7e10
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7e10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "review_workflow",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "review_stage",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "workflow_id",
            sa.Uuid(),
            sa.ForeignKey("review_workflow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_review_stage_workflow_id", "review_stage", ["workflow_id"])

    op.create_table(
        "article",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column(
            "review_stage_id",
            sa.Uuid(),
            sa.ForeignKey("review_stage.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_article_review_stage_id", "article", ["review_stage_id"])

    op.create_table(
        "page",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False, unique=True),
        sa.Column(
            "review_stage_id",
            sa.Uuid(),
            sa.ForeignKey("review_stage.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_page_review_stage_id", "page", ["review_stage_id"])


def downgrade() -> None:
    op.drop_index("ix_page_review_stage_id", table_name="page")
    op.drop_table("page")
    op.drop_index("ix_article_review_stage_id", table_name="article")
    op.drop_table("article")
    op.drop_index("ix_review_stage_workflow_id", table_name="review_stage")
    op.drop_table("review_stage")
    op.drop_table("review_workflow")

"""
Content models that can sit on a review stage.

Every content type that takes part in review workflows mixes in
StageLinkedMixin, which gives it the review_stage_id link column, and
declares the type tag it is addressed by.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from review_workflows.models.base_model import TimestampedModel


class StageLinkedMixin:
    """Adds the review stage link to a content model."""

    # The entity owns the link; deleting the stage only clears it
    review_stage_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("review_stage.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )


class Article(StageLinkedMixin, TimestampedModel):
    """Article table - long-form content going through review."""

    __tablename__ = "article"
    __entity_type__ = "article"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    body: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )


class Page(StageLinkedMixin, TimestampedModel):
    """Page table - site pages going through review."""

    __tablename__ = "page"
    __entity_type__ = "page"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

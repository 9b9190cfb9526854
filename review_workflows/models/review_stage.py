"""
ReviewStage model.

Represents a step in a content review workflow (e.g., To do, In progress, Reviewed).
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from review_workflows.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from review_workflows.models.workflow import ReviewWorkflow


class ReviewStage(TimestampedModel):
    """
    ReviewStage table - represents a step in a review workflow.

    The position determines the order of the stage inside its workflow and
    is rewritten every time the workflow's stage list is replaced.
    """

    __tablename__ = "review_stage"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    workflow_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("review_workflow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Order in the workflow (0, 1, 2, etc.)
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    workflow: Mapped["ReviewWorkflow"] = relationship(
        "ReviewWorkflow",
        back_populates="stages",
    )

"""
ReviewWorkflow model.

Represents an ordered collection of review stages.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from review_workflows.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from review_workflows.models.review_stage import ReviewStage


class ReviewWorkflow(TimestampedModel):
    """
    ReviewWorkflow table - a named, ordered list of review stages.

    Exactly one workflow is meant to carry is_default; it is the reference
    used when content has to be moved off a deleted stage.
    """

    __tablename__ = "review_workflow"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    is_default: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # Bumped each time the stage list is committed
    revision: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    # Relationships
    stages: Mapped[List["ReviewStage"]] = relationship(
        "ReviewStage",
        back_populates="workflow",
        order_by="ReviewStage.position",
        lazy="selectin",
    )

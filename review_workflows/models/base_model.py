"""
Base model with common fields.

All tables inherit from this to get:
- id (UUID primary key)
- created_at (when the record was created)
- updated_at (when the record was last modified)
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from review_workflows.db.base import Base


class TimestampedModel(Base):
    """
    Abstract base class for all models.

    This is not a real table - it's a template that other models inherit from.
    """

    __abstract__ = True  # This means: don't create a table for this class

    # Fetch server-generated timestamps right after INSERT/UPDATE so they can
    # be read without another round trip
    __mapper_args__ = {"eager_defaults": True}

    # Primary key - UUID, generated client side so new rows have an id
    # as soon as they are added to the session
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from review_workflows.models.workflow import ReviewWorkflow
from review_workflows.models.review_stage import ReviewStage
from review_workflows.models.content import Article, Page, StageLinkedMixin

# Export all models
__all__ = [
    "ReviewWorkflow",
    "ReviewStage",
    "Article",
    "Page",
    "StageLinkedMixin",
]

"""
Stage link operations for content entities of any registered type.

Content types are addressed by a type tag ("article", "page"). The
relocator maps each tag to its model and reads or writes the
review_stage_id link column on it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Type
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from review_workflows.errors import NotFoundError
from review_workflows.models.content import Article, Page, StageLinkedMixin

CONTENT_MODELS: List[Type[StageLinkedMixin]] = [Article, Page]


@dataclass(frozen=True)
class LinkedEntity:
    """A content entity sitting on a stage."""

    type: str
    id: UUID


class EntityRelocator:
    """Finds and moves content entities between review stages."""

    def __init__(self, db: AsyncSession, models: Optional[Iterable[Type[StageLinkedMixin]]] = None):
        self.db = db
        self.models: Dict[str, Type[StageLinkedMixin]] = {
            model.__entity_type__: model for model in (models or CONTENT_MODELS)
        }

    def model_for(self, type_tag: str) -> Type[StageLinkedMixin]:
        model = self.models.get(type_tag)
        if model is None:
            raise NotFoundError(
                f"Unknown content type '{type_tag}'",
                details={"type": type_tag, "known_types": sorted(self.models)},
            )
        return model

    async def find_linked(self, stage_id: UUID) -> List[LinkedEntity]:
        """List every entity, across all content types, linked to a stage."""
        linked: List[LinkedEntity] = []
        for type_tag, model in self.models.items():
            result = await self.db.execute(
                select(model.id)
                .where(model.review_stage_id == stage_id)
                .order_by(model.created_at.asc())
            )
            linked.extend(LinkedEntity(type=type_tag, id=entity_id) for entity_id in result.scalars().all())
        return linked

    async def get_stage_id(self, type_tag: str, entity_id: UUID) -> Optional[UUID]:
        """Return the stage an entity sits on; NotFoundError if the entity is missing."""
        model = self.model_for(type_tag)
        result = await self.db.execute(
            select(model.id, model.review_stage_id).where(model.id == entity_id)
        )
        row = result.one_or_none()
        if row is None:
            raise NotFoundError(f"{type_tag} {entity_id} not found")
        return row.review_stage_id

    async def relocate(self, type_tag: str, entity_id: UUID, target_stage_id: UUID) -> None:
        """Point an entity's stage link at target_stage_id."""
        model = self.model_for(type_tag)
        result = await self.db.execute(
            update(model)
            .where(model.id == entity_id)
            .values(review_stage_id=target_stage_id)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"{type_tag} {entity_id} not found")

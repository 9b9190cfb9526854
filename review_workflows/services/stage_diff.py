"""
Pure helpers behind stage list reconciliation.

Nothing here touches the database: the functions work on any objects with
``id`` and ``name`` attributes, ORM rows and StageInput schemas alike.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from review_workflows.errors import ValidationError


@dataclass
class StageDiff:
    """Three-way partition between a current and a proposed stage list."""

    created: List[Any] = field(default_factory=list)
    updated: List[Any] = field(default_factory=list)
    deleted: List[Any] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.created or self.updated or self.deleted)


def get_diff_between_stages(source_stages: Sequence[Any], comparison_stages: Sequence[Any]) -> StageDiff:
    """
    Compare two stage lists by id.

    A comparison stage whose id is not found in source_stages is created
    (this covers stages without an id). A stage found in both lists with a
    different name is updated; with the same name it is left out entirely.
    A source stage whose id is absent from comparison_stages is deleted.
    Each partition keeps the order of its input list.
    """
    source_by_id = {stage.id: stage for stage in source_stages if stage.id is not None}
    comparison_ids = {stage.id for stage in comparison_stages if stage.id is not None}

    diff = StageDiff()
    for stage in comparison_stages:
        source = source_by_id.get(stage.id) if stage.id is not None else None
        if source is None:
            diff.created.append(stage)
        elif source.name != stage.name:
            diff.updated.append(stage)

    diff.deleted = [stage for stage in source_stages if stage.id not in comparison_ids]
    return diff


def assert_at_least_one_stage_remains(workflow_stages: Sequence[Any], diff: StageDiff) -> None:
    """
    Reject a diff that would leave the workflow without stages.

    Only the counts are compared, the resulting list is not simulated.
    """
    remaining = len(workflow_stages) - len(diff.deleted) + len(diff.created)
    if remaining < 1:
        raise ValidationError(
            "At least one stage must remain in the workflow.",
            details={
                "current": len(workflow_stages),
                "created": len(diff.created),
                "deleted": len(diff.deleted),
            },
        )


def find_nearest_surviving_stage_id(
    stages: Sequence[Any],
    start_index: int,
    is_surviving: Callable[[Any], bool],
) -> Optional[Any]:
    """
    Find the id of the stage closest to start_index that survives.

    Stages before start_index (start_index included) are searched first,
    walking backwards; only then the stages after it. Returns None when no
    stage in the list survives. A negative start_index skips the backward
    search.
    """
    for index in range(min(start_index, len(stages) - 1), -1, -1):
        if is_surviving(stages[index]):
            return stages[index].id

    for stage in stages[max(start_index + 1, 0):]:
        if is_surviving(stage):
            return stage.id

    return None

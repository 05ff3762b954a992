"""Schemas for combination coverage and recipe copy planning."""

from __future__ import annotations

from pydantic import Field

from recipe_guide.schemas.base import APIResponse
from recipe_guide.schemas.enums import CopyAction
from recipe_guide.schemas.recipe import ModifierCondition, RecipeStep


class CoverageSummary(APIResponse):
    """How many combinations already have a recipe."""

    total: int
    configured: int
    unconfigured: int


class CopyTarget(APIResponse):
    """One combination a recipe will be copied onto."""

    combination_id: str
    action: CopyAction
    recipe_id: str | None = Field(
        default=None,
        description="Recipe overwritten by an update; empty for a create",
    )
    name: str
    modifier_conditions: list[ModifierCondition]
    print_code: str
    steps: list[RecipeStep]


class CopyPlan(APIResponse):
    """Creates and updates needed to copy one recipe onto other combinations."""

    source_recipe_id: str
    targets: list[CopyTarget] = Field(default_factory=list)
    create_count: int = 0
    update_count: int = 0

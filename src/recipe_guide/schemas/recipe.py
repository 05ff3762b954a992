"""Recipe, step and step type schemas."""

from __future__ import annotations

from pydantic import Field

from recipe_guide.schemas.base import APIRequest, APIResponse
from recipe_guide.schemas.enums import StepCategory


class StepType(APIRequest):
    """Catalog entry describing one kind of preparation action.

    A container without ``container_prefix``/``container_suffix`` wraps its
    contents in its own ``code`` on both sides.
    """

    id: str
    code: str = Field(..., description="Short code printed on tickets, e.g. 'M'")
    name: str | None = None
    category: StepCategory = StepCategory.ACTION
    is_container: bool = False
    container_prefix: str | None = None
    container_suffix: str | None = None


class RecipeStep(APIRequest):
    """One instruction within a recipe, addressed by its array index."""

    step_type_id: str
    instruction: str | None = Field(
        default=None,
        description="Opaque text appended to the step code, e.g. a quantity",
    )
    display_order: int | None = Field(
        default=None,
        ge=1,
        description="1-based print position; defaults to array position + 1",
    )
    contained_step_indices: list[int] = Field(
        default_factory=list,
        description="Indices of the steps this step wraps, in authoring order",
    )


class ModifierCondition(APIRequest):
    """One ``(group, option)`` pair a recipe is scoped to."""

    modifier_group_id: str
    modifier_option_id: str

    def as_pair(self) -> tuple[str, str]:
        return (self.modifier_group_id, self.modifier_option_id)


class Recipe(APIRequest):
    """Authored preparation instructions for an item.

    An empty ``modifier_conditions`` list marks the default recipe.
    """

    id: str
    item_id: str
    name: str | None = None
    print_code: str = ""
    modifier_conditions: list[ModifierCondition] = Field(default_factory=list)
    steps: list[RecipeStep] = Field(default_factory=list)

    def condition_set(self) -> frozenset[tuple[str, str]]:
        """Conditions as an unordered set of ``(group_id, option_id)``."""
        return frozenset(c.as_pair() for c in self.modifier_conditions)


class StepPreview(APIResponse):
    """Live preview of one step's generated code."""

    index: int
    generated_code: str
    is_contained: bool

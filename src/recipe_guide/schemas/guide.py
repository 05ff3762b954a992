"""Request and response bodies of the recipe guide endpoints."""

from __future__ import annotations

from pydantic import Field

from recipe_guide.schemas.base import APIRequest, APIResponse
from recipe_guide.schemas.enums import MoveDirection
from recipe_guide.schemas.modifier import (
    AmbiguousRecipeMatch,
    ModifierCombination,
    ModifierGroup,
    SuppliedCombination,
)
from recipe_guide.schemas.planning import CoverageSummary
from recipe_guide.schemas.recipe import Recipe, RecipeStep, StepPreview, StepType


# =============================================================================
# Steps
# =============================================================================


class EncodeStepsRequest(APIRequest):
    """Steps to encode together with the step type catalog they use."""

    steps: list[RecipeStep] = Field(default_factory=list)
    step_types: list[StepType] = Field(default_factory=list)


class EncodeStepsResponse(APIResponse):
    """Per-step previews and the recipe print code."""

    previews: list[StepPreview]
    print_code: str


class InsertStepRequest(EncodeStepsRequest):
    """Insert ``step`` at ``position`` (append when omitted)."""

    step: RecipeStep
    position: int | None = Field(default=None, ge=0)


class MoveStepRequest(EncodeStepsRequest):
    """Swap the step at ``index`` with its neighbour."""

    index: int = Field(..., ge=0)
    direction: MoveDirection


class RemoveStepRequest(EncodeStepsRequest):
    """Remove the step at ``index``."""

    index: int = Field(..., ge=0)


class SetContainmentRequest(EncodeStepsRequest):
    """Replace the containment list of the step at ``index``."""

    index: int = Field(..., ge=0)
    contained_step_indices: list[int] = Field(default_factory=list)


class EditStepsResponse(EncodeStepsResponse):
    """The edited step list, re-encoded."""

    steps: list[RecipeStep]


class RefreshPrintCodeRequest(APIRequest):
    """Recipe whose print code should be recomputed from its steps."""

    recipe: Recipe
    step_types: list[StepType] = Field(default_factory=list)


class RecipePrintCodeResponse(APIResponse):
    """Recomputed print code of a recipe."""

    recipe_id: str
    print_code: str
    printable: bool = Field(..., description="False when the print code is blank")


# =============================================================================
# Combinations
# =============================================================================


class ResolveCombinationsRequest(APIRequest):
    """Item modifier groups, the groups to combine and existing recipes."""

    modifier_groups: list[ModifierGroup] = Field(default_factory=list)
    selected_group_ids: list[str] = Field(default_factory=list)
    recipes: list[Recipe] = Field(default_factory=list)
    lenient: bool | None = Field(
        default=None,
        description="Override the configured handling of groups without options",
    )
    combinations: list[SuppliedCombination] | None = Field(
        default=None,
        description=(
            "Combinations the host already tracks. When present they are "
            "ordered and matched instead of generating the product"
        ),
    )


class ResolveCombinationsResponse(APIResponse):
    """Ordered combinations with their recipes."""

    combinations: list[ModifierCombination]
    warnings: list[AmbiguousRecipeMatch] = Field(default_factory=list)
    summary: CoverageSummary
    estimated_count: int
    exceeds_warning_threshold: bool


class SuggestGroupsRequest(APIRequest):
    """Item modifier groups and the recipes already authored for the item."""

    modifier_groups: list[ModifierGroup] = Field(default_factory=list)
    recipes: list[Recipe] = Field(default_factory=list)


class SuggestGroupsResponse(APIResponse):
    """Groups to preselect and the size of their product."""

    selected_group_ids: list[str]
    estimated_count: int
    exceeds_warning_threshold: bool


class CopyPlanRequest(ResolveCombinationsRequest):
    """Copy ``source_recipe`` onto every other combination of the selection."""

    source_recipe: Recipe

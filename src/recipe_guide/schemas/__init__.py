"""Pydantic schemas for the recipe guide.

Field names are snake_case in Python and camelCase on the wire.
"""

from recipe_guide.schemas.base import APIRequest, APIResponse
from recipe_guide.schemas.enums import (
    AmbiguityReason,
    CopyAction,
    HealthStatus,
    MoveDirection,
    StepCategory,
)
from recipe_guide.schemas.modifier import (
    AmbiguousRecipeMatch,
    CombinationOption,
    ModifierCombination,
    ModifierGroup,
    ModifierOption,
    SuppliedCombination,
)
from recipe_guide.schemas.planning import CopyPlan, CopyTarget, CoverageSummary
from recipe_guide.schemas.recipe import (
    ModifierCondition,
    Recipe,
    RecipeStep,
    StepPreview,
    StepType,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "AmbiguityReason",
    "AmbiguousRecipeMatch",
    "CombinationOption",
    "CopyAction",
    "CopyPlan",
    "CopyTarget",
    "CoverageSummary",
    "HealthStatus",
    "ModifierCombination",
    "ModifierCondition",
    "ModifierGroup",
    "ModifierOption",
    "MoveDirection",
    "Recipe",
    "RecipeStep",
    "StepCategory",
    "StepPreview",
    "StepType",
    "SuppliedCombination",
]

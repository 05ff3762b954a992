"""Shared test fixtures and configuration for the Recipe Guide service tests.

``APP_ENV`` is pinned to ``test`` before the application package is
imported so the module-level settings load the test YAML overlay.
"""

from __future__ import annotations

import os


os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from recipe_guide.schemas import ModifierGroup, ModifierOption, RecipeStep, StepType  # noqa: E402
from recipe_guide.services.encoding import index_step_types  # noqa: E402


@pytest.fixture
def step_types() -> dict[str, StepType]:
    """A small catalog: plain ingredient steps and two container styles."""
    return index_step_types(
        [
            StepType(id="milk", code="M", category="ingredient"),
            StepType(id="syrup", code="S", category="ingredient"),
            StepType(id="shake", code="SH", category="action"),
            StepType(
                id="cup",
                code="[",
                category="equipment",
                is_container=True,
                container_suffix="]",
            ),
            StepType(id="bar", code="|", category="equipment", is_container=True),
        ]
    )


@pytest.fixture
def milk_into_cup() -> list[RecipeStep]:
    """``[M200]``: a cup container holding 200 of milk."""
    return [
        RecipeStep(step_type_id="milk", instruction="200", display_order=1),
        RecipeStep(step_type_id="cup", display_order=2, contained_step_indices=[0]),
    ]


@pytest.fixture
def size_group() -> ModifierGroup:
    return ModifierGroup(
        id="size",
        name="Size",
        options=[
            ModifierOption(id="large", display_name="Large", display_order=3),
            ModifierOption(id="small", display_name="Small", display_order=1),
            ModifierOption(id="medium", display_name="Medium", display_order=2),
        ],
    )


@pytest.fixture
def sweetness_group() -> ModifierGroup:
    return ModifierGroup(
        id="sweet",
        name="Sweetness",
        options=[
            ModifierOption(id="less", display_name="Less sugar", display_order=2),
            ModifierOption(id="normal", display_name="Normal", display_order=1),
        ],
    )

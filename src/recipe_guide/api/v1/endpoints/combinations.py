"""Modifier combination endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_guide.core.config import Settings, get_settings
from recipe_guide.core.exceptions import BadRequestError
from recipe_guide.observability.logging import get_logger
from recipe_guide.schemas.guide import (
    CopyPlanRequest,
    ResolveCombinationsRequest,
    ResolveCombinationsResponse,
    SuggestGroupsRequest,
    SuggestGroupsResponse,
)
from recipe_guide.schemas.planning import CopyPlan
from recipe_guide.services.combinations import (
    CombinationResolution,
    InvalidGroupSelectionError,
    RecipeCopyError,
    annotate_recipes,
    estimate_combination_count,
    generate_combinations,
    plan_copy_to_combinations,
    restore_combinations,
    select_groups,
    suggest_selected_group_ids,
    summarize_coverage,
)


logger = get_logger(__name__)

router = APIRouter(prefix="/combinations", tags=["Combinations"])


def _resolve(
    body: ResolveCombinationsRequest,
    settings: Settings,
) -> tuple[CombinationResolution, int]:
    """Resolve the request's selection; returns the resolution and estimated size.

    Supplied combinations are restored and matched as given, so their
    back-references are honoured; otherwise the product is generated.
    """
    lenient = body.lenient
    if lenient is None:
        lenient = settings.recipe_guide.lenient_empty_groups

    try:
        selected = select_groups(body.modifier_groups, body.selected_group_ids)
        supplied = None
        if body.combinations is not None:
            supplied = restore_combinations(body.combinations, selected)
    except InvalidGroupSelectionError as e:
        raise BadRequestError(str(e), error="INVALID_GROUP_SELECTION") from e

    if supplied is not None:
        estimated = len(supplied)
    else:
        estimated = estimate_combination_count(selected, lenient=lenient)

    if estimated > settings.recipe_guide.combination_warning_threshold:
        logger.warning(
            "Large combination product requested",
            estimated_count=estimated,
            threshold=settings.recipe_guide.combination_warning_threshold,
        )

    combinations = supplied
    if combinations is None:
        combinations = generate_combinations(selected, lenient=lenient)
    return annotate_recipes(combinations, body.recipes), estimated


@router.post(
    "/resolve",
    response_model=ResolveCombinationsResponse,
    summary="List modifier combinations with their recipes",
    description=(
        "Enumerates every combination of the selected modifier groups in a "
        "stable display order and marks which ones already have a recipe. "
        "Duplicate recipe condition sets are reported in ``warnings``."
    ),
)
async def resolve_item_combinations(
    body: ResolveCombinationsRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ResolveCombinationsResponse:
    """Resolve combinations for the selected groups."""
    resolution, estimated = _resolve(body, settings)
    return ResolveCombinationsResponse(
        combinations=resolution.combinations,
        warnings=resolution.warnings,
        summary=summarize_coverage(resolution.combinations),
        estimated_count=estimated,
        exceeds_warning_threshold=estimated
        > settings.recipe_guide.combination_warning_threshold,
    )


@router.post(
    "/suggest-groups",
    response_model=SuggestGroupsResponse,
    summary="Suggest which modifier groups to combine",
)
async def suggest_groups(
    body: SuggestGroupsRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> SuggestGroupsResponse:
    """Preselect the groups existing recipes use, or all groups for a new item."""
    group_ids = suggest_selected_group_ids(body.modifier_groups, body.recipes)
    selected = set(group_ids)
    estimated = estimate_combination_count(
        [g for g in body.modifier_groups if g.id in selected],
        lenient=settings.recipe_guide.lenient_empty_groups,
    )
    return SuggestGroupsResponse(
        selected_group_ids=group_ids,
        estimated_count=estimated,
        exceeds_warning_threshold=estimated
        > settings.recipe_guide.combination_warning_threshold,
    )


@router.post(
    "/copy-plan",
    response_model=CopyPlan,
    summary="Plan copying a recipe onto the other combinations",
)
async def copy_plan(
    body: CopyPlanRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> CopyPlan:
    """List the recipes to create or overwrite when copying ``sourceRecipe``."""
    resolution, _ = _resolve(body, settings)
    try:
        return plan_copy_to_combinations(body.source_recipe, resolution.combinations)
    except RecipeCopyError as e:
        raise BadRequestError(str(e), error="RECIPE_NOT_COPYABLE") from e

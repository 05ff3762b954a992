"""Helpers the host uses around combination resolution.

Covers choosing which groups to combine, estimating how large the product
will be, summarizing recipe coverage and planning a bulk copy of one recipe
onto the other combinations.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from recipe_guide.observability.logging import get_logger
from recipe_guide.schemas.enums import CopyAction
from recipe_guide.schemas.planning import CopyPlan, CopyTarget, CoverageSummary
from recipe_guide.schemas.recipe import ModifierCondition
from recipe_guide.services.combinations.constants import RECIPE_NAME_SEPARATOR
from recipe_guide.services.combinations.exceptions import RecipeCopyError
from recipe_guide.services.encoding.editor import renumber


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_guide.schemas.modifier import ModifierCombination, ModifierGroup
    from recipe_guide.schemas.recipe import Recipe

logger = get_logger(__name__)


def suggest_selected_group_ids(
    modifier_groups: Sequence[ModifierGroup],
    recipes: Sequence[Recipe],
) -> list[str]:
    """Groups to preselect for an item.

    Groups already used by a recipe's conditions, in first-seen order;
    every group when no recipe narrows the choice yet.
    """
    attached = {group.id for group in modifier_groups}
    used: list[str] = []
    for recipe in recipes:
        for condition in recipe.modifier_conditions:
            group_id = condition.modifier_group_id
            if group_id in attached and group_id not in used:
                used.append(group_id)
    if used:
        return used
    return [group.id for group in modifier_groups]


def estimate_combination_count(
    groups: Sequence[ModifierGroup],
    *,
    lenient: bool = False,
) -> int:
    """Product size for ``groups``.

    A group without options empties the product in strict mode and counts
    as one placeholder entry in lenient mode.
    """
    if lenient:
        return math.prod(len(group.options) or 1 for group in groups)
    return math.prod(len(group.options) for group in groups)


def summarize_coverage(combinations: Sequence[ModifierCombination]) -> CoverageSummary:
    configured = sum(1 for c in combinations if c.has_recipe)
    return CoverageSummary(
        total=len(combinations),
        configured=configured,
        unconfigured=len(combinations) - configured,
    )


def combination_name(combination: ModifierCombination) -> str:
    """Recipe name derived from the combination's option names."""
    return RECIPE_NAME_SEPARATOR.join(o.display_name for o in combination.options)


def plan_copy_to_combinations(
    source: Recipe,
    combinations: Sequence[ModifierCombination],
) -> CopyPlan:
    """Plan copying ``source`` onto every other combination.

    Unconfigured combinations get a new recipe, configured ones have their
    recipe overwritten. Steps are copied with display orders renumbered by
    position and the print code is kept verbatim.

    Raises:
        RecipeCopyError: The source recipe has no steps.
    """
    if not source.steps:
        raise RecipeCopyError(source.id, "recipe has no steps")

    steps = renumber(source.steps)
    targets: list[CopyTarget] = []
    for combination in combinations:
        if combination.recipe is not None and combination.recipe.id == source.id:
            continue
        configured = combination.has_recipe and combination.recipe is not None
        targets.append(
            CopyTarget(
                combination_id=combination.id,
                action=CopyAction.UPDATE if configured else CopyAction.CREATE,
                recipe_id=combination.recipe.id if configured else None,
                name=combination_name(combination),
                modifier_conditions=[
                    ModifierCondition(
                        modifier_group_id=opt.modifier_group_id,
                        modifier_option_id=opt.modifier_option_id,
                    )
                    for opt in combination.options
                    if opt.modifier_option_id is not None
                ],
                print_code=source.print_code,
                steps=steps,
            )
        )

    update_count = sum(1 for t in targets if t.action == CopyAction.UPDATE)
    logger.info(
        "Planned recipe copy",
        source_recipe_id=source.id,
        target_count=len(targets),
        update_count=update_count,
    )
    return CopyPlan(
        source_recipe_id=source.id,
        targets=targets,
        create_count=len(targets) - update_count,
        update_count=update_count,
    )

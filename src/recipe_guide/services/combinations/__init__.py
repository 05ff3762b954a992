"""Modifier combination package.

Enumerates option combinations for an item, orders them and matches them
against authored recipes.
"""

from recipe_guide.services.combinations.exceptions import (
    CombinationError,
    InvalidGroupSelectionError,
    RecipeCopyError,
)
from recipe_guide.services.combinations.planning import (
    combination_name,
    estimate_combination_count,
    plan_copy_to_combinations,
    suggest_selected_group_ids,
    summarize_coverage,
)
from recipe_guide.services.combinations.resolver import (
    CombinationResolution,
    annotate_recipes,
    generate_combinations,
    match_recipes,
    resolve,
    resolve_combinations,
    restore_combinations,
    select_groups,
    sort_combinations,
)


__all__ = [
    "CombinationError",
    "CombinationResolution",
    "InvalidGroupSelectionError",
    "RecipeCopyError",
    "annotate_recipes",
    "combination_name",
    "estimate_combination_count",
    "generate_combinations",
    "match_recipes",
    "plan_copy_to_combinations",
    "resolve",
    "resolve_combinations",
    "restore_combinations",
    "select_groups",
    "sort_combinations",
    "suggest_selected_group_ids",
    "summarize_coverage",
]

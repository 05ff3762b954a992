"""Combination resolver.

Enumerates every way of picking one option from each selected modifier
group, orders the result deterministically and pairs each combination with
the recipe authored for it.

Ordering walks the groups in selection order. For each group the chosen
option's ``display_order`` decides first (missing orders sort last), then
its display name; the first group that differs settles the comparison.
"""

from __future__ import annotations

import itertools
import unicodedata
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from recipe_guide.observability.logging import get_logger
from recipe_guide.schemas.enums import AmbiguityReason
from recipe_guide.schemas.modifier import (
    AmbiguousRecipeMatch,
    CombinationOption,
    ModifierCombination,
)
from recipe_guide.services.combinations.constants import (
    COMBINATION_ID_SEPARATOR,
    DEFAULT_COMBINATION_ID,
    ID_ESCAPE,
    PAIR_SEPARATOR,
    PLACEHOLDER_DISPLAY_NAME,
    UNORDERED_POSITION,
)
from recipe_guide.services.combinations.exceptions import InvalidGroupSelectionError


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_guide.schemas.modifier import ModifierGroup, SuppliedCombination
    from recipe_guide.schemas.recipe import Recipe

logger = get_logger(__name__)


@dataclass(frozen=True)
class CombinationResolution:
    """Ordered combinations plus any ambiguity warnings raised while matching."""

    combinations: list[ModifierCombination]
    warnings: list[AmbiguousRecipeMatch] = field(default_factory=list)


def collation_key(name: str) -> tuple[str, str]:
    """Sort key comparing names case- and accent-insensitively first.

    The raw name breaks ties so the order stays total and deterministic.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return (folded, name)


def _escape_id_part(value: str) -> str:
    # The escape character itself must be replaced first
    for char in (ID_ESCAPE, PAIR_SEPARATOR, COMBINATION_ID_SEPARATOR):
        value = value.replace(char, ID_ESCAPE + char)
    return value


def combination_id(options: Sequence[CombinationOption]) -> str:
    """Deterministic id built from the chosen ``group:option`` pairs.

    Separator characters inside ids are backslash-escaped, so distinct
    choices never share an id.
    """
    if not options:
        return DEFAULT_COMBINATION_ID
    return COMBINATION_ID_SEPARATOR.join(
        _escape_id_part(o.modifier_group_id)
        + PAIR_SEPARATOR
        + _escape_id_part(o.modifier_option_id or "")
        for o in options
    )


def select_groups(
    modifier_groups: Sequence[ModifierGroup],
    selected_group_ids: Sequence[str],
) -> list[ModifierGroup]:
    """Return the selected groups in selection order.

    Raises:
        InvalidGroupSelectionError: An id is unknown or selected twice.
    """
    by_id = {group.id: group for group in modifier_groups}
    selected: list[ModifierGroup] = []
    seen: set[str] = set()
    for group_id in selected_group_ids:
        if group_id in seen:
            raise InvalidGroupSelectionError(group_id, "selected more than once")
        group = by_id.get(group_id)
        if group is None:
            raise InvalidGroupSelectionError(group_id, "not attached to the item")
        seen.add(group_id)
        selected.append(group)
    return selected


def _axis(group: ModifierGroup, *, lenient: bool) -> list[CombinationOption]:
    if group.options:
        return [
            CombinationOption(
                modifier_group_id=group.id,
                modifier_option_id=option.id,
                display_name=option.label,
            )
            for option in group.options
        ]
    if lenient:
        return [
            CombinationOption(
                modifier_group_id=group.id,
                modifier_option_id=None,
                display_name=PLACEHOLDER_DISPLAY_NAME,
            )
        ]
    return []


def generate_combinations(
    selected_groups: Sequence[ModifierGroup],
    *,
    lenient: bool = False,
) -> list[ModifierCombination]:
    """Enumerate and order the Cartesian product of the groups' options.

    With no groups selected the result is the single default combination.
    In strict mode a group without options empties the product; in lenient
    mode it contributes one placeholder entry instead.
    """
    if not selected_groups:
        return [ModifierCombination(id=DEFAULT_COMBINATION_ID, options=[])]

    axes = [_axis(group, lenient=lenient) for group in selected_groups]
    combinations = [
        ModifierCombination(id=combination_id(chosen), options=list(chosen))
        for chosen in itertools.product(*axes)
    ]
    logger.debug(
        "Generated modifier combinations",
        group_count=len(selected_groups),
        combination_count=len(combinations),
        lenient=lenient,
    )
    return sort_combinations(combinations, selected_groups)


def sort_combinations(
    combinations: Sequence[ModifierCombination],
    selected_groups: Sequence[ModifierGroup],
) -> list[ModifierCombination]:
    """Order combinations group by group in selection order (stable)."""

    def key(combination: ModifierCombination) -> list[tuple[int, int, tuple[str, str]]]:
        chosen_by_group = {o.modifier_group_id: o for o in combination.options}
        parts = []
        for group in selected_groups:
            chosen = chosen_by_group.get(group.id)
            if chosen is None:
                # Combinations lacking this group sort after those having it
                parts.append((1, UNORDERED_POSITION, ("", "")))
                continue
            option = group.find_option(chosen.modifier_option_id)
            order = UNORDERED_POSITION
            if option is not None and option.display_order is not None:
                order = option.display_order
            parts.append((0, order, collation_key(chosen.display_name)))
        return parts

    return sorted(combinations, key=key)


def restore_combinations(
    supplied: Sequence[SuppliedCombination],
    selected_groups: Sequence[ModifierGroup],
) -> list[ModifierCombination]:
    """Rebuild host-supplied combinations against the selected groups.

    Options take their display names from the groups and follow selection
    order. Each combination keeps its ``existing_recipe_id`` so the
    back-reference takes part in recipe matching.

    Raises:
        InvalidGroupSelectionError: A combination picks from a group that is
            not selected, picks a group twice or names an unknown option.
    """
    by_id = {group.id: group for group in selected_groups}
    position = {group.id: i for i, group in enumerate(selected_groups)}

    combinations: list[ModifierCombination] = []
    for entry in supplied:
        chosen: dict[str, CombinationOption] = {}
        for condition in entry.options:
            group = by_id.get(condition.modifier_group_id)
            if group is None:
                raise InvalidGroupSelectionError(
                    condition.modifier_group_id, "not among the selected groups"
                )
            if group.id in chosen:
                raise InvalidGroupSelectionError(group.id, "chosen twice in one combination")
            option = group.find_option(condition.modifier_option_id)
            if option is None:
                raise InvalidGroupSelectionError(
                    group.id, f"has no option {condition.modifier_option_id}"
                )
            chosen[group.id] = CombinationOption(
                modifier_group_id=group.id,
                modifier_option_id=option.id,
                display_name=option.label,
            )
        options = sorted(chosen.values(), key=lambda o: position[o.modifier_group_id])
        combinations.append(
            ModifierCombination(
                id=combination_id(options),
                options=options,
                existing_recipe_id=entry.existing_recipe_id,
            )
        )
    return sort_combinations(combinations, selected_groups)


def _match_one(
    combination: ModifierCombination,
    recipes: Sequence[Recipe],
) -> tuple[Recipe | None, AmbiguousRecipeMatch | None]:
    wanted = combination.condition_set()
    matches = [recipe for recipe in recipes if recipe.condition_set() == wanted]

    if combination.existing_recipe_id:
        referenced = next(
            (r for r in recipes if r.id == combination.existing_recipe_id), None
        )
        if referenced is not None:
            warning = None
            if referenced.condition_set() != wanted:
                warning = AmbiguousRecipeMatch(
                    combination_id=combination.id,
                    recipe_ids=[referenced.id, *(r.id for r in matches)],
                    reason=AmbiguityReason.BACK_REFERENCE_MISMATCH,
                )
            return referenced, warning

    if not matches:
        return None, None
    warning = None
    if len(matches) > 1:
        warning = AmbiguousRecipeMatch(
            combination_id=combination.id,
            recipe_ids=[r.id for r in matches],
            reason=AmbiguityReason.DUPLICATE_CONDITIONS,
        )
    return matches[0], warning


def annotate_recipes(
    combinations: Sequence[ModifierCombination],
    recipes: Sequence[Recipe],
) -> CombinationResolution:
    """Attach the matching recipe to each combination and collect warnings.

    A back-reference supplied by the combination source wins when it
    resolves; otherwise the combination's options must equal a recipe's
    conditions as a set. When several recipes qualify the first in
    ``recipes`` order is used and the ambiguity is reported.
    """
    annotated: list[ModifierCombination] = []
    warnings: list[AmbiguousRecipeMatch] = []
    for combination in combinations:
        recipe, warning = _match_one(combination, recipes)
        if warning is not None:
            logger.warning(
                "Ambiguous recipe match",
                combination_id=warning.combination_id,
                recipe_ids=warning.recipe_ids,
                reason=warning.reason,
            )
            warnings.append(warning)
        annotated.append(
            combination.model_copy(update={"has_recipe": recipe is not None, "recipe": recipe})
        )
    return CombinationResolution(combinations=annotated, warnings=warnings)


def match_recipes(
    combinations: Sequence[ModifierCombination],
    recipes: Sequence[Recipe],
) -> list[ModifierCombination]:
    """Return copies of ``combinations`` with ``has_recipe``/``recipe`` set."""
    return annotate_recipes(combinations, recipes).combinations


def resolve(
    modifier_groups: Sequence[ModifierGroup],
    selected_group_ids: Sequence[str],
    existing_recipes: Sequence[Recipe],
    *,
    lenient: bool = False,
) -> CombinationResolution:
    """Generate, order and match combinations, keeping ambiguity warnings."""
    selected = select_groups(modifier_groups, selected_group_ids)
    combinations = generate_combinations(selected, lenient=lenient)
    return annotate_recipes(combinations, existing_recipes)


def resolve_combinations(
    modifier_groups: Sequence[ModifierGroup],
    selected_group_ids: Sequence[str],
    existing_recipes: Sequence[Recipe],
    *,
    lenient: bool = False,
) -> list[ModifierCombination]:
    """Ordered combinations of the selected groups, annotated with recipes."""
    return resolve(
        modifier_groups, selected_group_ids, existing_recipes, lenient=lenient
    ).combinations

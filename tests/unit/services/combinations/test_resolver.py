"""Unit tests for the combination resolver.

Tests cover:
- Cartesian product size and shape
- Deterministic ordering by display order then display name
- Strict and lenient handling of groups without options
- Set-equality recipe matching, back-references and ambiguity warnings
- Restoring host-supplied combinations
"""

from __future__ import annotations

import pytest

from recipe_guide.schemas import (
    AmbiguityReason,
    CombinationOption,
    ModifierCombination,
    ModifierCondition,
    ModifierGroup,
    ModifierOption,
    Recipe,
    SuppliedCombination,
)
from recipe_guide.services.combinations import (
    InvalidGroupSelectionError,
    annotate_recipes,
    generate_combinations,
    match_recipes,
    resolve,
    resolve_combinations,
    restore_combinations,
    select_groups,
)
from recipe_guide.services.combinations.resolver import collation_key, combination_id
from tests.factories.modifier import ModifierGroupFactory, ModifierOptionFactory
from tests.factories.recipe import RecipeFactory


pytestmark = pytest.mark.unit


def _recipe(recipe_id: str, *pairs: tuple[str, str]) -> Recipe:
    return RecipeFactory.build(
        id=recipe_id,
        modifier_conditions=[
            ModifierCondition(modifier_group_id=g, modifier_option_id=o) for g, o in pairs
        ],
    )


def _option_ids(combination: ModifierCombination) -> list[str | None]:
    return [o.modifier_option_id for o in combination.options]


# =============================================================================
# Enumeration
# =============================================================================


class TestGenerateCombinations:
    """Tests for generate_combinations."""

    def test_empty_selection_yields_default_combination(self):
        """Should return exactly one combination without options."""
        combinations = generate_combinations([])

        assert len(combinations) == 1
        assert combinations[0].options == []
        assert combinations[0].id == "default"

    def test_product_size(self):
        """Should return one combination per option tuple."""
        groups = [
            ModifierGroupFactory.build(options=ModifierOptionFactory.batch(2)),
            ModifierGroupFactory.build(options=ModifierOptionFactory.batch(3)),
        ]

        combinations = generate_combinations(groups)

        assert len(combinations) == 6
        assert all(len(c.options) == 2 for c in combinations)
        assert len({c.id for c in combinations}) == 6

    def test_options_follow_selection_order(self, size_group, sweetness_group):
        """Should list one option per group in the order groups were selected."""
        combinations = generate_combinations([sweetness_group, size_group])

        for combination in combinations:
            assert [o.modifier_group_id for o in combination.options] == ["sweet", "size"]

    def test_carries_display_names(self, size_group):
        """Should copy each option's display name onto the combination."""
        combinations = generate_combinations([size_group])

        assert [c.options[0].display_name for c in combinations] == [
            "Small",
            "Medium",
            "Large",
        ]

    def test_strict_mode_empty_group_collapses_product(self, size_group):
        """Should yield no combinations when a selected group has no options."""
        empty = ModifierGroup(id="extras", options=[])

        assert generate_combinations([size_group, empty]) == []

    def test_lenient_mode_adds_placeholder(self, size_group):
        """Should contribute a single placeholder for a group without options."""
        empty = ModifierGroup(id="extras", options=[])

        combinations = generate_combinations([size_group, empty], lenient=True)

        assert len(combinations) == 3
        placeholder = combinations[0].options[1]
        assert placeholder.modifier_group_id == "extras"
        assert placeholder.modifier_option_id is None
        assert placeholder.display_name == "(none)"

    def test_combination_ids_are_deterministic(self, size_group, sweetness_group):
        """Should build ids from the chosen group:option pairs."""
        combinations = generate_combinations([size_group, sweetness_group])

        assert combinations[0].id == "size:small|sweet:normal"


# =============================================================================
# Ordering
# =============================================================================


class TestOrdering:
    """Tests for deterministic combination order."""

    def test_orders_group_by_group(self, size_group, sweetness_group):
        """Should sort by the first group, then the second."""
        combinations = generate_combinations([size_group, sweetness_group])

        assert [_option_ids(c) for c in combinations] == [
            ["small", "normal"],
            ["small", "less"],
            ["medium", "normal"],
            ["medium", "less"],
            ["large", "normal"],
            ["large", "less"],
        ]

    def test_selection_order_changes_sort_priority(self, size_group, sweetness_group):
        """Should let the first selected group dominate the order."""
        combinations = generate_combinations([sweetness_group, size_group])

        assert [_option_ids(c) for c in combinations][:3] == [
            ["normal", "small"],
            ["normal", "medium"],
            ["normal", "large"],
        ]

    def test_lower_display_order_sorts_first(self):
        """Should place every displayOrder 1 combination before displayOrder 2."""
        first = ModifierGroup(
            id="g1",
            options=[
                ModifierOption(id="b", display_name="B", display_order=2),
                ModifierOption(id="a", display_name="A", display_order=1),
            ],
        )
        second = ModifierGroupFactory.build(id="g2", options=ModifierOptionFactory.batch(4))

        combinations = generate_combinations([first, second])

        heads = [c.options[0].modifier_option_id for c in combinations]
        assert heads == ["a"] * 4 + ["b"] * 4

    def test_missing_display_order_sorts_last(self):
        """Should treat a missing display order as the largest value."""
        group = ModifierGroup(
            id="g",
            options=[
                ModifierOption(id="none", display_name="Aardvark"),
                ModifierOption(id="big", display_name="Zebra", display_order=1000),
            ],
        )

        combinations = generate_combinations([group])

        assert [_option_ids(c) for c in combinations] == [["big"], ["none"]]

    def test_equal_display_order_breaks_tie_by_name(self):
        """Should compare display names when display orders are equal."""
        group = ModifierGroup(
            id="milk",
            options=[
                ModifierOption(id="soy", display_name="soy", display_order=1),
                ModifierOption(id="oat", display_name="Oat", display_order=1),
                ModifierOption(id="almond", display_name="Álmond", display_order=1),
            ],
        )

        combinations = generate_combinations([group])

        assert [_option_ids(c) for c in combinations] == [["almond"], ["oat"], ["soy"]]

    def test_falls_back_to_option_name(self):
        """Should use the option name when it has no display name."""
        group = ModifierGroup(
            id="g",
            options=[ModifierOption(id="x", name="Extra"), ModifierOption(id="l", name="Lite")],
        )

        combinations = generate_combinations([group])

        assert [c.options[0].display_name for c in combinations] == ["Extra", "Lite"]

    def test_full_ties_keep_input_order(self):
        """Should keep options with equal display order and name in input order."""
        options = [
            ModifierOption(id="first", display_name="Shot", display_order=1),
            ModifierOption(id="second", display_name="Shot", display_order=1),
        ]

        forward = generate_combinations([ModifierGroup(id="g", options=options)])
        backward = generate_combinations([ModifierGroup(id="g", options=options[::-1])])

        assert [_option_ids(c) for c in forward] == [["first"], ["second"]]
        assert [_option_ids(c) for c in backward] == [["second"], ["first"]]


def test_collation_key_ignores_case_and_accents():
    """Should compare folded names first and raw names second."""
    assert collation_key("Crème") < collation_key("cremf")
    assert collation_key("a") != collation_key("A")


def test_combination_id_for_no_options():
    """Should name the empty combination 'default'."""
    assert combination_id([]) == "default"


def test_combination_id_escapes_separators():
    """Should give distinct ids when group or option ids contain separators."""

    def chosen(group_id: str, option_id: str) -> CombinationOption:
        return CombinationOption(
            modifier_group_id=group_id, modifier_option_id=option_id, display_name=option_id
        )

    left = combination_id([chosen("a:b", "c")])
    right = combination_id([chosen("a", "b:c")])

    assert left == "a\\:b:c"
    assert right == "a:b\\:c"
    assert combination_id([chosen("g", "o|h:p")]) != combination_id(
        [chosen("g", "o"), chosen("h", "p")]
    )
    assert combination_id([chosen("g", "o\\")]) == "g:o\\\\"


# =============================================================================
# Group selection
# =============================================================================


class TestSelectGroups:
    """Tests for select_groups."""

    def test_returns_groups_in_selection_order(self, size_group, sweetness_group):
        """Should follow the order of the selected ids, not the item's order."""
        selected = select_groups([size_group, sweetness_group], ["sweet", "size"])

        assert [g.id for g in selected] == ["sweet", "size"]

    def test_rejects_unknown_group(self, size_group):
        """Should refuse ids that are not attached to the item."""
        with pytest.raises(InvalidGroupSelectionError) as exc_info:
            select_groups([size_group], ["temperature"])

        assert exc_info.value.group_id == "temperature"

    def test_rejects_duplicate_group(self, size_group):
        """Should refuse selecting a group twice."""
        with pytest.raises(InvalidGroupSelectionError, match="more than once"):
            select_groups([size_group], ["size", "size"])


# =============================================================================
# Recipe matching
# =============================================================================


class TestMatchRecipes:
    """Tests for recipe matching."""

    def test_exact_set_match_only(self):
        """Should match only the combination whose options equal the conditions."""
        g1 = ModifierGroup(id="g1", options=[ModifierOption(id="o1", display_order=1)])
        g2 = ModifierGroup(
            id="g2",
            options=[
                ModifierOption(id="o2", display_order=1),
                ModifierOption(id="o3", display_order=2),
            ],
        )
        recipe = _recipe("r1", ("g1", "o1"), ("g2", "o2"))

        combinations = match_recipes(generate_combinations([g1, g2]), [recipe])

        by_id = {c.id: c for c in combinations}
        assert by_id["g1:o1|g2:o2"].has_recipe is True
        assert by_id["g1:o1|g2:o2"].recipe.id == "r1"
        assert by_id["g1:o1|g2:o3"].has_recipe is False
        assert by_id["g1:o1|g2:o3"].recipe is None

    def test_condition_order_is_irrelevant(self, size_group, sweetness_group):
        """Should compare conditions as an unordered set."""
        recipe = _recipe("r1", ("sweet", "less"), ("size", "small"))

        combinations = resolve_combinations(
            [size_group, sweetness_group], ["size", "sweet"], [recipe]
        )

        matched = [c.id for c in combinations if c.has_recipe]
        assert matched == ["size:small|sweet:less"]

    def test_partial_overlap_is_not_a_match(self, size_group, sweetness_group):
        """Should not match a recipe scoped to only one of the groups."""
        recipe = _recipe("r1", ("size", "small"))

        combinations = resolve_combinations(
            [size_group, sweetness_group], ["size", "sweet"], [recipe]
        )

        assert not any(c.has_recipe for c in combinations)

    def test_default_recipe_matches_default_combination(self):
        """Should match a recipe without conditions to the empty selection."""
        recipe = _recipe("base")

        combinations = resolve_combinations([], [], [recipe])

        assert combinations[0].has_recipe is True
        assert combinations[0].recipe.id == "base"

    def test_placeholder_is_ignored_when_matching(self, size_group):
        """Should match lenient placeholders as if the group were not selected."""
        empty = ModifierGroup(id="extras", options=[])
        recipe = _recipe("r1", ("size", "small"))

        combinations = resolve_combinations(
            [size_group, empty], ["size", "extras"], [recipe], lenient=True
        )

        assert combinations[0].recipe.id == "r1"

    def test_input_combinations_unchanged(self, size_group):
        """Should return annotated copies."""
        combinations = generate_combinations([size_group])

        match_recipes(combinations, [_recipe("r1", ("size", "small"))])

        assert not any(c.has_recipe for c in combinations)


class TestAmbiguity:
    """Tests for ambiguous matches."""

    def test_duplicate_conditions_first_recipe_wins(self, size_group):
        """Should pick the first recipe in list order and warn."""
        recipes = [_recipe("r1", ("size", "small")), _recipe("r2", ("size", "small"))]

        resolution = resolve([size_group], ["size"], recipes)

        assert resolution.combinations[0].recipe.id == "r1"
        assert len(resolution.warnings) == 1
        warning = resolution.warnings[0]
        assert warning.combination_id == "size:small"
        assert warning.recipe_ids == ["r1", "r2"]
        assert warning.reason == AmbiguityReason.DUPLICATE_CONDITIONS

    def test_back_reference_wins(self, size_group):
        """Should resolve an explicit back-reference before set matching."""
        recipes = [_recipe("r1", ("size", "small")), _recipe("r2", ("size", "small"))]
        combination = generate_combinations([size_group])[0].model_copy(
            update={"existing_recipe_id": "r2"}
        )

        resolution = annotate_recipes([combination], recipes)

        assert resolution.combinations[0].recipe.id == "r2"
        assert resolution.warnings == []

    def test_back_reference_mismatch_warns(self, size_group):
        """Should keep the back-reference but warn when conditions disagree."""
        recipes = [_recipe("r1", ("size", "small")), _recipe("r9", ("size", "large"))]
        combination = generate_combinations([size_group])[0].model_copy(
            update={"existing_recipe_id": "r9"}
        )

        resolution = annotate_recipes([combination], recipes)

        assert resolution.combinations[0].recipe.id == "r9"
        assert resolution.warnings[0].reason == AmbiguityReason.BACK_REFERENCE_MISMATCH
        assert resolution.warnings[0].recipe_ids == ["r9", "r1"]

    def test_unresolved_back_reference_falls_back_to_sets(self, size_group):
        """Should fall back to set matching when the referenced id is unknown."""
        combination = generate_combinations([size_group])[0].model_copy(
            update={"existing_recipe_id": "gone"}
        )

        resolution = annotate_recipes([combination], [_recipe("r1", ("size", "small"))])

        assert resolution.combinations[0].recipe.id == "r1"
        assert resolution.warnings == []


# =============================================================================
# Supplied combinations
# =============================================================================


class TestRestoreCombinations:
    """Tests for restore_combinations."""

    def test_orders_and_names_supplied_combinations(self, size_group, sweetness_group):
        """Should use group display names and the usual combination order."""
        supplied = [
            SuppliedCombination(
                options=[
                    ModifierCondition(modifier_group_id="sweet", modifier_option_id="less"),
                    ModifierCondition(modifier_group_id="size", modifier_option_id="large"),
                ],
            ),
            SuppliedCombination(
                options=[
                    ModifierCondition(modifier_group_id="size", modifier_option_id="small"),
                    ModifierCondition(modifier_group_id="sweet", modifier_option_id="normal"),
                ],
                existing_recipe_id="r1",
            ),
        ]

        combinations = restore_combinations(supplied, [size_group, sweetness_group])

        assert [c.id for c in combinations] == ["size:small|sweet:normal", "size:large|sweet:less"]
        assert [o.display_name for o in combinations[1].options] == ["Large", "Less sugar"]
        assert combinations[0].existing_recipe_id == "r1"
        assert combinations[1].existing_recipe_id is None

    def test_back_reference_survives_matching(self, size_group):
        """Should let the supplied back-reference pick the recipe."""
        supplied = [
            SuppliedCombination(
                options=[ModifierCondition(modifier_group_id="size", modifier_option_id="small")],
                existing_recipe_id="r2",
            )
        ]
        recipes = [_recipe("r1", ("size", "small")), _recipe("r2", ("size", "small"))]

        resolution = annotate_recipes(restore_combinations(supplied, [size_group]), recipes)

        assert resolution.combinations[0].recipe.id == "r2"
        assert resolution.warnings == []

    def test_rejects_unselected_group(self, size_group):
        """Should refuse options from a group outside the selection."""
        supplied = [
            SuppliedCombination(
                options=[ModifierCondition(modifier_group_id="sweet", modifier_option_id="less")]
            )
        ]

        with pytest.raises(InvalidGroupSelectionError) as exc_info:
            restore_combinations(supplied, [size_group])

        assert exc_info.value.group_id == "sweet"

    def test_rejects_unknown_option(self, size_group):
        """Should refuse an option the group does not offer."""
        supplied = [
            SuppliedCombination(
                options=[ModifierCondition(modifier_group_id="size", modifier_option_id="huge")]
            )
        ]

        with pytest.raises(InvalidGroupSelectionError, match="has no option huge"):
            restore_combinations(supplied, [size_group])

    def test_rejects_group_chosen_twice(self, size_group):
        """Should refuse two options from one group in a single combination."""
        supplied = [
            SuppliedCombination(
                options=[
                    ModifierCondition(modifier_group_id="size", modifier_option_id="small"),
                    ModifierCondition(modifier_group_id="size", modifier_option_id="large"),
                ]
            )
        ]

        with pytest.raises(InvalidGroupSelectionError, match="chosen twice"):
            restore_combinations(supplied, [size_group])

"""Modifier group, option and combination schemas."""

from __future__ import annotations

from pydantic import Field

from recipe_guide.schemas.base import APIRequest, APIResponse
from recipe_guide.schemas.enums import AmbiguityReason
from recipe_guide.schemas.recipe import ModifierCondition, Recipe


class ModifierOption(APIRequest):
    """One concrete choice within a modifier group."""

    id: str
    name: str | None = None
    display_name: str | None = None
    display_order: int | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name or ""


class ModifierGroup(APIRequest):
    """A customizable choice axis attached to an item, e.g. "Size"."""

    id: str
    name: str | None = None
    display_name: str | None = None
    options: list[ModifierOption] = Field(default_factory=list)

    def find_option(self, option_id: str | None) -> ModifierOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class CombinationOption(APIResponse):
    """The option chosen for one group within a combination.

    ``modifier_option_id`` is ``None`` only for the placeholder a group
    without options contributes in lenient mode.
    """

    modifier_group_id: str
    modifier_option_id: str | None
    display_name: str


class ModifierCombination(APIResponse):
    """One point in the Cartesian product of the selected groups' options."""

    id: str
    options: list[CombinationOption] = Field(default_factory=list)
    has_recipe: bool = False
    recipe: Recipe | None = None
    existing_recipe_id: str | None = Field(
        default=None,
        description="Recipe id asserted by the combination source, if any",
    )

    def condition_set(self) -> frozenset[tuple[str, str]]:
        """Chosen options as ``(group_id, option_id)`` pairs, placeholders excluded."""
        return frozenset(
            (option.modifier_group_id, option.modifier_option_id)
            for option in self.options
            if option.modifier_option_id is not None
        )


class SuppliedCombination(APIRequest):
    """A combination the host already tracks, optionally pointing at its recipe."""

    options: list[ModifierCondition] = Field(default_factory=list)
    existing_recipe_id: str | None = None


class AmbiguousRecipeMatch(APIResponse):
    """Non-fatal signal that a combination's recipe match is not unique."""

    combination_id: str
    recipe_ids: list[str]
    reason: AmbiguityReason

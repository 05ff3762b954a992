"""Combination resolver exceptions."""

from __future__ import annotations


class CombinationError(Exception):
    """Base exception for combination resolution errors."""


class InvalidGroupSelectionError(CombinationError):
    """Raised when the selected group ids do not describe a usable selection."""

    def __init__(self, group_id: str, reason: str) -> None:
        self.group_id = group_id
        super().__init__(f"Cannot select modifier group {group_id}: {reason}")


class RecipeCopyError(CombinationError):
    """Raised when a recipe cannot be copied onto other combinations."""

    def __init__(self, recipe_id: str, reason: str) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Cannot copy recipe {recipe_id}: {reason}")

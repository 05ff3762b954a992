"""Factory configuration and exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.modifier import ModifierGroupFactory, ModifierOptionFactory
from tests.factories.recipe import RecipeFactory, RecipeStepFactory, StepTypeFactory


__all__ = [
    "ModifierGroupFactory",
    "ModifierOptionFactory",
    "RecipeFactory",
    "RecipeStepFactory",
    "StepTypeFactory",
]

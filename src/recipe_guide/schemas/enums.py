"""Enumeration types for recipe guide schemas."""

from __future__ import annotations

from enum import StrEnum


class StepCategory(StrEnum):
    """Kind of preparation action a step type describes."""

    INGREDIENT = "ingredient"
    EQUIPMENT = "equipment"
    ACTION = "action"


class MoveDirection(StrEnum):
    """Direction a step moves in the editor."""

    UP = "up"
    DOWN = "down"


class AmbiguityReason(StrEnum):
    """Why a combination's recipe match is ambiguous."""

    # Several recipes carry the same condition set
    DUPLICATE_CONDITIONS = "duplicate_conditions"
    # The host back-reference points to a recipe with other conditions
    BACK_REFERENCE_MISMATCH = "back_reference_mismatch"


class CopyAction(StrEnum):
    """What copying a recipe onto a combination does."""

    CREATE = "create"
    UPDATE = "update"


class HealthStatus(StrEnum):
    """Service health states."""

    HEALTHY = "healthy"
    READY = "ready"

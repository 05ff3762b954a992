"""Structural edits on a recipe's step list.

Containment is addressed by array position, so every insert, move or
removal rewrites the ``contained_step_indices`` of the other steps to keep
pointing at the same steps. All operations return a new list and leave the
input untouched; display orders are renumbered to follow array order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_guide.schemas.enums import MoveDirection
from recipe_guide.services.encoding.encoder import check_containment
from recipe_guide.services.encoding.exceptions import StepEditError


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from recipe_guide.schemas.recipe import RecipeStep


def _require_index(steps: Sequence[RecipeStep], index: int) -> None:
    if not 0 <= index < len(steps):
        msg = f"Step {index} does not exist in a list of {len(steps)} steps"
        raise StepEditError(msg)


def _remap(
    steps: Sequence[RecipeStep],
    mapping: Callable[[int], int | None],
) -> list[RecipeStep]:
    """Rewrite containment through ``mapping`` (``None`` drops the entry)."""
    remapped = []
    for step in steps:
        indices = [
            new for new in (mapping(i) for i in step.contained_step_indices) if new is not None
        ]
        remapped.append(step.model_copy(update={"contained_step_indices": indices}))
    return remapped


def renumber(steps: Sequence[RecipeStep]) -> list[RecipeStep]:
    """Set every step's ``display_order`` to its position + 1."""
    return [
        step.model_copy(update={"display_order": position})
        for position, step in enumerate(steps, start=1)
    ]


def insert_step(
    steps: Sequence[RecipeStep],
    step: RecipeStep,
    position: int | None = None,
) -> list[RecipeStep]:
    """Insert ``step`` at ``position`` (append when omitted).

    The new step's own containment is read against the resulting list.
    """
    if position is None:
        position = len(steps)
    if not 0 <= position <= len(steps):
        msg = f"Cannot insert at position {position} in a list of {len(steps)} steps"
        raise StepEditError(msg)

    shifted = _remap(steps, lambda i: i + 1 if i >= position else i)
    shifted.insert(position, step)
    result = renumber(shifted)
    check_containment(result)
    return result


def move_step(
    steps: Sequence[RecipeStep],
    index: int,
    direction: MoveDirection | str,
) -> list[RecipeStep]:
    """Swap the step at ``index`` with its neighbour above or below."""
    _require_index(steps, index)
    target = index - 1 if MoveDirection(direction) == MoveDirection.UP else index + 1
    if not 0 <= target < len(steps):
        msg = f"Step {index} cannot move {direction}"
        raise StepEditError(msg)

    def swap(i: int) -> int:
        if i == index:
            return target
        if i == target:
            return index
        return i

    moved = _remap(steps, swap)
    moved[index], moved[target] = moved[target], moved[index]
    return renumber(moved)


def remove_step(steps: Sequence[RecipeStep], index: int) -> list[RecipeStep]:
    """Remove the step at ``index``.

    References to the removed step disappear from every containment list
    and references past it shift down by one.
    """
    _require_index(steps, index)

    def shift(i: int) -> int | None:
        if i == index:
            return None
        return i - 1 if i > index else i

    remaining = [step for position, step in enumerate(steps) if position != index]
    return renumber(_remap(remaining, shift))


def set_contained_steps(
    steps: Sequence[RecipeStep],
    index: int,
    indices: Sequence[int],
) -> list[RecipeStep]:
    """Replace the containment list of one step and revalidate the structure.

    Raises:
        StepEditError: ``index`` is not a step.
        StepValidationError: The new containment is out of range, lists a
            step twice, contains the step itself or closes a cycle.
    """
    _require_index(steps, index)
    result = list(steps)
    result[index] = steps[index].model_copy(
        update={"contained_step_indices": list(indices)}
    )
    check_containment(result)
    return result

"""Step encoder: compiles recipe steps into a printable code string.

Each step renders as its step type code followed by its instruction. A
container step wraps the codes of the steps it contains::

    [M200 S2]3     container "[" / "]" holding M200 and S2, instruction 3

Any step may list contained steps, but only a container renders them; a
non-container keeps its own code. Contained steps never print at the top
level; the remaining top-level steps are joined by single spaces in display
order to form the recipe's print code. The exact character sequence is
what ticket printers receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_guide.observability.logging import get_logger
from recipe_guide.schemas.recipe import StepPreview
from recipe_guide.services.encoding.exceptions import (
    CyclicContainmentError,
    InvalidContainmentIndexError,
    SelfContainmentError,
    StepValidationError,
    UnknownStepTypeError,
)


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from recipe_guide.schemas.recipe import Recipe, RecipeStep, StepType

logger = get_logger(__name__)

STEP_SEPARATOR = " "

_UNVISITED, _VISITING, _DONE = 0, 1, 2


@dataclass(frozen=True)
class EncodedSteps:
    """Result of encoding a step list."""

    previews: list[StepPreview]
    print_code: str


def index_step_types(step_types: Iterable[StepType]) -> dict[str, StepType]:
    """Build the ``id -> StepType`` lookup the encoder expects."""
    return {step_type.id: step_type for step_type in step_types}


def check_containment(steps: Sequence[RecipeStep]) -> None:
    """Validate containment structure without consulting a step catalog.

    Raises:
        InvalidContainmentIndexError: Index out of range or listed twice.
        SelfContainmentError: A step contains itself.
        CyclicContainmentError: Containment loops back on itself.
    """
    _check_indices(steps)
    _check_cycles(steps)


def _check_indices(steps: Sequence[RecipeStep]) -> None:
    count = len(steps)
    for index, step in enumerate(steps):
        seen: set[int] = set()
        for contained in step.contained_step_indices:
            if contained == index:
                raise SelfContainmentError(index)
            if not 0 <= contained < count:
                raise InvalidContainmentIndexError(
                    index, contained, f"index out of range for {count} steps"
                )
            if contained in seen:
                raise InvalidContainmentIndexError(index, contained, "listed more than once")
            seen.add(contained)


def _check_cycles(steps: Sequence[RecipeStep]) -> None:
    cycle = find_containment_cycle(steps)
    if cycle is not None:
        raise CyclicContainmentError(cycle)


def find_containment_cycle(steps: Sequence[RecipeStep]) -> list[int] | None:
    """Return the indices along a containment cycle, or ``None`` if acyclic.

    Out-of-range indices are ignored here; :func:`check_containment`
    reports them before cycle detection runs.
    """
    count = len(steps)
    state = [_UNVISITED] * count
    path: list[int] = []

    def visit(index: int) -> list[int] | None:
        state[index] = _VISITING
        path.append(index)
        for contained in steps[index].contained_step_indices:
            if not 0 <= contained < count:
                continue
            if state[contained] == _VISITING:
                start = path.index(contained)
                return [*path[start:], contained]
            if state[contained] == _UNVISITED:
                cycle = visit(contained)
                if cycle is not None:
                    return cycle
        path.pop()
        state[index] = _DONE
        return None

    for index in range(count):
        if state[index] == _UNVISITED:
            cycle = visit(index)
            if cycle is not None:
                return cycle
    return None


def _validate(steps: Sequence[RecipeStep], step_types: Mapping[str, StepType]) -> None:
    for index, step in enumerate(steps):
        if step.step_type_id not in step_types:
            raise UnknownStepTypeError(index, step.step_type_id)

    _check_indices(steps)
    _check_cycles(steps)


def contained_indices(steps: Sequence[RecipeStep]) -> set[int]:
    """Indices referenced by any step's containment list."""
    return {i for step in steps for i in step.contained_step_indices}


def encode_steps(
    steps: Sequence[RecipeStep],
    step_types: Mapping[str, StepType],
) -> EncodedSteps:
    """Encode ``steps`` into per-step previews and the recipe print code.

    Args:
        steps: Steps in array order; containment refers to these positions.
        step_types: Step type catalog keyed by id.

    Returns:
        EncodedSteps with one preview per step and the final print code.

    Raises:
        StepValidationError: The step configuration is malformed. No
            partial result is produced.
    """
    try:
        _validate(steps, step_types)
    except StepValidationError as e:
        logger.warning(
            "Rejected step configuration",
            kind=str(e.kind),
            step_index=e.step_index,
            error=str(e),
        )
        raise

    codes: dict[int, str] = {}

    def code_for(index: int) -> str:
        if index in codes:
            return codes[index]
        step = steps[index]
        step_type = step_types[step.step_type_id]
        instruction = step.instruction or ""
        if step_type.is_container:
            inner = STEP_SEPARATOR.join(code_for(i) for i in step.contained_step_indices)
            prefix = step_type.container_prefix or step_type.code
            suffix = step_type.container_suffix or step_type.code
            code = f"{prefix}{inner}{suffix}{instruction}"
        else:
            code = f"{step_type.code}{instruction}"
        codes[index] = code
        return code

    nested = contained_indices(steps)
    previews = [
        StepPreview(index=i, generated_code=code_for(i), is_contained=i in nested)
        for i in range(len(steps))
    ]

    top_level = sorted(
        (i for i in range(len(steps)) if i not in nested),
        key=lambda i: (_display_order(steps[i], i), i),
    )
    print_code = STEP_SEPARATOR.join(codes[i] for i in top_level)

    logger.debug(
        "Encoded recipe steps",
        step_count=len(steps),
        top_level_count=len(top_level),
    )
    return EncodedSteps(previews=previews, print_code=print_code)


def _display_order(step: RecipeStep, index: int) -> int:
    return step.display_order if step.display_order is not None else index + 1


def refresh_print_code(recipe: Recipe, step_types: Mapping[str, StepType]) -> Recipe:
    """Return a copy of ``recipe`` whose ``print_code`` matches its steps."""
    encoded = encode_steps(recipe.steps, step_types)
    return recipe.model_copy(update={"print_code": encoded.print_code})


def is_printable_code(code: str | None) -> bool:
    """A print code is usable on a ticket only if it is not blank."""
    return bool(code and code.strip())

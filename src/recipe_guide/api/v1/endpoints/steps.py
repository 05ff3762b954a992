"""Step encoding and editing endpoints.

Every editing endpoint applies one structural edit and returns the new
step list re-encoded, so the console always shows a current print code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from recipe_guide.core.exceptions import BadRequestError, UnprocessableRecipeError
from recipe_guide.observability.logging import get_logger
from recipe_guide.schemas.guide import (
    EditStepsResponse,
    EncodeStepsRequest,
    EncodeStepsResponse,
    InsertStepRequest,
    MoveStepRequest,
    RecipePrintCodeResponse,
    RefreshPrintCodeRequest,
    RemoveStepRequest,
    SetContainmentRequest,
)
from recipe_guide.services.encoding import (
    EncodedSteps,
    StepEditError,
    StepValidationError,
    encode_steps,
    index_step_types,
    insert_step,
    is_printable_code,
    move_step,
    refresh_print_code,
    remove_step,
    set_contained_steps,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from recipe_guide.schemas.recipe import RecipeStep, StepType


logger = get_logger(__name__)

router = APIRouter(tags=["Steps"])


def _encode(steps: Sequence[RecipeStep], step_types: Sequence[StepType]) -> EncodedSteps:
    try:
        return encode_steps(steps, index_step_types(step_types))
    except StepValidationError as e:
        raise UnprocessableRecipeError(e) from e


def _apply_edit(
    body: EncodeStepsRequest,
    edit: Callable[[], list[RecipeStep]],
) -> EditStepsResponse:
    try:
        steps = edit()
    except StepEditError as e:
        raise BadRequestError(str(e), error="INVALID_STEP_POSITION") from e
    except StepValidationError as e:
        raise UnprocessableRecipeError(e) from e

    encoded = _encode(steps, body.step_types)
    return EditStepsResponse(
        steps=steps,
        previews=encoded.previews,
        print_code=encoded.print_code,
    )


@router.post(
    "/steps/encode",
    response_model=EncodeStepsResponse,
    summary="Encode recipe steps into a print code",
    responses={
        422: {
            "description": "Malformed step configuration",
            "content": {
                "application/json": {
                    "example": {
                        "error": "CYCLIC_CONTAINMENT",
                        "message": "Containment cycle between steps: 0 -> 1 -> 0",
                    }
                }
            },
        },
    },
)
async def encode(body: EncodeStepsRequest) -> EncodeStepsResponse:
    """Return per-step previews and the print code for ``body.steps``."""
    encoded = _encode(body.steps, body.step_types)
    return EncodeStepsResponse(previews=encoded.previews, print_code=encoded.print_code)


@router.post(
    "/steps/insert",
    response_model=EditStepsResponse,
    summary="Insert a step",
)
async def insert(body: InsertStepRequest) -> EditStepsResponse:
    """Insert a step, shifting containment references past the position."""
    return _apply_edit(body, lambda: insert_step(body.steps, body.step, body.position))


@router.post(
    "/steps/move",
    response_model=EditStepsResponse,
    summary="Move a step up or down",
)
async def move(body: MoveStepRequest) -> EditStepsResponse:
    """Swap a step with its neighbour, keeping containment pointed at the same steps."""
    return _apply_edit(body, lambda: move_step(body.steps, body.index, body.direction))


@router.post(
    "/steps/remove",
    response_model=EditStepsResponse,
    summary="Remove a step",
)
async def remove(body: RemoveStepRequest) -> EditStepsResponse:
    """Remove a step and drop every reference to it."""
    return _apply_edit(body, lambda: remove_step(body.steps, body.index))


@router.post(
    "/steps/containment",
    response_model=EditStepsResponse,
    summary="Set the steps a step contains",
)
async def set_containment(body: SetContainmentRequest) -> EditStepsResponse:
    """Replace one step's containment list after validating it."""
    return _apply_edit(
        body,
        lambda: set_contained_steps(body.steps, body.index, body.contained_step_indices),
    )


@router.post(
    "/recipes/print-code",
    response_model=RecipePrintCodeResponse,
    summary="Recompute a recipe's print code",
)
async def recipe_print_code(body: RefreshPrintCodeRequest) -> RecipePrintCodeResponse:
    """Recompute the stored print code of a recipe from its steps."""
    try:
        recipe = refresh_print_code(body.recipe, index_step_types(body.step_types))
    except StepValidationError as e:
        raise UnprocessableRecipeError(e) from e

    if recipe.print_code != body.recipe.print_code:
        logger.info(
            "Recipe print code changed",
            recipe_id=recipe.id,
            previous=body.recipe.print_code,
            current=recipe.print_code,
        )
    return RecipePrintCodeResponse(
        recipe_id=recipe.id,
        print_code=recipe.print_code,
        printable=is_printable_code(recipe.print_code),
    )

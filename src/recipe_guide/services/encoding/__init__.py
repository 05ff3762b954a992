"""Step encoding package.

Compiles recipe steps into print codes and keeps index-addressed
containment valid across structural edits.
"""

from recipe_guide.services.encoding.editor import (
    insert_step,
    move_step,
    remove_step,
    renumber,
    set_contained_steps,
)
from recipe_guide.services.encoding.encoder import (
    EncodedSteps,
    check_containment,
    encode_steps,
    find_containment_cycle,
    index_step_types,
    is_printable_code,
    refresh_print_code,
)
from recipe_guide.services.encoding.exceptions import (
    CyclicContainmentError,
    InvalidContainmentIndexError,
    SelfContainmentError,
    StepEditError,
    StepEncodingError,
    StepValidationError,
    StepValidationKind,
    UnknownStepTypeError,
)


__all__ = [
    "CyclicContainmentError",
    "EncodedSteps",
    "InvalidContainmentIndexError",
    "SelfContainmentError",
    "StepEditError",
    "StepEncodingError",
    "StepValidationError",
    "StepValidationKind",
    "UnknownStepTypeError",
    "check_containment",
    "encode_steps",
    "find_containment_cycle",
    "index_step_types",
    "insert_step",
    "is_printable_code",
    "move_step",
    "refresh_print_code",
    "remove_step",
    "renumber",
    "set_contained_steps",
]

"""Step encoding exceptions."""

from __future__ import annotations

from enum import StrEnum


class StepValidationKind(StrEnum):
    """Category of a malformed step configuration."""

    UNKNOWN_STEP_TYPE = "UNKNOWN_STEP_TYPE"
    INVALID_CONTAINMENT_INDEX = "INVALID_CONTAINMENT_INDEX"
    SELF_CONTAINMENT = "SELF_CONTAINMENT"
    CYCLIC_CONTAINMENT = "CYCLIC_CONTAINMENT"


class StepEncodingError(Exception):
    """Base exception for step encoding and editing errors."""


class StepValidationError(StepEncodingError):
    """Raised when a step list cannot be encoded.

    Attributes:
        kind: Which invariant was violated.
        step_index: Index of the offending step, when there is one.
    """

    kind: StepValidationKind

    def __init__(self, message: str, *, step_index: int | None = None) -> None:
        self.step_index = step_index
        super().__init__(message)


class UnknownStepTypeError(StepValidationError):
    """Raised when a step references a step type missing from the catalog."""

    kind = StepValidationKind.UNKNOWN_STEP_TYPE

    def __init__(self, step_index: int, step_type_id: str) -> None:
        self.step_type_id = step_type_id
        super().__init__(
            f"Step {step_index} references unknown step type: {step_type_id}",
            step_index=step_index,
        )


class InvalidContainmentIndexError(StepValidationError):
    """Raised when a containment list cannot be honoured as written."""

    kind = StepValidationKind.INVALID_CONTAINMENT_INDEX

    def __init__(self, step_index: int, contained_index: int, reason: str) -> None:
        self.contained_index = contained_index
        super().__init__(
            f"Step {step_index} cannot contain step {contained_index}: {reason}",
            step_index=step_index,
        )


class SelfContainmentError(StepValidationError):
    """Raised when a step lists itself among its contained steps."""

    kind = StepValidationKind.SELF_CONTAINMENT

    def __init__(self, step_index: int) -> None:
        super().__init__(f"Step {step_index} contains itself", step_index=step_index)


class CyclicContainmentError(StepValidationError):
    """Raised when containment forms a cycle.

    ``cycle`` lists the step indices along the cycle, starting and ending
    with the same index.
    """

    kind = StepValidationKind.CYCLIC_CONTAINMENT

    def __init__(self, cycle: list[int]) -> None:
        self.cycle = cycle
        path = " -> ".join(str(i) for i in cycle)
        super().__init__(f"Containment cycle between steps: {path}", step_index=cycle[0])


class StepEditError(StepEncodingError):
    """Raised when an editing operation addresses a position that does not exist."""

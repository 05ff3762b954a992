"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: models accepted from the host (steps, recipes, groups)
    - APIResponse: models produced by the service (previews, combinations)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for data supplied by the host application.

    Extra fields are ignored: the platform API carries many properties
    (timestamps, tenant ids) the recipe guide does not need.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for data produced by the service.

    Extra fields are forbidden so only declared properties are returned.
    """

    model_config = ConfigDict(
        extra="forbid",
    )

"""Base schema classes.

Every schema serializes with camelCase aliases and accepts both camelCase and
snake_case on input.

Usage:
    - APIRequest: incoming request bodies (unknown fields ignored)
    - APIResponse: outgoing response bodies (unknown fields forbidden)
    - ModelOutput: data decoded from text-generation output (unknown fields
      ignored, since the model may invent extra keys)
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
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas."""

    model_config = ConfigDict(extra="ignore")


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas."""

    model_config = ConfigDict(extra="forbid")


class ModelOutput(_BaseSchema):
    """Base class for structures decoded from free-text model output."""

    model_config = ConfigDict(extra="ignore")

"""Strict base model for configuration and option objects."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic model.

    Fields are snake_case in Python and camelCase when dumped by alias,
    so option objects can be read from the same JSON the node tooling uses
    (`maxConcurrency` rather than `max_concurrency`).

    Unknown fields are rejected and values are never coerced across types.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )

    def with_updates(self, **kwargs: Any) -> Self:
        """Return a validated copy with the given fields replaced."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | kwargs))

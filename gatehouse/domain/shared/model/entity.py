"""Base class for mutable domain entities."""

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """An identity-bearing domain object.

    Entities are compared by value like any pydantic model; repositories key
    them by ``id``.
    """

    model_config = ConfigDict(validate_assignment=True)

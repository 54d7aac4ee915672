"""Shared schema base classes for API requests and responses."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


class ORMModel(BaseModel):
    """Base model that supports orm_mode for SQLAlchemy."""

    model_config = {"from_attributes": True}


class CamelModel(ORMModel):
    """Wire format uses camelCase keys; snake_case is accepted on input too."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    """Acknowledgement envelope for mutations that return no resource."""
    success: bool = True
    message: str | None = None


# Surrounding whitespace is stripped before the length checks run.
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TagStr = Annotated[str, StringConstraints(max_length=64)]
PreferenceStr = Annotated[str, StringConstraints(max_length=255)]

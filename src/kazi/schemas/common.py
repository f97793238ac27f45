"""Shared schema building blocks.

Learn: The wire format is camelCase (jobType, employerId, postedDate)
while the Python side stays snake_case. CamelModel wires that up once:
alias_generator produces the camelCase names, populate_by_name lets
tests and services construct models with snake_case too, and FastAPI
serializes responses by alias.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

# Presence check: required text fields must contain something besides spaces.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AckResponse(CamelModel):
    success: bool = True
    message: str

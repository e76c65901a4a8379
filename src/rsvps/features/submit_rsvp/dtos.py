"""DTOs for the RSVP submission feature."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, NonNegativeInt
from pydantic.alias_generators import to_camel

from src.rsvps.dtos import AgeRanges


class ChildrenSubmit(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    # Accepted for compatibility with older forms, always recomputed server-side
    count: NonNegativeInt | None = None
    age_ranges: AgeRanges = Field(default_factory=AgeRanges)


class RSVPSubmitRequest(BaseModel):
    """Request body for an RSVP submission."""

    model_config = ConfigDict(
        populate_by_name=True, alias_generator=to_camel, str_strip_whitespace=True
    )

    code: str = Field(min_length=3)
    name: str = Field(min_length=2)
    email: EmailStr | Literal[""] | None = None
    phone: str | None = None
    attending: bool
    adult_partner: bool = False
    children: ChildrenSubmit = Field(default_factory=ChildrenSubmit)
    message: str | None = Field(default=None, max_length=500)


class RSVPSubmitResponse(BaseModel):
    ok: bool
    message: str

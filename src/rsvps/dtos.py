from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.alias_generators import to_camel


class InvalidInviteCodeError(Exception):
    """Raised when a submission carries an invite code that is not on the allow-list."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__("Unknown invite code")


class MissingContactError(Exception):
    """Raised when neither email nor phone survive normalization."""

    def __init__(self) -> None:
        super().__init__("An email address or a phone number is required")


class AgeRanges(BaseModel):
    """Number of children per age bracket."""

    model_config = ConfigDict(populate_by_name=True)

    age_0_3: NonNegativeInt = Field(default=0, alias="0-3")
    age_4_10: NonNegativeInt = Field(default=0, alias="4-10")
    age_11_17: NonNegativeInt = Field(default=0, alias="11-17")

    def total(self) -> int:
        return self.age_0_3 + self.age_4_10 + self.age_11_17


class Children(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    count: NonNegativeInt = 0
    age_ranges: AgeRanges = Field(default_factory=AgeRanges)

    @classmethod
    def from_age_ranges(cls, age_ranges: AgeRanges) -> "Children":
        """Build children info with the count derived from the brackets."""
        return cls(count=age_ranges.total(), age_ranges=age_ranges)


class RSVPRecord(BaseModel):
    """One stored response per distinct contactable person."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, frozen=True)

    id: str
    created_at: str
    updated_at: str
    code: str
    name: str
    email: str | None = None
    phone: str | None = None
    attending: bool
    adult_partner: bool = False
    children: Children = Field(default_factory=Children)
    message: str | None = None

    @property
    def headcount(self) -> int:
        """People this response brings: the guest, a partner and the children."""
        if not self.attending:
            return 0
        return 1 + int(self.adult_partner) + self.children.count


@dataclass(frozen=True)
class SubmitRSVPResponseDTO:
    """DTO returned by the submission write model."""

    message: str
    attending: bool
    record_id: str
    created: bool


@dataclass(frozen=True)
class RSVPListDTO:
    """DTO returned by the listing read model."""

    items: list[RSVPRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def headcount(self) -> int:
        return sum(item.headcount for item in self.items)

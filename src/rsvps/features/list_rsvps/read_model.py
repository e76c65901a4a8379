"""Read model for the admin RSVP listing."""

from abc import ABC, abstractmethod
from enum import Enum

from src.rsvps.dtos import RSVPListDTO
from src.rsvps.repository.base import RecordStore


class AttendingFilter(str, Enum):
    YES = "yes"
    NO = "no"

    @classmethod
    def parse(cls, value: str | None) -> "AttendingFilter | None":
        """Unknown values mean no filter, like an absent parameter."""
        try:
            return cls(value) if value else None
        except ValueError:
            return None


class RSVPListReadModel(ABC):
    @abstractmethod
    async def list_rsvps(self, attending: AttendingFilter | None = None) -> RSVPListDTO:
        raise NotImplementedError


class StoreRSVPListReadModel(RSVPListReadModel):
    """Listing backed by a RecordStore; ordering is whatever the store returns."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def list_rsvps(self, attending: AttendingFilter | None = None) -> RSVPListDTO:
        records = await self.store.read_all()
        if attending == AttendingFilter.YES:
            records = [record for record in records if record.attending]
        elif attending == AttendingFilter.NO:
            records = [record for record in records if not record.attending]
        return RSVPListDTO(items=records)

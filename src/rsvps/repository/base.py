"""Record store contract shared by the file and spreadsheet backends."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

from src.rsvps.dtos import RSVPRecord


class RecordStoreError(Exception):
    """Raised when the underlying file or remote sheet cannot be read or written."""


class RecordStore(ABC):
    """Persist and query RSVP records keyed by contact identity.

    Backends locate records by position (list index, sheet row) rather than
    by id, since rows edited by hand may carry a blank or duplicated id.
    """

    def __init__(self) -> None:
        # Serialises read-match-write so concurrent submissions cannot lose updates
        self._write_lock = asyncio.Lock()

    @abstractmethod
    async def read_all(self) -> list[RSVPRecord]:
        """Return every stored record in listing order."""
        raise NotImplementedError

    @abstractmethod
    async def locate_match(
        self, email: str | None, phone: str | None
    ) -> tuple[int, RSVPRecord] | None:
        """Return the position and record sharing the normalized email or phone, if any."""
        raise NotImplementedError

    @abstractmethod
    async def write_at(self, record: RSVPRecord, position: int | None) -> None:
        """Overwrite the record at ``position``, or insert it when ``position`` is None."""
        raise NotImplementedError

    @abstractmethod
    async def upsert(self, record: RSVPRecord) -> None:
        """Replace the record with the same non-blank id, or insert it as a new one."""
        raise NotImplementedError

    async def find_match(self, email: str | None, phone: str | None) -> RSVPRecord | None:
        match = await self.locate_match(email, phone)
        return match[1] if match else None

    async def upsert_by_identity(
        self,
        email: str | None,
        phone: str | None,
        build: Callable[[RSVPRecord | None], RSVPRecord],
    ) -> RSVPRecord:
        """Find the existing record for an identity, build its replacement and store it
        in the matched position.

        The whole sequence runs under the store's write lock.
        """
        async with self._write_lock:
            match = await self.locate_match(email, phone)
            position, existing = match if match else (None, None)
            record = build(existing)
            await self.write_at(record, position)
            return record

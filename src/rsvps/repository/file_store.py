import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.rsvps.dtos import RSVPRecord
from src.rsvps.identity import identity_matches
from src.rsvps.repository.base import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)


class FileRecordStore(RecordStore):
    """Whole record set kept as one JSON array, newest first.

    Writes go through the raw entries so that an entry which no longer
    validates is kept on disk untouched instead of being dropped.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    async def read_all(self) -> list[RSVPRecord]:
        entries = await asyncio.to_thread(self._load_entries)
        return [record for _, record in self._parse_entries(entries)]

    async def locate_match(
        self, email: str | None, phone: str | None
    ) -> tuple[int, RSVPRecord] | None:
        entries = await asyncio.to_thread(self._load_entries)
        for index, record in self._parse_entries(entries):
            if identity_matches(email, phone, record.email, record.phone):
                return index, record
        return None

    async def write_at(self, record: RSVPRecord, position: int | None) -> None:
        entries = await asyncio.to_thread(self._load_entries)
        entry = record.model_dump(by_alias=True, exclude_none=True)
        if position is None:
            entries.insert(0, entry)
        else:
            entries[position] = entry
        await asyncio.to_thread(self._dump, entries)

    async def upsert(self, record: RSVPRecord) -> None:
        position = None
        if record.id:
            entries = await asyncio.to_thread(self._load_entries)
            for index, existing in self._parse_entries(entries):
                if existing.id == record.id:
                    position = index
                    break
        await self.write_at(record, position)

    def _load_entries(self) -> list[Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise RecordStoreError(f"Could not read RSVP data file {self.path}") from e

        try:
            raw = json.loads(text)
        except ValueError as e:
            logger.warning(f"Unparsable RSVP data file {self.path}, treating as empty: {e}")
            return []

        if not isinstance(raw, list):
            logger.warning(f"RSVP data file {self.path} does not hold a list, treating as empty")
            return []
        return raw

    def _parse_entries(self, entries: list[Any]) -> list[tuple[int, RSVPRecord]]:
        records = []
        for index, item in enumerate(entries):
            try:
                records.append((index, RSVPRecord.model_validate(item)))
            except ValidationError as e:
                logger.warning(f"Skipping malformed RSVP entry {index} in {self.path}: {e}")
        return records

    def _dump(self, entries: list[Any]) -> None:
        payload = json.dumps(entries, indent=2, ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise RecordStoreError(f"Could not write RSVP data file {self.path}") from e

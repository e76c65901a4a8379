"""Google Sheets backend: one row per RSVP in a single tab, header on row 1."""

import asyncio
import base64
import binascii
import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import gspread

from src.config.errors import ConfigurationError
from src.config.settings import Settings
from src.rsvps.dtos import AgeRanges, Children, RSVPRecord
from src.rsvps.identity import identity_matches
from src.rsvps.repository.base import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

COLUMNS = [
    "id",
    "createdAt",
    "updatedAt",
    "code",
    "name",
    "email",
    "phone",
    "attending",
    "adultPartner",
    "kids_0_3",
    "kids_4_10",
    "kids_11_17",
    "kids_total",
    "message",
]
LAST_COLUMN = "N"

TRUTHY_CELLS = frozenset({"yes", "true", "1", "oui"})


class SheetClient(ABC):
    """Row-level access to one sheet tab. Row indexes are 1-based and include the header."""

    @abstractmethod
    def get_rows(self) -> list[list[str]]:
        raise NotImplementedError

    @abstractmethod
    def append_row(self, row: list[Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_row(self, row_index: int, row: list[Any]) -> None:
        raise NotImplementedError


class GspreadSheetClient(SheetClient):
    """SheetClient backed by a service account through gspread."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._worksheet: gspread.Worksheet | None = None

    def _credentials(self) -> dict:
        blob = self._settings.google_service_account_json_b64
        if not blob:
            raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_JSON_B64")
        try:
            return json.loads(base64.b64decode(blob).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_JSON_B64") from e

    def worksheet(self) -> gspread.Worksheet:
        if self._worksheet is None:
            if not self._settings.gsheet_id:
                raise ConfigurationError("GSHEET_ID")
            client = gspread.service_account_from_dict(self._credentials(), scopes=SCOPES)
            spreadsheet = client.open_by_key(self._settings.gsheet_id)
            self._worksheet = spreadsheet.worksheet(self._settings.gsheet_tab)
        return self._worksheet

    def get_rows(self) -> list[list[str]]:
        return self.worksheet().get_values(f"A1:{LAST_COLUMN}")

    def append_row(self, row: list[Any]) -> None:
        self.worksheet().append_row(row, value_input_option="RAW")

    def update_row(self, row_index: int, row: list[Any]) -> None:
        self.worksheet().update(
            values=[row],
            range_name=f"A{row_index}:{LAST_COLUMN}{row_index}",
            value_input_option="RAW",
        )


def parse_truthy(cell: Any) -> bool:
    return str(cell).strip().lower() in TRUTHY_CELLS


def _parse_count(cell: Any) -> int:
    try:
        return max(int(str(cell).strip()), 0)
    except ValueError:
        return 0


def record_to_row(record: RSVPRecord) -> list[Any]:
    age_ranges = record.children.age_ranges
    return [
        record.id,
        record.created_at,
        record.updated_at,
        record.code,
        record.name,
        record.email or "",
        record.phone or "",
        "yes" if record.attending else "no",
        "yes" if record.adult_partner else "no",
        age_ranges.age_0_3,
        age_ranges.age_4_10,
        age_ranges.age_11_17,
        record.children.count,
        record.message or "",
    ]


def row_to_record(row: list[Any]) -> RSVPRecord:
    """Map a sheet row positionally, treating missing trailing cells as empty."""
    cells = [str(cell) if cell is not None else "" for cell in row]
    cells += [""] * (len(COLUMNS) - len(cells))
    values = dict(zip(COLUMNS, cells))

    # The stored total is ignored, the brackets are authoritative
    age_ranges = AgeRanges(
        age_0_3=_parse_count(values["kids_0_3"]),
        age_4_10=_parse_count(values["kids_4_10"]),
        age_11_17=_parse_count(values["kids_11_17"]),
    )
    return RSVPRecord(
        id=values["id"],
        created_at=values["createdAt"],
        updated_at=values["updatedAt"],
        code=values["code"],
        name=values["name"],
        email=values["email"] or None,
        phone=values["phone"] or None,
        attending=parse_truthy(values["attending"]),
        adult_partner=parse_truthy(values["adultPartner"]),
        children=Children.from_age_ranges(age_ranges),
        message=values["message"] or None,
    )


class SheetRecordStore(RecordStore):
    def __init__(self, client: SheetClient) -> None:
        super().__init__()
        self._client = client

    async def _indexed_records(self) -> list[tuple[int, RSVPRecord]]:
        try:
            rows = await asyncio.to_thread(self._client.get_rows)
        except (gspread.exceptions.GSpreadException, OSError) as e:
            raise RecordStoreError("Could not read RSVP sheet") from e
        # rows[0] is the header, data starts on sheet row 2
        return [
            (index, row_to_record(row))
            for index, row in enumerate(rows[1:], start=2)
            if any(str(cell).strip() for cell in row)
        ]

    async def read_all(self) -> list[RSVPRecord]:
        records = [record for _, record in await self._indexed_records()]
        return sorted(records, key=lambda record: record.updated_at, reverse=True)

    async def locate_match(
        self, email: str | None, phone: str | None
    ) -> tuple[int, RSVPRecord] | None:
        for row_index, record in await self._indexed_records():
            if identity_matches(email, phone, record.email, record.phone):
                return row_index, record
        return None

    async def write_at(self, record: RSVPRecord, position: int | None) -> None:
        row = record_to_row(record)
        try:
            if position is None:
                await asyncio.to_thread(self._client.append_row, row)
            else:
                await asyncio.to_thread(self._client.update_row, position, row)
        except (gspread.exceptions.GSpreadException, OSError) as e:
            raise RecordStoreError("Could not write RSVP sheet") from e
        logger.debug(f"Stored RSVP {record.id} in sheet row {position or 'append'}")

    async def upsert(self, record: RSVPRecord) -> None:
        row_index = None
        if record.id:
            for index, existing in await self._indexed_records():
                if existing.id == record.id:
                    row_index = index
                    break
        await self.write_at(record, row_index)

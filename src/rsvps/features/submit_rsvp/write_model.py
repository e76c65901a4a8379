"""Write model for the RSVP submission feature.

Turns a validated submission into a stored record: checks the invite code,
derives the family composition, resolves the guest's identity and upserts.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from src.rsvps.dtos import (
    AgeRanges,
    Children,
    InvalidInviteCodeError,
    MissingContactError,
    RSVPRecord,
    SubmitRSVPResponseDTO,
)
from src.rsvps.features.submit_rsvp.dtos import RSVPSubmitRequest
from src.rsvps.identity import normalize_email, normalize_phone
from src.rsvps.repository.base import RecordStore

logger = logging.getLogger(__name__)

ATTENDING_MESSAGE = "Thank you for confirming your attendance!"
DECLINED_MESSAGE = "We're sorry you can't make it. Your response has been recorded."


def utc_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with a trailing Z, so stored timestamps sort lexicographically."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SubmitRSVPWriteModel(ABC):
    """Abstract base class for RSVP submission write operations."""

    @abstractmethod
    async def submit_rsvp(self, submission: RSVPSubmitRequest) -> SubmitRSVPResponseDTO:
        """Store a submission, replacing any earlier one from the same guest.

        Raises:
            InvalidInviteCodeError: the code is not on the allow-list
            MissingContactError: neither email nor phone is usable
            RecordStoreError: the store could not be read or written
        """
        raise NotImplementedError


class StoreSubmitRSVPWriteModel(SubmitRSVPWriteModel):
    """Submission write model backed by a RecordStore."""

    def __init__(
        self,
        store: RecordStore,
        invite_codes: frozenset[str],
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.store = store
        self.invite_codes = invite_codes
        self.clock = clock

    async def submit_rsvp(self, submission: RSVPSubmitRequest) -> SubmitRSVPResponseDTO:
        if submission.code not in self.invite_codes:
            raise InvalidInviteCodeError(submission.code)

        if submission.attending:
            adult_partner = submission.adult_partner
            children = Children.from_age_ranges(submission.children.age_ranges)
        else:
            # A declined invitation carries no family data
            adult_partner = False
            children = Children.from_age_ranges(AgeRanges())

        email = normalize_email(submission.email) if submission.email else ""
        phone = normalize_phone(submission.phone) if submission.phone else ""
        if not phone.lstrip("+"):
            phone = ""
        if not email and not phone:
            raise MissingContactError()

        now = utc_timestamp(self.clock())
        created = False

        def build(existing: RSVPRecord | None) -> RSVPRecord:
            nonlocal created
            created = existing is None
            return RSVPRecord(
                id=existing.id if existing and existing.id else str(uuid4()),
                created_at=existing.created_at if existing and existing.created_at else now,
                updated_at=now,
                code=submission.code,
                name=submission.name,
                email=email or None,
                phone=phone or None,
                attending=submission.attending,
                adult_partner=adult_partner,
                children=children,
                message=submission.message or None,
            )

        record = await self.store.upsert_by_identity(email or None, phone or None, build)
        logger.info(f"{'Created' if created else 'Updated'} RSVP {record.id} (code {record.code})")

        return SubmitRSVPResponseDTO(
            message=ATTENDING_MESSAGE if record.attending else DECLINED_MESSAGE,
            attending=record.attending,
            record_id=record.id,
            created=created,
        )

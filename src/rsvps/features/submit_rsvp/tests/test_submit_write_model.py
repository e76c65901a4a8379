"""Tests for StoreSubmitRSVPWriteModel."""

import pytest

from src.rsvps.dtos import InvalidInviteCodeError, MissingContactError, RSVPRecord
from src.rsvps.features.submit_rsvp.dtos import RSVPSubmitRequest
from src.rsvps.features.submit_rsvp.write_model import (
    ATTENDING_MESSAGE,
    DECLINED_MESSAGE,
    StoreSubmitRSVPWriteModel,
    utc_timestamp,
)

INVITE_CODES = frozenset({"VIP1"})


def submission(**overrides) -> RSVPSubmitRequest:
    payload = {
        "code": "VIP1",
        "name": "Ada Lovelace",
        "email": "ada@mail.com",
        "attending": True,
        "adultPartner": True,
        "children": {"ageRanges": {"0-3": 2, "4-10": 1, "11-17": 0}},
    }
    payload.update(overrides)
    return RSVPSubmitRequest.model_validate(payload)


@pytest.fixture
def write_model(file_store, clock):
    return StoreSubmitRSVPWriteModel(store=file_store, invite_codes=INVITE_CODES, clock=clock)


def test_utc_timestamp_is_sortable_iso8601(clock):
    assert utc_timestamp(clock()) == "2026-06-01T12:00:00.000Z"


@pytest.mark.asyncio
async def test_creates_record_with_server_assigned_fields(write_model, file_store, clock):
    response = await write_model.submit_rsvp(submission())

    assert response.created is True
    assert response.attending is True
    assert response.message == ATTENDING_MESSAGE

    [record] = await file_store.read_all()
    assert record.id == response.record_id
    assert record.created_at == record.updated_at == utc_timestamp(clock())
    assert record.email == "ada@mail.com"
    assert record.phone is None


@pytest.mark.asyncio
async def test_children_count_is_derived_from_brackets(write_model, file_store):
    await write_model.submit_rsvp(
        submission(children={"count": 9, "ageRanges": {"0-3": 2, "4-10": 1, "11-17": 0}})
    )

    [record] = await file_store.read_all()
    assert record.children.count == 3


@pytest.mark.asyncio
async def test_not_attending_zeroes_family_data(write_model, file_store):
    response = await write_model.submit_rsvp(
        submission(
            attending=False,
            adultPartner=True,
            children={"count": 4, "ageRanges": {"0-3": 1, "4-10": 2, "11-17": 1}},
        )
    )

    assert response.message == DECLINED_MESSAGE
    [record] = await file_store.read_all()
    assert record.adult_partner is False
    assert record.children.model_dump(by_alias=True) == {
        "count": 0,
        "ageRanges": {"0-3": 0, "4-10": 0, "11-17": 0},
    }


@pytest.mark.asyncio
async def test_second_submission_updates_same_guest(write_model, file_store, clock):
    first = await write_model.submit_rsvp(submission(name="Ada", message="Hello"))
    clock.advance(minutes=5)
    second = await write_model.submit_rsvp(
        submission(name="Ada Byron", email=" ADA@mail.com", message="Changed my mind")
    )

    assert second.created is False
    assert second.record_id == first.record_id

    records = await file_store.read_all()
    assert len(records) == 1
    [record] = records
    assert record.name == "Ada Byron"
    assert record.message == "Changed my mind"
    assert record.created_at == "2026-06-01T12:00:00.000Z"
    assert record.updated_at == "2026-06-01T12:05:00.000Z"


@pytest.mark.asyncio
async def test_phone_identity_matches_across_formats(write_model, file_store):
    await write_model.submit_rsvp(submission(email="", phone="+33 6 12 34 56 78"))
    await write_model.submit_rsvp(submission(email=None, phone="+33-612-345-678", name="Again"))

    [record] = await file_store.read_all()
    assert record.phone == "+33612345678"
    assert record.name == "Again"


@pytest.mark.asyncio
async def test_distinct_guests_may_share_an_invite_code(write_model, file_store):
    await write_model.submit_rsvp(submission(email="one@mail.com"))
    await write_model.submit_rsvp(submission(email="two@mail.com"))

    assert len(await file_store.read_all()) == 2


@pytest.mark.asyncio
async def test_unknown_code_is_rejected_without_write(write_model, file_store):
    with pytest.raises(InvalidInviteCodeError):
        await write_model.submit_rsvp(submission(code="NOPE"))

    assert not file_store.path.exists()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "contact",
    [
        {"email": "", "phone": ""},
        {"email": None, "phone": None},
        {"email": "", "phone": "   "},
        {"email": "", "phone": "+ -- ()"},
    ],
)
async def test_missing_contact_is_rejected_without_write(write_model, file_store, contact):
    with pytest.raises(MissingContactError):
        await write_model.submit_rsvp(submission(**contact))

    assert not file_store.path.exists()


@pytest.mark.asyncio
async def test_matched_record_without_id_is_given_one(write_model, file_store):
    await file_store.upsert(
        RSVPRecord(
            id="",
            created_at="2026-05-01T08:00:00.000Z",
            updated_at="2026-05-01T08:00:00.000Z",
            code="VIP1",
            name="Typed In",
            email="ada@mail.com",
            attending=False,
        )
    )

    response = await write_model.submit_rsvp(submission())

    assert response.created is False
    [record] = await file_store.read_all()
    assert record.id == response.record_id
    assert record.id
    assert record.created_at == "2026-05-01T08:00:00.000Z"
    assert record.name == "Ada Lovelace"

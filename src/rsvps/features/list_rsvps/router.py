import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.admin import urls
from src.dependencies import get_record_store
from src.rsvps.dtos import RSVPRecord
from src.rsvps.features.list_rsvps.read_model import (
    AttendingFilter,
    RSVPListReadModel,
    StoreRSVPListReadModel,
)
from src.rsvps.repository.base import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


class RSVPListResponse(BaseModel):
    count: int
    headcount: int
    items: list[RSVPRecord]


def get_rsvp_list_read_model(
    store: RecordStore = Depends(get_record_store),
) -> RSVPListReadModel:
    """Dependency to get the listing read model instance."""
    return StoreRSVPListReadModel(store=store)


@router.get(urls.LIST_RSVPS_URL, response_model=RSVPListResponse)
async def list_rsvps(
    attending: str | None = None,
    read_model: RSVPListReadModel = Depends(get_rsvp_list_read_model),
) -> RSVPListResponse:
    """
    List stored responses, optionally only those attending (`yes`) or not (`no`).
    Protected by the admin access gate.
    """
    try:
        listing = await read_model.list_rsvps(AttendingFilter.parse(attending))
    except RecordStoreError as e:
        logger.error(f"Failed to read RSVPs: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not load responses",
        )

    return RSVPListResponse(count=listing.count, headcount=listing.headcount, items=listing.items)

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.config.settings import Settings
from src.dependencies import get_app_settings, get_record_store
from src.rsvps import urls
from src.rsvps.dtos import InvalidInviteCodeError, MissingContactError
from src.rsvps.features.submit_rsvp.dtos import RSVPSubmitRequest, RSVPSubmitResponse
from src.rsvps.features.submit_rsvp.write_model import (
    StoreSubmitRSVPWriteModel,
    SubmitRSVPWriteModel,
)
from src.rsvps.repository.base import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_submit_rsvp_write_model(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_app_settings),
) -> SubmitRSVPWriteModel:
    """Dependency to get the submission write model instance."""
    return StoreSubmitRSVPWriteModel(store=store, invite_codes=settings.get_invite_codes())


@router.post(urls.SUBMIT_RSVP_URL, response_model=RSVPSubmitResponse)
async def submit_rsvp(
    submission: RSVPSubmitRequest,
    write_model: SubmitRSVPWriteModel = Depends(get_submit_rsvp_write_model),
) -> RSVPSubmitResponse:
    """
    Submit or update an RSVP.

    A guest is recognised by email or phone; a later submission from the same
    guest replaces the earlier one instead of creating a duplicate.
    """
    try:
        response_dto = await write_model.submit_rsvp(submission)
    except InvalidInviteCodeError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid invite code")
    except MissingContactError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RecordStoreError as e:
        logger.error(f"Failed to store RSVP: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not save your response, please try again",
        )

    return RSVPSubmitResponse(ok=True, message=response_dto.message)

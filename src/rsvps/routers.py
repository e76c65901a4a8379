from fastapi import APIRouter

from .features.invite_landing.router import router as invite_landing_router
from .features.list_rsvps.router import router as list_rsvps_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(invite_landing_router)
router.include_router(list_rsvps_router)
router.include_router(submit_rsvp_router)

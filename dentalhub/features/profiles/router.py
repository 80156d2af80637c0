# Profiles Feature - Router

from fastapi import APIRouter, Depends
from dentalhub.features.profiles.dependencies import get_current_session
from dentalhub.features.profiles.schemas import ActingSession, ProfileResponse
from dentalhub.features.profiles.service import ProfileService
from dentalhub.shared.errors import NotFoundError
from dentalhub.shared.exceptions import NotFoundException


router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(session: ActingSession = Depends(get_current_session)):
    """
    Get the current user's role-specific profile and dashboard branding.
    
    Doctors get their own clinic; patients get the clinic of their
    earliest active doctor.
    """
    try:
        profile = await ProfileService.resolve_profile(session)
    except NotFoundError as e:
        raise NotFoundException(e.message)
    
    return ProfileResponse(
        profile=profile,
        branding=ProfileService.get_branding(profile),
    )

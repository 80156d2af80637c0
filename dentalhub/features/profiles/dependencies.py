# Profiles Feature - Dependencies

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from dentalhub.features.profiles.schemas import ActingSession, DoctorProfile
from dentalhub.features.profiles.service import ProfileService
from dentalhub.core.security import decode_token
from dentalhub.core.logging import logger
from dentalhub.shared.errors import NotFoundError
from dentalhub.shared.exceptions import CredentialsException, ForbiddenException


# HTTP Bearer security scheme
security = HTTPBearer()


def session_from_token(token: str) -> ActingSession:
    """
    Build an acting session from an identity provider token.
    
    Raises:
        CredentialsException: If the token is invalid or lacks a known role
    """
    payload = decode_token(token)
    if payload is None:
        logger.warning("Failed to decode access token")
        raise CredentialsException("Invalid authentication credentials")
    
    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in ("doctor", "patient"):
        logger.warning(f"Token rejected - sub present: {bool(user_id)}, role: {role}")
        raise CredentialsException("Invalid authentication credentials")
    
    return ActingSession(user_id=user_id, email=payload.get("email"), role=role)


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> ActingSession:
    """Dependency to get the verified session of the caller."""
    return session_from_token(credentials.credentials)


async def get_current_doctor(
    session: ActingSession = Depends(get_current_session)
) -> DoctorProfile:
    """
    Dependency to get the current doctor with a clinic affiliation.
    
    Raises:
        ForbiddenException: If the caller is not a doctor attached to a clinic
    """
    if session.role != "doctor":
        raise ForbiddenException("Only doctors can manage clinic documents")
    
    try:
        profile = await ProfileService.resolve_profile(session)
    except NotFoundError as e:
        raise ForbiddenException(e.message)
    
    if not profile.clinic_id:
        raise ForbiddenException("No clinic associated with account")
    
    return profile

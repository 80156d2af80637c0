# Profiles Feature - Schemas

from typing import Annotated, Optional, Literal, Union
from pydantic import BaseModel, Field


UserRole = Literal["doctor", "patient"]

DEFAULT_LOGO_URL = "/logos/practices/default.svg"
DEFAULT_PRACTICE_NAME = "Practice"


class ActingSession(BaseModel):
    """Verified identity of the caller, passed explicitly into every boundary call."""
    user_id: str
    email: Optional[str] = None
    role: UserRole


class ClinicSummary(BaseModel):
    """Subset of clinic data used for dashboard branding."""
    id: str
    name: str
    logo_url: Optional[str] = ""
    primary_color: str = "#0ea5e9"


class DoctorProfile(BaseModel):
    """Doctor variant: affiliated directly with a clinic."""
    kind: Literal["doctor"] = "doctor"
    user_id: str
    full_name: str
    clinic_id: Optional[str] = None
    clinic: Optional[ClinicSummary] = None


class PatientProfile(BaseModel):
    """Patient variant: clinic comes from the earliest active doctor link."""
    kind: Literal["patient"] = "patient"
    user_id: str
    full_name: str
    primary_doctor_id: Optional[str] = None
    clinic: Optional[ClinicSummary] = None


Profile = Annotated[Union[DoctorProfile, PatientProfile], Field(discriminator="kind")]


class BrandingResponse(BaseModel):
    """Header branding for the dashboard."""
    practice_name: str = DEFAULT_PRACTICE_NAME
    logo_url: str = DEFAULT_LOGO_URL
    primary_color: str = "#0ea5e9"


class ProfileResponse(BaseModel):
    """Schema for the current user's profile and branding."""
    profile: Profile
    branding: BrandingResponse

# Profiles Feature - Service

from typing import Optional, Union
from beanie import PydanticObjectId
from dentalhub.features.profiles.models import Clinic, Doctor, Patient, DoctorPatientLink
from dentalhub.features.profiles.schemas import (
    ActingSession,
    ClinicSummary,
    DoctorProfile,
    PatientProfile,
    BrandingResponse,
)
from dentalhub.core.logging import logger
from dentalhub.shared.errors import AuthError, NotFoundError


class ProfileService:
    """Service class for resolving the acting user's profile and clinic."""
    
    @staticmethod
    async def get_clinic_summary(clinic_id: Optional[str]) -> Optional[ClinicSummary]:
        """Load a clinic's branding fields, or None if it cannot be found."""
        if not clinic_id:
            return None
        
        try:
            clinic = await Clinic.get(PydanticObjectId(clinic_id))
        except Exception:
            clinic = None
        
        if not clinic:
            logger.warning(f"Clinic {clinic_id} referenced by a profile was not found")
            return None
        
        return ClinicSummary(
            id=str(clinic.id),
            name=clinic.name,
            logo_url=clinic.logo_url or "",
            primary_color=clinic.primary_color,
        )
    
    @staticmethod
    async def resolve_profile(session: ActingSession) -> Union[DoctorProfile, PatientProfile]:
        """
        Resolve the acting user's role-specific profile.
        
        Args:
            session: Acting session
            
        Returns:
            DoctorProfile or PatientProfile, depending on the session role
            
        Raises:
            NotFoundError: If no profile exists for the user
        """
        if session.role == "doctor":
            doctor = await Doctor.find_one(Doctor.user_id == session.user_id)
            if not doctor:
                raise NotFoundError("Doctor profile not found")
            
            return DoctorProfile(
                user_id=doctor.user_id,
                full_name=doctor.full_name,
                clinic_id=doctor.clinic_id,
                clinic=await ProfileService.get_clinic_summary(doctor.clinic_id),
            )
        
        patient = await Patient.find_one(Patient.user_id == session.user_id)
        if not patient:
            raise NotFoundError("Patient profile not found")
        
        # Branding comes from the clinic of the patient's first active doctor
        link = await DoctorPatientLink.find(
            DoctorPatientLink.patient_id == session.user_id,
            DoctorPatientLink.status == "active",
        ).sort([("created_at", 1)]).first_or_none()
        
        clinic = None
        if link:
            doctor = await Doctor.find_one(Doctor.user_id == link.doctor_id)
            clinic = await ProfileService.get_clinic_summary(doctor.clinic_id if doctor else None)
        
        return PatientProfile(
            user_id=patient.user_id,
            full_name=patient.full_name,
            primary_doctor_id=link.doctor_id if link else None,
            clinic=clinic,
        )
    
    @staticmethod
    async def resolve_clinic_id(session: Optional[ActingSession]) -> str:
        """
        Resolve the clinic a doctor session belongs to.
        
        Raises:
            AuthError: If there is no session
            NotFoundError: If the user is not a doctor affiliated with a clinic
        """
        if session is None:
            raise AuthError("Not authenticated")
        
        if session.role != "doctor":
            raise NotFoundError("No clinic associated with account")
        
        doctor = await Doctor.find_one(Doctor.user_id == session.user_id)
        if not doctor or not doctor.clinic_id:
            raise NotFoundError("No clinic associated with account")
        
        return doctor.clinic_id
    
    @staticmethod
    def get_branding(profile: Union[DoctorProfile, PatientProfile]) -> BrandingResponse:
        """Header branding for a profile, falling back to the default logo."""
        clinic = profile.clinic
        if not clinic or not clinic.logo_url:
            return BrandingResponse()
        
        return BrandingResponse(
            practice_name=clinic.name or BrandingResponse().practice_name,
            logo_url=clinic.logo_url,
            primary_color=clinic.primary_color,
        )

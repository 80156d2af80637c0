# Profiles Feature - Models

from typing import Optional, Literal
from beanie import Document, Indexed
from dentalhub.shared.models import TimestampMixin


class Clinic(Document, TimestampMixin):
    """Clinic document model holding the practice's details and branding."""
    
    name: str
    address: Optional[str] = ""
    phone: Optional[str] = ""
    email: Optional[str] = ""
    logo_url: Optional[str] = ""
    primary_color: str = "#0ea5e9"
    
    class Settings:
        name = "clinics"
        use_state_management = True
    
    class Config:
        json_schema_extra = {
            "example": {
                "name": "Westside Endodontics",
                "address": "123 Dental Ave",
                "phone": "+1 (555) 123-4567",
                "email": "front-desk@clinic.com",
                "logo_url": "/logos/practices/westside.svg",
                "primary_color": "#0ea5e9",
            }
        }


class Doctor(Document, TimestampMixin):
    """Doctor profile. ``user_id`` is the identity provider's user id."""
    
    user_id: Indexed(str, unique=True)
    full_name: str
    clinic_id: Optional[str] = None
    license_number: Optional[str] = None
    specialty: Optional[str] = None
    
    class Settings:
        name = "doctors"
        use_state_management = True


class Patient(Document, TimestampMixin):
    """Patient profile. ``user_id`` is the identity provider's user id."""
    
    user_id: Indexed(str, unique=True)
    full_name: str
    phone: Optional[str] = None
    
    class Settings:
        name = "patients"
        use_state_management = True


class DoctorPatientLink(Document, TimestampMixin):
    """Association between a doctor and a patient they treat."""
    
    doctor_id: Indexed(str)
    patient_id: Indexed(str)
    status: Literal["pending", "active", "inactive"] = "pending"
    
    class Settings:
        name = "doctor_patient_links"
        use_state_management = True
        indexes = [
            [("patient_id", 1), ("status", 1), ("created_at", 1)],
        ]

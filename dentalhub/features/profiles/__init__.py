# Profiles Feature

from dentalhub.features.profiles.router import router
from dentalhub.features.profiles.service import ProfileService

__all__ = ["router", "ProfileService"]

"""Application configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Database
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "dentalhub"
    
    # Identity provider tokens (shared secret with the auth service)
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    
    # Application
    APP_NAME: str = "DentalHub"
    API_V1_PREFIX: str = "/api/v1"
    PORT: int = 8000
    
    # CORS - allow the dashboard frontends
    BACKEND_CORS_ORIGINS: str = '["http://localhost:3000"]'
    
    # Documents
    DOCUMENTS_ROUTE: str = "/dashboard/doctor/documents"
    DOCUMENT_UPDATE_MAX_RETRIES: int = 3
    
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    
    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from JSON string."""
        try:
            return json.loads(self.BACKEND_CORS_ORIGINS)
        except json.JSONDecodeError:
            return ["http://localhost:3000"]


settings = Settings()

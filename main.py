"""DentalHub - clinic document management service."""

import uvicorn

from dentalhub.config import settings
from dentalhub.main import app


if __name__ == "__main__":
    uvicorn.run(
        "dentalhub.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )

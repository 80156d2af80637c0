from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from dentalhub.config import settings
from dentalhub.database import Database
from dentalhub.features.documents.router import router as documents_router
from dentalhub.features.documents.invalidation import list_invalidator
from dentalhub.features.documents.socket import sio, socket_app
from dentalhub.features.profiles.router import router as profiles_router
from dentalhub.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI application."""
    # Startup
    logger.info("Starting DentalHub API...")
    await Database.connect_db()
    
    # Set Socket.IO reference so document mutations reach open list views
    list_invalidator.set_socketio(sio)
    
    logger.info("Application started successfully")
    
    yield
    
    # Shutdown
    logger.info("Shutting down...")
    await Database.close_db()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="DentalHub clinic documents API",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(documents_router, prefix=settings.API_V1_PREFIX)
app.include_router(profiles_router, prefix=settings.API_V1_PREFIX)

# Mount Socket.IO application
app.mount("/socket.io", socket_app)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to DentalHub API",
        "version": "1.0.0",
        "docs": "/docs",
        "socket.io": "/socket.io",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
    }

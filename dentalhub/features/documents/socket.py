# Documents Feature - Socket.IO Server

import socketio
from typing import Optional, Dict, Any
from dentalhub.core.logging import logger
from dentalhub.features.documents.invalidation import documents_room
from dentalhub.features.profiles.dependencies import session_from_token
from dentalhub.features.profiles.service import ProfileService
from dentalhub.shared.errors import DocumentError
from dentalhub.shared.exceptions import CredentialsException


# Create Socket.IO server with ASGI support
sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
)

# Connected doctors: {sid: {user_id, clinic_id}}
connected_users: Dict[str, Dict[str, Any]] = {}


async def authenticate_socket(auth_data: Optional[Dict]) -> Optional[Dict]:
    """
    Authenticate a socket connection and resolve the doctor's clinic.
    
    Args:
        auth_data: Authentication data containing token
        
    Returns:
        User info dict or None if authentication fails
    """
    if not auth_data or "token" not in auth_data:
        logger.warning("Socket connection attempted without token")
        return None
    
    try:
        session = session_from_token(auth_data["token"])
    except CredentialsException:
        logger.warning("Socket connection with invalid token")
        return None
    
    try:
        clinic_id = await ProfileService.resolve_clinic_id(session)
    except DocumentError as e:
        logger.warning(f"Socket auth - {session.user_id}: {e.message}")
        return None
    
    return {"user_id": session.user_id, "clinic_id": clinic_id}


@sio.event
async def connect(sid, environ, auth):
    """Handle client connection and subscribe it to its clinic's document list."""
    try:
        user_info = await authenticate_socket(auth)
    except Exception as e:
        logger.error(f"Socket authentication error: {e}")
        return False
    
    if not user_info:
        return False  # Reject connection
    
    connected_users[sid] = user_info
    await sio.enter_room(sid, documents_room(user_info["clinic_id"]))
    
    logger.info(f"Socket connected: {sid} (user {user_info['user_id']}, clinic {user_info['clinic_id']})")
    return True


@sio.event
async def disconnect(sid):
    """Handle client disconnection."""
    user_info = connected_users.pop(sid, None)
    
    if user_info:
        await sio.leave_room(sid, documents_room(user_info["clinic_id"]))
    
    logger.info(f"Socket disconnected: {sid}")


# Create ASGI app for Socket.IO
socket_app = socketio.ASGIApp(sio)

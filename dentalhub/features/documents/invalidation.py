# Documents Feature - List invalidation

from typing import Dict
from dentalhub.config import settings
from dentalhub.core.logging import logger


def documents_room(clinic_id: str) -> str:
    """Socket.IO room for a clinic's document list subscribers."""
    return f"clinic_{clinic_id}_documents"


class DocumentListInvalidator:
    """
    Signals that a clinic's document list route is stale.

    Every call bumps a per-clinic revision number and, once a Socket.IO
    server is attached, broadcasts ``documents_invalidated`` to the
    clinic's room so open list views refetch.
    """
    
    def __init__(self, route: str = settings.DOCUMENTS_ROUTE):
        self.route = route
        self.sio = None
        self._revisions: Dict[str, int] = {}
    
    def set_socketio(self, sio):
        """Set the Socket.IO server instance."""
        self.sio = sio
    
    def revision(self, clinic_id: str) -> int:
        return self._revisions.get(clinic_id, 0)
    
    async def invalidate(self, clinic_id: str) -> int:
        revision = self.revision(clinic_id) + 1
        self._revisions[clinic_id] = revision
        
        if self.sio is not None:
            await self.sio.emit("documents_invalidated", {
                "clinic_id": clinic_id,
                "path": self.route,
                "revision": revision,
            }, room=documents_room(clinic_id))
        
        logger.debug(f"Invalidated {self.route} for clinic {clinic_id} (revision {revision})")
        return revision


# Shared instance, attached to the Socket.IO server during app startup
list_invalidator = DocumentListInvalidator()

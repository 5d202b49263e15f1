# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import DocumentType, Priority, RequestStatus, UserRole
from .models import DocumentRequest, DocumentRequestEvent

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "DocumentType",
    "Priority",
    "RequestStatus",
    "UserRole",
    # Models
    "DocumentRequest",
    "DocumentRequestEvent",
]

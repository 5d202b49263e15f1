# This project was developed with assistance from AI tools.
"""
SQLAdmin views for document requests.

Access the admin panel at: http://localhost:8000/admin

Views are read-only: status changes go through the lifecycle routes so that
every change is versioned and recorded in the history table.

When AUTH_DISABLED=false, requires admin credentials via login form.
When AUTH_DISABLED=true, admin panel is open (dev mode).
"""

from db import DocumentRequest, DocumentRequestEvent
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from sqlalchemy import create_engine
from starlette.requests import Request
from starlette.responses import Response

from .core.config import settings


def sync_database_url(url: str) -> str:
    """SQLAdmin requires a sync engine; strip the async driver from the URL."""
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


engine = create_engine(sync_database_url(settings.DATABASE_URL), echo=False)


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")
        if username == settings.SQLADMIN_USER and password == settings.SQLADMIN_PASSWORD:
            request.session.update({"admin_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        if settings.AUTH_DISABLED:
            return True
        return request.session.get("admin_authenticated", False)


class DocumentRequestAdmin(ModelView, model=DocumentRequest):
    column_list = [
        DocumentRequest.id,
        DocumentRequest.document_type,
        DocumentRequest.applicant_name,
        DocumentRequest.status,
        DocumentRequest.priority,
        DocumentRequest.processing_fee,
        DocumentRequest.request_date,
        DocumentRequest.processed_date,
    ]
    column_searchable_list = [DocumentRequest.applicant_name, DocumentRequest.purpose]
    column_sortable_list = [
        DocumentRequest.id,
        DocumentRequest.status,
        DocumentRequest.request_date,
    ]
    column_default_sort = [(DocumentRequest.request_date, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Document Request"
    name_plural = "Document Requests"
    icon = "fa-solid fa-file-lines"


class DocumentRequestEventAdmin(ModelView, model=DocumentRequestEvent):
    column_list = [
        DocumentRequestEvent.id,
        DocumentRequestEvent.request_id,
        DocumentRequestEvent.from_status,
        DocumentRequestEvent.to_status,
        DocumentRequestEvent.actor,
        DocumentRequestEvent.occurred_at,
    ]
    column_sortable_list = [DocumentRequestEvent.id, DocumentRequestEvent.occurred_at]
    column_default_sort = [(DocumentRequestEvent.id, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Status Event"
    name_plural = "Status History"
    icon = "fa-solid fa-clock-rotate-left"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(secret_key=settings.SQLADMIN_SECRET_KEY)
    admin = Admin(app, engine, title="Barangay Documents Admin", authentication_backend=auth_backend)

    admin.add_view(DocumentRequestAdmin)
    admin.add_view(DocumentRequestEventAdmin)

    return admin

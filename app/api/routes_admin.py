import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.orm import Session

from app.api.deps import get_settings, require_admin
from app.core.config import Settings
from app.core.errors import NotFound, StorageError
from app.core.security import ADMIN_ROLE, AdminIdentity, authenticate_admin, create_access_token
from app.db import contacts_store
from app.db.session import get_db
from app.schemas.admin import LoginRequest, LoginResponse
from app.schemas.contact import ContactRead, ContactUpdated, MessageResponse

logger = logging.getLogger(__name__)


class CredentialCheckRoute(APIRoute):
    """Answers an unreadable login body like any other credential mismatch."""

    def get_route_handler(self):
        handler = super().get_route_handler()

        async def route_handler(request: Request):
            try:
                return await handler(request)
            except RequestValidationError:
                logger.warning("Rejected admin login attempt")
                return JSONResponse(status_code=401, content={"detail": "Invalid credentials"})

        return route_handler


login_router = APIRouter(prefix="/api/admin", route_class=CredentialCheckRoute)
router = APIRouter(prefix="/api/admin")


# ===============================
# POST /api/admin/login
# ===============================
@login_router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, settings: Settings = Depends(get_settings)):
    if not authenticate_admin(credentials.username, credentials.password, settings):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(settings.admin_username, settings)
    return LoginResponse(
        message="Login successful",
        token=token,
        admin=AdminIdentity(username=settings.admin_username, role=ADMIN_ROLE),
    )


# ===============================
# GET /api/admin/contacts
# ===============================
@router.get("/contacts", response_model=list[ContactRead])
def list_contacts(
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return contacts_store.list_contacts(db)
    except StorageError:
        logger.exception("Failed to list contacts")
        raise HTTPException(status_code=500, detail="Failed to fetch contacts")


# ===============================
# DELETE /api/admin/contacts/{contact_id}
# ===============================
@router.delete("/contacts/{contact_id}", response_model=MessageResponse)
def delete_contact(
    contact_id: str,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        removed = contacts_store.delete_contact(db, contact_id)
    except StorageError:
        logger.exception("Failed to delete contact %s", contact_id)
        raise HTTPException(status_code=500, detail="Failed to delete contact")

    if removed:
        logger.info("Admin %s deleted contact %s", admin.username, contact_id)
    return MessageResponse(message="Contact deleted successfully")


def _set_read_state(db: Session, contact_id: str, is_read: bool) -> ContactRead:
    try:
        contact = contacts_store.update_read_state(db, contact_id, is_read)
    except NotFound:
        raise HTTPException(status_code=404, detail="Contact not found")
    except StorageError:
        logger.exception("Failed to update contact %s", contact_id)
        raise HTTPException(status_code=500, detail="Failed to update contact")
    return ContactRead.model_validate(contact)


# ===============================
# PUT /api/admin/contacts/{contact_id}/read
# ===============================
@router.put("/contacts/{contact_id}/read", response_model=ContactUpdated)
def mark_read(
    contact_id: str,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    contact = _set_read_state(db, contact_id, True)
    return ContactUpdated(message="Contact marked as read", contact=contact)


# ===============================
# PUT /api/admin/contacts/{contact_id}/unread
# ===============================
@router.put("/contacts/{contact_id}/unread", response_model=ContactUpdated)
def mark_unread(
    contact_id: str,
    admin: AdminIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    contact = _set_read_state(db, contact_id, False)
    return ContactUpdated(message="Contact marked as unread", contact=contact)

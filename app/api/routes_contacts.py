import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.db.contacts_store import insert_contact
from app.db.session import get_db
from app.schemas.contact import ContactCreate, ContactCreated
from app.services.sheets import append_contact_row

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ===============================
# POST /api/contact
# ===============================
@router.post("/contact", status_code=201, response_model=ContactCreated)
def submit_contact(
    contact: ContactCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    payload = contact.model_dump()

    try:
        stored = insert_contact(db, payload)
    except StorageError:
        logger.exception("Failed to store contact submission")
        raise HTTPException(status_code=500, detail="Failed to submit contact form")

    logger.info("Stored contact submission %s", stored.id)

    sheets = request.app.state.sheets
    if sheets is not None:
        # runs after the response is sent
        background_tasks.add_task(
            append_contact_row,
            sheets,
            {**payload, "submitted_at": stored.submitted_at},
        )

    return ContactCreated(
        message="Contact form submitted successfully!",
        contact_id=stored.id,
    )

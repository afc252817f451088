import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFound, StorageError
from app.db.models.contact import ContactSubmission, utcnow

logger = logging.getLogger(__name__)


def _parse_id(contact_id) -> uuid.UUID | None:
    if isinstance(contact_id, uuid.UUID):
        return contact_id
    try:
        return uuid.UUID(str(contact_id))
    except ValueError:
        return None


def insert_contact(db: Session, data: dict) -> ContactSubmission:
    contact = ContactSubmission(
        name=data["name"],
        email=data["email"],
        phone=data["phone"],
        message=data["message"],
        is_read=False,
    )
    try:
        db.add(contact)
        db.commit()
        db.refresh(contact)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("failed to insert contact") from e

    return contact


def list_contacts(db: Session) -> list[ContactSubmission]:
    try:
        rows = db.execute(
            select(ContactSubmission).order_by(ContactSubmission.created_at.desc())
        ).scalars().all()
    except SQLAlchemyError as e:
        raise StorageError("failed to list contacts") from e
    return list(rows)


def update_read_state(db: Session, contact_id, is_read: bool) -> ContactSubmission:
    parsed = _parse_id(contact_id)
    if parsed is None:
        raise NotFound(contact_id)

    try:
        contact = db.get(ContactSubmission, parsed)
        if contact is None:
            raise NotFound(contact_id)

        contact.is_read = is_read
        contact.updated_at = utcnow()
        db.commit()
        db.refresh(contact)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("failed to update contact") from e

    return contact


def delete_contact(db: Session, contact_id) -> bool:
    """Returns whether a record was removed. A missing record is not an error."""
    parsed = _parse_id(contact_id)
    if parsed is None:
        return False

    try:
        contact = db.get(ContactSubmission, parsed)
        if contact is None:
            return False
        db.delete(contact)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("failed to delete contact") from e

    return True

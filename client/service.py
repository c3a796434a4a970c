import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from publication.schema import ERROR_MESSAGES, PublicationErrorKind
from .models import Client

logger = logging.getLogger(__name__)


def get_client(db: Session, client_id: str) -> Client | None:
    return db.get(Client, client_id)


def fetch_client(db: Session, client_id: str) -> Client:
    client = get_client(db, client_id.strip())
    if not client:
        logger.info("unknown client id %r", client_id)
        kind = PublicationErrorKind.CLIENT_NOT_FOUND
        raise HTTPException(
            status_code=404,
            detail={"error": kind.value, "message": ERROR_MESSAGES[kind]},
        )
    return client

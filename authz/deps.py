from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.database import get_db
from client import service as client_service
from client.models import Client

# The client id is taken on trust; there is no credential behind it.
def get_current_client(
    x_client_id: str = Header(..., alias="X-Client-Id"),
    db: Session = Depends(get_db),
) -> Client:
    return client_service.fetch_client(db, x_client_id)

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_client

from .schema import ClientSchema, ClientLoginPayload
from . import service

client_router = APIRouter(prefix="/clients", tags=["Clients"])

# Login: the id is looked up but not authenticated
@client_router.post("/login", response_model=ClientSchema)
def login(
    payload: ClientLoginPayload,
    db: Session = Depends(get_db),
):
    return service.fetch_client(db, payload.client_id)

@client_router.get("/me", response_model=ClientSchema)
def read_me(client = Depends(get_current_client)):
    return client

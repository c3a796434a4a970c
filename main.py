import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.logging_config import setup_logging

from client.router import client_router
from property.router import property_router
from publication.router import publication_router
from publication.schema import ERROR_MESSAGES, PublicationErrorKind
import models_bootstrap

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

openapi_tags = [
    {
        "name": "Clients",
        "description": "Client identity",
    },
    {
        "name": "Properties",
        "description": "Client properties and their availability",
    },
    {
        "name": "Publications",
        "description": "Scheduling, editing and removing publications",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title="Property Publication Scheduler", openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(client_router, prefix="/api")
app.include_router(property_router, prefix="/api")
app.include_router(publication_router, prefix="/api")


# Store failures: the write may or may not have landed, callers re-fetch before retrying
@app.exception_handler(OperationalError)
def store_unavailable(request: Request, exc: OperationalError):
    logger.error("store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": {
            "error": PublicationErrorKind.STORE_UNAVAILABLE.value,
            "message": ERROR_MESSAGES[PublicationErrorKind.STORE_UNAVAILABLE],
        }},
    )


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}

import logging

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from visacms.models.response import MessageResponse
from visacms.services import database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Schema"])


@router.get(
    "/init-db",
    response_model=MessageResponse,
    summary="Create the record tables if they are missing",
    description="Idempotent: existing tables and their rows are left untouched.",
)
def init_db() -> MessageResponse:
    try:
        database.init_schema(database.engine)
    except SQLAlchemyError as exc:
        logger.error("Schema initialisation failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return MessageResponse(message="Database tables created successfully!")

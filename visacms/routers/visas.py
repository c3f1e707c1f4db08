import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import sessionmaker

from visacms.config import MUTATION_RATE_LIMIT
from visacms.limits import limiter
from visacms.models.response import KeyRequest, VisaMutationResponse
from visacms.models.visa import VisaCreate, VisaRecord, VisaUpdate
from visacms.services.database import get_session_factory
from visacms.services.errors import ConflictError, NotFoundError, StoreError, ValidationError
from visacms.services.store import VisaStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/visas", tags=["Visas"])


def get_visa_store(session_factory: sessionmaker = Depends(get_session_factory)) -> VisaStore:
    return VisaStore(session_factory)


@router.get("", response_model=List[VisaRecord], summary="List all visa programs")
def list_visas(store: VisaStore = Depends(get_visa_store)) -> List[VisaRecord]:
    try:
        return store.list_all()
    except StoreError as exc:
        logger.error("Error listing visas: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))


@router.post(
    "",
    status_code=201,
    response_model=VisaMutationResponse,
    summary="Add a visa program",
    description=(
        "Creates a visa program addressed by slug.  The slug is the "
        "slugified `slug` field when given, otherwise the slugified name."
    ),
)
@limiter.limit(MUTATION_RATE_LIMIT)
def create_visa(
    request: Request, body: VisaCreate, store: VisaStore = Depends(get_visa_store)
) -> VisaMutationResponse:
    logger.info("Create visa request received", extra={"visa_name": body.name})

    try:
        record = store.insert(body)
    except ValidationError as exc:
        logger.warning("Rejected visa: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except ConflictError as exc:
        logger.warning("Duplicate visa: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc))
    except StoreError as exc:
        logger.error("Error adding visa: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))

    return VisaMutationResponse(message="Visa added", data=record)


@router.put("", response_model=VisaMutationResponse, summary="Replace a visa program by slug")
@limiter.limit(MUTATION_RATE_LIMIT)
def update_visa(
    request: Request, body: VisaUpdate, store: VisaStore = Depends(get_visa_store)
) -> VisaMutationResponse:
    logger.info("Update visa request received", extra={"slug": body.slug})

    try:
        record = store.update_by_key(body.slug, body)
    except ValidationError as exc:
        logger.warning("Rejected visa update: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        logger.warning("Visa update for unknown slug %s", body.slug)
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        logger.error("Error updating visa %s: %s", body.slug, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    return VisaMutationResponse(message="Updated successfully", data=record)


@router.delete("", response_model=VisaMutationResponse, summary="Delete a visa program by slug")
@limiter.limit(MUTATION_RATE_LIMIT)
def delete_visa(
    request: Request, body: KeyRequest, store: VisaStore = Depends(get_visa_store)
) -> VisaMutationResponse:
    logger.info("Delete visa request received", extra={"slug": body.slug})

    try:
        record = store.delete_by_key(body.slug)
    except ValidationError as exc:
        logger.warning("Rejected visa delete: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        logger.warning("Visa delete for unknown slug %s", body.slug)
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        logger.error("Error deleting visa %s: %s", body.slug, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    return VisaMutationResponse(message="Deleted successfully", data=record)

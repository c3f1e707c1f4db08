import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import sessionmaker

from visacms.config import MUTATION_RATE_LIMIT
from visacms.limits import limiter
from visacms.models.news import NewsCreate, NewsRecord, NewsUpdate
from visacms.models.response import KeyRequest, NewsMutationResponse
from visacms.services.database import get_session_factory
from visacms.services.errors import ConflictError, NotFoundError, StoreError, ValidationError
from visacms.services.store import NewsStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/news", tags=["News"])


def get_news_store(session_factory: sessionmaker = Depends(get_session_factory)) -> NewsStore:
    return NewsStore(session_factory)


@router.get("", response_model=List[NewsRecord], summary="List all news, newest first")
def list_news(store: NewsStore = Depends(get_news_store)) -> List[NewsRecord]:
    try:
        return store.list_all()
    except StoreError as exc:
        logger.error("Error listing news: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))


@router.post(
    "",
    status_code=201,
    response_model=NewsMutationResponse,
    summary="Add a news article",
    description=(
        "Creates a news article.  The slug is derived from the title on the "
        "server; any slug sent by the client is ignored."
    ),
)
@limiter.limit(MUTATION_RATE_LIMIT)
def create_news(
    request: Request, body: NewsCreate, store: NewsStore = Depends(get_news_store)
) -> NewsMutationResponse:
    logger.info("Create news request received", extra={"title": body.title})

    try:
        record = store.insert(body)
    except ValidationError as exc:
        logger.warning("Rejected news: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except ConflictError as exc:
        logger.warning("Duplicate news: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc))
    except StoreError as exc:
        logger.error("Error adding news: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))

    return NewsMutationResponse(message="News added", data=record)


@router.put("", response_model=NewsMutationResponse, summary="Replace a news article by slug")
@limiter.limit(MUTATION_RATE_LIMIT)
def update_news(
    request: Request, body: NewsUpdate, store: NewsStore = Depends(get_news_store)
) -> NewsMutationResponse:
    """Overwrite every field of the article at ``slug``; omitted fields become empty."""
    logger.info("Update news request received", extra={"slug": body.slug})

    try:
        record = store.update_by_key(body.slug, body)
    except ValidationError as exc:
        logger.warning("Rejected news update: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        logger.warning("News update for unknown slug %s", body.slug)
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        logger.error("Error updating news %s: %s", body.slug, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    return NewsMutationResponse(message="Updated successfully", data=record)


@router.delete("", response_model=NewsMutationResponse, summary="Delete a news article by slug")
@limiter.limit(MUTATION_RATE_LIMIT)
def delete_news(
    request: Request, body: KeyRequest, store: NewsStore = Depends(get_news_store)
) -> NewsMutationResponse:
    logger.info("Delete news request received", extra={"slug": body.slug})

    try:
        record = store.delete_by_key(body.slug)
    except ValidationError as exc:
        logger.warning("Rejected news delete: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        logger.warning("News delete for unknown slug %s", body.slug)
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        logger.error("Error deleting news %s: %s", body.slug, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    return NewsMutationResponse(message="Deleted successfully", data=record)

import logging

from fastapi import APIRouter, HTTPException

from visacms.data.static_news import STATIC_NEWS
from visacms.data.static_visas import STATIC_VISAS
from visacms.models.response import NewsIndexResponse, NewsPageResponse, VisaPageResponse
from visacms.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public"])


async def _all_news() -> list:
    live = await catalog.fetch_live_records("/api/news")
    return catalog.merge_records(live, STATIC_NEWS)


@router.get("/latest-news", response_model=NewsIndexResponse, summary="All news, live then bundled")
async def news_index() -> NewsIndexResponse:
    items = await _all_news()
    return NewsIndexResponse(items=items, paths=catalog.lookup_paths(items))


@router.get(
    "/latest-news/{slug}",
    response_model=NewsPageResponse,
    summary="One news article with the remaining stories",
    description=(
        "Looks the article up by the slugified title across the live and "
        "bundled news.  An unknown slug is a 404."
    ),
)
async def news_page(slug: str) -> NewsPageResponse:
    items = await _all_news()
    story = catalog.find_record(items, slug)
    if story is None:
        logger.info("News page miss", extra={"slug": slug})
        raise HTTPException(status_code=404, detail="News article not found")

    return NewsPageResponse(
        story=story,
        other_stories=catalog.other_records(items, slug),
        metadata=catalog.news_metadata(story),
    )


@router.get("/visa/{slug}", response_model=VisaPageResponse, summary="One visa program page")
async def visa_page(slug: str) -> VisaPageResponse:
    live = await catalog.fetch_live_records("/api/visas")
    visas = catalog.merge_records(live, STATIC_VISAS)

    visa = catalog.find_record(visas, slug, key=catalog.visa_key)
    if visa is None:
        logger.info("Visa page miss", extra={"slug": slug})
        raise HTTPException(status_code=404, detail="Visa program not found")

    return VisaPageResponse(visa=visa, metadata=catalog.visa_metadata(visa))

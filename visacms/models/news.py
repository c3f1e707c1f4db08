from datetime import datetime

from visacms.models.base import CamelModel, FormModel


class NewsCreate(FormModel):
    title: str = ""
    summary: str = ""
    image: str = ""  # external URL or inlined data URI, stored as-is
    tag: str = ""
    time: str = ""
    read_time: str = ""
    content: str = ""  # markup allowed


class NewsUpdate(NewsCreate):
    slug: str = ""


class NewsRecord(CamelModel):
    """One persisted news article as returned by the collection endpoint."""

    slug: str
    title: str
    summary: str = ""
    image: str = ""
    tag: str = ""
    time: str = ""
    read_time: str = ""
    content: str = ""
    created_at: datetime

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from visacms.models.base import CamelModel, FormModel
from visacms.models.news import NewsRecord
from visacms.models.visa import VisaRecord


class KeyRequest(FormModel):
    slug: str = ""


class NewsMutationResponse(BaseModel):
    message: str
    data: NewsRecord


class VisaMutationResponse(BaseModel):
    message: str
    data: VisaRecord


class MessageResponse(BaseModel):
    message: str


class PageMetadata(BaseModel):
    title: str
    description: str
    keywords: Optional[str] = None


class NewsIndexResponse(BaseModel):
    items: List[Dict[str, Any]]
    paths: List[str]


class NewsPageResponse(CamelModel):
    story: Dict[str, Any]
    other_stories: List[Dict[str, Any]]
    metadata: PageMetadata


class VisaPageResponse(BaseModel):
    visa: Dict[str, Any]
    metadata: PageMetadata

"""Descriptors for the two record kinds the admin forms edit."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from visacms.services.normalizer import slugify


def _news_key(form: Dict[str, str]) -> str:
    return slugify(form.get("title", ""))


def _visa_key(form: Dict[str, str]) -> str:
    return slugify(form.get("slug") or form.get("name", ""))


@dataclass(frozen=True)
class EntityKind:
    label: str
    endpoint: str
    fields: Tuple[str, ...]
    required: Tuple[str, ...]
    title_field: str
    content_field: str
    derive_key: Callable[[Dict[str, str]], str]
    # Older records may carry the body under another name
    fallbacks: Dict[str, str] = field(default_factory=dict)
    key_field: str = "slug"

    def blank_form(self) -> Dict[str, str]:
        return {name: "" for name in self.fields}

    def missing_required(self, form: Dict[str, str]) -> List[str]:
        return [name for name in self.required if not (form.get(name) or "").strip()]

    def prepare(self, records: List[dict]) -> List[dict]:
        """Apply field fallbacks and drop records without a title or key."""
        prepared = []
        for record in records:
            fixed = dict(record)
            for name, fallback in self.fallbacks.items():
                fixed[name] = fixed.get(name) or fixed.get(fallback) or ""
            if (fixed.get(self.title_field) or "").strip() and (fixed.get(self.key_field) or "").strip():
                prepared.append(fixed)
        return prepared


NEWS = EntityKind(
    label="news",
    endpoint="/api/news",
    fields=("title", "summary", "image", "tag", "time", "readTime", "content"),
    required=("title", "content"),
    title_field="title",
    content_field="content",
    derive_key=_news_key,
    fallbacks={"content": "description"},
)

VISAS = EntityKind(
    label="visa",
    endpoint="/api/visas",
    fields=(
        "name",
        "slug",
        "description",
        "info",
        "metaTitle",
        "metaDescription",
        "metaKeywords",
        "image",
    ),
    required=("name",),
    title_field="name",
    content_field="info",
    derive_key=_visa_key,
)

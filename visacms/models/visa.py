from visacms.models.base import CamelModel, FormModel


class VisaCreate(FormModel):
    name: str = ""
    slug: str = ""  # optional hint; the name is used when blank
    description: str = ""
    info: str = ""  # long-form markup
    meta_title: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    image: str = ""


class VisaUpdate(VisaCreate):
    pass


class VisaRecord(CamelModel):
    """One persisted visa program as returned by the collection endpoint."""

    slug: str
    name: str
    description: str = ""
    info: str = ""
    meta_title: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    image: str = ""

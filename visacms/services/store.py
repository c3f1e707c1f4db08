"""Record stores: one single-statement operation per call, committed rows returned.

Every write uses ``RETURNING`` so the caller receives the committed row
from the mutation itself and never has to re-read the table to see it.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from pydantic import BaseModel
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from visacms.models.news import NewsRecord
from visacms.models.visa import VisaRecord
from visacms.services.database import NewsRow, VisaRow
from visacms.services.errors import ConflictError, NotFoundError, StoreError, ValidationError
from visacms.services.normalizer import slugify

logger = logging.getLogger(__name__)


class _TableStore:
    row = None
    record = None
    label = "Record"
    required: Tuple[str, ...] = ()

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # -- hooks -----------------------------------------------------------------

    def _order(self) -> tuple:
        return (self.row.id.asc(),)

    def _derive_slug(self, values: dict) -> str:
        raise NotImplementedError

    # -- helpers ---------------------------------------------------------------

    @contextmanager
    def _transaction(self, conflict_message: str = "") -> Iterator[Session]:
        """Run one statement in its own transaction and translate driver errors."""
        try:
            with self._session_factory.begin() as session:
                yield session
        except IntegrityError as exc:
            if conflict_message:
                raise ConflictError(conflict_message) from exc
            raise StoreError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error("%s store failure: %s", self.label, exc)
            raise StoreError(str(exc)) from exc

    def _check_required(self, values: dict) -> None:
        missing = [name for name in self.required if not str(values.get(name) or "").strip()]
        if missing:
            names = " and ".join(name.capitalize() for name in self.required)
            verb = "is" if len(self.required) == 1 else "are"
            raise ValidationError(f"{names} {verb} required")

    @staticmethod
    def _require_key(slug: str) -> str:
        key = (slug or "").strip()
        if not key:
            raise ValidationError("Slug required")
        return key

    # -- operations ------------------------------------------------------------

    def list_all(self) -> List[BaseModel]:
        stmt = select(self.row).order_by(*self._order())
        with self._transaction() as session:
            return [self.record.model_validate(row) for row in session.scalars(stmt)]

    def insert(self, payload: BaseModel) -> BaseModel:
        values = payload.model_dump()
        self._check_required(values)

        slug = self._derive_slug(values)
        if not slug:
            raise ValidationError(f"{self.label} slug must contain at least one letter or digit")
        values["slug"] = slug

        stmt = insert(self.row).values(**values).returning(self.row)
        with self._transaction(f"{self.label} with slug '{slug}' already exists") as session:
            record = self.record.model_validate(session.scalars(stmt).one())

        logger.info("%s created", self.label, extra={"slug": slug})
        return record

    def update_by_key(self, slug: str, payload: BaseModel) -> BaseModel:
        """Overwrite every mutable field of the record at *slug*.

        The slug itself is never rewritten.
        """
        key = self._require_key(slug)
        values = payload.model_dump(exclude={"slug"})
        self._check_required(values)

        stmt = (
            update(self.row)
            .where(self.row.slug == key)
            .values(**values)
            .returning(self.row)
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            row = session.scalars(stmt).one_or_none()
            if row is None:
                raise NotFoundError(f"{self.label} not found")
            record = self.record.model_validate(row)

        logger.info("%s updated", self.label, extra={"slug": key})
        return record

    def delete_by_key(self, slug: str) -> BaseModel:
        key = self._require_key(slug)

        stmt = (
            delete(self.row)
            .where(self.row.slug == key)
            .returning(self.row)
            .execution_options(synchronize_session=False)
        )
        with self._transaction() as session:
            row = session.scalars(stmt).one_or_none()
            if row is None:
                raise NotFoundError(f"{self.label} not found")
            record = self.record.model_validate(row)

        logger.info("%s deleted", self.label, extra={"slug": key})
        return record


class NewsStore(_TableStore):
    row = NewsRow
    record = NewsRecord
    label = "News"
    required = ("title", "content")

    def _order(self) -> tuple:
        # Newest first; the surrogate id breaks ties between equal timestamps
        return (NewsRow.created_at.desc(), NewsRow.id.desc())

    def _derive_slug(self, values: dict) -> str:
        return slugify(values["title"])


class VisaStore(_TableStore):
    row = VisaRow
    record = VisaRecord
    label = "Visa"
    required = ("name",)

    def _derive_slug(self, values: dict) -> str:
        return slugify(values.get("slug") or values["name"])

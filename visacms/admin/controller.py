"""Create/edit/delete workflow behind the admin news and visa forms.

The controller is either :class:`Creating` (no selection) or
:class:`Editing` (one record selected by slug).  Every mutation is applied
optimistically to the local cache, sent to the collection endpoint, then
either confirmed and followed by a full re-fetch, or rolled back with the
user's typed input left in the form.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from visacms.admin.cache import RecordCache
from visacms.admin.client import CollectionClient
from visacms.admin.kinds import EntityKind
from visacms.services.errors import CmsError, ValidationError
from visacms.services.normalizer import excerpt, make_data_uri

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Creating:
    pass


@dataclass(frozen=True)
class Editing:
    key: str


FormState = Union[Creating, Editing]


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str = "success"  # "success" or "error"


@dataclass(frozen=True)
class ListingRow:
    key: str
    title: str
    excerpt: str
    provisional: bool


def _decline(prompt: str) -> bool:
    return False


class FormController:
    """Drives one admin form against a :class:`CollectionClient`.

    Args:
        kind:    :data:`~visacms.admin.kinds.NEWS` or :data:`~visacms.admin.kinds.VISAS`.
        client:  Collection endpoint client for *kind*.
        confirm: Called with a prompt before any delete; the delete only
                 proceeds when it returns ``True``.  Declines by default.
    """

    def __init__(
        self,
        kind: EntityKind,
        client: CollectionClient,
        confirm: Callable[[str], bool] = _decline,
    ) -> None:
        self.kind = kind
        self.client = client
        self.confirm = confirm
        self.cache = RecordCache(kind.key_field)
        self.state: FormState = Creating()
        self.form: Dict[str, str] = kind.blank_form()
        self.notification: Optional[Notification] = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """Replace the cache with the endpoint's current collection."""
        try:
            records = self.client.list()
        except CmsError as exc:
            logger.error("Failed to load %s: %s", self.kind.label, exc)
            self._notify(f"Failed to load {self.kind.label}.", "error")
            return False
        self.cache.replace_all(self.kind.prepare(records))
        return True

    def listing(self) -> List[ListingRow]:
        return [
            ListingRow(
                key=entry.record.get(self.kind.key_field, ""),
                title=entry.record.get(self.kind.title_field, ""),
                excerpt=excerpt(entry.record.get(self.kind.content_field) or ""),
                provisional=entry.provisional,
            )
            for entry in self.cache.entries
        ]

    # ------------------------------------------------------------------
    # Form editing
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        if name not in self.form:
            raise KeyError(name)
        self.form[name] = value

    def attach_image(self, data: bytes, media_type: str) -> bool:
        """Inline an image file into the form as a data URI."""
        try:
            self.form["image"] = make_data_uri(data, media_type)
        except ValidationError as exc:
            self._notify(str(exc), "error")
            return False
        self._notify("Image uploaded successfully!")
        return True

    def attach_image_url(self, url: str) -> None:
        """Use *url* returned by the upload endpoint, with a cache-busting stamp."""
        separator = "&" if "?" in url else "?"
        self.form["image"] = f"{url}{separator}t={int(time.time() * 1000)}"

    def remove_image(self) -> None:
        self.form["image"] = ""

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_for_edit(self, key: str) -> bool:
        """Load the record at *key* into the form, discarding any unsaved edits."""
        entry = self.cache.get(key)
        if entry is None:
            self._notify(f"No {self.kind.label} with slug '{key}'.", "error")
            return False
        if entry.provisional:
            self._notify("This entry is still being saved.", "error")
            return False

        self.form = {name: entry.record.get(name) or "" for name in self.kind.fields}
        self.state = Editing(key)
        return True

    def cancel(self) -> None:
        self._reset()

    def submit(self) -> Optional[dict]:
        """Create or update from the current form; return the confirmed record."""
        missing = self.kind.missing_required(self.form)
        if missing:
            names = " and ".join(name.capitalize() for name in self.kind.required)
            self._notify(f"{names} {'is' if len(self.kind.required) == 1 else 'are'} required.", "error")
            return None

        payload = dict(self.form)
        editing = isinstance(self.state, Editing)
        if editing:
            key = self.state.key
            current = self.cache.get(key)
            previous = current.record if current is not None else {}
            txn = self.cache.begin_replace(key, {**previous, **payload, self.kind.key_field: key})
        else:
            key = self.kind.derive_key(payload)
            txn = self.cache.begin_insert({**payload, self.kind.key_field: key})

        try:
            if editing:
                record = self.client.update(key, payload)
            else:
                record = self.client.create(payload)
        except CmsError as exc:
            txn.rollback()
            logger.error("Saving %s failed: %s", self.kind.label, exc)
            self._notify(f"Failed to save {self.kind.label}: {exc}", "error")
            return None

        txn.confirm(record)
        self._reset()
        self._refresh()
        done = "updated" if editing else "added"
        self._notify(f"{self.kind.label.capitalize()} {done} successfully!")
        return record

    def delete(self, key: str) -> bool:
        entry = self.cache.get(key)
        if entry is not None and entry.provisional:
            self._notify("This entry is still being saved.", "error")
            return False
        if not self.confirm(f"Are you sure you want to delete this {self.kind.label}?"):
            return False

        txn = self.cache.begin_remove(key)
        try:
            self.client.delete(key)
        except CmsError as exc:
            txn.rollback()
            logger.error("Deleting %s %s failed: %s", self.kind.label, key, exc)
            self._notify(f"Failed to delete {self.kind.label}: {exc}", "error")
            return False

        txn.confirm()
        if self.state == Editing(key):
            self._reset()
        self._refresh()
        self._notify(f"{self.kind.label.capitalize()} deleted successfully!")
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self.form = self.kind.blank_form()
        self.state = Creating()

    def _refresh(self) -> None:
        # The mutation already succeeded; a failed re-fetch keeps the confirmed cache
        try:
            records = self.client.list()
        except CmsError as exc:
            logger.warning("Re-fetching %s after save failed: %s", self.kind.label, exc)
            return
        self.cache.replace_all(self.kind.prepare(records))

    def _notify(self, message: str, kind: str = "success") -> None:
        self.notification = Notification(message, kind)

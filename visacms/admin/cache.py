"""Client-side record cache with snapshot/apply/confirm-or-revert transactions.

The cache has no authority over the data: it is always replaceable by a
fresh listing from the collection endpoint.  Optimistic changes go through a
:class:`Transaction`, which moves from ``PENDING`` to exactly one of
``CONFIRMED`` or ``ROLLED_BACK``.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional


class TransactionState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class TransactionStateError(RuntimeError):
    """Raised when a settled transaction is confirmed or rolled back again."""


@dataclass(frozen=True)
class CacheEntry:
    record: Dict
    provisional: bool = False


class Transaction:
    def __init__(
        self,
        cache: "RecordCache",
        snapshot: List[CacheEntry],
        placeholder: Optional[CacheEntry] = None,
    ) -> None:
        self._cache = cache
        self._snapshot = snapshot
        self._placeholder = placeholder
        self.state = TransactionState.PENDING

    def _settle(self, action: str, state: TransactionState) -> None:
        if self.state is not TransactionState.PENDING:
            raise TransactionStateError(f"Cannot {action} a {self.state.value} transaction")
        self.state = state

    def confirm(self, record: Optional[Dict] = None) -> None:
        """Accept the tentative change, swapping the placeholder for *record*."""
        self._settle("confirm", TransactionState.CONFIRMED)
        if self._placeholder is not None:
            self._cache._swap(self._placeholder, CacheEntry(record) if record else None)

    def rollback(self) -> None:
        """Restore the cache to its contents before the transaction began."""
        self._settle("roll back", TransactionState.ROLLED_BACK)
        self._cache._entries = list(self._snapshot)


class RecordCache:
    def __init__(self, key_field: str = "slug") -> None:
        self.key_field = key_field
        self._entries: List[CacheEntry] = []

    @property
    def entries(self) -> List[CacheEntry]:
        return list(self._entries)

    @property
    def records(self) -> List[Dict]:
        return [entry.record for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[CacheEntry]:
        for entry in self._entries:
            if entry.record.get(self.key_field) == key:
                return entry
        return None

    def replace_all(self, records: List[Dict]) -> None:
        self._entries = [CacheEntry(dict(record)) for record in records]

    def snapshot(self) -> List[CacheEntry]:
        return list(self._entries)

    def begin(
        self,
        apply: Callable[[List[CacheEntry]], List[CacheEntry]],
        placeholder: Optional[CacheEntry] = None,
    ) -> Transaction:
        """Snapshot the cache, apply a tentative change and return its transaction."""
        snapshot = self.snapshot()
        self._entries = apply(list(snapshot))
        return Transaction(self, snapshot, placeholder)

    def begin_insert(self, record: Dict) -> Transaction:
        placeholder = CacheEntry(dict(record), provisional=True)
        return self.begin(lambda entries: [*entries, placeholder], placeholder)

    def begin_replace(self, key: str, record: Dict) -> Transaction:
        placeholder = CacheEntry(dict(record), provisional=True)

        def apply(entries: List[CacheEntry]) -> List[CacheEntry]:
            return [
                placeholder if entry.record.get(self.key_field) == key else entry
                for entry in entries
            ]

        return self.begin(apply, placeholder)

    def begin_remove(self, key: str) -> Transaction:
        return self.begin(
            lambda entries: [e for e in entries if e.record.get(self.key_field) != key]
        )

    def _swap(self, old: CacheEntry, new: Optional[CacheEntry]) -> None:
        swapped = []
        for entry in self._entries:
            if entry is old:
                if new is not None:
                    swapped.append(replace(new, provisional=False))
            else:
                swapped.append(entry)
        self._entries = swapped

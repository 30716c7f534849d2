"""
The ordered file store: the single source of truth for uploaded files.

Records are identified by position only. Two records may share a name,
so every operation here takes store indices, never names.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class StoreError(IndexError):
    pass


@dataclass(frozen=True)
class FileRecord:
    """One logical file: a slash-delimited relative path and its text."""
    name: str
    content: str

    @property
    def size(self) -> int:
        return len(self.content)


class FileStore:
    """
    Ordered sequence of FileRecord.

    Every mutating method returns True when the sequence actually changed,
    so the owner can decide whether derived state needs to be rebuilt.
    """

    def __init__(self, records: Iterable[FileRecord] = ()):
        self._records: list[FileRecord] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> FileRecord:
        return self._records[self._check(index)]

    def snapshot(self) -> tuple[FileRecord, ...]:
        return tuple(self._records)

    def names(self) -> list[str]:
        return [r.name for r in self._records]

    def _check(self, index: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool):
            raise StoreError(f"Index must be an integer, got {index!r}")
        if not 0 <= index < len(self._records):
            raise StoreError(f"Index {index} out of range for {len(self._records)} files")
        return index

    # ---------------------------------------------------
    # Mutations
    # ---------------------------------------------------
    def append(self, records: Iterable[FileRecord]) -> bool:
        batch = list(records)
        if not batch:
            return False
        self._records = self._records + batch
        return True

    def move_up(self, index: int) -> bool:
        self._check(index)
        if index == 0:
            return False
        r = self._records
        r[index - 1], r[index] = r[index], r[index - 1]
        return True

    def move_down(self, index: int) -> bool:
        self._check(index)
        if index == len(self._records) - 1:
            return False
        r = self._records
        r[index], r[index + 1] = r[index + 1], r[index]
        return True

    def remove(self, index: int) -> bool:
        del self._records[self._check(index)]
        return True

    def remove_many(self, indices: Iterable[int]) -> bool:
        doomed = {self._check(i) for i in indices}
        logger.debug("Removing indices: %s", sorted(doomed))
        if not doomed:
            return False
        self._records = [r for i, r in enumerate(self._records) if i not in doomed]
        logger.debug("New files count: %d", len(self._records))
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """
        Splice the record at ``from_index`` out, then splice it back in at
        ``to_index``. ``to_index`` refers to the list *after* removal, so
        valid destinations are ``0..len-1``.
        """
        self._check(from_index)
        self._check(to_index)
        if from_index == to_index:
            return False
        moved = self._records.pop(from_index)
        self._records.insert(to_index, moved)
        return True

    def clear(self) -> bool:
        if not self._records:
            return False
        self._records = []
        return True

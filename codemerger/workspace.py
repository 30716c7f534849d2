"""
One editing session: the file store plus everything derived from it.

After every store change the tree, document and structure are rebuilt
synchronously and the selection is cleared, because selected indices are
positional and may now point at different files.
"""

import logging
import threading
from functools import wraps
from typing import Iterable, List, Optional

from . import config
from .ingest import UploadBlob, ingest_blobs, pasted_text_blob
from .render import document_stats, render_document, render_structure
from .selection import EMPTY, SelectionStatus, restrict, status_of, toggle
from .store import FileRecord, FileStore
from .tree import build_tree, prune_expanded, toggle_folder

logger = logging.getLogger(__name__)


class BusyError(RuntimeError):
    pass


def _locked(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)

    return wrapper


class Workspace:
    """
    ``lock`` serializes every edit with the rebuild that follows it, so
    readers holding it always see a tree and document built from the
    current store. Ingestion decodes outside it and only takes it to append.
    """

    def __init__(self, records: Iterable[FileRecord] = (), template: str = config.DEFAULT_TEMPLATE):
        self.store = FileStore(records)
        self.template = template
        self.selected = EMPTY
        self.expanded = frozenset()
        self.lock = threading.RLock()
        self._processing = threading.Lock()
        self._rebuild()

    # ---------------------------------------------------
    # Derived state
    # ---------------------------------------------------
    def _rebuild(self) -> None:
        records = self.store.snapshot()
        self.tree = build_tree(records)
        self.document = render_document(records, self.template)
        self.structure = render_structure(r.name for r in records)
        self.expanded = prune_expanded(self.expanded, self.tree)

    def _changed(self, changed: bool) -> bool:
        if changed:
            self.selected = EMPTY
            self._rebuild()
        return changed

    @property
    def is_processing(self) -> bool:
        return self._processing.locked()

    def stats(self) -> dict:
        return document_stats(self.document, len(self.store))

    # ---------------------------------------------------
    # Ingestion
    # ---------------------------------------------------
    def ingest(self, blobs: Iterable[UploadBlob]) -> List[FileRecord]:
        """
        Run the pipeline over ``blobs`` and append the whole batch at once.
        Raises BusyError if another ingestion is running; on IngestError
        the store is left as it was.
        """
        if not self._processing.acquire(blocking=False):
            raise BusyError("Files are already being processed")
        try:
            batch = ingest_blobs(blobs)
            with self.lock:
                self._changed(self.store.append(batch))
            logger.info("Appended %d files, store now holds %d", len(batch), len(self.store))
            return batch
        finally:
            self._processing.release()

    def paste_text(self, text: str) -> List[FileRecord]:
        return self.ingest([pasted_text_blob(text)])

    # ---------------------------------------------------
    # Store edits
    # ---------------------------------------------------
    @_locked
    def move_up(self, index: int) -> bool:
        return self._changed(self.store.move_up(index))

    @_locked
    def move_down(self, index: int) -> bool:
        return self._changed(self.store.move_down(index))

    @_locked
    def remove(self, index: int) -> bool:
        return self._changed(self.store.remove(index))

    @_locked
    def remove_many(self, indices: Iterable[int]) -> bool:
        return self._changed(self.store.remove_many(indices))

    @_locked
    def reorder(self, from_index: int, to_index: int) -> bool:
        return self._changed(self.store.reorder(from_index, to_index))

    @_locked
    def clear(self) -> bool:
        return self._changed(self.store.clear())

    @_locked
    def remove_selected(self) -> int:
        count = len(self.selected)
        if count:
            self.remove_many(self.selected)
        return count

    # ---------------------------------------------------
    # Template
    # ---------------------------------------------------
    @_locked
    def set_template(self, template: str) -> None:
        self.template = template
        self.document = render_document(self.store.snapshot(), template)

    def reset_template(self) -> None:
        self.set_template(config.DEFAULT_TEMPLATE)

    # ---------------------------------------------------
    # Tree view state
    # ---------------------------------------------------
    @_locked
    def toggle_selection(self, path: Optional[str], is_folder: bool) -> SelectionStatus:
        node = self.tree.get(path, is_folder)
        self.selected = restrict(toggle(self.selected, node), len(self.store))
        return status_of(self.selected, node)

    @_locked
    def status_of(self, path: Optional[str], is_folder: bool) -> SelectionStatus:
        return status_of(self.selected, self.tree.get(path, is_folder))

    @_locked
    def toggle_folder(self, path: str) -> bool:
        self.tree.get(path, True)
        self.expanded = toggle_folder(self.expanded, path)
        return path in self.expanded

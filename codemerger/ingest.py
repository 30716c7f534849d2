"""
Ingestion pipeline: normalize a batch of uploads into one ordered batch of
FileRecords.

Zip uploads are flattened in place, plain uploads become a single record.
Per-file problems turn into placeholder content; only a failure outside
those per-file boundaries aborts the batch, as IngestError.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, List

from . import config
from .archive import decode_text, expand_archive
from .store import FileRecord

logger = logging.getLogger(__name__)


class IngestError(Exception):
    pass


@dataclass(frozen=True)
class UploadBlob:
    """An uploaded file: its name, declared MIME type and a byte reader."""
    name: str
    content_type: str
    read: Callable[[], bytes]

    @classmethod
    def from_bytes(cls, name: str, data: bytes, content_type: str = "") -> "UploadBlob":
        return cls(name=name, content_type=content_type, read=lambda: data)


def is_archive(name: str, content_type: str | None) -> bool:
    if (name or "").lower().endswith(config.ARCHIVE_EXTENSION):
        return True
    return (content_type or "") in config.ARCHIVE_MIME_TYPES


def pasted_text_blob(text: str, now: datetime | None = None) -> UploadBlob:
    """Wrap pasted clipboard text as a ``pasted-code-<timestamp>.txt`` upload."""
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S")
    return UploadBlob.from_bytes(
        f"pasted-code-{stamp}.txt", text.encode(config.TEXT_ENCODING), "text/plain"
    )


def _ingest_archive(blob: UploadBlob) -> List[FileRecord]:
    try:
        data = blob.read()
    except Exception as e:
        logger.warning("Error unzipping %s: %s", blob.name, e)
        return [FileRecord(name=blob.name, content=config.ARCHIVE_OPEN_FAILED)]
    return expand_archive(data, blob.name)


def _ingest_plain(blob: UploadBlob) -> FileRecord:
    try:
        content = decode_text(blob.read())
    except Exception as e:
        logger.warning("Error reading file %s: %s", blob.name, e)
        content = config.FILE_READ_FAILED
    return FileRecord(name=blob.name, content=content)


def ingest_blobs(blobs: Iterable[UploadBlob]) -> List[FileRecord]:
    """
    Return the records for ``blobs`` in upload order.

    Entries of one archive stay contiguous, in the archive's own order, at
    the position of that archive in the batch.
    """
    records: List[FileRecord] = []
    try:
        for blob in blobs:
            if is_archive(blob.name, blob.content_type):
                records.extend(_ingest_archive(blob))
            else:
                records.append(_ingest_plain(blob))
    except Exception as e:
        logger.exception("Global error processing files")
        raise IngestError(f"Failed to process files: {e}") from e
    return records

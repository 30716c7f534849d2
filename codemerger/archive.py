"""
Archive expansion: turn zip bytes into an ordered list of (path, text) records.

A broken entry only costs that entry; a broken archive only costs that
upload. Neither failure escapes this module.
"""

import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Callable, List

from . import config
from .store import FileRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of an opened archive, read lazily."""
    path: str
    is_directory: bool
    read_content: Callable[[], str]
    size: int = 0


def decode_text(data: bytes) -> str:
    return data.decode(config.TEXT_ENCODING, errors="replace")


def is_junk_path(path: str) -> bool:
    """True for OS bookkeeping entries such as ``__MACOSX/...`` or ``.DS_Store``."""
    return any(seg in config.JUNK_SEGMENTS for seg in path.split("/"))


def iter_entries(z: zipfile.ZipFile) -> List[ArchiveEntry]:
    """Members of ``z`` in central-directory order."""
    entries = []
    for info in z.infolist():
        entries.append(
            ArchiveEntry(
                path=info.filename,
                is_directory=info.is_dir(),
                read_content=lambda info=info: decode_text(z.read(info)),
                size=info.file_size,
            )
        )
    return entries


def expand_archive(data: bytes, upload_name: str) -> List[FileRecord]:
    """
    Expand zip ``data`` into FileRecords named by their path inside the archive.

    If the container itself cannot be opened, a single placeholder record
    named ``upload_name`` stands in for the whole archive.
    """
    records = []
    try:
        z = zipfile.ZipFile(io.BytesIO(data))
    except Exception as e:
        logger.warning("Error unzipping %s: %s", upload_name, e)
        return [FileRecord(name=upload_name, content=config.ARCHIVE_OPEN_FAILED)]

    with z:
        for entry in iter_entries(z):
            if entry.is_directory or is_junk_path(entry.path):
                continue
            if entry.size > config.MAX_ENTRY_BYTES:
                logger.warning(
                    "Skipping %s inside %s: %d bytes exceeds %d",
                    entry.path, upload_name, entry.size, config.MAX_ENTRY_BYTES,
                )
                records.append(FileRecord(name=entry.path, content=config.ENTRY_TOO_LARGE))
                continue
            try:
                content = entry.read_content()
            except Exception as e:
                logger.warning(
                    "Failed to read content of %s inside %s: %s", entry.path, upload_name, e
                )
                content = config.ENTRY_READ_FAILED
            records.append(FileRecord(name=entry.path, content=content))
    return records

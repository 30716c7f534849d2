"""Shared builders for tests."""

from __future__ import annotations

import io
import zipfile

from codemerger.store import FileRecord


def records(*names: str) -> list[FileRecord]:
    return [FileRecord(name=n, content=f"content of {n}") for n in names]


def make_zip(entries: list[tuple[str, bytes | str]]) -> bytes:
    """Build zip bytes; names ending in ``/`` become directory entries."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as z:
        for name, data in entries:
            if name.endswith("/"):
                z.writestr(zipfile.ZipInfo(name), b"")
            else:
                z.writestr(name, data)
    return buf.getvalue()

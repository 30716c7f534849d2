"""Tests for the ingestion pipeline."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from codemerger import config
from codemerger.ingest import IngestError, UploadBlob, ingest_blobs, is_archive, pasted_text_blob
from codemerger.store import FileRecord

from helpers import make_zip


def _failing_read():
    raise OSError("disk went away")


class ClassificationTests(unittest.TestCase):
    def test_extension_is_case_insensitive(self) -> None:
        self.assertTrue(is_archive("Project.ZIP", "application/octet-stream"))
        self.assertTrue(is_archive("a.zip", ""))

    def test_zip_mime_types(self) -> None:
        self.assertTrue(is_archive("download", "application/zip"))
        self.assertTrue(is_archive("download", "application/x-zip-compressed"))
        self.assertFalse(is_archive("notes.txt", "text/plain"))
        self.assertFalse(is_archive("zip.txt", None))


class IngestBlobsTests(unittest.TestCase):
    def test_archive_entries_are_flattened_in_place(self) -> None:
        blobs = [
            UploadBlob.from_bytes("first.txt", b"1", "text/plain"),
            UploadBlob.from_bytes("bundle.zip", make_zip([("a/x.py", "x"), ("a/y.py", "y")])),
            UploadBlob.from_bytes("last.txt", b"2", "text/plain"),
        ]
        self.assertEqual(
            ingest_blobs(blobs),
            [
                FileRecord("first.txt", "1"),
                FileRecord("a/x.py", "x"),
                FileRecord("a/y.py", "y"),
                FileRecord("last.txt", "2"),
            ],
        )

    def test_plain_read_failure_keeps_name_with_placeholder(self) -> None:
        blobs = [
            UploadBlob("gone.txt", "text/plain", _failing_read),
            UploadBlob.from_bytes("ok.txt", b"fine"),
        ]
        self.assertEqual(
            ingest_blobs(blobs),
            [FileRecord("gone.txt", config.FILE_READ_FAILED), FileRecord("ok.txt", "fine")],
        )

    def test_bad_archive_does_not_affect_siblings(self) -> None:
        blobs = [
            UploadBlob.from_bytes("broken.zip", b"garbage"),
            UploadBlob("unreadable.zip", "application/zip", _failing_read),
            UploadBlob.from_bytes("ok.txt", b"fine"),
        ]
        self.assertEqual(
            ingest_blobs(blobs),
            [
                FileRecord("broken.zip", config.ARCHIVE_OPEN_FAILED),
                FileRecord("unreadable.zip", config.ARCHIVE_OPEN_FAILED),
                FileRecord("ok.txt", "fine"),
            ],
        )

    def test_failure_outside_per_file_handling_raises(self) -> None:
        def exploding():
            yield UploadBlob.from_bytes("ok.txt", b"fine")
            raise RuntimeError("enumeration failed")

        with self.assertRaises(IngestError):
            ingest_blobs(exploding())


class PastedTextTests(unittest.TestCase):
    def test_pasted_text_becomes_timestamped_plain_file(self) -> None:
        blob = pasted_text_blob("print('hi')", now=datetime(2024, 3, 5, 14, 7, 9, 123000, tzinfo=timezone.utc))
        self.assertEqual(blob.name, "pasted-code-2024-03-05T14-07-09.txt")
        self.assertEqual(blob.content_type, "text/plain")
        self.assertEqual(ingest_blobs([blob]), [FileRecord(blob.name, "print('hi')")])


if __name__ == "__main__":
    unittest.main()

"""Tests for zip expansion."""

from __future__ import annotations

import unittest
from unittest import mock

from codemerger import config
from codemerger.archive import ArchiveEntry, decode_text, expand_archive, is_junk_path
from codemerger.store import FileRecord

from helpers import make_zip


class ExpandArchiveTests(unittest.TestCase):
    def test_entries_keep_archive_order_and_full_paths(self) -> None:
        data = make_zip([("src/b.py", "b = 1"), ("README.md", "# hi"), ("src/a.py", "a = 1")])
        result = expand_archive(data, "bundle.zip")
        self.assertEqual(
            result,
            [
                FileRecord("src/b.py", "b = 1"),
                FileRecord("README.md", "# hi"),
                FileRecord("src/a.py", "a = 1"),
            ],
        )

    def test_directories_and_os_junk_are_dropped(self) -> None:
        data = make_zip(
            [
                ("src/", b""),
                ("src/main.py", "print()"),
                ("__MACOSX/src/._main.py", b"\x00\x05"),
                ("src/.DS_Store", b"\x00"),
            ]
        )
        self.assertEqual(expand_archive(data, "x.zip"), [FileRecord("src/main.py", "print()")])

    def test_junk_marker_must_be_a_whole_segment(self) -> None:
        self.assertTrue(is_junk_path("__MACOSX/a.txt"))
        self.assertTrue(is_junk_path("deep/dir/.DS_Store"))
        self.assertFalse(is_junk_path("notes.DS_Store.txt"))

    def test_undecodable_bytes_are_replaced_not_fatal(self) -> None:
        data = make_zip([("bin.dat", b"ok\xff\xfe")])
        [record] = expand_archive(data, "x.zip")
        self.assertEqual(record.name, "bin.dat")
        self.assertTrue(record.content.startswith("ok"))
        self.assertIn("�", record.content)

    def test_unreadable_entry_gets_placeholder_and_others_survive(self) -> None:
        data = make_zip([("a.txt", "A"), ("b.txt", "B"), ("c.txt", "C")])

        def fake_entries(z):
            def broken():
                raise RuntimeError("bad crc")

            return [
                ArchiveEntry("a.txt", False, lambda: "A"),
                ArchiveEntry("b.txt", False, broken),
                ArchiveEntry("c.txt", False, lambda: "C"),
            ]

        with mock.patch("codemerger.archive.iter_entries", side_effect=fake_entries):
            result = expand_archive(data, "x.zip")

        self.assertEqual(
            result,
            [
                FileRecord("a.txt", "A"),
                FileRecord("b.txt", config.ENTRY_READ_FAILED),
                FileRecord("c.txt", "C"),
            ],
        )

    def test_oversized_member_gets_placeholder_without_being_read(self) -> None:
        data = make_zip([("small.txt", "ok"), ("huge.txt", "x" * 64)])
        with mock.patch.object(config, "MAX_ENTRY_BYTES", 16), mock.patch(
            "codemerger.archive.decode_text", wraps=decode_text
        ) as decode:
            result = expand_archive(data, "x.zip")
        self.assertEqual(
            result,
            [FileRecord("small.txt", "ok"), FileRecord("huge.txt", config.ENTRY_TOO_LARGE)],
        )
        self.assertEqual(decode.call_count, 1)

    def test_corrupt_archive_yields_single_placeholder_named_after_upload(self) -> None:
        result = expand_archive(b"this is not a zip", "broken.zip")
        self.assertEqual(result, [FileRecord("broken.zip", config.ARCHIVE_OPEN_FAILED)])

    def test_empty_archive_yields_nothing(self) -> None:
        self.assertEqual(expand_archive(make_zip([]), "empty.zip"), [])


if __name__ == "__main__":
    unittest.main()

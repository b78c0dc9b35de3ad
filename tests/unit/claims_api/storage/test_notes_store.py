from __future__ import annotations

import io
import json
import pathlib
import tempfile
import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from claims_api.storage import MockNotesRepository, S3NotesRepository


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")


class TestS3NotesRepository(unittest.TestCase):
    def test_get_notes_reads_claim_object(self) -> None:
        s3 = MagicMock()
        s3.get_object.return_value = {"Body": io.BytesIO(json.dumps({"notes": ["a", "b"]}).encode("utf-8"))}
        notes = S3NotesRepository(s3, "notes-bucket").get_notes_for_claim("CLM-1")

        s3.get_object.assert_called_once_with(Bucket="notes-bucket", Key="CLM-1.json")
        self.assertEqual(notes, ["a", "b"])

    def test_empty_body_yields_no_notes(self) -> None:
        s3 = MagicMock()
        s3.get_object.return_value = {"Body": io.BytesIO(b"")}
        self.assertEqual(S3NotesRepository(s3, "notes-bucket").get_notes_for_claim("CLM-1"), [])

    def test_object_without_notes_array_yields_no_notes(self) -> None:
        for stored in (['a', 'b'], "just text", {"notes": "one string"}, {"other": 1}):
            s3 = MagicMock()
            s3.get_object.return_value = {"Body": io.BytesIO(json.dumps(stored).encode("utf-8"))}
            self.assertEqual(S3NotesRepository(s3, "notes-bucket").get_notes_for_claim("CLM-1"), [])

    def test_missing_object_yields_no_notes(self) -> None:
        s3 = MagicMock()
        s3.get_object.side_effect = _client_error("NoSuchKey")
        self.assertEqual(S3NotesRepository(s3, "notes-bucket").get_notes_for_claim("CLM-1"), [])

    def test_other_errors_propagate(self) -> None:
        s3 = MagicMock()
        s3.get_object.side_effect = _client_error("AccessDenied")
        with self.assertRaises(ClientError):
            S3NotesRepository(s3, "notes-bucket").get_notes_for_claim("CLM-1")

    def test_save_replaces_object(self) -> None:
        s3 = MagicMock()
        S3NotesRepository(s3, "notes-bucket").save_notes_for_claim("CLM-1", ["only note"])

        s3.put_object.assert_called_once_with(
            Bucket="notes-bucket",
            Key="CLM-1.json",
            Body=json.dumps({"notes": ["only note"]}),
            ContentType="application/json",
        )


class TestMockNotesRepository(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = pathlib.Path(self.tmp.name) / "notes.json"

    def test_get_notes_from_fixture(self) -> None:
        self.path.write_text(json.dumps({"CLM-1": ["first", "second"]}), encoding="utf-8")
        repo = MockNotesRepository(self.path)
        self.assertEqual(repo.get_notes_for_claim("CLM-1"), ["first", "second"])
        self.assertEqual(repo.get_notes_for_claim("CLM-2"), [])

    def test_unreadable_fixture_yields_no_notes(self) -> None:
        self.assertEqual(MockNotesRepository(self.path).get_notes_for_claim("CLM-1"), [])
        self.path.write_text("[broken", encoding="utf-8")
        self.assertEqual(MockNotesRepository(self.path).get_notes_for_claim("CLM-1"), [])

    def test_non_array_fixture_entry_yields_no_notes(self) -> None:
        self.path.write_text(json.dumps({"CLM-1": "single note", "CLM-2": None}), encoding="utf-8")
        repo = MockNotesRepository(self.path)
        self.assertEqual(repo.get_notes_for_claim("CLM-1"), [])
        self.assertEqual(repo.get_notes_for_claim("CLM-2"), [])

    def test_save_does_not_touch_fixture(self) -> None:
        original = json.dumps({"CLM-1": ["first"]})
        self.path.write_text(original, encoding="utf-8")
        MockNotesRepository(self.path).save_notes_for_claim("CLM-1", ["replacement"])
        self.assertEqual(self.path.read_text(encoding="utf-8"), original)


if __name__ == "__main__":
    unittest.main()

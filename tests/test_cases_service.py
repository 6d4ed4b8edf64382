"""Tests for casedesk.services.cases and casedesk.services.uploads."""

import asyncio
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from sqlalchemy import Text
from sqlalchemy.exc import OperationalError

from casedesk.core.database import Store
from casedesk.core.errors import InternalError, InvalidInputError, NotFoundError
from casedesk.models import Case
from casedesk.services import cases
from casedesk.services.uploads import discard_upload, save_upload, stored_filename


class FakeUpload:
    """Minimal stand-in for a multipart file part."""

    def __init__(self, filename: str, content: bytes) -> None:
        self.filename = filename
        self._content = content

    async def read(self) -> bytes:
        return self._content


class TestCaseRepository(unittest.TestCase):
    def setUp(self) -> None:
        self.store = Store("sqlite://")
        self.store.connect()
        self.db = self.store.session()

    def tearDown(self) -> None:
        self.db.close()
        self.store.dispose()

    def test_create_stamps_owner_and_defaults(self) -> None:
        case = cases.create(self.db, "owner1", "t1", None, None)
        self.assertEqual(case.owner_id, "owner1")
        self.assertEqual(case.title, "t1")
        self.assertEqual(case.category, "")
        self.assertEqual(case.description, "")
        self.assertEqual(case.image_path, "")
        self.assertTrue(case.id)
        self.assertIsNotNone(case.created_at)

    def test_list_all_returns_every_case(self) -> None:
        self.assertEqual(cases.list_all(self.db), [])
        a = cases.create(self.db, "o1", "a", "c", "d")
        b = cases.create(self.db, "o2", "b", "c", "d", image_path="/uploads/1.png")
        ids = {c.id for c in cases.list_all(self.db)}
        self.assertEqual(ids, {a.id, b.id})

    def test_delete_removes_only_target(self) -> None:
        a = cases.create(self.db, "o1", "a", "", "")
        b = cases.create(self.db, "o1", "b", "", "")
        cases.delete_by_id(self.db, a.id)
        self.assertEqual([c.id for c in cases.list_all(self.db)], [b.id])

    def test_delete_missing_raises_not_found(self) -> None:
        a = cases.create(self.db, "o1", "a", "", "")
        cases.delete_by_id(self.db, a.id)
        with self.assertRaises(NotFoundError) as ctx:
            cases.delete_by_id(self.db, a.id)
        self.assertEqual(ctx.exception.message, "Case not found")

    def test_free_form_fields_have_no_length_limit(self) -> None:
        for column in ("title", "category", "description"):
            self.assertIsInstance(Case.__table__.c[column].type, Text)
        case = cases.create(self.db, "o1", "t" * 5000, "c" * 5000, "")
        self.assertEqual(len(case.title), 5000)
        self.assertEqual(len(case.category), 5000)


class TestStoreFailures(unittest.TestCase):
    """SQLAlchemy errors surface as InternalError after a rollback."""

    def test_commit_failure_becomes_internal_error(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection reset"))
        with self.assertRaises(InternalError) as ctx:
            cases.create(db, "o1", "t", "c", "d")
        db.rollback.assert_called_once()
        self.assertIsInstance(ctx.exception.cause, OperationalError)
        self.assertEqual(ctx.exception.message, "Server error")

    def test_query_failure_becomes_internal_error(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertRaises(InternalError):
            cases.list_all(db)
        with self.assertRaises(InternalError):
            cases.delete_by_id(db, "c1")


class TestSaveUpload(unittest.TestCase):
    def setUp(self) -> None:
        self.dir = tempfile.mkdtemp()

    def tearDown(self) -> None:
        shutil.rmtree(self.dir, ignore_errors=True)

    def test_stored_filename_keeps_lowercased_extension(self) -> None:
        self.assertEqual(stored_filename("Photo.PNG", now_ms=1718000000000), "1718000000000.png")
        self.assertEqual(stored_filename("noext", now_ms=5), "5")

    def test_no_upload_returns_empty(self) -> None:
        self.assertEqual(asyncio.run(save_upload(None, self.dir, max_bytes=10)), "")
        self.assertEqual(asyncio.run(save_upload("text", self.dir, max_bytes=10)), "")
        self.assertEqual(
            asyncio.run(save_upload(FakeUpload("a.png", b""), self.dir, max_bytes=10)), ""
        )

    def test_writes_file_and_returns_public_path(self) -> None:
        path = asyncio.run(save_upload(FakeUpload("a.jpg", b"abc"), self.dir, max_bytes=10))
        self.assertTrue(path.startswith("/uploads/"))
        self.assertTrue(path.endswith(".jpg"))
        stored = Path(self.dir) / path.removeprefix("/uploads/")
        self.assertEqual(stored.read_bytes(), b"abc")

    def test_same_millisecond_uploads_do_not_collide(self) -> None:
        paths = {
            asyncio.run(save_upload(FakeUpload("a.jpg", b"x"), self.dir, max_bytes=10))
            for _ in range(5)
        }
        self.assertEqual(len(paths), 5)

    def test_oversize_upload_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            asyncio.run(save_upload(FakeUpload("a.jpg", b"x" * 11), self.dir, max_bytes=10))

    def test_discard_removes_stored_file(self) -> None:
        path = asyncio.run(save_upload(FakeUpload("a.jpg", b"abc"), self.dir, max_bytes=10))
        discard_upload(path, self.dir)
        self.assertEqual(list(Path(self.dir).iterdir()), [])

    def test_discard_ignores_empty_and_missing(self) -> None:
        discard_upload("", self.dir)
        discard_upload("/uploads/123.png", self.dir)
        self.assertEqual(list(Path(self.dir).iterdir()), [])


if __name__ == "__main__":
    unittest.main()

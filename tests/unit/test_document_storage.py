"""Tests for local document storage."""

import io
from pathlib import Path

import pytest

from src.projectdesk.core.exceptions import DocumentStorageError
from src.projectdesk.services.document_storage import LocalDocumentStorage, safe_file_name

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("report.pdf", "report.pdf"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\bob\\plan.docx", "plan.docx"),
        ("dir/sub/notes.txt", "notes.txt"),
    ],
)
def test_safe_file_name_strips_directories(raw: str, expected: str):
    assert safe_file_name(raw) == expected


class TestLocalDocumentStorage:
    async def test_save_writes_under_project_directory(self, tmp_path: Path):
        storage = LocalDocumentStorage(tmp_path)

        stored = await storage.save(7, "brief.txt", io.BytesIO(b"hello"))

        assert stored.file_name == "brief.txt"
        assert stored.file_size == 5
        assert stored.relative_path.startswith("uploads/projects/7/")
        assert stored.relative_path.endswith("_brief.txt")
        assert (tmp_path / stored.relative_path).read_bytes() == b"hello"

    async def test_same_name_never_collides(self, tmp_path: Path):
        storage = LocalDocumentStorage(tmp_path)

        first = await storage.save(7, "a.txt", io.BytesIO(b"1"))
        second = await storage.save(7, "a.txt", io.BytesIO(b"2"))

        assert first.relative_path != second.relative_path
        assert len(list(storage.project_dir(7).iterdir())) == 2

    async def test_save_rewinds_stream(self, tmp_path: Path):
        stream = io.BytesIO(b"content")
        stream.read()

        stored = await LocalDocumentStorage(tmp_path).save(1, "c.txt", stream)

        assert stored.file_size == 7

    async def test_nameless_upload_is_rejected(self, tmp_path: Path):
        with pytest.raises(DocumentStorageError):
            await LocalDocumentStorage(tmp_path).save(1, "", io.BytesIO(b"x"))

    async def test_write_failure_is_wrapped(self, tmp_path: Path):
        # A regular file where the upload root should be a directory
        blocker = tmp_path / "root"
        blocker.write_text("not a directory")

        with pytest.raises(DocumentStorageError):
            await LocalDocumentStorage(blocker).save(1, "a.txt", io.BytesIO(b"x"))

    async def test_delete_project_files(self, tmp_path: Path):
        storage = LocalDocumentStorage(tmp_path)
        await storage.save(3, "a.txt", io.BytesIO(b"x"))

        assert await storage.delete_project_files(3) is True
        assert not storage.project_dir(3).exists()

    async def test_delete_missing_directory_is_fine(self, tmp_path: Path):
        assert await LocalDocumentStorage(tmp_path).delete_project_files(99) is True

    async def test_delete_failure_is_logged_not_raised(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        storage = LocalDocumentStorage(tmp_path)
        await storage.save(3, "a.txt", io.BytesIO(b"x"))

        def _fail(path):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr("src.projectdesk.services.document_storage.shutil.rmtree", _fail)

        assert await storage.delete_project_files(3) is False

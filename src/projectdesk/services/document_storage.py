"""Local filesystem storage for project documents.

Files live under ``<root>/uploads/projects/<project_id>/`` and are named
``<token>_<original name>``, so two uploads never collide. Paths handed back
to the database are relative to ``root``.
"""

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import BinaryIO
from uuid import uuid4

from src.projectdesk.core.exceptions import DocumentStorageError
from src.projectdesk.core.logging import get_logger

logger = get_logger(__name__)

PROJECT_UPLOADS_DIR = PurePosixPath("uploads", "projects")


@dataclass(frozen=True)
class UploadedDocument:
    """A file submitted with the last wizard step."""

    file_name: str
    size: int
    stream: BinaryIO


@dataclass(frozen=True)
class StoredDocument:
    file_name: str
    relative_path: str
    file_size: int


def safe_file_name(file_name: str) -> str:
    """Strip any client-side directory part (both / and \\ separators)."""
    return PureWindowsPath(file_name).name


class LocalDocumentStorage:
    """Writes uploaded documents below a web-servable root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def project_relative_dir(self, project_id: int) -> PurePosixPath:
        return PROJECT_UPLOADS_DIR / str(project_id)

    def project_dir(self, project_id: int) -> Path:
        return self.root.joinpath(*self.project_relative_dir(project_id).parts)

    async def save(self, project_id: int, file_name: str, stream: BinaryIO) -> StoredDocument:
        """Write one document for a project.

        Raises:
            DocumentStorageError: If the name is unusable or the write fails.
        """
        base_name = safe_file_name(file_name)
        if not base_name:
            raise DocumentStorageError("Uploaded file has no name")

        unique_name = f"{uuid4().hex}_{base_name}"
        target = self.project_dir(project_id) / unique_name

        try:
            size = await asyncio.to_thread(self._write, target, stream)
        except OSError as e:
            raise DocumentStorageError(f"Error saving file {base_name}: {e}") from e

        relative_path = self.project_relative_dir(project_id) / unique_name
        logger.debug(
            "Stored project document",
            project_id=project_id,
            file_path=str(relative_path),
            file_size=size,
        )
        return StoredDocument(file_name=base_name, relative_path=str(relative_path), file_size=size)

    @staticmethod
    def _write(target: Path, stream: BinaryIO) -> int:
        target.parent.mkdir(parents=True, exist_ok=True)
        if stream.seekable():
            stream.seek(0)
        with open(target, "wb") as out:
            shutil.copyfileobj(stream, out)
            return out.tell()

    async def delete_project_files(self, project_id: int) -> bool:
        """Best-effort removal of a project's upload directory.

        Failures are logged, never raised. Returns True if nothing is left behind.
        """
        directory = self.project_dir(project_id)
        try:
            if directory.exists():
                await asyncio.to_thread(shutil.rmtree, directory)
            return True
        except OSError as e:
            logger.warning(
                "Failed to clean up project files, manual cleanup required",
                project_id=project_id,
                path=str(directory),
                error=str(e),
            )
            return False

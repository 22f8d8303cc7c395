"""Tests for committing a finished wizard into a project.

Covers the all-or-nothing guarantee: either the project, its team, its
document rows and its files all exist, or none of them do.
"""

import io
from datetime import date
from pathlib import Path
from typing import BinaryIO

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.projectdesk.core.db import UnitOfWork
from src.projectdesk.core.exceptions import (
    DocumentStorageError,
    ProjectCommitError,
    ReferenceNotFoundError,
    WizardValidationError,
)
from src.projectdesk.models import Project, ProjectDocument, ProjectEmployeeLink
from src.projectdesk.repositories import (
    CompanyRepository,
    EmployeeRepository,
    ProjectDocumentRepository,
    ProjectRepository,
)
from src.projectdesk.schemas.wizard import WizardState
from src.projectdesk.services import LocalDocumentStorage, ProjectCommitService, UploadedDocument
from src.projectdesk.services.document_storage import StoredDocument
from tests.helpers import CUSTOMER_ID, EXECUTOR_ID, HEAD_ID, MEMBER_ID, count_rows

pytestmark = pytest.mark.usefixtures("reference_data")

STATE = WizardState(
    name="Alpha",
    start_date=date(2025, 1, 1),
    end_date=date(2025, 6, 1),
    priority=5,
    customer_company_id=CUSTOMER_ID,
    executor_company_id=EXECUTOR_ID,
    head_id=HEAD_ID,
    employee_ids=frozenset({HEAD_ID, MEMBER_ID}),
    current_step=5,
)


def upload(name: str, content: bytes) -> UploadedDocument:
    return UploadedDocument(file_name=name, size=len(content), stream=io.BytesIO(content))


class FailingStorage(LocalDocumentStorage):
    """Writes normally until the ``fail_on``-th save, which raises."""

    def __init__(self, root: Path, fail_on: int):
        super().__init__(root)
        self.fail_on = fail_on
        self.calls = 0

    async def save(self, project_id: int, file_name: str, stream: BinaryIO) -> StoredDocument:
        self.calls += 1
        if self.calls == self.fail_on:
            raise DocumentStorageError(f"Error saving file {file_name}: disk full")
        return await super().save(project_id, file_name, stream)


def make_service(
    session: AsyncSession,
    storage: LocalDocumentStorage,
    max_attempts: int = 3,
) -> ProjectCommitService:
    return ProjectCommitService(
        ProjectRepository(session),
        CompanyRepository(session),
        EmployeeRepository(session),
        ProjectDocumentRepository(session),
        session,
        storage,
        max_attempts=max_attempts,
        retry_delay_seconds=0,
    )


async def commit_and_load(
    session: AsyncSession,
    storage: LocalDocumentStorage,
    state: WizardState,
    documents: list[UploadedDocument] | None = None,
) -> Project:
    project_id = await make_service(session, storage).commit(state, documents or [])
    project = await ProjectRepository(session).get_with_relations(project_id)
    assert project is not None
    return project


def stored_files(storage: LocalDocumentStorage) -> list[Path]:
    projects_dir = storage.root / "uploads" / "projects"
    if not projects_dir.exists():
        return []
    return [p for p in projects_dir.rglob("*") if p.is_file()]


async def test_commit_without_files(
    engine: AsyncEngine, db_session: AsyncSession, storage: LocalDocumentStorage
):
    project = await commit_and_load(db_session, storage, STATE)

    assert project.id is not None
    assert project.name == "Alpha"
    assert project.customer_company.name == "Acme"
    assert project.executor_company.name == "Globex"
    assert project.head.id == HEAD_ID
    assert {e.id for e in project.employees} == {HEAD_ID, MEMBER_ID}
    assert project.documents == []
    assert await count_rows(engine, Project) == 1
    assert await count_rows(engine, ProjectEmployeeLink) == 2


async def test_commit_stores_documents(
    engine: AsyncEngine, db_session: AsyncSession, storage: LocalDocumentStorage
):
    project = await commit_and_load(
        db_session,
        storage,
        STATE,
        [upload("plan.pdf", b"%PDF-1.7"), upload("notes.txt", b"hello")],
    )

    assert [d.file_name for d in project.documents] == ["plan.pdf", "notes.txt"]
    for document in project.documents:
        assert document.file_path.startswith(f"uploads/projects/{project.id}/")
        assert (storage.root / document.file_path).is_file()
    assert project.documents[1].file_size == 5


async def test_empty_files_are_skipped(
    engine: AsyncEngine, db_session: AsyncSession, storage: LocalDocumentStorage
):
    documents = [upload("a.txt", b"a"), upload("empty.txt", b""), upload("c.txt", b"c")]

    project = await commit_and_load(db_session, storage, STATE, documents)

    assert [d.file_name for d in project.documents] == ["a.txt", "c.txt"]
    assert await count_rows(engine, ProjectDocument) == 2
    assert len(stored_files(storage)) == 2


async def test_storage_failure_rolls_back_everything(
    engine: AsyncEngine, db_session: AsyncSession, tmp_path: Path
):
    storage = FailingStorage(tmp_path / "wwwroot", fail_on=2)
    documents = [upload("a.txt", b"a"), upload("b.txt", b"b"), upload("c.txt", b"c")]

    with pytest.raises(ProjectCommitError):
        await make_service(db_session, storage).commit(STATE, documents)

    assert storage.calls == 2
    assert await count_rows(engine, Project) == 0
    assert await count_rows(engine, ProjectDocument) == 0
    assert await count_rows(engine, ProjectEmployeeLink) == 0
    # The first file was written, then removed by the cleanup
    assert stored_files(storage) == []


async def test_storage_failure_is_not_retried(db_session: AsyncSession, tmp_path: Path):
    storage = FailingStorage(tmp_path / "wwwroot", fail_on=1)

    with pytest.raises(ProjectCommitError):
        await make_service(db_session, storage).commit(STATE, [upload("a.txt", b"a")])

    assert storage.calls == 1


async def test_missing_reference_fails_without_writes(
    engine: AsyncEngine, db_session: AsyncSession, storage: LocalDocumentStorage
):
    state = STATE.model_copy(update={"head_id": 999, "employee_ids": frozenset({999})})

    with pytest.raises(ReferenceNotFoundError):
        await make_service(db_session, storage).commit(state, [upload("a.txt", b"a")])

    assert await count_rows(engine, Project) == 0
    assert stored_files(storage) == []


async def test_missing_team_member_fails(
    engine: AsyncEngine, db_session: AsyncSession, storage: LocalDocumentStorage
):
    state = STATE.model_copy(update={"employee_ids": frozenset({HEAD_ID, 998})})

    with pytest.raises(ReferenceNotFoundError, match="998"):
        await make_service(db_session, storage).commit(state)

    assert await count_rows(engine, Project) == 0


async def test_invalid_state_is_rejected_before_any_write(
    engine: AsyncEngine, db_session: AsyncSession, storage: LocalDocumentStorage
):
    state = STATE.model_copy(update={"executor_company_id": CUSTOMER_ID})

    with pytest.raises(WizardValidationError) as exc_info:
        await make_service(db_session, storage).commit(state)

    assert [e.field for e in exc_info.value.errors] == ["executor_company_id"]
    assert await count_rows(engine, Project) == 0


class TestPersistenceFailures:
    @pytest.fixture
    def flaky_commit(self, monkeypatch: pytest.MonkeyPatch):
        """Make the first ``failures`` unit-of-work commits raise ``error``."""
        calls = {
            "count": 0,
            "failures": 0,
            "error": OperationalError("COMMIT", None, Exception("database is locked")),
        }
        original_commit = UnitOfWork.commit

        async def _commit(self: UnitOfWork) -> None:
            calls["count"] += 1
            if calls["count"] <= calls["failures"]:
                raise calls["error"]
            await original_commit(self)

        monkeypatch.setattr(UnitOfWork, "commit", _commit)
        return calls

    async def test_transient_failure_is_retried(
        self,
        engine: AsyncEngine,
        db_session: AsyncSession,
        storage: LocalDocumentStorage,
        flaky_commit: dict,
    ):
        flaky_commit["failures"] = 1

        project = await commit_and_load(db_session, storage, STATE, [upload("a.txt", b"abc")])

        assert flaky_commit["count"] == 2
        assert await count_rows(engine, Project) == 1
        assert len(project.documents) == 1
        assert project.documents[0].file_size == 3
        # Files from the failed attempt were removed
        assert len(stored_files(storage)) == 1

    async def test_exhausted_retries_surface(
        self,
        engine: AsyncEngine,
        db_session: AsyncSession,
        storage: LocalDocumentStorage,
        flaky_commit: dict,
    ):
        flaky_commit["failures"] = 10

        with pytest.raises(ProjectCommitError):
            await make_service(db_session, storage, max_attempts=3).commit(
                STATE, [upload("a.txt", b"abc")]
            )

        assert flaky_commit["count"] == 3
        assert await count_rows(engine, Project) == 0
        assert stored_files(storage) == []

    async def test_integrity_error_is_not_retried(
        self,
        engine: AsyncEngine,
        db_session: AsyncSession,
        storage: LocalDocumentStorage,
        flaky_commit: dict,
    ):
        flaky_commit["failures"] = 10
        flaky_commit["error"] = IntegrityError(
            "COMMIT", None, Exception("UNIQUE constraint failed: project_documents.file_path")
        )

        with pytest.raises(ProjectCommitError):
            await make_service(db_session, storage, max_attempts=3).commit(
                STATE, [upload("a.txt", b"abc")]
            )

        assert flaky_commit["count"] == 1
        assert await count_rows(engine, Project) == 0
        assert await count_rows(engine, ProjectDocument) == 0
        assert await count_rows(engine, ProjectEmployeeLink) == 0
        assert stored_files(storage) == []

"""Project creation wizard - ties the state store, state machine and commit together."""

from collections.abc import Sequence

from src.projectdesk.core.exceptions import (
    FieldError,
    ProjectCommitError,
    WizardValidationError,
)
from src.projectdesk.core.logging import get_logger
from src.projectdesk.schemas.wizard import WizardFields, WizardState
from src.projectdesk.services.document_storage import UploadedDocument
from src.projectdesk.services.project_commit_service import ProjectCommitService
from src.projectdesk.services.wizard.machine import (
    Commit,
    Completed,
    Outcome,
    Redirect,
    Render,
    Restart,
    WizardAction,
    WizardStep,
    show,
    transition,
)
from src.projectdesk.services.wizard.store import WizardStateStore

logger = get_logger(__name__)

COMMIT_FAILED_MESSAGE = "Failed to create project. Please try again."


class ProjectWizardService:
    """Runs one wizard request against the caller's session store."""

    def __init__(self, store: WizardStateStore, commit_service: ProjectCommitService):
        self.store = store
        self.commit_service = commit_service

    async def start(self) -> Outcome:
        """Discard any wizard in progress and begin at the first step."""
        await self.store.clear()
        await self.store.save(WizardState())
        logger.info("Project wizard started")
        return Redirect(WizardStep.BASIC)

    async def show_step(self, step: WizardStep) -> Outcome:
        return show(await self.store.load(), step)

    async def reject(self, step: WizardStep, errors: Sequence[FieldError]) -> Outcome:
        """Re-render ``step`` with errors found before the fields could be merged."""
        outcome = show(await self.store.load(), step)
        if isinstance(outcome, Render):
            return Render(step, outcome.state, tuple(errors))
        return outcome

    async def submit(
        self,
        step: WizardStep,
        action: WizardAction,
        fields: WizardFields,
        documents: Sequence[UploadedDocument] = (),
    ) -> Outcome:
        """Apply a step submission and persist the resulting snapshot."""
        result = transition(await self.store.load(), step, action, fields)

        if result.save is not None:
            await self.store.save(result.save)

        outcome = result.outcome
        if isinstance(outcome, Render):
            logger.info(
                "Wizard step rejected",
                errors=[f"{e.field}: {e.message}" for e in outcome.errors],
            )
        if isinstance(outcome, Restart):
            logger.info("Wizard state missing, restarting")
        if isinstance(outcome, Commit):
            return await self._commit(outcome.state, documents)
        return outcome

    async def _commit(
        self,
        state: WizardState,
        documents: Sequence[UploadedDocument],
    ) -> Outcome:
        try:
            project_id = await self.commit_service.commit(state, documents)
        except WizardValidationError as e:
            return Render(WizardStep.DOCUMENTS, state, tuple(e.errors), COMMIT_FAILED_MESSAGE)
        except ProjectCommitError as e:
            logger.warning("Project wizard commit failed", error=str(e))
            return Render(WizardStep.DOCUMENTS, state, (), COMMIT_FAILED_MESSAGE)

        await self.store.clear()
        return Completed(project_id=project_id)

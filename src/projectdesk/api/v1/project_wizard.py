"""Project creation wizard endpoints.

``GET /create`` starts a wizard; each step is then shown with ``GET /{step}``
and submitted as a form with ``POST /{step}``. Moves between steps are
``303`` redirects; a step that has to be shown again comes back as a
``WizardStepResponse`` body.
"""

import os
from typing import BinaryIO

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.datastructures import FormData, UploadFile

from src.projectdesk.api.dependencies import ProjectWizardServiceDep
from src.projectdesk.core.exceptions import WizardValidationError
from src.projectdesk.core.logging import bind_wizard_context
from src.projectdesk.schemas.wizard import FieldErrorRead, WizardFields, WizardStepResponse
from src.projectdesk.services import UploadedDocument
from src.projectdesk.services.wizard import (
    Completed,
    Outcome,
    Redirect,
    Render,
    Restart,
    WizardAction,
    WizardStep,
)

router = APIRouter(prefix="/projects/wizard", tags=["project wizard"])

STEP_RESPONSES = {
    200: {"model": WizardStepResponse, "description": "Step to display"},
    303: {"description": "Redirect to another step, the wizard start or the project list"},
}


@router.get(
    "/create",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Start project wizard",
    description="Discard any wizard in progress and redirect to the first step.",
)
async def start_project_wizard(
    request: Request,
    service: ProjectWizardServiceDep,
) -> Response:
    return _respond(request, await service.start())


@router.get(
    "/{step}",
    summary="Show wizard step",
    responses=STEP_RESPONSES,
)
async def show_project_wizard_step(
    step: WizardStep,
    request: Request,
    service: ProjectWizardServiceDep,
) -> Response:
    bind_wizard_context(step.value, step.number)
    return _respond(request, await service.show_step(step))


@router.post(
    "/{step}",
    summary="Submit wizard step",
    description=(
        "Submit the step form. `action=back` returns to the previous step without "
        "validation; anything else validates and moves forward. The `documents` "
        "step accepts multipart `files` and creates the project."
    ),
    responses={
        **STEP_RESPONSES,
        422: {"model": WizardStepResponse, "description": "Step has validation errors"},
        500: {"model": WizardStepResponse, "description": "Project could not be created"},
    },
)
async def submit_project_wizard_step(
    step: WizardStep,
    request: Request,
    service: ProjectWizardServiceDep,
) -> Response:
    bind_wizard_context(step.value, step.number)
    form = await request.form()
    action = WizardAction.parse(_text(form.get("action")))

    try:
        fields = WizardFields.from_form(
            form,
            form.getlist("employee_ids"),
            discard_invalid=action is WizardAction.BACK,
        )
    except WizardValidationError as e:
        return _respond(request, await service.reject(step, e.errors))

    documents = _uploaded_documents(form) if step is WizardStep.DOCUMENTS else []
    outcome = await service.submit(step, action, fields, documents)
    return _respond(request, outcome)


def _respond(request: Request, outcome: Outcome) -> Response:
    if isinstance(outcome, Redirect):
        url = request.url_for("show_project_wizard_step", step=outcome.step.value)
        return RedirectResponse(str(url), status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(outcome, Restart):
        url = request.url_for("start_project_wizard")
        return RedirectResponse(str(url), status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(outcome, Completed):
        url = request.url_for("list_projects")
        return RedirectResponse(str(url), status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(outcome, Render):
        body = WizardStepResponse(
            step=outcome.step.value,
            step_number=outcome.step.number,
            state=outcome.state,
            errors=[FieldErrorRead.model_validate(e) for e in outcome.errors],
            detail=outcome.detail,
        )
        if outcome.detail is not None:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        elif outcome.errors:
            status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        else:
            status_code = status.HTTP_200_OK
        return JSONResponse(body.model_dump(mode="json"), status_code=status_code)
    raise TypeError(f"Unexpected wizard outcome: {outcome!r}")


def _text(value: str | UploadFile | None) -> str | None:
    return value if isinstance(value, str) else None


def _uploaded_documents(form: FormData) -> list[UploadedDocument]:
    documents = []
    for upload in form.getlist("files"):
        if not isinstance(upload, UploadFile):
            continue
        size = upload.size if upload.size is not None else _stream_size(upload.file)
        documents.append(UploadedDocument(upload.filename or "", size, upload.file))
    return documents


def _stream_size(stream: BinaryIO) -> int:
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size

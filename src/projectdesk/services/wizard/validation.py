"""Ordered validation rules for the project wizard.

Rules run in a fixed order and every violation is reported, so the field an
error is attached to is deterministic. Rules for later steps only run once the
wizard has reached that step: their fields don't exist yet on earlier steps.
"""

from collections.abc import Callable

from src.projectdesk.core.exceptions import FieldError
from src.projectdesk.models.project import MAX_PRIORITY, MIN_PRIORITY, PROJECT_NAME_MAX_LENGTH
from src.projectdesk.schemas.wizard import WizardState

Rule = Callable[[WizardState], FieldError | None]


def name_is_valid(state: WizardState) -> FieldError | None:
    if state.name is None or not state.name.strip():
        return FieldError("name", "Project name is required")
    if len(state.name) > PROJECT_NAME_MAX_LENGTH:
        return FieldError("name", "Project name is too long")
    return None


def start_date_is_present(state: WizardState) -> FieldError | None:
    if state.start_date is None:
        return FieldError("start_date", "Start date is required")
    return None


def end_date_is_present(state: WizardState) -> FieldError | None:
    if state.end_date is None:
        return FieldError("end_date", "End date is required")
    return None


def priority_is_valid(state: WizardState) -> FieldError | None:
    if state.priority is None:
        return FieldError("priority", "Priority value is required")
    if not MIN_PRIORITY <= state.priority <= MAX_PRIORITY:
        return FieldError("priority", "Priority is invalid")
    return None


def end_date_after_start_date(state: WizardState) -> FieldError | None:
    if state.start_date is None or state.end_date is None:
        return None
    if state.end_date <= state.start_date:
        return FieldError("end_date", "End date must be after start date")
    return None


def customer_company_is_present(state: WizardState) -> FieldError | None:
    if state.customer_company_id is None:
        return FieldError("customer_company_id", "Customer company is required")
    return None


def executor_company_is_present(state: WizardState) -> FieldError | None:
    if state.executor_company_id is None:
        return FieldError("executor_company_id", "Executor company is required")
    return None


def companies_differ(state: WizardState) -> FieldError | None:
    if state.customer_company_id is None or state.executor_company_id is None:
        return None
    if state.customer_company_id == state.executor_company_id:
        return FieldError("executor_company_id", "Executor must differ from customer")
    return None


def head_is_present(state: WizardState) -> FieldError | None:
    if state.head_id is None:
        return FieldError("head_id", "Head must be specified")
    return None


# (first step the rule applies to, rule)
VALIDATION_RULES: tuple[tuple[int, Rule], ...] = (
    (1, name_is_valid),
    (1, start_date_is_present),
    (1, end_date_is_present),
    (1, priority_is_valid),
    (1, end_date_after_start_date),
    (2, customer_company_is_present),
    (2, executor_company_is_present),
    (2, companies_differ),
    (3, head_is_present),
)


def validate_wizard_state(state: WizardState) -> list[FieldError]:
    """Run every rule gated at ``state.current_step`` and collect the violations."""
    errors: list[FieldError] = []
    for first_step, rule in VALIDATION_RULES:
        if state.current_step < first_step:
            break
        error = rule(state)
        if error is not None:
            errors.append(error)
    return errors

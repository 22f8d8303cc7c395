"""Project wizard state machine.

``transition`` and ``show`` are pure: they take the stored snapshot and the
submission and return what to persist and what to answer with. Loading,
saving and committing are left to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.projectdesk.core.exceptions import FieldError
from src.projectdesk.schemas.wizard import WizardFields, WizardState
from src.projectdesk.services.wizard.validation import validate_wizard_state


class WizardStep(str, Enum):
    """The five wizard steps, in order."""

    BASIC = "basic"
    COMPANIES = "companies"
    HEAD = "head"
    TEAM = "team"
    DOCUMENTS = "documents"

    @property
    def number(self) -> int:
        return _STEP_ORDER.index(self) + 1

    @classmethod
    def from_number(cls, number: int) -> Self:
        return _STEP_ORDER[number - 1]

    @property
    def next(self) -> "WizardStep | None":
        if self.number == len(_STEP_ORDER):
            return None
        return _STEP_ORDER[self.number]

    @property
    def previous(self) -> "WizardStep | None":
        if self.number == 1:
            return None
        return _STEP_ORDER[self.number - 2]


_STEP_ORDER: tuple[WizardStep, ...] = tuple(WizardStep)

# Fields each step's form owns; merging overwrites exactly these.
STEP_FIELDS: dict[WizardStep, tuple[str, ...]] = {
    WizardStep.BASIC: ("name", "start_date", "end_date", "priority"),
    WizardStep.COMPANIES: ("customer_company_id", "executor_company_id"),
    WizardStep.HEAD: ("head_id",),
    WizardStep.TEAM: ("employee_ids",),
    WizardStep.DOCUMENTS: (),
}


class WizardAction(str, Enum):
    ADVANCE = "advance"
    BACK = "back"

    @classmethod
    def parse(cls, value: str | None) -> "WizardAction":
        """Anything other than "back" moves forward."""
        if value is not None and value.strip().lower() == cls.BACK.value:
            return cls.BACK
        return cls.ADVANCE


@dataclass(frozen=True)
class Render:
    """Show ``step`` again, with errors if any."""

    step: WizardStep
    state: WizardState
    errors: tuple[FieldError, ...] = ()
    detail: str | None = None


@dataclass(frozen=True)
class Redirect:
    """Go to ``step``."""

    step: WizardStep


@dataclass(frozen=True)
class Restart:
    """No wizard in progress; start over from ``create``."""


@dataclass(frozen=True)
class Commit:
    """The wizard is complete; materialise ``state`` into a project."""

    state: WizardState


@dataclass(frozen=True)
class Completed:
    """The project was created and the wizard cleared."""

    project_id: int


Outcome = Render | Redirect | Restart | Commit | Completed


@dataclass(frozen=True)
class Transition:
    outcome: Outcome
    save: WizardState | None = None


def merge_fields(state: WizardState, step: WizardStep, fields: WizardFields) -> WizardState:
    """Return a new snapshot with ``step``'s fields taken from the submission."""
    update: dict[str, object] = {}
    for name in STEP_FIELDS[step]:
        value = getattr(fields, name)
        if name == "employee_ids":
            value = frozenset(value)
        update[name] = value
    return state.model_copy(update=update)


def _guard_skipping(state: WizardState, step: WizardStep) -> Redirect | None:
    if step.number > state.current_step:
        return Redirect(WizardStep.from_number(state.current_step))
    return None


def show(state: WizardState | None, step: WizardStep) -> Outcome:
    """Decide what a GET for ``step`` answers with."""
    if state is None:
        return Restart()
    redirect = _guard_skipping(state, step)
    if redirect is not None:
        return redirect
    return Render(step, state)


def transition(
    state: WizardState | None,
    step: WizardStep,
    action: WizardAction,
    fields: WizardFields,
) -> Transition:
    """Apply a step submission to the stored snapshot."""
    if state is None:
        return Transition(Restart())

    redirect = _guard_skipping(state, step)
    if redirect is not None:
        return Transition(redirect)

    merged = merge_fields(state, step, fields).model_copy(update={"current_step": step.number})

    if action is WizardAction.BACK:
        target = step.previous or step
        back = merged.model_copy(update={"current_step": target.number})
        return Transition(Redirect(target), back)

    errors = validate_wizard_state(merged)
    if errors:
        return Transition(Render(step, merged, tuple(errors)))

    next_step = step.next
    if next_step is None:
        return Transition(Commit(merged))

    if step is WizardStep.TEAM and merged.head_id is not None:
        merged = merged.model_copy(update={"employee_ids": merged.employee_ids | {merged.head_id}})

    advanced = merged.model_copy(update={"current_step": next_step.number})
    return Transition(Redirect(next_step), advanced)

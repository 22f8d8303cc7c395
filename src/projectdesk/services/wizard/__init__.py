"""Project wizard building blocks: validation rules, state machine, state stores."""

from src.projectdesk.services.wizard.machine import (
    STEP_FIELDS,
    Commit,
    Completed,
    Outcome,
    Redirect,
    Render,
    Restart,
    Transition,
    WizardAction,
    WizardStep,
    merge_fields,
    show,
    transition,
)
from src.projectdesk.services.wizard.store import (
    WIZARD_STATE_KEY,
    RedisWizardStateStore,
    SessionWizardStateStore,
    WizardStateStore,
)
from src.projectdesk.services.wizard.validation import VALIDATION_RULES, validate_wizard_state

__all__ = [
    # State machine
    "STEP_FIELDS",
    "Commit",
    "Completed",
    "Outcome",
    "Redirect",
    "Render",
    "Restart",
    "Transition",
    "WizardAction",
    "WizardStep",
    "merge_fields",
    "show",
    "transition",
    # Stores
    "WIZARD_STATE_KEY",
    "RedisWizardStateStore",
    "SessionWizardStateStore",
    "WizardStateStore",
    # Validation
    "VALIDATION_RULES",
    "validate_wizard_state",
]

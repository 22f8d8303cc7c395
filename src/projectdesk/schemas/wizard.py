"""Project wizard schemas - session state, submitted fields and step responses."""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from src.projectdesk.core.exceptions import FieldError, WizardValidationError

WIZARD_FIRST_STEP = 1
WIZARD_LAST_STEP = 5


class WizardState(BaseModel):
    """Immutable snapshot of a project wizard in progress.

    Each step handler produces a new snapshot with ``model_copy(update=...)``
    rather than mutating the stored one.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    priority: int | None = None
    customer_company_id: int | None = None
    executor_company_id: int | None = None
    head_id: int | None = None
    employee_ids: frozenset[int] = frozenset()
    current_step: int = Field(default=WIZARD_FIRST_STEP, ge=WIZARD_FIRST_STEP, le=WIZARD_LAST_STEP)

    @field_serializer("employee_ids")
    def serialize_employee_ids(self, employee_ids: frozenset[int]) -> list[int]:
        return sorted(employee_ids)

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str | bytes) -> "WizardState":
        return cls.model_validate_json(raw)


class WizardFields(BaseModel):
    """Fields submitted by a wizard step form.

    Empty form values mean "not provided". Only the fields owned by the
    submitted step are merged into the wizard state.
    """

    name: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    priority: int | None = None
    customer_company_id: int | None = None
    executor_company_id: int | None = None
    head_id: int | None = None
    employee_ids: list[int] = []

    @field_validator(
        "name",
        "start_date",
        "end_date",
        "priority",
        "customer_company_id",
        "executor_company_id",
        "head_id",
        mode="before",
    )
    @classmethod
    def blank_as_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return v

    @field_validator("employee_ids", mode="before")
    @classmethod
    def drop_blank_ids(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [item for item in v if not (isinstance(item, str) and not item.strip())]

    @classmethod
    def from_form(
        cls,
        data: Mapping[str, Any],
        employee_ids: Iterable[Any] = (),
        discard_invalid: bool = False,
    ) -> "WizardFields":
        """Parse submitted form values, reporting type errors as field errors.

        Args:
            data: Submitted form values.
            employee_ids: All submitted ``employee_ids`` values.
            discard_invalid: Treat unparseable values as not provided instead
                of failing. Used when going back, which never fails.

        Raises:
            WizardValidationError: If a value cannot be parsed (e.g. a malformed
                date) and ``discard_invalid`` is false.
        """
        payload = {
            key: data[key] for key in cls.model_fields if key in data and key != "employee_ids"
        }
        payload["employee_ids"] = list(employee_ids)
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            if discard_invalid:
                return cls.model_validate(_without_invalid(payload, e))
            raise WizardValidationError(
                [
                    FieldError(
                        field=str(error["loc"][0]) if error["loc"] else "",
                        message=error["msg"],
                    )
                    for error in e.errors()
                ]
            ) from e


def _without_invalid(payload: dict[str, Any], error: ValidationError) -> dict[str, Any]:
    invalid = {str(e["loc"][0]) for e in error.errors() if e["loc"]}
    cleaned = {key: value for key, value in payload.items() if key not in invalid}
    if "employee_ids" in invalid:
        # Keep the ids that do parse
        cleaned["employee_ids"] = [
            value for value in payload["employee_ids"] if str(value).strip().isdigit()
        ]
    return cleaned


class FieldErrorRead(BaseModel):
    """Schema for a field-level validation error."""

    field: str
    message: str

    model_config = {"from_attributes": True}


class WizardStepResponse(BaseModel):
    """Body returned when a wizard step is (re-)rendered."""

    step: str
    step_number: int
    state: WizardState
    errors: list[FieldErrorRead] = []
    detail: str | None = None

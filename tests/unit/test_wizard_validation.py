"""Tests for the ordered wizard validation rules."""

from datetime import date, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.projectdesk.schemas.wizard import WizardState
from src.projectdesk.services.wizard.validation import validate_wizard_state

pytestmark = pytest.mark.unit

VALID_BASIC = {
    "name": "Alpha",
    "start_date": date(2025, 1, 1),
    "end_date": date(2025, 6, 1),
    "priority": 5,
}


def fields_of(errors) -> list[str]:
    return [e.field for e in errors]


class TestBasicStep:
    def test_valid_basic_fields_pass(self):
        assert validate_wizard_state(WizardState(**VALID_BASIC, current_step=1)) == []

    def test_empty_state_reports_every_basic_field_in_order(self):
        errors = validate_wizard_state(WizardState(current_step=1))
        assert fields_of(errors) == ["name", "start_date", "end_date", "priority"]
        assert errors[0].message == "Project name is required"
        assert errors[3].message == "Priority value is required"

    def test_whitespace_name_is_required(self):
        errors = validate_wizard_state(WizardState(**{**VALID_BASIC, "name": "   "}))
        assert [(e.field, e.message) for e in errors] == [("name", "Project name is required")]

    def test_name_longer_than_limit(self):
        errors = validate_wizard_state(WizardState(**{**VALID_BASIC, "name": "x" * 101}))
        assert [(e.field, e.message) for e in errors] == [("name", "Project name is too long")]

    @pytest.mark.parametrize("priority", [0, 11, -3])
    def test_priority_out_of_range(self, priority: int):
        errors = validate_wizard_state(WizardState(**{**VALID_BASIC, "priority": priority}))
        assert [(e.field, e.message) for e in errors] == [("priority", "Priority is invalid")]

    def test_equal_dates_are_rejected(self):
        state = WizardState(**{**VALID_BASIC, "end_date": VALID_BASIC["start_date"]})
        errors = validate_wizard_state(state)
        assert [(e.field, e.message) for e in errors] == [
            ("end_date", "End date must be after start date")
        ]

    def test_later_step_rules_do_not_run_on_step_one(self):
        # Companies and head are still empty here
        assert validate_wizard_state(WizardState(**VALID_BASIC, current_step=1)) == []


@given(
    start=st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 1, 1)),
    days_before=st.integers(min_value=0, max_value=3650),
    name=st.one_of(st.none(), st.text(max_size=120)),
    priority=st.one_of(st.none(), st.integers(min_value=-5, max_value=20)),
)
def test_end_not_after_start_always_flags_end_date(
    start: date, days_before: int, name: str | None, priority: int | None
):
    """End date on or before start date is reported on end_date, whatever else is wrong."""
    state = WizardState(
        name=name,
        start_date=start,
        end_date=start - timedelta(days=days_before),
        priority=priority,
    )
    errors = validate_wizard_state(state)
    assert ("end_date", "End date must be after start date") in [
        (e.field, e.message) for e in errors
    ]


class TestCompaniesStep:
    def test_missing_companies(self):
        errors = validate_wizard_state(WizardState(**VALID_BASIC, current_step=2))
        assert [(e.field, e.message) for e in errors] == [
            ("customer_company_id", "Customer company is required"),
            ("executor_company_id", "Executor company is required"),
        ]

    def test_same_company_is_attributed_to_executor(self):
        state = WizardState(
            **VALID_BASIC, customer_company_id=101, executor_company_id=101, current_step=2
        )
        errors = validate_wizard_state(state)
        assert [(e.field, e.message) for e in errors] == [
            ("executor_company_id", "Executor must differ from customer")
        ]

    def test_basic_errors_come_before_company_errors(self):
        state = WizardState(customer_company_id=101, executor_company_id=101, current_step=2)
        assert fields_of(validate_wizard_state(state)) == [
            "name",
            "start_date",
            "end_date",
            "priority",
            "executor_company_id",
        ]


class TestHeadStep:
    def test_head_required_from_step_three(self):
        state = WizardState(
            **VALID_BASIC, customer_company_id=101, executor_company_id=102, current_step=3
        )
        errors = validate_wizard_state(state)
        assert [(e.field, e.message) for e in errors] == [("head_id", "Head must be specified")]

    def test_complete_state_is_valid_on_last_step(self):
        state = WizardState(
            **VALID_BASIC,
            customer_company_id=101,
            executor_company_id=102,
            head_id=201,
            current_step=5,
        )
        assert validate_wizard_state(state) == []

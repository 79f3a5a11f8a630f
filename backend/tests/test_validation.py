"""
Unit tests for the validation result and schema-level date handling.
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from eventdesk.core.errors import ValidationFailedError
from eventdesk.core.validation import ValidationResult, check_positive
from eventdesk.schemas import EmployeeIn, EventIn, TicketIn


class TestValidationResult:

    def test_empty_result_is_valid(self):
        result = ValidationResult()
        assert result.is_valid
        result.raise_if_invalid("employee")

    def test_errors_accumulate_per_field(self):
        result = ValidationResult()
        result.add("id", "first").add("id", "second").add("name", "third")
        assert result.as_dict() == {"id": ["first", "second"], "name": ["third"]}
        assert result.has_error("id")
        assert not result.has_error("post")

    def test_merge(self):
        left = ValidationResult().add("id", "a")
        right = ValidationResult().add("id", "b").add("date", "c")
        assert left.merge(right).as_dict() == {"id": ["a", "b"], "date": ["c"]}

    def test_raise_carries_errors_and_candidate(self):
        result = ValidationResult().add("id", "bad")
        with pytest.raises(ValidationFailedError) as exc_info:
            result.raise_if_invalid("event", candidate={"id": -1})
        assert exc_info.value.errors is result
        assert exc_info.value.candidate == {"id": -1}
        assert str(exc_info.value) == "VALIDATION_FAILED: Event validation failed"

    @pytest.mark.parametrize("value,ok", [(1, True), (0, False), (-4, False), (None, False)])
    def test_check_positive(self, value, ok):
        result = ValidationResult()
        assert check_positive(result, "id", value, "must be positive") is ok
        assert result.is_valid is ok


class TestDateFields:

    def test_event_date_datetime_truncated(self):
        data = EventIn(id=1, name="Expo", event_date=datetime(2030, 5, 1, 23, 59), event_type="Forum")
        assert data.event_date == date(2030, 5, 1)

    def test_event_date_iso_datetime_string(self):
        data = EventIn(id=1, name="Expo", event_date="2030-05-01T08:00:00Z", event_type="Forum")
        assert data.event_date == date(2030, 5, 1)

    def test_sale_date_optional(self):
        data = TicketIn(ticket_number=1, service_number=1, event_id=1, ticket_type="VIP", payment_method="Card")
        assert data.sale_date is None

    def test_length_limits(self):
        with pytest.raises(ValidationError):
            TicketIn(ticket_type="x" * 21, payment_method="Card")


class TestKeyBounds:

    def test_key_above_integer_range_rejected(self):
        with pytest.raises(ValidationError):
            EmployeeIn(service_number=2_147_483_648, name="Ann", surname="Lee", post="Clerk", phone_number="1")
        with pytest.raises(ValidationError):
            EventIn(id=2**63, name="Expo", event_type="Forum")
        with pytest.raises(ValidationError):
            TicketIn(ticket_number=1, service_number=1, event_id=2**31, ticket_type="VIP", payment_method="Card")

    def test_largest_key_and_non_positive_keys_pass_schema(self):
        """Non-positive keys are reported by the services, not the schema."""
        assert EmployeeIn(
            service_number=2_147_483_647, name="Ann", surname="Lee", post="Clerk", phone_number="1"
        ).service_number == 2_147_483_647
        assert EventIn(id=-1, name="Expo", event_type="Forum").id == -1

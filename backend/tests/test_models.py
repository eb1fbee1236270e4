"""Unit tests for serial normalization and the event models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from assettrail.errors import EventValidationError
from assettrail.models import CurrentState, Event, NewEvent, normalize_serial
from tests.fixtures import make_event_fields


class TestNormalizeSerial:
    @pytest.mark.parametrize("raw", [" ab12 ", "AB12", "ab12", "\tAb12\n"])
    def test_variants_normalize_to_same_key(self, raw):
        assert normalize_serial(raw) == "AB12"

    def test_idempotent(self):
        once = normalize_serial("  xy-99 ")
        assert normalize_serial(once) == once

    @pytest.mark.parametrize("raw", ["", "   ", None, 123])
    def test_blank_or_non_string_rejected(self, raw):
        with pytest.raises(EventValidationError) as exc_info:
            normalize_serial(raw)
        assert exc_info.value.fields == ["serial_number"]


class TestNewEvent:
    def test_parses_iso_date_and_strips_text(self):
        new_event = NewEvent.model_validate(
            make_event_fields(event_date=" 2023-01-10 ", status=" Assigned ")
        )
        assert new_event.event_date == date(2023, 1, 10)
        assert new_event.status == "Assigned"

    def test_accepts_date_instance(self):
        new_event = NewEvent.model_validate(make_event_fields(event_date=date(2023, 1, 10)))
        assert new_event.event_date == date(2023, 1, 10)

    def test_rejects_datetime(self):
        with pytest.raises(ValidationError):
            NewEvent.model_validate(
                make_event_fields(event_date=datetime(2023, 1, 10, 12, 30))
            )

    @pytest.mark.parametrize(
        "value", ["86400", 1672531200, "2023-01-10T00:00:00", "2023-01-10 00:00"]
    )
    def test_rejects_timestamps_and_datetime_strings(self, value):
        with pytest.raises(ValidationError):
            NewEvent.model_validate(make_event_fields(event_date=value))

    def test_ignores_unknown_keys(self):
        new_event = NewEvent.model_validate(make_event_fields(location="HQ"))
        assert not hasattr(new_event, "location")


class TestEvent:
    def _event(self, **overrides) -> Event:
        fields = {
            "event_id": 1,
            "serial_number": "SN1",
            "event_date": "2021-06-01",
            "status": "Assigned",
            "current_name": "PC-1",
            "renamed_from": "N/A",
            "renamed_to": "N/A",
            "manufacture": "HP",
            "model": "EliteBook",
            "description": "Desk 4",
            "created_at": "2021-06-01T09:00:00+00:00",
        }
        fields.update(overrides)
        return Event(**fields)

    def test_event_is_immutable(self):
        event = self._event()
        with pytest.raises(ValidationError):
            event.status = "Disposal"

    def test_sort_key_orders_same_day_by_event_id(self):
        earlier = self._event(event_id=5)
        later = self._event(event_id=7)
        next_day = self._event(event_id=2, event_date="2021-06-02")
        assert sorted([next_day, later, earlier], key=Event.sort_key) == [
            earlier, later, next_day,
        ]

    def test_current_state_from_event(self):
        state = CurrentState.from_event(self._event(status="Returned"))
        assert state.current_status == "Returned"
        assert state.last_event_date == date(2021, 6, 1)
        assert state.serial_number == "SN1"

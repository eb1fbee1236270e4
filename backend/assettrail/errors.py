"""Failure kinds raised by the event store and the state projector."""

from datetime import date


class AssetTrailError(Exception):
    """Base class for every error raised by the event core."""


class EventValidationError(AssetTrailError):
    """Malformed or missing input: blank serial, blank field, bad date."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        self.fields = fields or []
        super().__init__(message)


class EventOrderingError(AssetTrailError):
    def __init__(
        self, serial_number: str, event_date: date, latest_event_date: date
    ) -> None:
        self.serial_number = serial_number
        self.event_date = event_date
        self.latest_event_date = latest_event_date
        super().__init__(
            f"event_date {event_date.isoformat()} is before latest event date "
            f"{latest_event_date.isoformat()}"
        )


class SerialNotFoundError(AssetTrailError):
    def __init__(self, serial_number: str) -> None:
        self.serial_number = serial_number
        super().__init__(f"Serial not found: {serial_number}")


class ConsistencyError(AssetTrailError):
    """Latest event and history disagree within one read. Indicates a defect."""

    def __init__(self, serial_number: str, reason: str) -> None:
        self.serial_number = serial_number
        self.reason = reason
        super().__init__(f"Inconsistent event log for {serial_number}: {reason}")

"""Exceptions raised by record sources and the courier proxy."""


class RecordSourceError(Exception):
    """The record source could not be read or written."""


class RecordNotFoundError(LookupError):
    """No record with the requested id exists in the batch."""

    def __init__(self, record_id: str):
        super().__init__(f"Request not found: {record_id!r}")
        self.record_id = record_id


class CourierError(Exception):
    """The courier API rejected the order or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, data: object = None):
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class UnknownCourierError(ValueError):
    """The order named a courier the proxy does not forward to."""

    def __init__(self, courier: str):
        super().__init__(f"Unknown courier: {courier!r}")
        self.courier = courier

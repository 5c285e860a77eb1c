"""Errors raised by the service layer.

Missing records are signalled by returning None; routes turn that into a 404.
"""


class DuplicateValueError(Exception):
    """A unique column (building code, room code, sensor id, email) already holds the value."""

    def __init__(self, field: str, value: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
        self.message = message

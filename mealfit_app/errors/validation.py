"""Input validation errors."""

from typing import Optional


class InvalidInputError(Exception):
    """User-supplied values are missing or out of range."""

    def __init__(self, message: str, fields: Optional[list] = None):
        super().__init__(message)
        self.fields = fields or []
        self.recoverable = True

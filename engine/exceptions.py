"""Errors raised by the match statistics engine."""


class ValidationError(ValueError):
    """A match payload is missing a required structural field.

    ``field`` holds the dotted path of the offending field (e.g. ``teamA.name``).
    """

    def __init__(self, field, message=None):
        self.field = field
        self.message = message or f"Missing or invalid field: {field}"
        super().__init__(self.message)

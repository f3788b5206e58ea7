"""Custom exceptions for crontide."""


class CronError(Exception):
    pass


class StructureError(CronError):
    """Raised when an expression is not shaped like a cron expression."""
    pass


class FieldCountError(StructureError):
    """Raised when an expression does not have 5, 6 or 7 fields."""

    def __init__(self, expression: str, count: int):
        self.expression = expression
        self.count = count
        super().__init__(
            f"Invalid cron expression '{expression}'. "
            f"Expected 5 to 7 fields, got {count}"
        )


class MalformedFieldError(StructureError):
    """Raised when a field contains a token the grammar does not accept."""

    def __init__(self, field: str, token: str):
        self.field = field
        self.token = token
        super().__init__(f"Malformed {field} field: '{token}'")


class InvalidTimezoneError(StructureError):
    """Raised when a timezone name cannot be resolved."""

    def __init__(self, timezone: str):
        self.timezone = timezone
        super().__init__(f"Unknown timezone '{timezone}'")


class RangeError(CronError):
    """Raised when a numeric value falls outside its field's domain."""
    pass


class InvalidValueError(RangeError):
    """Raised when a single value is outside the field's domain."""

    def __init__(self, field: str, value: int, min_val: int, max_val: int):
        self.field = field
        self.value = value
        self.min_val = min_val
        self.max_val = max_val
        super().__init__(
            f"Invalid value {value} for {field}: expected {min_val}-{max_val}"
        )


class InvalidRangeError(RangeError):
    """Raised when a range is inverted or leaves the field's domain."""

    def __init__(self, field: str, token: str, min_val: int, max_val: int):
        self.field = field
        self.token = token
        self.min_val = min_val
        self.max_val = max_val
        super().__init__(f"Invalid range {token} for {field}: expected {min_val}-{max_val}")


class InvalidStepError(RangeError):
    """Raised when a step is zero or negative."""

    def __init__(self, field: str, token: str):
        self.field = field
        self.token = token
        super().__init__(f"Invalid step value in {field} field: '{token}'")


class SemanticError(CronError):
    """Raised when fields are individually valid but inconsistent together."""
    pass


class DayFieldConflictError(SemanticError):
    """Raised when day-of-month and day-of-week both constrain the schedule."""

    def __init__(self, reason: str = "day-of-month and day-of-week cannot both be specified"):
        self.reason = reason
        super().__init__(reason)


class ImpossibleDateError(SemanticError):
    """Raised when a day-of-month value can never occur in a listed month."""

    def __init__(self, day: int, month: int, month_name: str):
        self.day = day
        self.month = month
        super().__init__(f"Invalid date: day {day} is not valid for month {month_name}")


class InvalidNthError(SemanticError):
    """Raised when the N in W#N is outside 1-5."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid nth value for day of week: '{token}'")


class InvalidOffsetError(SemanticError):
    """Raised when an L-N offset is negative or not a number."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid L offset: '{token}'")


class NotFoundError(CronError):
    """Raised when no fire time exists for a schedule and reference instant."""
    pass


class SearchExhaustedError(NotFoundError):
    """Raised when the bounded fire-time search gives up."""

    def __init__(self, expression: str, direction: str, reason: str):
        self.expression = expression
        self.direction = direction
        self.reason = reason
        super().__init__(
            f"No {direction} fire time for '{expression}': {reason}"
        )

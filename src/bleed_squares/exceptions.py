"""Error taxonomy for bleed test generation.

Every failure aborts the run. The classes derive from ValueError so callers
that only care about "bad input" can catch that.
"""


class BleedSquaresError(ValueError):
    """Base class for all generation errors."""


class ConfigurationError(BleedSquaresError):
    """A configuration key is missing or its value cannot be parsed."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"config key {key!r}: {reason}")


class GeometryError(BleedSquaresError):
    """A computed cell or line dimension is not positive."""


class EncodingError(BleedSquaresError):
    """A value cannot be represented in the firmware wire format."""


class EncodingOverflowError(EncodingError):
    """A count does not fit in its fixed-width hexadecimal header field."""

    def __init__(self, field: str, value: int, digits: int) -> None:
        self.field = field
        self.value = value
        self.digits = digits
        super().__init__(
            f"{field} value {value} does not fit in {digits} hex digits "
            f"(max {16**digits - 1})"
        )

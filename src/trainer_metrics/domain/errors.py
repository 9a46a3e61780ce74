"""Domain errors for the metrics engine."""


class InvalidMeasurement(ValueError):
    """Raised when a measurement falls outside a formula's numeric domain."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field

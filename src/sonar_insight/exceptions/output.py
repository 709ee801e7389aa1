"""Output rendering exceptions."""

from .base import SonarInsightError


class OutputFormatError(SonarInsightError):
    """Raised when data cannot be rendered in the requested format."""

    def __init__(self, format_name: str, reason: str):
        super().__init__(
            f"Cannot render data as {format_name}",
            details={"format": format_name, "reason": reason},
        )
        self.format_name = format_name
        self.reason = reason

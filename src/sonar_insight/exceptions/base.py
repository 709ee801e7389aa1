"""Root of the Sonar Insight error hierarchy."""

from typing import Dict, Optional


class SonarInsightError(Exception):
    """Base exception for all Sonar Insight errors.

    ``details`` is key/value context appended to the message. ``hint`` is a
    follow-up action the CLI prints under the error line.
    """

    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, str]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}
        if hint is not None:
            self.hint = hint

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

"""SonarCloud REST API exceptions."""

from typing import Dict, Optional

from .base import SonarInsightError

_STATUS_HINTS = {
    401: "Check that SONAR_TOKEN is valid",
    403: "Check that the token can browse the project and SONAR_ORGANIZATION is right",
    404: "Check the project key and SONAR_ORGANIZATION",
}


class SonarCloudAPIError(SonarInsightError):
    """Raised when a SonarCloud request fails or returns an error status."""

    def __init__(
        self,
        message: str,
        endpoint: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        details: Dict[str, str] = {"endpoint": endpoint}
        if status_code is not None:
            details["status"] = str(status_code)
        if reason:
            details["reason"] = reason
        super().__init__(message, details=details, hint=_STATUS_HINTS.get(status_code))
        self.endpoint = endpoint
        self.status_code = status_code
        self.reason = reason

"""SonarCloud API client: quality gate, measures, issues and coverage endpoints.

Authentication follows SonarCloud's token scheme: the token is sent as the
basic-auth user name with an empty password. GETs are retried on transport
failures and on 429 and 5xx responses with exponential jitter.
"""

import random
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from ..config import Settings
from ..exceptions import SonarCloudAPIError
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_METRIC_KEYS = (
    "ncloc,coverage,duplicated_lines_density,bugs,vulnerabilities,code_smells,security_hotspots"
)
COVERAGE_METRIC_KEYS = "coverage,lines_to_cover,uncovered_lines"

# /issues/search refuses to page past this many results
_ISSUE_RESULT_LIMIT = 10000

_RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _backoff(attempt: int) -> float:
    return (2 ** attempt) + random.random()


class SonarCloudClient:
    """Thin synchronous client over the SonarCloud web API.

    Usage::

        client = SonarCloudClient.from_settings(settings)
        report = client.get_full_quality_report("my-org_my-project")
    """

    def __init__(
        self,
        token: str,
        host_url: str = "https://sonarcloud.io",
        organization: Optional[str] = None,
        timeout: int = 30,
        retries: int = 3,
        page_size: int = 500,
        max_pages: int = 20,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.host_url = host_url.rstrip("/")
        self.api_base = f"{self.host_url}/api"
        self.organization = organization
        self.timeout = timeout
        self.retries = retries
        self.page_size = page_size
        self.max_pages = max_pages

        if session is None:
            session = requests.Session()
        session.auth = (token, "")
        session.headers.setdefault("Accept", "application/json")
        self.session = session

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "SonarCloudClient":
        return cls(
            token=settings.require_token(),
            host_url=settings.host_url,
            organization=settings.organization,
            timeout=settings.timeout_seconds,
            retries=settings.retries,
            page_size=settings.page_size,
            max_pages=settings.max_pages,
            session=session,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "SonarCloudClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ── Transport ─────────────────────────────────────────────────────────

    def _get(self, endpoint: str, params: Dict[str, Any], action: str) -> Dict[str, Any]:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises:
            SonarCloudAPIError: On transport failure, error status or a
                body that is not JSON.
        """
        if self.organization:
            params = {**params, "organization": self.organization}
        url = f"{self.api_base}{endpoint}"
        logger.debug("GET %s params=%s", url, params)

        response = self._send(url, params, endpoint, action)

        if not response.ok:
            reason = _error_message(response)
            logger.error("%s: %s - %s", action, response.status_code, reason)
            raise SonarCloudAPIError(
                f"{action}: {response.status_code} - {reason}",
                endpoint=endpoint,
                status_code=response.status_code,
                reason=reason,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SonarCloudAPIError(
                f"{action}: response is not JSON",
                endpoint=endpoint,
                status_code=response.status_code,
                reason=str(e),
            ) from e

    def _send(self, url: str, params: Dict[str, Any], endpoint: str, action: str) -> requests.Response:
        """GET with retry and exponential jitter; the last response is returned as-is."""
        for attempt in range(self.retries + 1):
            last_attempt = attempt == self.retries
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                if last_attempt:
                    logger.error("%s: no response from %s: %s", action, endpoint, e)
                    raise SonarCloudAPIError(
                        f"{action}: no response, check the network connection or API endpoint",
                        endpoint=endpoint,
                        reason=str(e),
                    ) from e
                logger.debug("Retrying %s after error: %s", endpoint, e)
            else:
                if response.status_code not in _RETRY_STATUSES or last_attempt:
                    return response
                logger.debug("Retrying %s after status %d", endpoint, response.status_code)
            time.sleep(_backoff(attempt))
        raise RuntimeError("unreachable")

    # ── Endpoints ─────────────────────────────────────────────────────────

    def get_project_info(self, project_key: str) -> Optional[Dict[str, Any]]:
        data = self._get("/projects/search", {"projects": project_key}, "Failed to get project info")
        components = data.get("components") or []
        return components[0] if components else None

    def get_quality_gate_status(self, project_key: str) -> Optional[Dict[str, Any]]:
        data = self._get(
            "/qualitygates/project_status",
            {"projectKey": project_key},
            "Failed to get quality gate status",
        )
        return data.get("projectStatus")

    def get_project_measures(
        self, project_key: str, metric_keys: str = DEFAULT_METRIC_KEYS
    ) -> List[Dict[str, Any]]:
        data = self._get(
            "/measures/component",
            {"component": project_key, "metricKeys": metric_keys},
            "Failed to get project measures",
        )
        return (data.get("component") or {}).get("measures") or []

    def get_issues(
        self, project_key: str, statuses: Optional[str] = None, **params: Any
    ) -> List[Dict[str, Any]]:
        """Fetch issues, following ``paging`` up to ``max_pages`` pages."""
        query: Dict[str, Any] = {"componentKeys": project_key, "ps": self.page_size, **params}
        if statuses:
            query["statuses"] = statuses

        issues: List[Dict[str, Any]] = []
        for page in range(1, self.max_pages + 1):
            data = self._get("/issues/search", {**query, "p": page}, "Failed to get issues")
            batch = data.get("issues") or []
            issues.extend(batch)

            paging = data.get("paging") or {}
            total = min(int(paging.get("total", len(issues))), _ISSUE_RESULT_LIMIT)
            if not batch or len(issues) >= total:
                break
        else:
            logger.warning(
                "Stopped after %d issue pages (%d issues); raise max_pages to fetch more",
                self.max_pages, len(issues),
            )

        logger.info(f"Fetched {len(issues)} issues for {project_key}")
        return issues

    def get_coverage_details(self, project_key: str) -> List[Dict[str, Any]]:
        data = self._get(
            "/measures/component_tree",
            {"component": project_key, "metricKeys": COVERAGE_METRIC_KEYS, "strategy": "children"},
            "Failed to get coverage details",
        )
        return data.get("components") or []

    def get_full_quality_report(self, project_key: str) -> Dict[str, Any]:
        """Collect every source into one snapshot-shaped dict."""
        return {
            "projectInfo": self.get_project_info(project_key),
            "qualityGate": self.get_quality_gate_status(project_key),
            "measures": self.get_project_measures(project_key),
            "issues": self.get_issues(project_key),
            "coverageDetails": self.get_coverage_details(project_key),
            "timestamp": _utc_timestamp(),
        }


def _error_message(response: requests.Response) -> str:
    """First ``errors[].msg`` of a SonarCloud error body, else the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason or "API error"
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors and isinstance(errors[0], dict) and errors[0].get("msg"):
        return str(errors[0]["msg"])
    return response.reason or "API error"

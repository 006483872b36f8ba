"""
Marketplace API Client - Interact with the creator marketplace REST API.

Covers the resources the workflow board needs: workflow stages, campaigns,
applications, creators and the per-application detail data. Every payload
is validated with the pydantic schemas in ``creatorhub.models``.
"""
from typing import Any, List, Optional

import requests

from .config import Settings, get_settings
from .models.schemas import (
    Application,
    Campaign,
    Company,
    Creator,
    CreatorStats,
    Deliverable,
    Message,
    MetricsUpdate,
    WorkflowStage,
)
from .utils.logger import get_logger

SESSION_COOKIE_NAME = "connect.sid"

logger = get_logger(__name__)


def error_message(exc: Exception, default: str) -> str:
    """Extract the server's ``{"error": ...}`` text from a failed request."""
    response = getattr(exc, "response", None)
    if response is None:
        return default
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


class MarketplaceClient:
    """
    Client for the marketplace REST API.

    Provides methods to:
    - Fetch the active company and its workflow stages
    - List campaigns, applications and creators
    - Move applications between workflow stages
    - Fetch deliverables, messages and creator stats for one application
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        """
        Initialize the marketplace client.

        Args:
            settings: Settings instance (loaded from the environment if not provided)
            session: requests.Session to reuse (auto-created if not provided)
        """
        self.settings = settings or get_settings()
        self.base_url = self.settings.api_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        if self.settings.api_token:
            self.session.headers["Authorization"] = f"Bearer {self.settings.api_token}"
        if self.settings.session_cookie:
            self.session.cookies.set(SESSION_COOKIE_NAME, self.settings.session_cookie)

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, PATCH, DELETE)
            endpoint: API endpoint path, starting with /api
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON body, or None for an empty response
        """
        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault("timeout", self.settings.request_timeout)
        logger.debug("%s %s", method, url)

        response = self.session.request(method, url, **kwargs)
        if not response.ok:
            logger.warning("%s %s -> %s", method, endpoint, response.status_code)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Company / stages
    # ------------------------------------------------------------------

    def get_active_company(self) -> Company:
        return Company.model_validate(self._request("GET", "/api/active-company"))

    def list_workflow_stages(self, company_id: int) -> List[WorkflowStage]:
        """Get the ordered workflow stages defined by a company."""
        data = self._request("GET", f"/api/companies/{company_id}/workflow-stages") or []
        return [WorkflowStage.model_validate(item) for item in data]

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def list_campaigns(self) -> List[Campaign]:
        data = self._request("GET", "/api/campaigns") or []
        return [Campaign.model_validate(item) for item in data]

    def list_applications(self) -> List[Application]:
        data = self._request("GET", "/api/applications") or []
        return [Application.model_validate(item) for item in data]

    def list_creators(self) -> List[Creator]:
        data = self._request("GET", "/api/creators") or []
        return [Creator.model_validate(item) for item in data]

    def list_active_applications(self) -> List[Application]:
        """Applications of the logged-in creator that are in production."""
        data = self._request("GET", "/api/applications/active") or []
        return [Application.model_validate(item) for item in data]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_workflow_status(self, application_id: int, workflow_status: str) -> Any:
        """Move an application to a company workflow stage (by stage name)."""
        return self._request(
            "PATCH",
            f"/api/applications/{application_id}/workflow-status-company",
            json={"workflowStatus": workflow_status},
        )

    def update_creator_workflow_status(self, application_id: int, creator_workflow_status: str) -> Any:
        return self._request(
            "PATCH",
            f"/api/applications/{application_id}/creator-workflow-status",
            json={"creatorWorkflowStatus": creator_workflow_status},
        )

    def update_metrics(self, application_id: int, metrics: MetricsUpdate) -> Any:
        return self._request(
            "PATCH",
            f"/api/applications/{application_id}/metrics",
            json=metrics.to_payload(),
        )

    def delete_campaign(self, campaign_id: int) -> None:
        self._request("DELETE", f"/api/campaigns/{campaign_id}")

    # ------------------------------------------------------------------
    # Detail panel data
    # ------------------------------------------------------------------

    def list_deliverables(self, application_id: int) -> List[Deliverable]:
        data = self._request("GET", f"/api/applications/{application_id}/deliverables") or []
        return [Deliverable.model_validate(item) for item in data]

    def list_messages(self, application_id: int) -> List[Message]:
        data = self._request("GET", f"/api/applications/{application_id}/messages") or []
        return [Message.model_validate(item) for item in data]

    def get_creator_stats(self, campaign_id: int, creator_id: int) -> Optional[CreatorStats]:
        data = self._request("GET", f"/api/campaigns/{campaign_id}/creator/{creator_id}/stats")
        if not data:
            return None
        return CreatorStats.model_validate(data)

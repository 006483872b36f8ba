"""Shared fixtures: an in-memory stand-in for the marketplace REST API."""

import os
import sys
from typing import Dict, List

import pytest
import requests

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from creatorhub.config import Settings
from creatorhub.models.schemas import (
    Application,
    Campaign,
    Company,
    Creator,
    CreatorStats,
    Deliverable,
    Message,
    WorkflowStage,
)


def make_stage(stage_id: int, name: str, position: int, company_id: int = 1) -> WorkflowStage:
    return WorkflowStage(id=stage_id, company_id=company_id, name=name, position=position)


def make_application(app_id: int, campaign_id: int = 10, creator_id: int = 100, status: str = "accepted",
                     workflow_status=None, creator_workflow_status=None) -> Application:
    return Application(
        id=app_id,
        campaign_id=campaign_id,
        creator_id=creator_id,
        status=status,
        workflow_status=workflow_status,
        creator_workflow_status=creator_workflow_status,
    )


def http_error(status: int = 500, body: bytes = b"") -> requests.HTTPError:
    response = requests.Response()
    response.status_code = status
    response._content = body
    return requests.HTTPError(f"{status} Server Error", response=response)


class FakeMarketplaceClient:
    """Mimics MarketplaceClient against in-memory collections.

    Methods named in ``failing`` raise an HTTP 500 instead of answering.
    """

    def __init__(self):
        self.company = Company(id=1, name="Marca")
        self.stages: List[WorkflowStage] = [
            make_stage(1, "Aceito", 0),
            make_stage(2, "Produção", 1),
            make_stage(3, "Entregue", 2),
        ]
        self.applications: List[Application] = []
        self.campaigns: List[Campaign] = [Campaign(id=10, title="Verão", status="open")]
        self.creators: List[Creator] = [Creator(id=100, name="Ana Souza", instagram="anasouza")]
        self.deliverables: Dict[int, List[Deliverable]] = {}
        self.messages: Dict[int, List[Message]] = {}
        self.stats: Dict[tuple, CreatorStats] = {}
        self.failing = set()
        self.calls: List[tuple] = []

    def _call(self, name, *args):
        self.calls.append((name, *args))
        if name in self.failing:
            raise http_error(500)

    def count(self, name) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def get_active_company(self):
        self._call("get_active_company")
        return self.company

    def list_workflow_stages(self, company_id):
        self._call("list_workflow_stages", company_id)
        return list(self.stages)

    def list_applications(self):
        self._call("list_applications")
        return list(self.applications)

    def list_active_applications(self):
        self._call("list_active_applications")
        return list(self.applications)

    def list_campaigns(self):
        self._call("list_campaigns")
        return list(self.campaigns)

    def list_creators(self):
        self._call("list_creators")
        return list(self.creators)

    def list_deliverables(self, application_id):
        self._call("list_deliverables", application_id)
        return list(self.deliverables.get(application_id, []))

    def list_messages(self, application_id):
        self._call("list_messages", application_id)
        return list(self.messages.get(application_id, []))

    def get_creator_stats(self, campaign_id, creator_id):
        self._call("get_creator_stats", campaign_id, creator_id)
        return self.stats.get((campaign_id, creator_id))

    def update_workflow_status(self, application_id, workflow_status):
        self._call("update_workflow_status", application_id, workflow_status)
        self.applications = [
            app.model_copy(update={"workflow_status": workflow_status}) if app.id == application_id else app
            for app in self.applications
        ]
        return {"id": application_id, "workflowStatus": workflow_status}

    def update_creator_workflow_status(self, application_id, status):
        self._call("update_creator_workflow_status", application_id, status)
        self.applications = [
            app.model_copy(update={"creator_workflow_status": status}) if app.id == application_id else app
            for app in self.applications
        ]
        return {"id": application_id}

    def update_metrics(self, application_id, metrics):
        self._call("update_metrics", application_id, metrics.to_payload())
        return {}

    def delete_campaign(self, campaign_id):
        self._call("delete_campaign", campaign_id)
        self.campaigns = [c for c in self.campaigns if c.id != campaign_id]


@pytest.fixture()
def client():
    return FakeMarketplaceClient()


@pytest.fixture()
def settings():
    return Settings(api_url="http://api.test", company_id=None, max_workers=4)

"""
Tests for the marketplace REST client.
The HTTP session is patched; no network access is needed.
"""

import json
from unittest.mock import patch

import pytest
import requests

from creatorhub.api_client import MarketplaceClient, error_message
from creatorhub.config import Settings
from creatorhub.models.schemas import MetricsUpdate


def make_response(status: int = 200, payload=None, raw: bytes = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    else:
        response._content = b"" if payload is None else json.dumps(payload).encode()
    return response


@pytest.fixture()
def api():
    settings = Settings(
        api_url="http://api.test/",
        session_cookie="s%3Aabc",
        api_token="tok",
        request_timeout=5.0,
    )
    return MarketplaceClient(settings, session=requests.Session())


# ===========================================================================
# Session setup
# ===========================================================================


class TestSession:
    def test_auth_headers_and_cookie(self, api):
        assert api.base_url == "http://api.test"
        assert api.session.headers["Authorization"] == "Bearer tok"
        assert api.session.headers["Content-Type"] == "application/json"
        assert api.session.cookies.get("connect.sid") == "s%3Aabc"

    def test_no_credentials(self):
        client = MarketplaceClient(
            Settings(api_url="http://api.test", session_cookie=None, api_token=None),
            session=requests.Session(),
        )
        assert "Authorization" not in client.session.headers
        assert client.session.cookies.get("connect.sid") is None


# ===========================================================================
# Reads
# ===========================================================================


class TestReads:
    def test_list_workflow_stages(self, api):
        payload = [
            {"id": 2, "companyId": 1, "name": "Produção", "position": 1, "color": "#ec4899", "isDefault": False},
            {"id": 1, "companyId": 1, "name": "Aceito", "position": 0, "isDefault": True},
        ]
        with patch.object(api.session, "request", return_value=make_response(payload=payload)) as mock_request:
            stages = api.list_workflow_stages(1)

        mock_request.assert_called_once_with("GET", "http://api.test/api/companies/1/workflow-stages", timeout=5.0)
        assert [s.name for s in stages] == ["Produção", "Aceito"]
        assert stages[1].is_default

    def test_list_applications(self, api):
        payload = [{"id": 1, "campaignId": 10, "creatorId": 100, "status": "accepted", "workflowStatus": None}]
        with patch.object(api.session, "request", return_value=make_response(payload=payload)):
            apps = api.list_applications()
        assert apps[0].campaign_id == 10
        assert apps[0].workflow_status is None
        assert apps[0].is_accepted

    def test_empty_body_is_empty_list(self, api):
        with patch.object(api.session, "request", return_value=make_response(payload=None)):
            assert api.list_campaigns() == []

    def test_creator_stats_missing(self, api):
        with patch.object(api.session, "request", return_value=make_response(payload=None)) as mock_request:
            assert api.get_creator_stats(10, 100) is None
        assert mock_request.call_args[0][1] == "http://api.test/api/campaigns/10/creator/100/stats"

    def test_deliverable_title_alias(self, api):
        payload = [{"id": 3, "applicationId": 1, "title": "reels.mp4", "createdAt": "2024-05-01T10:00:00Z"}]
        with patch.object(api.session, "request", return_value=make_response(payload=payload)):
            deliverable = api.list_deliverables(1)[0]
        assert deliverable.file_name == "reels.mp4"
        assert deliverable.uploaded_at is not None

    def test_server_error_raises(self, api):
        with patch.object(api.session, "request", return_value=make_response(500, {"error": "boom"})):
            with pytest.raises(requests.HTTPError):
                api.list_creators()


# ===========================================================================
# Mutations
# ===========================================================================


class TestMutations:
    def test_update_workflow_status_body(self, api):
        with patch.object(api.session, "request", return_value=make_response(payload={"id": 1})) as mock_request:
            api.update_workflow_status(1, "Produção")

        mock_request.assert_called_once_with(
            "PATCH",
            "http://api.test/api/applications/1/workflow-status-company",
            json={"workflowStatus": "Produção"},
            timeout=5.0,
        )

    def test_update_creator_workflow_status_body(self, api):
        with patch.object(api.session, "request", return_value=make_response(payload={})) as mock_request:
            api.update_creator_workflow_status(4, "producao")
        assert mock_request.call_args.kwargs["json"] == {"creatorWorkflowStatus": "producao"}

    def test_update_metrics_skips_empty_fields(self, api):
        with patch.object(api.session, "request", return_value=make_response(payload={})) as mock_request:
            api.update_metrics(1, MetricsUpdate(views=10, quality_score=4.0))
        assert mock_request.call_args.kwargs["json"] == {"views": 10, "qualityScore": 4.0}

    def test_delete_campaign(self, api):
        with patch.object(api.session, "request", return_value=make_response(204)) as mock_request:
            assert api.delete_campaign(10) is None
        assert mock_request.call_args[0] == ("DELETE", "http://api.test/api/campaigns/10")


# ===========================================================================
# Error text
# ===========================================================================


class TestErrorMessage:
    def test_reads_error_field(self):
        exc = requests.HTTPError(response=make_response(400, {"error": "Contrato pendente"}))
        assert error_message(exc, "fallback") == "Contrato pendente"

    def test_non_json_body(self):
        exc = requests.HTTPError(response=make_response(502, raw=b"<html>Bad Gateway</html>"))
        assert error_message(exc, "fallback") == "fallback"

    def test_no_response(self):
        assert error_message(requests.ConnectionError("down"), "fallback") == "fallback"

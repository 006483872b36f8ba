import pytest
from conftest import make_application

from creatorhub.config import Settings
from creatorhub.kanban.board import KanbanBoard
from creatorhub.kanban.cache import Keys
from creatorhub.kanban.drag import DropOutcome
from creatorhub.models.schemas import Campaign


def column_ids(board):
    return {col.stage.name: [card.id for card in col.cards] for col in board.columns()}


@pytest.fixture()
def board(client, settings):
    return KanbanBoard(client, settings=settings)


class TestLoad:
    def test_columns_follow_stage_order(self, board, client):
        board.load()
        assert [col.stage.name for col in board.columns()] == ["Aceito", "Produção", "Entregue"]
        assert all(col.is_empty for col in board.columns())

    def test_active_company_resolved_once(self, board, client):
        board.load()
        board.load()
        assert board.company_id == 1
        assert client.count("get_active_company") == 1
        assert ("list_workflow_stages", 1) in client.calls

    def test_configured_company_skips_lookup(self, client):
        board = KanbanBoard(client, settings=Settings(api_url="http://api.test", company_id=7))
        board.load()
        assert client.count("get_active_company") == 0
        assert ("list_workflow_stages", 7) in client.calls

    def test_stage_failure_yields_no_columns(self, board, client):
        client.applications = [make_application(1)]
        client.failing.add("list_workflow_stages")
        board.load()
        assert board.columns() == []
        assert len(board.cards) == 1

    def test_company_failure_yields_no_columns(self, board, client):
        client.failing.add("get_active_company")
        board.load()
        assert board.columns() == []
        assert client.count("list_workflow_stages") == 0

    def test_failed_refetch_keeps_last_cards(self, board, client):
        client.applications = [make_application(1)]
        board.load()
        client.failing.add("list_applications")
        board.cache.invalidate(Keys.applications())
        assert [card.id for card in board.cards] == [1]

    def test_listeners_notified(self, board):
        seen = []
        board.subscribe(lambda: seen.append("render"))
        board.load()
        board.select_campaign(10)
        assert seen == ["render", "render"]

    def test_close_stops_refreshing(self, board, client):
        board.load()
        board.close()
        board.cache.invalidate(Keys.applications())
        assert client.count("list_applications") == 1

    def test_unrelated_invalidation_ignored(self, board, client):
        board.load()
        board.cache.invalidate(Keys.leaderboard(10))
        assert client.count("list_applications") == 1


class TestMoveScenarios:
    def test_unset_status_card_moved_to_next_stage(self, board, client):
        client.applications = [make_application(1, workflow_status=None)]
        board.load()
        assert column_ids(board)["Aceito"] == [1]

        assert board.drag.begin_drag(1)
        board.drag.hover("Produção")
        assert [col.is_drop_target for col in board.columns()] == [False, True, False]
        assert board.drag.drop("Produção") is DropOutcome.COMMITTED

        assert ("update_workflow_status", 1, "Produção") in client.calls
        assert column_ids(board) == {"Aceito": [], "Produção": [1], "Entregue": []}
        assert not board.committer.is_moving(1)
        assert client.count("list_applications") == 2
        assert board.notifier.latest.title == "Status atualizado"

    def test_stale_status_falls_back_to_first_column(self, board, client):
        client.applications = [make_application(1, workflow_status="Revisao")]
        board.load()
        assert column_ids(board)["Aceito"] == [1]
        assert board.column_of(1) == "Aceito"

    def test_drop_on_fallback_column_is_noop(self, board, client):
        client.applications = [make_application(1, workflow_status="Revisao")]
        board.load()
        board.drag.begin_drag(1)
        assert board.drag.drop("Aceito") is DropOutcome.SAME_COLUMN
        assert client.count("update_workflow_status") == 0

    def test_failed_move_leaves_card_in_place(self, board, client):
        client.applications = [make_application(1)]
        client.failing.add("update_workflow_status")
        board.load()
        board.drag.begin_drag(1)
        board.drag.drop("Entregue")

        assert column_ids(board)["Aceito"] == [1]
        assert board.notifier.latest.title == "Erro"
        assert not board.committer.is_moving(1)
        assert client.count("list_applications") == 1

    def test_in_flight_card_keeps_last_confirmed_column(self, client, settings):
        client.applications = [make_application(1)]
        jobs = []
        board = KanbanBoard(client, settings=settings, dispatch=jobs.append)
        board.load()
        board.drag.begin_drag(1)
        board.drag.drop("Entregue")

        assert board.committer.is_moving(1)
        assert column_ids(board)["Aceito"] == [1]
        jobs.pop()()
        assert column_ids(board)["Entregue"] == [1]

    def test_only_accepted_applications_shown(self, board, client):
        client.applications = [
            make_application(1),
            make_application(2, status="pending"),
            make_application(3, status="rejected"),
        ]
        board.load()
        assert [card.id for card in board.cards] == [1]


class TestCampaignFilter:
    @pytest.fixture(autouse=True)
    def data(self, client):
        client.campaigns = [
            Campaign(id=10, title="Verão", status="open"),
            Campaign(id=11, title="Inverno", status="draft"),
        ]
        client.applications = [make_application(1, campaign_id=10), make_application(2, campaign_id=11)]

    def test_options_are_open_campaigns(self, board):
        board.load()
        assert [c.id for c in board.campaign_options()] == [10]

    def test_filter_by_campaign(self, board):
        board.load()
        board.select_campaign(11)
        assert [card.id for card in board.visible_cards()] == [2]
        assert column_ids(board)["Aceito"] == [2]
        board.select_campaign(None)
        assert len(board.visible_cards()) == 2

    def test_missing_campaign_uses_placeholder(self, board, client):
        client.applications = [make_application(3, campaign_id=99)]
        board.load()
        assert board.card(3).campaign.title == "Campanha"


class TestCampaignDelete:
    def test_delete_success(self, board, client):
        board.load()
        board.select_campaign(10)
        board.request_campaign_delete(10)

        assert board.confirm_campaign_delete()
        assert ("delete_campaign", 10) in client.calls
        assert board.selected_campaign_id is None
        assert board.deleting_campaign_id is None
        assert board.notifier.latest.title == "Campanha excluída"
        assert client.count("list_campaigns") == 2
        assert board.campaign_options() == []

    def test_delete_failure(self, board, client):
        client.failing.add("delete_campaign")
        board.load()
        board.request_campaign_delete(10)

        assert board.confirm_campaign_delete() is False
        assert board.deleting_campaign_id == 10
        toast = board.notifier.latest
        assert toast.title == "Erro"
        assert toast.description == "Não foi possível excluir a campanha."

    def test_cancel(self, board, client):
        board.request_campaign_delete(10)
        board.cancel_campaign_delete()
        assert board.confirm_campaign_delete() is False
        assert client.count("delete_campaign") == 0

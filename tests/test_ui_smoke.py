"""
UI smoke tests.
Tkinter rendering needs a display, so these tests cover state, theme,
services and the import structure of the views.
"""

import os
import threading
from unittest.mock import patch

import pytest
from conftest import make_application


# ===========================================================================
# Theme / State
# ===========================================================================


class TestTheme:
    def test_modern_theme_overrides_colors(self):
        from gui.theme import ModernTheme, Theme

        assert ModernTheme().name == "Modern"
        assert ModernTheme().drop_target_color != Theme().drop_target_color


class TestState:
    def test_defaults(self):
        from gui.state import AppState

        state = AppState()
        assert state.current_view == "board"
        assert state.selected_card_id is None
        assert state.status_message == "Pronto"
        assert not state.is_busy


# ===========================================================================
# Services
# ===========================================================================


class TestBoardServices:
    def test_boards_share_cache_and_notifier(self, client, settings):
        from gui.services import create_board_services

        services = create_board_services(client=client, settings=settings)
        assert services.board.cache is services.cache
        assert services.creator_board.cache is services.cache
        assert services.board.notifier is services.notifier
        assert services.creator_board.notifier is services.notifier

    def test_board_move_through_services(self, client, settings):
        from gui.services import create_board_services

        client.applications = [make_application(1)]
        services = create_board_services(client=client, settings=settings)
        services.board.load()
        services.board.drag.begin_drag(1)
        services.board.drag.drop("Entregue")
        assert services.board.column_of(1) == "Entregue"

    def test_get_marketplace_client(self, settings):
        from gui.services import get_marketplace_client

        api = get_marketplace_client(settings)
        assert api.base_url == "http://api.test"


class TestSettingsService:
    def test_save_settings(self, tmp_path, monkeypatch):
        from gui.services.settings_service import save_settings

        env_path = tmp_path / ".env"
        monkeypatch.setenv("CREATORHUB_API_URL", "")
        saved = save_settings(
            {"CREATORHUB_API_URL": "http://board.test", "OPENAI_API_KEY": "nope", "CREATORHUB_COMPANY_ID": None},
            env_path=env_path,
        )
        assert saved == 1
        content = env_path.read_text()
        assert "CREATORHUB_API_URL" in content
        assert "OPENAI_API_KEY" not in content

        assert os.environ["CREATORHUB_API_URL"] == "http://board.test"

    def test_saved_settings_apply_to_new_instances(self, tmp_path, monkeypatch):
        from creatorhub.config import get_settings
        from gui.services.settings_service import save_settings

        monkeypatch.setenv("CREATORHUB_COMPANY_ID", "")
        save_settings({"CREATORHUB_COMPANY_ID": "12"}, env_path=tmp_path / ".env")
        assert get_settings().company_id == 12


# ===========================================================================
# Async helpers
# ===========================================================================


class TestAsyncTasks:
    def test_run_async_runs_inline(self):
        from gui.utils.async_tasks import run_async

        assert run_async(lambda a, b: a + b, 2, 3) == 5

    def test_run_in_background_schedules_callback(self):
        from gui.utils.async_tasks import run_in_background

        done = threading.Event()
        results = []
        scheduled = []

        def schedule(fn):
            scheduled.append(fn)
            fn()
            done.set()

        thread = run_in_background(lambda: 42, results.append, schedule)
        thread.join(timeout=2)
        assert done.wait(timeout=2)
        assert results == [42]
        assert len(scheduled) == 1

    def test_run_in_background_logs_failures(self):
        from gui.utils import async_tasks

        callback_results = []

        def boom():
            raise RuntimeError("nope")

        with patch.object(async_tasks, "log") as mock_log:
            thread = async_tasks.run_in_background(boom, callback_results.append)
            thread.join(timeout=2)

        assert callback_results == []
        assert "nope" in mock_log.call_args[0][0]


# ===========================================================================
# Views (import only)
# ===========================================================================


class TestViews:
    def test_views_import(self):
        pytest.importorskip("tkinter")
        from gui.views.creator_board import CreatorBoardView
        from gui.views.detail import DetailView
        from gui.views.kanban import KanbanView
        from gui.views.base import BaseView

        assert issubclass(KanbanView, BaseView)
        assert issubclass(DetailView, BaseView)
        assert issubclass(CreatorBoardView, BaseView)

    def test_app_import(self):
        pytest.importorskip("tkinter")
        from gui.app import CreatorHubApp, main

        assert callable(main)
        assert hasattr(CreatorHubApp, "move_creator_card")

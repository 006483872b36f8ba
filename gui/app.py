"""Main GUI application object.

Builds the Tk window, wires the shared board services, and routes view
actions (``BaseView.call``) to board operations. Network work runs on
background threads; results come back to the Tk thread via ``root.after``.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import simpledialog, ttk
from typing import Any, Callable, Dict, Optional

from creatorhub.config import Settings, get_settings
from creatorhub.kanban.cache import Keys
from creatorhub.notifications import Toast
from creatorhub.utils.logger import setup_logging
from gui.components.status_bar import StatusBar
from gui.services.board_service import create_board_services
from gui.services.settings_service import save_settings
from gui.state import AppState
from gui.theme import ModernTheme, configure_styles
from gui.utils.async_tasks import run_in_background
from gui.utils.logging import log
from gui.views.creator_board import CreatorBoardView
from gui.views.detail import DetailView
from gui.views.kanban import KanbanView


class CreatorHubApp:
    """Desktop shell around the company board and the creator board."""

    def __init__(self, root: Optional[tk.Tk] = None, settings: Optional[Settings] = None, client=None):
        self.settings = settings or get_settings()
        setup_logging(self.settings.log_level, self.settings.verbose)

        self.root = root or tk.Tk()
        self.root.title("CreatorHub · Workflow")
        self.root.geometry("1280x760")
        self.state = AppState()
        self.theme = ModernTheme()
        configure_styles(self.root, self.theme)

        services = create_board_services(client, self.settings, dispatch=self._dispatch)
        self.cache = services.cache
        self.notifier = services.notifier
        self.board = services.board
        self.creator_board = services.creator_board

        self._build()

        self.board.subscribe(lambda: self._schedule(self.refresh_views))
        self.notifier.subscribe(lambda toast: self._schedule(lambda: self._show_toast(toast)))
        self.cache.subscribe(self._on_invalidate)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build(self) -> None:  # pragma: no cover - UI code
        menubar = tk.Menu(self.root)
        menubar.add_command(label="Conexão…", command=self.configure_connection)
        self.root.config(menu=menubar)

        main = ttk.Frame(self.root, style="Main.TFrame", padding=10)
        main.pack(fill="both", expand=True)

        self.notebook = ttk.Notebook(main)
        self.notebook.pack(side="left", fill="both", expand=True)
        self.kanban_view = KanbanView(self.notebook, self)
        self.creator_view = CreatorBoardView(self.notebook, self)
        self.notebook.add(self.kanban_view, text="Workflow da empresa")
        self.notebook.add(self.creator_view, text="Minha produção")
        self.notebook.bind("<<NotebookTabChanged>>", lambda _: self._on_tab_changed())

        self.detail_view = DetailView(main, self, width=340, padding=8)

        self.status_bar = StatusBar(self.root, self.state)
        self.status_bar.pack(side="bottom", fill="x")

    def refresh_views(self) -> None:  # pragma: no cover - UI code
        self.state.is_busy = bool(self.board.committer.moving_ids)
        self.status_bar.update_status()
        self.kanban_view.refresh()
        if self.board.detail.is_open:
            if self.board.detail.card is None:
                self.close_card()
            else:
                self.detail_view.refresh()

    def _on_tab_changed(self) -> None:  # pragma: no cover - UI code
        self.state.current_view = "board" if self.notebook.index("current") == 0 else "creator"
        if self.state.current_view == "creator":
            self.creator_view.refresh()

    # ------------------------------------------------------------------
    # Threading helpers
    # ------------------------------------------------------------------

    def _schedule(self, fn: Callable[[], None]) -> None:
        self.root.after(0, fn)

    def _dispatch(self, job: Callable[[], None]):
        self._schedule(self.refresh_views)
        return run_in_background(job)

    def _background(self, fn: Callable[[], Any], callback: Callable[[Any], None]) -> None:
        run_in_background(fn, callback, schedule=self._schedule)

    def _on_invalidate(self, key) -> None:
        if key.resource == "applications-active" and self.state.current_view == "creator":
            self._schedule(self.creator_view.refresh)

    def _show_toast(self, toast: Toast) -> None:  # pragma: no cover - UI code
        self.status_bar.show_toast(toast)

    # ------------------------------------------------------------------
    # Actions (called from views)
    # ------------------------------------------------------------------

    def reload_board(self) -> None:
        self.state.is_busy = True
        self.state.status_message = "Carregando…"
        self.status_bar.update_status()
        self._background(self.board.refresh, lambda _: self._finish_loading())

    def _finish_loading(self) -> None:
        self.state.is_busy = False
        self.state.status_message = "Pronto"
        self.refresh_views()

    def select_campaign(self, campaign_id: Optional[int]) -> None:
        self.state.selected_campaign_id = campaign_id
        self.board.select_campaign(campaign_id)

    def delete_campaign(self, campaign_id: int) -> None:
        self.board.request_campaign_delete(campaign_id)
        self._background(self.board.confirm_campaign_delete, lambda _: self.refresh_views())

    def open_card(self, card_id: int) -> None:  # pragma: no cover - UI code
        card = self.board.card(card_id)
        if card is None:
            return
        self.board.detail.open(card)
        self.state.selected_card_id = card_id
        self.detail_view.pack(side="right", fill="y", padx=(10, 0))
        self.detail_view.refresh()

    def close_card(self) -> None:  # pragma: no cover - UI code
        self.board.detail.close()
        self.state.selected_card_id = None
        self.detail_view.pack_forget()

    def advance_card(self, stage_name: str) -> None:
        if self.board.detail.advance_to(stage_name):
            self.refresh_views()

    def load_card_details(self, callback: Callable[[Any], None]) -> None:
        panel = self.board.detail

        def fetch():
            return (
                panel.recent_deliverables(),
                panel.hidden_deliverables_count(),
                panel.recent_messages(),
                panel.creator_stats(),
            )

        self._background(fetch, callback)

    def save_metrics(self, values: Dict[str, str]) -> None:
        self.board.detail.submit_metrics(**values)

    def reload_creator_board(self) -> None:
        self.cache.invalidate(Keys.active_applications())

    def load_creator_columns(self, callback: Callable[[Any], None]) -> None:
        self._background(self.creator_board.columns, callback)

    def move_creator_card(self, application_id: int, stage: str) -> None:
        if self.creator_board.move(application_id, stage):
            self.creator_view.refresh()

    def configure_connection(self) -> None:  # pragma: no cover - UI code
        api_url = simpledialog.askstring("Conexão", "URL da API:", initialvalue=self.settings.api_url, parent=self.root)
        if api_url is None:
            return
        cookie = simpledialog.askstring("Conexão", "Cookie de sessão (connect.sid):", parent=self.root)
        values = {"CREATORHUB_API_URL": api_url}
        if cookie:
            values["CREATORHUB_SESSION_COOKIE"] = cookie
        save_settings(values)
        self.notifier.notify("Configurações salvas", "Reinicie o aplicativo para aplicar a nova conexão.")

    def run(self) -> None:  # pragma: no cover - UI code
        log("Starting CreatorHub GUI")
        self.root.after(100, self.reload_board)
        self.root.mainloop()


def main() -> None:  # pragma: no cover - UI code
    app = CreatorHubApp()
    app.run()


if __name__ == "__main__":  # pragma: no cover
    main()

"""Creator production board view (fixed creator stages)."""

import tkinter as tk
from tkinter import ttk

from creatorhub.models.schemas import CREATOR_STATUS_LABELS, CREATOR_WORKFLOW_STAGES
from gui.views.base import BaseView


class CreatorBoardView(BaseView):
    """One list per creator stage; arrows move the selected application."""

    def _build(self):  # pragma: no cover - UI code
        self.board = self.app.creator_board
        self._rows = {}

        hero = ttk.Frame(self, style="Main.TFrame")
        hero.pack(fill="x", pady=(0, 8))
        ttk.Label(hero, text="Minha produção", style="Header.TLabel").pack(side="left")
        ttk.Button(hero, text="↻ Atualizar", command=lambda: self.call("reload_creator_board")).pack(side="right")

        body = ttk.Frame(self, style="Main.TFrame")
        body.pack(fill="both", expand=True)
        self.lists = {}
        for idx, stage in enumerate(CREATOR_WORKFLOW_STAGES):
            body.columnconfigure(idx, weight=1, uniform="stage")
            frame = ttk.LabelFrame(body, text=CREATOR_STATUS_LABELS[stage]["label"], padding=4, style="Panel.TLabelframe")
            frame.grid(row=0, column=idx, sticky="nsew", padx=3)
            listbox = tk.Listbox(frame, height=14, exportselection=False)
            listbox.pack(fill="both", expand=True)
            nav = ttk.Frame(frame)
            nav.pack(fill="x", pady=(4, 0))
            ttk.Button(nav, text="◀", width=3, command=lambda s=stage: self._shift(s, -1)).pack(side="left")
            ttk.Button(nav, text="▶", width=3, command=lambda s=stage: self._shift(s, 1)).pack(side="right")
            self.lists[stage] = listbox

    def refresh(self):  # pragma: no cover - UI code
        self.call("load_creator_columns", self._render)

    def _render(self, columns):  # pragma: no cover - UI code
        self._rows = {}
        for stage, listbox in self.lists.items():
            listbox.delete(0, tk.END)
            apps = columns.get(stage, [])
            self._rows[stage] = [app.id for app in apps]
            for app in apps:
                marker = "⟳ " if self.board.moving_id == app.id else ""
                listbox.insert(tk.END, f"{marker}Candidatura #{app.id} · campanha {app.campaign_id}")

    def _shift(self, stage, step):  # pragma: no cover - UI code
        selection = self.lists[stage].curselection()
        if not selection:
            return
        target_idx = CREATOR_WORKFLOW_STAGES.index(stage) + step
        if not 0 <= target_idx < len(CREATOR_WORKFLOW_STAGES):
            return
        app_id = self._rows[stage][selection[0]]
        self.call("move_creator_card", app_id, CREATOR_WORKFLOW_STAGES[target_idx])

"""
Company Workflow Board View

Canvas-based kanban board:
- One column per company workflow stage, in stage order
- Cards for accepted creators, filterable by campaign
- Drag a card to another column to move it (press and move 8px)
- Click a card to open its detail panel
"""
import time
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Dict, List, Optional

from creatorhub.kanban.drag import DropOutcome, GestureResult, GestureTracker
from creatorhub.models.schemas import CREATOR_STATUS_LABELS
from gui.utils.logging import log
from gui.views.base import BaseView

COLUMN_WIDTH = 230
COLUMN_GAP = 12
HEADER_HEIGHT = 44
CARD_HEIGHT = 72
CARD_GAP = 8
PADDING = 10
ALL_CAMPAIGNS = "Todas as campanhas"


class KanbanView(BaseView):
    """
    Workflow board for the active company.

    Mouse events go through a GestureTracker, which decides between a click
    and a drag, and then into the board's DragController intents.
    """

    def _build(self):
        self.board = self.app.board
        self.theme = self.app.theme
        self.tracker = GestureTracker()
        self._pressed_card: Optional[int] = None
        self._column_names: List[str] = []
        self._campaign_ids: Dict[str, int] = {}

        header = ttk.Frame(self, style="Main.TFrame")
        header.pack(fill="x", pady=(0, 8))
        ttk.Label(header, text="Workflow", style="Header.TLabel").pack(side="left")
        ttk.Label(header, text="Acompanhe seus criadores em cada etapa", style="Muted.TLabel").pack(side="left", padx=(8, 0))

        ttk.Button(header, text="↻ Atualizar", command=lambda: self.call("reload_board")).pack(side="right")
        self.delete_btn = ttk.Button(header, text="Excluir campanha", command=self._on_delete_campaign, state="disabled")
        self.delete_btn.pack(side="right", padx=(0, 6))
        self.campaign_var = tk.StringVar(value=ALL_CAMPAIGNS)
        self.campaign_combo = ttk.Combobox(header, textvariable=self.campaign_var, state="readonly", width=28)
        self.campaign_combo.pack(side="right", padx=(0, 6))
        self.campaign_combo.bind("<<ComboboxSelected>>", lambda _: self._on_campaign_change())

        self.canvas = tk.Canvas(self, background=self.theme.background_color, highlightthickness=0)
        xscroll = ttk.Scrollbar(self, orient=tk.HORIZONTAL, command=self.canvas.xview)
        self.canvas.configure(xscrollcommand=xscroll.set)
        self.canvas.pack(fill="both", expand=True)
        xscroll.pack(fill="x")

        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_motion)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)
        self.canvas.bind("<Configure>", lambda _: self.refresh())

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def refresh(self):
        self._sync_campaigns()
        canvas = self.canvas
        canvas.delete("board")
        columns = self.board.columns()
        self._column_names = [col.stage.name for col in columns]
        if not columns:
            canvas.create_text(PADDING, PADDING, anchor="nw", tags=("board",),
                               text="Nenhuma etapa de workflow configurada", fill=self.theme.muted_color)
            return

        moving = self.board.committer.moving_ids
        dragged = self.board.drag.active_card_id
        height = max(canvas.winfo_height(), 420)
        for idx, column in enumerate(columns):
            x0 = PADDING + idx * (COLUMN_WIDTH + COLUMN_GAP)
            x1 = x0 + COLUMN_WIDTH
            style = {"fill": self.theme.column_color, "outline": ""}
            if column.is_drop_target:
                style = {"fill": self.theme.drop_target_color, "outline": self.theme.accent_color, "dash": (4, 2), "width": 2}
            canvas.create_rectangle(x0, PADDING, x1, height - PADDING, tags=("board",), **style)

            canvas.create_oval(x0 + 10, PADDING + 16, x0 + 20, PADDING + 26, fill=column.stage.color, outline="", tags=("board",))
            canvas.create_text(x0 + 28, PADDING + 21, anchor="w", text=column.stage.name, tags=("board",),
                               fill=self.theme.primary_color, font=(self.theme.font_family, 11, "bold"))
            canvas.create_text(x1 - 12, PADDING + 21, anchor="e", text=str(len(column.cards)), tags=("board",),
                               fill=self.theme.muted_color)

            if column.is_empty:
                text = "Solte aqui para mover" if column.is_drop_target else "Nenhum criador nesta etapa"
                canvas.create_text((x0 + x1) / 2, PADDING + HEADER_HEIGHT + 30, text=text, tags=("board",),
                                   fill=self.theme.muted_color)
                continue

            for row, card in enumerate(column.cards):
                y0 = PADDING + HEADER_HEIGHT + row * (CARD_HEIGHT + CARD_GAP)
                self._draw_card(card, x0 + 8, y0, x1 - 8, card.id in moving, card.id == dragged)

        canvas.configure(scrollregion=(0, 0, PADDING + len(columns) * (COLUMN_WIDTH + COLUMN_GAP), height))

    def _draw_card(self, card, x0, y0, x1, is_moving, is_dragged):
        canvas = self.canvas
        tags = ("board", "card", f"card:{card.id}")
        outline = self.theme.accent_color if is_dragged else self.theme.muted_color
        text_color = self.theme.muted_color if is_moving else self.theme.primary_color
        canvas.create_rectangle(x0, y0, x1, y0 + CARD_HEIGHT, fill=self.theme.card_color, outline=outline, tags=tags)
        canvas.create_text(x0 + 8, y0 + 10, anchor="nw", text="⟳" if is_moving else "⋮⋮", fill=self.theme.muted_color, tags=tags)
        canvas.create_text(x0 + 26, y0 + 8, anchor="nw", text=card.creator.name, fill=text_color,
                           font=(self.theme.font_family, 10, "bold"), tags=tags)
        if card.creator.instagram:
            canvas.create_text(x0 + 26, y0 + 26, anchor="nw", text=f"@{card.creator.instagram}",
                               fill=self.theme.muted_color, tags=tags)
        badge = card.campaign.title
        status = card.application.creator_workflow_status
        if status:
            badge += f"  •  {CREATOR_STATUS_LABELS.get(status, {}).get('label', status)}"
        canvas.create_text(x0 + 26, y0 + 46, anchor="nw", text=badge, fill=self.theme.muted_color,
                           width=x1 - x0 - 34, tags=tags)

    def _draw_ghost(self, x, y):
        card = self.board.card(self.board.drag.active_card_id)
        self.canvas.delete("ghost")
        if card is None:
            return
        self.canvas.create_rectangle(x - 80, y - 16, x + 80, y + 16, fill=self.theme.card_color,
                                     outline=self.theme.accent_color, width=2, tags=("ghost",))
        self.canvas.create_text(x, y, text=card.creator.name, fill=self.theme.primary_color, tags=("ghost",))

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------

    def _column_at(self, x) -> Optional[str]:
        offset = x - PADDING
        if offset < 0:
            return None
        idx = int(offset // (COLUMN_WIDTH + COLUMN_GAP))
        if idx >= len(self._column_names) or offset - idx * (COLUMN_WIDTH + COLUMN_GAP) > COLUMN_WIDTH:
            return None
        return self._column_names[idx]

    def _card_at(self, x, y) -> Optional[int]:
        for item in reversed(self.canvas.find_overlapping(x, y, x, y)):
            for tag in self.canvas.gettags(item):
                if tag.startswith("card:"):
                    return int(tag.split(":", 1)[1])
        return None

    # ------------------------------------------------------------------
    # Mouse handling
    # ------------------------------------------------------------------

    def _on_press(self, event):
        x, y = self.canvas.canvasx(event.x), self.canvas.canvasy(event.y)
        card_id = self._card_at(x, y)
        if card_id is None or self.board.committer.is_moving(card_id):
            self._pressed_card = None
            return
        self._pressed_card = card_id
        self.tracker.press(x, y, time.monotonic())

    def _on_motion(self, event):
        if self._pressed_card is None:
            return
        x, y = self.canvas.canvasx(event.x), self.canvas.canvasy(event.y)
        result = self.tracker.move(x, y, time.monotonic())
        if result is GestureResult.ACTIVATE and not self.board.drag.begin_drag(self._pressed_card):
            self.tracker.reset()
            self._pressed_card = None
            return
        if self.board.drag.is_dragging:
            column = self._column_at(x)
            if column != self.board.drag.hover_column:
                self.board.drag.hover(column)
                self.refresh()
            self._draw_ghost(x, y)

    def _on_release(self, event):
        card_id, self._pressed_card = self._pressed_card, None
        if card_id is None:
            return
        x, y = self.canvas.canvasx(event.x), self.canvas.canvasy(event.y)
        result = self.tracker.release(x, y, time.monotonic())
        if result is GestureResult.CLICK:
            self.call("open_card", card_id)
        elif result is GestureResult.DROP:
            outcome = self.board.drag.drop(self._column_at(x))
            if outcome is not DropOutcome.COMMITTED:
                log(f"drop of card {card_id}: {outcome.value}")
        self.canvas.delete("ghost")
        self.refresh()

    # ------------------------------------------------------------------
    # Campaign filter / deletion
    # ------------------------------------------------------------------

    def _sync_campaigns(self):
        self._campaign_ids = {f"{c.title} (#{c.id})": c.id for c in self.board.campaign_options()}
        self.campaign_combo.configure(values=[ALL_CAMPAIGNS, *self._campaign_ids])
        selected = self.board.selected_campaign_id
        if selected is None or selected not in self._campaign_ids.values():
            self.campaign_var.set(ALL_CAMPAIGNS)
            self.delete_btn.configure(state="disabled")
        else:
            self.delete_btn.configure(state="normal")

    def _on_campaign_change(self):
        self.call("select_campaign", self._campaign_ids.get(self.campaign_var.get()))

    def _on_delete_campaign(self):
        campaign_id = self.board.selected_campaign_id
        if campaign_id is None:
            return
        confirmed = messagebox.askyesno(
            "Excluir campanha",
            "Tem certeza que deseja excluir esta campanha? Esta ação não pode ser desfeita.",
            parent=self,
        )
        if confirmed:
            self.call("delete_campaign", campaign_id)

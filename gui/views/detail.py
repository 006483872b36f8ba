"""Detail side panel for one card."""

import tkinter as tk
from tkinter import ttk

from creatorhub.models.schemas import CREATOR_STATUS_LABELS
from gui.views.base import BaseView

METRIC_FIELDS = (
    ("views", "Views"),
    ("engagement", "Engajamento"),
    ("sales", "Vendas"),
    ("quality_score", "Qualidade (0-5)"),
)


class DetailView(BaseView):
    """Creator details, stage timeline, deliverables, messages and metrics."""

    def _build(self):  # pragma: no cover - UI code
        self.board = self.app.board
        self.panel = self.board.detail

        top = ttk.Frame(self, style="Main.TFrame")
        top.pack(fill="x")
        ttk.Label(top, text="Detalhes do Criador", style="Header.TLabel").pack(side="left")
        ttk.Button(top, text="✕", width=3, command=lambda: self.call("close_card")).pack(side="right")

        self.name_label = ttk.Label(self, style="Header.TLabel")
        self.name_label.pack(anchor="w", pady=(8, 0))
        self.instagram_label = ttk.Label(self, style="Muted.TLabel")
        self.instagram_label.pack(anchor="w")
        self.status_label = ttk.Label(self, style="Badge.TLabel")
        self.status_label.pack(anchor="w", pady=(6, 0))
        self.campaign_label = ttk.Label(self, style="Muted.TLabel")
        self.campaign_label.pack(anchor="w")

        self.stages_box = ttk.LabelFrame(self, text="Seu Workflow", padding=6, style="Panel.TLabelframe")
        self.stages_box.pack(fill="x", pady=(10, 4))

        self.deliverables_box = ttk.LabelFrame(self, text="Entregas", padding=6, style="Panel.TLabelframe")
        self.deliverables_box.pack(fill="x", pady=4)
        self.deliverables_list = tk.Listbox(self.deliverables_box, height=5)
        self.deliverables_list.pack(fill="x")
        self.deliverables_more = ttk.Label(self.deliverables_box, style="Muted.TLabel")
        self.deliverables_more.pack(anchor="w")

        self.messages_box = ttk.LabelFrame(self, text="Mensagens", padding=6, style="Panel.TLabelframe")
        self.messages_box.pack(fill="x", pady=4)
        self.messages_text = tk.Text(self.messages_box, height=7, wrap="word", state="disabled")
        self.messages_text.pack(fill="x")

        self.metrics_box = ttk.LabelFrame(self, text="Métricas de Performance", padding=6, style="Panel.TLabelframe")
        self.metric_vars = {}
        for row, (key, label) in enumerate(METRIC_FIELDS):
            ttk.Label(self.metrics_box, text=label, style="Muted.TLabel").grid(row=row, column=0, sticky="w")
            var = tk.StringVar()
            ttk.Entry(self.metrics_box, textvariable=var, width=12).grid(row=row, column=1, sticky="ew", padx=(6, 0))
            self.metric_vars[key] = var
        self.metrics_btn = ttk.Button(self.metrics_box, text="Salvar Métricas", command=self._on_save_metrics)
        self.metrics_btn.grid(row=len(METRIC_FIELDS), column=0, columnspan=2, sticky="ew", pady=(6, 0))
        self.points_label = ttk.Label(self.metrics_box, style="Muted.TLabel")
        self.points_label.grid(row=len(METRIC_FIELDS) + 1, column=0, columnspan=2, sticky="w")

    def refresh(self):  # pragma: no cover - UI code
        card = self.panel.card
        if card is None:
            return
        self.name_label.configure(text=card.creator.name)
        self.instagram_label.configure(text=f"@{card.creator.instagram}" if card.creator.instagram else "")
        status = card.application.creator_workflow_status or ""
        self.status_label.configure(text=CREATOR_STATUS_LABELS.get(status, {}).get("label", "Pendente"))
        self.campaign_label.configure(text=card.campaign.title)

        for child in self.stages_box.winfo_children():
            child.destroy()
        pills = self.panel.stage_pills(self.board.registry)
        for pill in pills:
            text = f"● {pill.stage.name}" if pill.is_active else pill.stage.name
            if pill.is_past:
                text = f"✓ {pill.stage.name}"
            button = ttk.Button(
                self.stages_box,
                text=text,
                command=lambda name=pill.stage.name: self.call("advance_card", name),
                state="disabled" if pill.is_updating else "normal",
            )
            button.pack(fill="x", pady=1)

        completed = bool(pills) and pills[-1].is_active
        if completed:
            self.metrics_box.pack(fill="x", pady=4)
            self.metrics_btn.configure(state="disabled" if self.panel.metrics_pending else "normal")
        else:
            self.metrics_box.pack_forget()

        self.call("load_card_details", self._render_details)

    def _render_details(self, details):  # pragma: no cover - UI code
        deliverables, hidden, messages, stats = details
        self.deliverables_box.configure(text=f"Entregas ({len(deliverables) + hidden})")
        self.deliverables_list.delete(0, tk.END)
        if not deliverables:
            self.deliverables_list.insert(tk.END, "Nenhuma entrega enviada ainda")
        for deliverable in deliverables:
            when = deliverable.uploaded_at.strftime("%d/%m %H:%M") if deliverable.uploaded_at else ""
            self.deliverables_list.insert(tk.END, f"[{deliverable.kind}] {deliverable.file_name}  {when}")
        self.deliverables_more.configure(text=f"+{hidden} mais entregas" if hidden else "")

        self.messages_box.configure(text=f"Mensagens ({len(messages)})")
        self.messages_text.configure(state="normal")
        self.messages_text.delete("1.0", tk.END)
        if not messages:
            self.messages_text.insert(tk.END, "Nenhuma mensagem trocada ainda")
        for line in messages:
            when = line.message.created_at.strftime("%d/%m %H:%M") if line.message.created_at else ""
            self.messages_text.insert(tk.END, f"{line.sender_label} · {when}\n{line.message.content}\n\n")
        self.messages_text.configure(state="disabled")

        if stats is not None and stats.points > 0:
            rank = f" · #{stats.rank} no ranking" if stats.rank else ""
            self.points_label.configure(text=f"Pontuação atual: {stats.points} pts{rank}")
        else:
            self.points_label.configure(text="")

    def _on_save_metrics(self):  # pragma: no cover - UI code
        values = {key: var.get() for key, var in self.metric_vars.items()}
        self.call("save_metrics", values)

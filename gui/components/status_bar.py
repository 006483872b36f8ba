import tkinter as tk
from tkinter import ttk

from creatorhub.notifications import Toast


class StatusBar(ttk.Frame):
    """
    Status bar showing the latest toast and a busy indicator.
    """

    def __init__(self, parent, state):
        super().__init__(parent, style="Panel.TFrame", padding=(6, 3))
        self.state = state

        self.message_var = tk.StringVar(value=state.status_message)
        self.message_label = ttk.Label(self, textvariable=self.message_var, style="Muted.TLabel")
        self.message_label.pack(side=tk.LEFT)

        self.busy_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.busy_var, style="Muted.TLabel", width=2).pack(side=tk.RIGHT, padx=(4, 0))

    def update_status(self):
        """Refresh status bar from app state."""
        self.message_var.set(self.state.status_message)
        self.busy_var.set("●" if self.state.is_busy else "")

    def show_toast(self, toast: Toast):
        text = f"{toast.title}: {toast.description}" if toast.description else toast.title
        self.state.status_message = text
        self.message_label.configure(foreground="#ef4444" if toast.is_error else "")
        self.update_status()

"""Base class for GUI views."""

from __future__ import annotations

from tkinter import ttk


class BaseView(ttk.Frame):
    """A ttk frame bound to the application object.

    Subclasses build their widgets in ``_build`` and reach application
    actions through ``call``.
    """

    def __init__(self, parent, app, **kwargs):
        super().__init__(parent, style="Main.TFrame", **kwargs)
        self.app = app
        self._build()

    def _build(self) -> None:  # pragma: no cover - UI code
        raise NotImplementedError

    def call(self, action: str, *args):
        return getattr(self.app, action)(*args)

    def refresh(self) -> None:
        """Redraw from current state."""

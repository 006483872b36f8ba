"""Theme primitives for the board GUI."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Base theme definition."""

    name: str = "Default"
    primary_color: str = "#1f2937"  # slate-800
    accent_color: str = "#3b82f6"  # blue-500
    background_color: str = "#ffffff"
    column_color: str = "#f1f5f9"
    drop_target_color: str = "#dbeafe"
    card_color: str = "#ffffff"
    muted_color: str = "#64748b"
    fallback_status_color: str = "#64748b"
    font_family: str = "Helvetica"


@dataclass(frozen=True)
class ModernTheme(Theme):
    """A slightly more opinionated default theme."""

    name: str = "Modern"
    background_color: str = "#0b1220"  # dark
    primary_color: str = "#e5e7eb"  # gray-200
    accent_color: str = "#22c55e"  # green-500
    column_color: str = "#111827"
    drop_target_color: str = "#1e3a5f"
    card_color: str = "#1f2937"
    muted_color: str = "#94a3b8"


def configure_styles(root, theme: Theme) -> None:  # pragma: no cover - UI code
    from tkinter import ttk

    style = ttk.Style(root)
    style.configure("Main.TFrame", background=theme.background_color)
    style.configure("Panel.TFrame", background=theme.column_color)
    style.configure("Header.TLabel", background=theme.background_color, foreground=theme.primary_color,
                    font=(theme.font_family, 16, "bold"))
    style.configure("Muted.TLabel", background=theme.background_color, foreground=theme.muted_color)
    style.configure("Panel.TLabelframe", background=theme.column_color)
    style.configure("Badge.TLabel", background=theme.column_color, foreground=theme.primary_color, padding=(6, 2))

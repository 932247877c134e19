"""Service layer helpers (settings persistence, Markdown import)."""

from .importers import from_markdown, from_markdown_inline, render_markdown
from .settings import DEFAULT_SETTINGS_PATH, ConversionSettings, SettingsStore

__all__ = [
    "ConversionSettings",
    "SettingsStore",
    "DEFAULT_SETTINGS_PATH",
    "render_markdown",
    "from_markdown",
    "from_markdown_inline",
]

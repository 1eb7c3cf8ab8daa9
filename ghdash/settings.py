"""
Persisted dashboard settings.

Settings share the key-value store with the cache but live under their own
prefix, so clearing the cache never resets them.
"""

import os
from dataclasses import dataclass, fields

from ghdash.exceptions import ConfigurationError
from ghdash.storage import KeyValueStore

SETTINGS_PREFIX = "ghdash_setting_"
THEMES = ("light", "dark", "system")


@dataclass
class DashboardSettings:
    """User preferences: API token, theme and which sections are shown."""

    token: str = ""
    theme: str = "light"
    show_stats: bool = True
    show_languages: bool = True
    show_activity: bool = True
    show_heatmap: bool = True
    show_repos: bool = True

    @classmethod
    def load(cls, store: KeyValueStore) -> "DashboardSettings":
        """
        Read settings from ``store``.

        Missing keys keep their defaults; a section is hidden only when
        stored as ``"false"``. An unknown theme falls back to ``light``.
        """
        settings = cls()
        for f in fields(cls):
            raw = store.get_item(SETTINGS_PREFIX + f.name)
            if raw is None:
                continue
            if f.type in (bool, "bool"):
                setattr(settings, f.name, raw != "false")
            else:
                setattr(settings, f.name, raw)

        if settings.theme not in THEMES:
            settings.theme = "light"
        return settings

    @classmethod
    def from_env(cls, store: KeyValueStore) -> "DashboardSettings":
        """
        Load settings, letting GITHUB_TOKEN stand in for an unset token.

        Environment variables:
            GITHUB_TOKEN: Personal access token (optional)
        """
        settings = cls.load(store)
        if not settings.token:
            settings.token = os.environ.get("GITHUB_TOKEN", "").strip()
        return settings

    def save(self, store: KeyValueStore) -> None:
        """
        Write every setting to ``store``.

        Raises:
            ConfigurationError: If the theme is not one of light, dark, system
            StoreError: If the store rejects the write
        """
        if self.theme not in THEMES:
            raise ConfigurationError(
                f"Invalid theme: {self.theme}. Must be one of {', '.join(THEMES)}"
            )

        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool):
                value = "true" if value else "false"
            store.set_item(SETTINGS_PREFIX + f.name, value.strip())


__all__ = ["SETTINGS_PREFIX", "THEMES", "DashboardSettings"]

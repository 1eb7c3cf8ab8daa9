"""
Display lookup tables.

Color, icon and label tables are bundled in a DisplayRegistry value that is
handed to the heatmap engine and the presentation helpers, so callers can
swap or localize them without touching module state.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

_LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a", "TypeScript": "#3178c6", "Python": "#3572A5", "Java": "#b07219",
    "C++": "#f34b7d", "C": "#555555", "C#": "#178600", "Go": "#00ADD8", "Rust": "#dea584",
    "Ruby": "#701516", "PHP": "#4F5D95", "Swift": "#F05138", "Kotlin": "#A97BFF", "Dart": "#00B4AB",
    "Scala": "#c22d40", "Shell": "#89e051", "HTML": "#e34c26", "CSS": "#563d7c", "SCSS": "#c6538c",
    "Vue": "#41b883", "Svelte": "#ff3e00", "Lua": "#000080", "R": "#198CE7", "MATLAB": "#e16737",
    "Perl": "#0298c3", "Haskell": "#5e5086", "Elixir": "#6e4a7e", "Clojure": "#db5855",
    "Objective_C": "#438eff", "Vim_Script": "#199f4b", "Jupyter_Notebook": "#DA5B0B",
    "TeX": "#3D6117", "PowerShell": "#012456", "Dockerfile": "#384d54", "Makefile": "#427819",
}

_EVENT_ICONS = {
    "PushEvent": "📝", "CreateEvent": "🆕", "DeleteEvent": "🗑️", "ForkEvent": "🍴",
    "IssuesEvent": "🔖", "IssueCommentEvent": "💬", "PullRequestEvent": "🔀",
    "PullRequestReviewEvent": "👀", "WatchEvent": "⭐", "ReleaseEvent": "🚀",
    "PublicEvent": "🌐", "MemberEvent": "👥",
}

_EVENT_LABELS = {
    "PushEvent": "Push", "CreateEvent": "Create", "DeleteEvent": "Delete",
    "ForkEvent": "Fork", "IssuesEvent": "Issue", "IssueCommentEvent": "Comment",
    "PullRequestEvent": "PR", "PullRequestReviewEvent": "Review",
    "WatchEvent": "Star", "ReleaseEvent": "Release",
    "PublicEvent": "Public", "MemberEvent": "Member",
}

_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Indexed by date.weekday(): Monday is 0
_WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _frozen(mapping: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class DisplayRegistry:
    """Lookup tables consumed by the presentation layer."""

    language_colors: Mapping[str, str] = field(default_factory=lambda: _frozen(_LANGUAGE_COLORS))
    default_language_color: str = "#8b8b8b"
    event_icons: Mapping[str, str] = field(default_factory=lambda: _frozen(_EVENT_ICONS))
    default_event_icon: str = "📌"
    event_labels: Mapping[str, str] = field(default_factory=lambda: _frozen(_EVENT_LABELS))
    month_names: tuple[str, ...] = _MONTH_NAMES
    weekday_names: tuple[str, ...] = _WEEKDAY_NAMES

    def __post_init__(self) -> None:
        if len(self.month_names) != 12:
            raise ValueError("month_names must have 12 entries")
        if len(self.weekday_names) != 7:
            raise ValueError("weekday_names must have 7 entries")

    def language_color(self, language: str | None) -> str:
        """Color for a language, trying ``Jupyter Notebook`` as ``Jupyter_Notebook``."""
        if not language:
            return self.default_language_color
        if language in self.language_colors:
            return self.language_colors[language]
        normalized = language.replace(" ", "_").replace("-", "_")
        return self.language_colors.get(normalized, self.default_language_color)

    def event_icon(self, event_type: str) -> str:
        return self.event_icons.get(event_type, self.default_event_icon)

    def event_label(self, event_type: str) -> str:
        if event_type in self.event_labels:
            return self.event_labels[event_type]
        return event_type.replace("Event", "")


DEFAULT_REGISTRY = DisplayRegistry()


__all__ = ["DisplayRegistry", "DEFAULT_REGISTRY"]

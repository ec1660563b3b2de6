"""Known applications that prompts can be linked to.

Each tracked app maps to one or more macOS bundle identifiers through a
static configuration table. Lookup is an exact, case-sensitive match.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TrackedApp(Enum):
    """Applications the launcher recognizes by bundle identifier."""

    ANTIGRAVITY = "antigravity"
    CHATGPT_ATLAS = "chatGPTAtlas"
    CHATGPT = "chatGPT"
    CLICKUP = "clickUp"
    COMET = "comet"
    CLAUDE = "claude"
    CONDUCTOR = "conductor"
    CURSOR = "cursor"
    DOCKER = "docker"
    FIGMA = "figma"
    GOODNOTES = "goodnotes"
    CHROME = "chrome"
    OBSIDIAN = "obsidian"
    WARP = "warp"
    XCODE = "xcode"
    ANDROID_STUDIO = "androidStudio"

    @property
    def display_name(self) -> str:
        """User-facing name from the configuration table."""
        config = TRACKED_APP_CONFIGS.get(self)
        return config.display_name if config else self.value

    @property
    def bundle_identifiers(self) -> tuple[str, ...]:
        config = TRACKED_APP_CONFIGS.get(self)
        return config.bundle_identifiers if config else ()

    @classmethod
    def from_value(cls, raw: str) -> TrackedApp | None:
        """Look up a tracked app by raw value, or None if unknown."""
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class TrackedAppConfig:
    """How a running application maps to a TrackedApp."""

    tracked_app: TrackedApp
    display_name: str
    bundle_identifiers: tuple[str, ...]


_CONFIGS: tuple[TrackedAppConfig, ...] = (
    TrackedAppConfig(
        TrackedApp.ANTIGRAVITY, "Antigravity", ("com.google.antigravity",)
    ),
    TrackedAppConfig(TrackedApp.CHATGPT_ATLAS, "ChatGPT Atlas", ("com.openai.atlas",)),
    TrackedAppConfig(
        TrackedApp.CHATGPT,
        "ChatGPT",
        ("com.openai.chat", "com.openai.chatgpt", "com.openai.chatgpt.app"),
    ),
    TrackedAppConfig(TrackedApp.CLICKUP, "ClickUp", ("com.clickup.desktop-app",)),
    TrackedAppConfig(TrackedApp.COMET, "Comet", ("ai.perplexity.comet",)),
    TrackedAppConfig(
        TrackedApp.CLAUDE, "Claude for Desktop", ("com.anthropic.claudefordecktop",)
    ),
    TrackedAppConfig(
        TrackedApp.WARP,
        "Warp",
        ("dev.warp.Warp-Stable", "dev.warp.warp-stable", "dev.warp.warp"),
    ),
    TrackedAppConfig(TrackedApp.CURSOR, "Cursor", ("com.todesktop.230313mzl4w4u92",)),
    TrackedAppConfig(
        TrackedApp.CONDUCTOR, "Conductor", ("com.conductor.app", "build.conductor.app")
    ),
    TrackedAppConfig(TrackedApp.DOCKER, "Docker", ("com.docker.docker",)),
    TrackedAppConfig(TrackedApp.FIGMA, "Figma", ("com.figma.Desktop",)),
    TrackedAppConfig(TrackedApp.GOODNOTES, "Goodnotes", ("com.goodnotesapp.x",)),
    TrackedAppConfig(TrackedApp.CHROME, "Google Chrome", ("com.google.Chrome",)),
    TrackedAppConfig(TrackedApp.OBSIDIAN, "Obsidian", ("md.obsidian",)),
    TrackedAppConfig(TrackedApp.XCODE, "Xcode", ("com.apple.dt.Xcode",)),
    TrackedAppConfig(
        TrackedApp.ANDROID_STUDIO, "Android Studio", ("com.google.android.studio",)
    ),
)

TRACKED_APP_CONFIGS: dict[TrackedApp, TrackedAppConfig] = {
    config.tracked_app: config for config in _CONFIGS
}


def resolve_tracked_app(bundle_identifier: str | None) -> TrackedApp | None:
    """Map a bundle identifier to a tracked app.

    Matching is exact and case-sensitive; the first configuration that lists
    the identifier wins. Unlisted identifiers return None.
    """
    if not bundle_identifier:
        return None
    for config in _CONFIGS:
        if bundle_identifier in config.bundle_identifiers:
            return config.tracked_app
    return None

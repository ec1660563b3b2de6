"""App targets a prompt can be linked to: a tracked app or a custom one."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from promptist.models.tracked_app import TrackedApp


@dataclass(frozen=True, slots=True)
class PromptAppFilter:
    """The app (tracked or custom) prompts are being filtered against."""

    tracked_app: TrackedApp | None = None
    bundle_identifier: str | None = None
    display_name: str | None = None

    @property
    def normalized_bundle_identifier(self) -> str | None:
        return self.bundle_identifier.lower() if self.bundle_identifier else None

    @property
    def normalized_display_name(self) -> str | None:
        return self.display_name.lower() if self.display_name else None

    @property
    def is_empty(self) -> bool:
        return (
            self.tracked_app is None
            and not self.bundle_identifier
            and not self.display_name
        )


class PromptAppTarget(ABC):
    """Either ``TrackedTarget`` or ``CustomTarget``."""

    __slots__ = ()

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable identity used to deduplicate linked apps."""

    @property
    @abstractmethod
    def display_name(self) -> str: ...

    @property
    def tracked_app(self) -> TrackedApp | None:
        return None

    @property
    def bundle_identifier(self) -> str | None:
        return None

    @property
    def normalized_display_name(self) -> str:
        return self.display_name.lower()

    def matches(self, app_filter: PromptAppFilter) -> bool:
        """Check whether this target matches the filter.

        Tracked-app equality is checked first, then case-insensitive bundle
        identifier equality, then case-insensitive display name equality.
        """
        if self.tracked_app is not None and self.tracked_app == app_filter.tracked_app:
            return True

        filter_bundle = app_filter.normalized_bundle_identifier
        if filter_bundle and self.bundle_identifier == filter_bundle:
            return True

        filter_name = app_filter.normalized_display_name
        if filter_name and filter_name == self.normalized_display_name:
            return True

        return False

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    @staticmethod
    def from_dict(data: dict[str, Any]) -> PromptAppTarget | None:
        """Decode a target, returning None for unknown tracked apps or shapes."""
        if "tracked" in data:
            payload = data["tracked"]
            raw = payload.get("_0") if isinstance(payload, dict) else payload
            app = TrackedApp.from_value(str(raw)) if raw is not None else None
            return TrackedTarget(app) if app is not None else None
        if "custom" in data and isinstance(data["custom"], dict):
            payload = data["custom"]
            name = payload.get("name")
            if not name:
                return None
            return CustomTarget(
                name=str(name),
                bundle_id=payload.get("bundleIdentifier") or None,
            )
        return None


@dataclass(frozen=True, slots=True)
class TrackedTarget(PromptAppTarget):
    """A prompt linked to a known tracked app."""

    app: TrackedApp

    @property
    def id(self) -> str:
        return f"tracked-{self.app.value}"

    @property
    def display_name(self) -> str:
        return self.app.display_name

    @property
    def tracked_app(self) -> TrackedApp | None:
        return self.app

    def to_dict(self) -> dict[str, Any]:
        return {"tracked": {"_0": self.app.value}}


@dataclass(frozen=True, slots=True)
class CustomTarget(PromptAppTarget):
    """A prompt linked to an app the user added by name."""

    name: str
    bundle_id: str | None = None

    @property
    def id(self) -> str:
        if self.bundle_id:
            return f"custom-{self.bundle_id.lower()}"
        return f"custom-{self.name.lower()}"

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def bundle_identifier(self) -> str | None:
        return self.bundle_id.lower() if self.bundle_id else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.bundle_id:
            payload["bundleIdentifier"] = self.bundle_id
        return {"custom": payload}


def parse_app_target(value: str) -> PromptAppTarget:
    """Build a target from user input.

    A tracked-app raw value (``xcode``) or display name (``Xcode``) yields a
    tracked target; ``Name=bundle.id`` yields a custom target with a bundle
    identifier; anything else is a custom target by name.
    """
    text = value.strip()
    app = TrackedApp.from_value(text)
    if app is not None:
        return TrackedTarget(app)
    for candidate in TrackedApp:
        if candidate.display_name.lower() == text.lower():
            return TrackedTarget(candidate)
    if "=" in text:
        name, _, bundle = text.partition("=")
        return CustomTarget(name=name.strip(), bundle_id=bundle.strip() or None)
    return CustomTarget(name=text)


def dedupe_targets(targets: list[PromptAppTarget]) -> list[PromptAppTarget]:
    """Drop targets whose id was already seen, keeping first occurrences."""
    seen: set[str] = set()
    result: list[PromptAppTarget] = []
    for target in targets:
        if target.id in seen:
            continue
        seen.add(target.id)
        result.append(target)
    return result

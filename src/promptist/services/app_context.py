"""Tracking of the frontmost application.

The service asks a probe which application is in front and resolves it to a
``TrackedApp`` through the static bundle-identifier table. Probes never
raise: any failure is logged and reported as "no app".
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from promptist.models.app_target import (
    CustomTarget,
    PromptAppFilter,
    PromptAppTarget,
    TrackedTarget,
)
from promptist.models.tracked_app import TrackedApp, resolve_tracked_app

logger = logging.getLogger(__name__)

BUNDLE_ID_ENV = "PROMPTIST_FRONTMOST_BUNDLE_ID"
APP_NAME_ENV = "PROMPTIST_FRONTMOST_APP_NAME"

_FRONTMOST_SCRIPT = (
    'tell application "System Events"\n'
    "  set p to first process whose frontmost is true\n"
    '  return (name of p) & "\\n" & (bundle identifier of p)\n'
    "end tell"
)


@dataclass(frozen=True, slots=True)
class FrontmostApp:
    """Name and bundle identifier reported by a probe."""

    name: str | None
    bundle_identifier: str | None


class FrontmostProbe(Protocol):
    def probe(self) -> FrontmostApp | None: ...


class MacOSFrontmostProbe:
    """Ask System Events for the frontmost process via ``osascript``."""

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout

    def probe(self) -> FrontmostApp | None:
        try:
            result = subprocess.run(
                ["osascript", "-e", _FRONTMOST_SCRIPT],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Frontmost app probe failed: %s", e)
            return None

        if result.returncode != 0:
            logger.warning(
                "osascript exited %d: %s", result.returncode, result.stderr.strip()
            )
            return None

        name, _, bundle = result.stdout.strip().partition("\n")
        name = name.strip() or None
        bundle = bundle.strip() or None
        if name is None and bundle is None:
            return None
        return FrontmostApp(name=name, bundle_identifier=bundle)


class EnvironmentProbe:
    """Read the frontmost app from environment variables.

    Useful on platforms without an accessible window server, and for
    scripting the CLI against a specific app.
    """

    def probe(self) -> FrontmostApp | None:
        bundle = os.environ.get(BUNDLE_ID_ENV, "").strip() or None
        name = os.environ.get(APP_NAME_ENV, "").strip() or None
        if name is None and bundle is None:
            return None
        return FrontmostApp(name=name, bundle_identifier=bundle)


class StaticProbe:
    """Return a fixed app; tests set ``app`` directly."""

    def __init__(self, app: FrontmostApp | None = None) -> None:
        self.app = app

    def probe(self) -> FrontmostApp | None:
        return self.app


def default_probe() -> FrontmostProbe:
    """Environment overrides win; otherwise osascript on macOS."""
    if os.environ.get(BUNDLE_ID_ENV) or os.environ.get(APP_NAME_ENV):
        return EnvironmentProbe()
    if sys.platform == "darwin":
        return MacOSFrontmostProbe()
    return EnvironmentProbe()


class AppContextService:
    """Holds the most recently observed frontmost application."""

    def __init__(
        self,
        probe: FrontmostProbe | None = None,
        ignored_bundle_ids: Iterable[str] = (),
    ) -> None:
        self.probe = probe or default_probe()
        self.ignored_bundle_ids = set(ignored_bundle_ids)
        self.frontmost_app_name: str | None = None
        self.frontmost_bundle_identifier: str | None = None
        self.current_tracked_app: TrackedApp | None = None

    def refresh(self) -> bool:
        """Query the probe and update the current app.

        Returns:
            True if the frontmost app changed.
        """
        return self.update(self.read_frontmost())

    def read_frontmost(self) -> FrontmostApp | None:
        """Ask the probe for the frontmost app without changing state.

        The macOS probe runs a subprocess, so this may block; the TUI calls
        it from a worker thread.
        """
        try:
            return self.probe.probe()
        except Exception as e:
            logger.warning("Frontmost app probe raised: %s", e)
            return None

    def update(self, app: FrontmostApp | None) -> bool:
        """Record a probed app.

        Apps in ``ignored_bundle_ids`` are skipped and the previous app is
        kept.

        Returns:
            True if the frontmost app changed.
        """
        if app is not None and app.bundle_identifier in self.ignored_bundle_ids:
            return False

        name = app.name if app else None
        bundle = app.bundle_identifier if app else None
        changed = (name, bundle) != (
            self.frontmost_app_name,
            self.frontmost_bundle_identifier,
        )
        self.frontmost_app_name = name
        self.frontmost_bundle_identifier = bundle
        self.current_tracked_app = resolve_tracked_app(bundle)
        if changed:
            logger.debug(
                "Frontmost app: %s (%s) -> %s", name, bundle, self.current_tracked_app
            )
        return changed

    def ignore(self, app: FrontmostApp | None) -> str | None:
        """Stop tracking a probed app, such as the host terminal.

        Returns:
            The ignored bundle identifier, or None if the app has none.
        """
        if app is None or not app.bundle_identifier:
            return None
        self.ignored_bundle_ids.add(app.bundle_identifier)
        logger.info("Ignoring frontmost app %s", app.bundle_identifier)
        return app.bundle_identifier

    @property
    def app_filter(self) -> PromptAppFilter | None:
        """Filter matching the current app, or None when no app is known."""
        bundle = (self.frontmost_bundle_identifier or "").strip() or None
        name = (self.frontmost_app_name or "").strip() or None
        if self.current_tracked_app is None and bundle is None and name is None:
            return None
        return PromptAppFilter(
            tracked_app=self.current_tracked_app,
            bundle_identifier=bundle,
            display_name=name,
        )

    @property
    def current_target(self) -> PromptAppTarget | None:
        """Link target for the current app, used to preset new templates."""
        if self.current_tracked_app is not None:
            return TrackedTarget(self.current_tracked_app)
        bundle = (self.frontmost_bundle_identifier or "").strip() or None
        name = (self.frontmost_app_name or "").strip() or None
        if name is not None:
            return CustomTarget(name, bundle)
        if bundle is not None:
            return CustomTarget(bundle, bundle)
        return None

    @property
    def display_name(self) -> str | None:
        if self.current_tracked_app is not None:
            return self.current_tracked_app.display_name
        return self.frontmost_app_name or self.frontmost_bundle_identifier

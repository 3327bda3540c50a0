"""Pytest configuration and fixtures for RTSP Camera tests.

Version: 0.1.0
Date: 2026-10-19
"""
from __future__ import annotations

import os
import sys

# Add the project root to Python path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from custom_components.rtsp_camera.host import (
    AlertLog,
    DeviceManager,
    DictDeviceStorage,
    HostPlatform,
    MediaManager,
)

# =============================================================================
# Mock Host Platform
# =============================================================================


class MockDeviceManager(DeviceManager):
    """In-memory device manager recording discovery calls."""

    def __init__(self, settings: dict[str, dict[str, str]] | None = None):
        self.settings: dict[str, dict[str, str]] = settings or {}
        self.names: dict[str, str] = {}
        self.discovered: list = []

    def get_native_ids(self) -> list[str]:
        return list(self.settings)

    def get_device_name(self, native_id: str) -> str:
        return self.names.get(native_id, native_id)

    def get_device_storage(self, native_id: str) -> DictDeviceStorage:
        return DictDeviceStorage(self.settings.setdefault(native_id, {}))

    def on_device_discovered(self, device) -> None:
        self.discovered.append(device)
        self.names[device.native_id] = device.name
        self.settings.setdefault(device.native_id, {})


class MockAlertLog(AlertLog):
    """Alert log recording every call in order."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def alert(self, text: str) -> None:
        self.calls.append(("alert", text))

    def clear_alert(self, text: str) -> None:
        self.calls.append(("clear", text))


@dataclass
class MockMediaObject:
    """Media object returned by the mock media manager."""

    ffmpeg_input: Any


class MockMediaManager(MediaManager):
    """Media manager returning the ffmpeg input wrapped as-is."""

    def __init__(self):
        self.inputs: list = []

    async def create_ffmpeg_media_object(self, ffmpeg_input):
        self.inputs.append(ffmpeg_input)
        return MockMediaObject(ffmpeg_input)


@dataclass
class _Timer:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False


@dataclass
class FakeScheduler:
    """Virtual clock standing in for the host's call_later."""

    now: float = 0.0
    timers: list[_Timer] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> Callable[[], None]:
        timer = _Timer(self.now + delay, callback)
        self.timers.append(timer)

        def cancel() -> None:
            timer.cancelled = True

        return cancel

    @property
    def pending(self) -> list[_Timer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.now + seconds
        while True:
            due = sorted(
                (t for t in self.pending if t.due <= target),
                key=lambda t: t.due,
            )
            if not due:
                break
            timer = due[0]
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target


# =============================================================================
# Pytest Fixtures
# =============================================================================


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Create a virtual clock."""
    return FakeScheduler()


@pytest.fixture
def device_manager() -> MockDeviceManager:
    """Create an empty device manager."""
    return MockDeviceManager()


@pytest.fixture
def alert_log() -> MockAlertLog:
    """Create a recording alert log."""
    return MockAlertLog()


@pytest.fixture
def media_manager() -> MockMediaManager:
    """Create a recording media manager."""
    return MockMediaManager()


@pytest.fixture
def host(device_manager, alert_log, media_manager, scheduler) -> HostPlatform:
    """Create a host platform wired to the mocks."""
    return HostPlatform(
        device_manager=device_manager,
        log=alert_log,
        media_manager=media_manager,
        call_later=scheduler.call_later,
    )

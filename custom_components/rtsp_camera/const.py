"""Constants for RTSP Camera.

Version: 0.1.0
Date: 2026-10-19
"""
from __future__ import annotations

from enum import StrEnum
from typing import Final

DOMAIN: Final = "rtsp_camera"

# =============================================================================
# Per-camera storage keys
# =============================================================================

# Generic RTSP camera
CONF_URL: Final = "url"
CONF_USERNAME: Final = "username"
CONF_PASSWORD: Final = "password"
CONF_NO_AUDIO: Final = "noAudio"

# Address-derived (smart) cameras
CONF_IP: Final = "ip"
CONF_HTTP_PORT: Final = "httpPort"
CONF_RTSP_PORT: Final = "rtspPort"
CONF_IS_ANALOGUE_CAMERA: Final = "isAnalogueCamera"
CONF_RTSP_URL_OVERRIDE: Final = "rtspUrlOverride"
CONF_RTSP_CHANNEL: Final = "rtspChannel"
CONF_RTSP_URL_PARAMS: Final = "rtspUrlParams"

# Provider
CONF_NEW_CAMERA: Final = "new-camera"

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_HTTP_PORT: Final = 80
DEFAULT_RTSP_PORT: Final = 554
DEFAULT_RTSP_URL_PARAMS: Final = "?transportmode=unicast"
DEFAULT_NAME: Final = "RTSP Cameras"

# Seconds to wait before re-subscribing after a listener error
LISTEN_RESTART_DELAY: Final = 10

# =============================================================================
# FFmpeg input tuning
# =============================================================================

FFMPEG_RTSP_TRANSPORT: Final = "tcp"
FFMPEG_ANALYZE_DURATION: Final = "15000000"
FFMPEG_PROBE_SIZE: Final = "10000000"
FFMPEG_REORDER_QUEUE_SIZE: Final = "1024"
FFMPEG_MAX_DELAY: Final = "20000000"

FFMPEG_INPUT_ARGUMENTS: Final = [
    "-rtsp_transport",
    FFMPEG_RTSP_TRANSPORT,
    "-analyzeduration",
    FFMPEG_ANALYZE_DURATION,
    "-probesize",
    FFMPEG_PROBE_SIZE,
    "-reorder_queue_size",
    FFMPEG_REORDER_QUEUE_SIZE,
    "-max_delay",
    FFMPEG_MAX_DELAY,
]

# =============================================================================
# Home Assistant wiring
# =============================================================================

STORAGE_KEY: Final = f"{DOMAIN}.devices"
STORAGE_VERSION: Final = 1
STORAGE_SAVE_DELAY: Final = 1  # seconds

SIGNAL_DEVICE_DISCOVERED: Final = f"{DOMAIN}_device_discovered"

SERVICE_ADD_CAMERA: Final = "add_camera"
ATTR_NAME: Final = "name"

# =============================================================================
# Enums
# =============================================================================


class SettingType(StrEnum):
    """Explicit setting field types (free text when unset)."""

    PASSWORD = "Password"
    BOOLEAN = "boolean"


class DeviceInterface(StrEnum):
    """Capability interfaces a registered device implements."""

    VIDEO_CAMERA = "VideoCamera"
    SETTINGS = "Settings"


class DeviceType(StrEnum):
    """Device types understood by the host."""

    CAMERA = "Camera"


class ListenState(StrEnum):
    """Listen loop states."""

    IDLE = "idle"
    LISTENING = "listening"
    RESTARTING = "restarting"

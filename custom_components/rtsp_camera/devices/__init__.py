"""Camera adapters and provider for RTSP Camera.

Version: 0.1.0
Date: 2026-10-19

- RtspCamera: camera with a single stored RTSP URL
- RtspSmartCamera: address-aware camera with a self-healing event listener
- RtspProvider: device registry and "add camera" workflow
"""
from .base import RtspCamera
from .listener import (
    ConfigChanged,
    EventSubscription,
    ListenLoop,
    NetworkFault,
)
from .provider import RtspProvider
from .smart import RtspSmartCamera, SmartCameraBackend

__all__ = [
    "ConfigChanged",
    "EventSubscription",
    "ListenLoop",
    "NetworkFault",
    "RtspCamera",
    "RtspProvider",
    "RtspSmartCamera",
    "SmartCameraBackend",
]

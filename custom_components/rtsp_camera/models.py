"""Data models for RTSP Camera."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .const import (
    CONF_HTTP_PORT,
    CONF_IP,
    CONF_IS_ANALOGUE_CAMERA,
    CONF_NO_AUDIO,
    CONF_PASSWORD,
    CONF_RTSP_CHANNEL,
    CONF_RTSP_PORT,
    CONF_RTSP_URL_OVERRIDE,
    CONF_RTSP_URL_PARAMS,
    CONF_URL,
    CONF_USERNAME,
    DeviceInterface,
    DeviceType,
    SettingType,
)


def encode_bool(value: bool) -> str:
    """Encode a boolean the way the settings store expects it."""
    return "true" if value else "false"


def decode_bool(value: str | None) -> bool:
    """Only the literal string "true" is true."""
    return value == "true"


def stringify(value: Any) -> str:
    """Coerce a submitted setting value to its stored string form."""
    if isinstance(value, bool):
        return encode_bool(value)
    return str(value)


@dataclass
class Setting:
    """One editable field of a device's settings form."""

    key: str
    title: str
    value: str | None = None
    placeholder: str | None = None
    description: str | None = None
    type: SettingType | None = None  # Free text when None

    def as_dict(self) -> dict[str, Any]:
        """Return the setting with unset optional fields omitted."""
        result: dict[str, Any] = {"key": self.key, "title": self.title}
        for name in ("placeholder", "description", "type"):
            attr = getattr(self, name)
            if attr is not None:
                result[name] = str(attr)
        result["value"] = self.value
        return result


@dataclass
class MediaStreamOptions:
    """Audio/video capability descriptor for a stream."""

    video: dict[str, Any] = field(default_factory=dict)
    audio: dict[str, Any] | None = field(default_factory=dict)  # None = no audio

    def as_dict(self) -> dict[str, Any]:
        """Return the descriptor with a disabled audio track omitted."""
        result: dict[str, Any] = {"video": dict(self.video)}
        if self.audio is not None:
            result["audio"] = dict(self.audio)
        return result


@dataclass
class FFmpegInput:
    """Transport descriptor handed to the media pipeline."""

    input_arguments: list[str]
    media_stream_options: MediaStreamOptions | None = None

    @property
    def url(self) -> str:
        """Return the stream URL, always the final input argument."""
        return self.input_arguments[-1]

    def as_dict(self) -> dict[str, Any]:
        """Return the descriptor in the host's wire shape."""
        return {
            "inputArguments": list(self.input_arguments),
            "mediaStreamOptions": (
                self.media_stream_options.as_dict()
                if self.media_stream_options
                else None
            ),
        }


@dataclass
class DiscoveredDevice:
    """A device announced to the host."""

    native_id: str
    name: str
    interfaces: list[DeviceInterface | str]
    type: DeviceType | str = DeviceType.CAMERA


@dataclass
class CameraConfig:
    """Typed view of a camera's string key/value settings."""

    # === Generic RTSP ===
    url: str = ""
    username: str = ""
    password: str = ""
    no_audio: bool = False

    # === Address-derived ===
    ip: str = ""
    http_port: str = ""
    rtsp_port: str = ""
    is_analogue_camera: bool = False
    rtsp_url_override: str = ""
    rtsp_channel: str = ""
    rtsp_url_params: str = ""

    @classmethod
    def from_storage(cls, storage: Any) -> CameraConfig:
        """Create config from a DeviceStorage or plain mapping.

        Missing keys fall back to the field defaults.
        """
        if isinstance(storage, Mapping):
            get = storage.get
        else:
            get = storage.get_item

        def text(key: str) -> str:
            return get(key) or ""

        return cls(
            url=text(CONF_URL),
            username=text(CONF_USERNAME),
            password=text(CONF_PASSWORD),
            no_audio=decode_bool(get(CONF_NO_AUDIO)),
            ip=text(CONF_IP),
            http_port=text(CONF_HTTP_PORT),
            rtsp_port=text(CONF_RTSP_PORT),
            is_analogue_camera=decode_bool(get(CONF_IS_ANALOGUE_CAMERA)),
            rtsp_url_override=text(CONF_RTSP_URL_OVERRIDE),
            rtsp_channel=text(CONF_RTSP_CHANNEL),
            rtsp_url_params=text(CONF_RTSP_URL_PARAMS),
        )

    def to_storage(self) -> dict[str, str]:
        """Return the string key/value form of this config."""
        return {
            CONF_URL: self.url,
            CONF_USERNAME: self.username,
            CONF_PASSWORD: self.password,
            CONF_NO_AUDIO: encode_bool(self.no_audio),
            CONF_IP: self.ip,
            CONF_HTTP_PORT: self.http_port,
            CONF_RTSP_PORT: self.rtsp_port,
            CONF_IS_ANALOGUE_CAMERA: encode_bool(self.is_analogue_camera),
            CONF_RTSP_URL_OVERRIDE: self.rtsp_url_override,
            CONF_RTSP_CHANNEL: self.rtsp_channel,
            CONF_RTSP_URL_PARAMS: self.rtsp_url_params,
        }

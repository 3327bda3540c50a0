"""Generic RTSP camera adapter."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlsplit, urlunsplit

from ..const import (
    CONF_NO_AUDIO,
    CONF_PASSWORD,
    CONF_URL,
    CONF_USERNAME,
    FFMPEG_INPUT_ARGUMENTS,
    SettingType,
)
from ..exceptions import InvalidStreamUrl
from ..models import (
    CameraConfig,
    FFmpegInput,
    MediaStreamOptions,
    Setting,
    encode_bool,
    stringify,
)

if TYPE_CHECKING:
    from ..host import DeviceStorage, HostPlatform

_LOGGER = logging.getLogger(__name__)


class RtspCamera:
    """A camera reached through a single stored RTSP URL.

    Settings live in the host's per-device string store:
    - url: RTSP stream URL
    - username / password: injected into the URL as userinfo
    - noAudio: "true" to drop the audio track
    """

    def __init__(self, native_id: str, host: HostPlatform) -> None:
        """Initialize the adapter."""
        self.native_id = native_id
        self.host = host
        self.storage: DeviceStorage = host.device_manager.get_device_storage(native_id)

    @property
    def config(self) -> CameraConfig:
        """Return the typed view of the current settings."""
        return CameraConfig.from_storage(self.storage)

    def is_audio_disabled(self) -> bool:
        """Return True if the audio track should be omitted."""
        return self.config.no_audio

    def get_username(self) -> str:
        """Return the stored username."""
        return self.config.username

    def get_password(self) -> str:
        """Return the stored password."""
        return self.config.password

    async def get_video_stream_options(self) -> list[MediaStreamOptions]:
        """Return the stream capability descriptors."""
        return [
            MediaStreamOptions(
                video={},
                audio=None if self.is_audio_disabled() else {},
            )
        ]

    async def get_stream_url(self) -> str:
        """Return the stream URL without credentials."""
        return self.config.url

    async def get_video_stream(self) -> Any:
        """Build the ffmpeg input for this camera and hand it to the host.

        Raises:
            InvalidStreamUrl: If the stream URL is missing or malformed
        """
        url = self.build_authenticated_url(
            await self.get_stream_url(),
            self.get_username(),
            self.get_password(),
        )

        options = await self.get_video_stream_options()
        ffmpeg_input = FFmpegInput(
            input_arguments=[*FFMPEG_INPUT_ARGUMENTS, "-i", url],
            media_stream_options=options[0] if options else None,
        )

        return await self.host.media_manager.create_ffmpeg_media_object(ffmpeg_input)

    @staticmethod
    def build_authenticated_url(url: str | None, username: str, password: str) -> str:
        """Return the URL with credentials embedded as userinfo.

        Any userinfo already in the URL is replaced. Without a username and
        password the URL comes back without userinfo.
        """
        if not url:
            raise InvalidStreamUrl(url)

        try:
            parsed = urlsplit(url)
            # Accessing port validates it
            parsed.port
        except ValueError as err:
            raise InvalidStreamUrl(url) from err

        if not parsed.scheme or not parsed.hostname:
            raise InvalidStreamUrl(url)

        host = parsed.netloc.rpartition("@")[2]

        userinfo = ""
        if username or password:
            userinfo = quote(username, safe="")
            if password:
                userinfo += ":" + quote(password, safe="")
            userinfo += "@"

        return urlunsplit(
            (parsed.scheme, userinfo + host, parsed.path, parsed.query, parsed.fragment)
        )

    async def get_url_settings(self) -> list[Setting]:
        """Return the settings that determine the stream URL."""
        return [
            Setting(
                key=CONF_URL,
                title="RTSP Stream URL",
                placeholder="rtsp://192.168.1.100:4567/foo/bar",
                value=self.config.url,
            ),
        ]

    async def get_settings(self) -> list[Setting]:
        """Return the full settings form for this camera."""
        return [
            *await self.get_url_settings(),
            Setting(
                key=CONF_USERNAME,
                title="Username",
                value=self.get_username(),
            ),
            Setting(
                key=CONF_PASSWORD,
                title="Password",
                value=self.get_password(),
                type=SettingType.PASSWORD,
            ),
            Setting(
                key=CONF_NO_AUDIO,
                title="No Audio",
                description=(
                    "Enable this setting if the stream does not have audio "
                    "or to mute audio."
                ),
                type=SettingType.BOOLEAN,
                value=encode_bool(self.is_audio_disabled()),
            ),
        ]

    async def put_setting(self, key: str, value: Any) -> None:
        """Store a setting value as a string."""
        _LOGGER.debug("Camera %s: setting %s updated", self.native_id, key)
        self.storage.set_item(key, stringify(value))

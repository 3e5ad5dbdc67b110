"""Capture backends known to the library."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ApiBackend(enum.Enum):
    """A capture backend.

    ``Auto`` asks for the backend best suited to the current platform.
    Backends that are not listed are described by :class:`CustomBackend`.
    """

    Auto = "Auto"
    AVFoundation = "AVFoundation"
    Video4Linux = "Video4Linux"
    UniversalVideoClass = "UniversalVideoClass"
    MediaFoundation = "MediaFoundation"
    OpenCv = "OpenCv"
    GStreamer = "GStreamer"
    Browser = "Browser"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CustomBackend:
    """A backend outside the known set, identified by name."""

    name: str

    def __str__(self) -> str:
        return f'Custom("{self.name}")'
"""Core value types: camera indices, resolutions, formats, device info and controls."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Any, List, Union

from camcore.error import GeneralError
from camcore.frame_format import (
    FrameFormat,
    SourceFrameFormat,
    source_format_sort_key,
    source_frame_format,
)

_U32_MAX = 0xFFFF_FFFF
_U128_LIMIT = 1 << 128
_DIGITS = frozenset("0123456789")


def _check_u32(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer, not {type(value).__name__}")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{what} must fit in an unsigned 32-bit integer")


def _parse_u32(text: str) -> int:
    """Parse ``text`` as an unsigned 32-bit integer, accepting an optional ``+``."""
    if not text:
        raise GeneralError("cannot parse integer from empty string")
    digits = text[1:] if text.startswith("+") else text
    if not digits or not set(digits) <= _DIGITS:
        raise GeneralError("invalid digit found in string")
    number = int(digits)
    if number > _U32_MAX:
        raise GeneralError("number too large to fit in target type")
    return number


@dataclass(frozen=True)
class CameraIndex:
    """The index of a camera: a number, or a string such as a URL for IP cameras."""

    value: Union[int, str] = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, str):
            return
        _check_u32(self.value, "camera index")

    def as_index(self) -> int:
        """Return the index as a number, parsing it if it is a string."""
        if isinstance(self.value, int):
            return self.value
        return _parse_u32(self.value)

    def as_string(self) -> str:
        """Return the index as a string."""
        return str(self.value)

    def is_index(self) -> bool:
        return isinstance(self.value, int)

    def is_string(self) -> bool:
        return not self.is_index()

    def __int__(self) -> int:
        return self.as_index()

    def __str__(self) -> str:
        return self.as_string()


@dataclass(frozen=True, order=True)
class Resolution:
    """A frame size, ordered by width and then by height."""

    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        _check_u32(self.width, "width")
        _check_u32(self.height, "height")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@functools.total_ordering
@dataclass(frozen=True)
class CameraFormat:
    """The resolution, frame format and frame rate of a camera stream."""

    resolution: Resolution = field(default_factory=lambda: Resolution(640, 480))
    format: SourceFrameFormat = FrameFormat.MJpeg
    frame_rate: int = 30

    def __post_init__(self) -> None:
        if not isinstance(self.resolution, Resolution):
            raise TypeError("resolution must be a Resolution")
        object.__setattr__(self, "format", source_frame_format(self.format))
        _check_u32(self.frame_rate, "frame rate")

    @classmethod
    def from_parts(
        cls, width: int, height: int, format: Any, frame_rate: int  # noqa: A002
    ) -> "CameraFormat":
        """Build a format from a bare width and height."""
        return cls(Resolution(width, height), format, frame_rate)

    @property
    def width(self) -> int:
        return self.resolution.width

    @property
    def height(self) -> int:
        return self.resolution.height

    def sort_key(self) -> tuple:
        """Order by resolution, then frame format, then frame rate."""
        return (
            self.resolution.width,
            self.resolution.height,
            source_format_sort_key(self.format),
            self.frame_rate,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CameraFormat):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.resolution}@{self.frame_rate}FPS, {self.format} Format"


@dataclass
class CameraInfo:
    """Information about a camera; ``description`` and ``misc`` vary by backend."""

    human_name: str
    description: str
    misc: str
    index: CameraIndex = field(default_factory=CameraIndex)

    def __post_init__(self) -> None:
        if not isinstance(self.index, CameraIndex):
            self.index = CameraIndex(self.index)

    def __str__(self) -> str:
        return (
            f"Name: {self.human_name}, Description: {self.description}, "
            f"Extra: {self.misc}, Index: {self.index}"
        )


class KnownCameraControl(enum.Enum):
    """Camera controls known to the library."""

    Brightness = 0
    Contrast = 1
    Hue = 2
    Saturation = 3
    Sharpness = 4
    Gamma = 5
    WhiteBalance = 6
    BacklightComp = 7
    Gain = 8
    Pan = 9
    Tilt = 10
    Zoom = 11
    Exposure = 12
    Iris = 13
    Focus = 14

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class OtherControl:
    """A platform-specific control identified by its numeric id."""

    id: int

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError("control id must be an integer")
        if not 0 <= self.id < _U128_LIMIT:
            raise ValueError("control id must fit in an unsigned 128-bit integer")

    def __str__(self) -> str:
        return f"Other({self.id})"


CameraControlId = Union[KnownCameraControl, OtherControl]


class KnownCameraControlFlag(enum.Enum):
    """Whether a control is managed by the driver or by the caller, and how."""

    Automatic = 0
    Manual = 1
    Continuous = 2
    ReadOnly = 3
    WriteOnly = 4
    Volatile = 5
    Disabled = 6

    def __str__(self) -> str:
        return self.name


def all_known_camera_controls() -> List[KnownCameraControl]:
    """Every known camera control, in declaration order."""
    return list(KnownCameraControl)
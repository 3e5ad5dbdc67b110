"""Frame formats: how the bytes of a captured frame are encoded."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Tuple, Union

from camcore.backend import ApiBackend, CustomBackend

_U128_LIMIT = 1 << 128


def _check_u128(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer, not {type(value).__name__}")
    if not 0 <= value < _U128_LIMIT:
        raise ValueError(f"{what} must fit in an unsigned 128-bit integer")


class FrameFormat(enum.Enum):
    """A known frame format, often called a FourCC."""

    # Compressed formats
    H265 = 0
    H264 = 1
    H263 = 2
    Avc1 = 3
    Mpeg1 = 4
    Mpeg2 = 5
    Mpeg4 = 6
    MJpeg = 7
    XVid = 8
    VP8 = 9
    VP9 = 10
    # YCbCr 4:2:2
    Yuv422 = 11
    Uyv422 = 12
    # YCbCr 4:2:0
    Nv12 = 13
    Nv21 = 14
    Yv12 = 15
    # Grayscale
    Luma8 = 16
    # RGB
    Rgb8 = 17
    RgbA8 = 18

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CustomFrameFormat:
    """A frame format outside the known set, identified by its code."""

    code: int

    def __post_init__(self) -> None:
        _check_u128(self.code, "code")

    def __str__(self) -> str:
        return f"Custom({self.code})"


COMPRESSED_FORMATS = (
    FrameFormat.H263,
    FrameFormat.H264,
    FrameFormat.H265,
    FrameFormat.Avc1,
    FrameFormat.Mpeg1,
    FrameFormat.Mpeg2,
    FrameFormat.Mpeg4,
    FrameFormat.MJpeg,
    FrameFormat.XVid,
    FrameFormat.VP8,
    FrameFormat.VP9,
)

CHROMA_FORMATS = (
    FrameFormat.Yuv422,
    FrameFormat.Uyv422,
    FrameFormat.Nv12,
    FrameFormat.Nv21,
    FrameFormat.Yv12,
)

LUMA_FORMATS = (FrameFormat.Luma8,)

RGB_FORMATS = (FrameFormat.Rgb8, FrameFormat.RgbA8)

ALL_FRAME_FORMATS = COMPRESSED_FORMATS + CHROMA_FORMATS + LUMA_FORMATS + RGB_FORMATS

Backend = Union[ApiBackend, CustomBackend]


@dataclass(frozen=True, eq=False)
class PlatformFrameFormat:
    """A frame format code that only has meaning on one backend."""

    backend: Backend
    format: int

    def __post_init__(self) -> None:
        if not isinstance(self.backend, (ApiBackend, CustomBackend)):
            raise TypeError("backend must be an ApiBackend or a CustomBackend")
        _check_u128(self.format, "format")

    def as_tuple(self) -> Tuple[Backend, int]:
        return (self.backend, self.format)

    @classmethod
    def from_tuple(cls, value: Tuple[Backend, int]) -> "PlatformFrameFormat":
        backend, fmt = value
        return cls(backend, fmt)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PlatformFrameFormat):
            return self.as_tuple() == other.as_tuple()
        if isinstance(other, tuple):
            return self.as_tuple() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __str__(self) -> str:
        return f"PlatformFrameFormat {{ backend: {self.backend}, format: {self.format} }}"


SourceFrameFormat = Union[FrameFormat, CustomFrameFormat, PlatformFrameFormat]


def source_frame_format(value: Any) -> SourceFrameFormat:
    """Normalise a frame format, or a ``(backend, code)`` pair, to a source format."""
    if isinstance(value, (FrameFormat, CustomFrameFormat, PlatformFrameFormat)):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        return PlatformFrameFormat.from_tuple(value)
    raise TypeError(f"cannot use {value!r} as a source frame format")


def _backend_sort_key(backend: Backend) -> Tuple[int, str]:
    if isinstance(backend, CustomBackend):
        return (1, backend.name)
    if not isinstance(backend, ApiBackend):
        raise TypeError(f"{backend!r} is not a backend")
    position = list(ApiBackend).index(backend)
    # Auto comes first, custom backends right after it.
    return (0 if position == 0 else position + 1, "")


def source_format_sort_key(fmt: SourceFrameFormat) -> tuple:
    """A key ordering known formats first, then custom codes, then platform formats."""
    if isinstance(fmt, FrameFormat):
        return (0, fmt.value, 0)
    if isinstance(fmt, CustomFrameFormat):
        return (0, len(FrameFormat), fmt.code)
    if isinstance(fmt, PlatformFrameFormat):
        return (1, _backend_sort_key(fmt.backend), fmt.format)
    raise TypeError(f"{fmt!r} is not a source frame format")